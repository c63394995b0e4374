"""
Skill Executor for running one skill attempt

Turns whatever a skill does (return a value, return a SkillResult, raise)
into a SkillResult the plan orchestrator's retry loop can act on.
"""

import logging
from typing import Any

from shelf.skills.base import BaseSkill, SkillContext, SkillResult

logger = logging.getLogger(__name__)


class SkillExecutor:
    """
    Executes single skill attempts

    Provides a safe interface for invoking skills with:
    - Error capture (exceptions become failed results)
    - Logging
    - Result normalization
    """

    async def execute(
        self, skill: BaseSkill, args: dict[str, Any] | None, context: SkillContext
    ) -> SkillResult:
        """
        Run one attempt of a skill

        Args:
            skill: The resolved skill
            args: Step arguments passed through to the skill
            context: Invocation context for this attempt

        Returns:
            SkillResult; success=False when the skill raised or itself
            returned a failed SkillResult
        """
        try:
            value = await skill.run(args, context)
        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            logger.debug(
                f"Skill {skill.name} attempt {context.attempt}/{context.max_attempts} "
                f"failed: {error_msg}"
            )
            return SkillResult(success=False, data=None, error=error_msg, exception=e)

        if isinstance(value, SkillResult):
            return value

        return SkillResult(success=True, data=value, error=None)
