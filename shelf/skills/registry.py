"""
Skill Registry - name to skill lookup for plan runs

One registry is shared by every plan run that receives it. It is not
locked: register/clear calls must not overlap with runs in flight.
"""

import logging

from shelf.skills.base import BaseSkill

logger = logging.getLogger(__name__)


class SkillRegistry:
    """
    Skills available to the plan orchestrator, keyed by name

    A step's ``use`` field is looked up here at run time. Registering a
    name that is already taken replaces the earlier skill.
    """

    def __init__(self) -> None:
        self._by_name: dict[str, BaseSkill] = {}

    def register(self, skill: BaseSkill) -> None:
        """
        Add a skill under its name

        Args:
            skill: Skill instance; replaces any skill with the same name
        """
        previous = self._by_name.get(skill.name)
        if previous is not None and previous is not skill:
            logger.debug(f"Skill '{skill.name}' replaced: {previous!r} -> {skill!r}")

        self._by_name[skill.name] = skill

    def unregister(self, name: str) -> None:
        """Drop the skill registered as ``name``; unknown names are ignored"""
        self._by_name.pop(name, None)

    def get(self, name: str) -> BaseSkill | None:
        """
        Look up a skill

        Returns:
            The registered skill, or None when nothing uses that name
        """
        return self._by_name.get(name)

    def list_skills(self) -> list[str]:
        """Registered names, oldest registration first"""
        return list(self._by_name)

    def clear(self) -> None:
        self._by_name.clear()

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name
