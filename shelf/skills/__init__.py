"""
Skills System

Skills are named handlers that implement the steps of an agent plan. They
are registered in a SkillRegistry and invoked one attempt at a time by the
SkillExecutor.
"""

from shelf.skills.base import BaseSkill, FunctionSkill, SkillContext, SkillHandler, SkillResult
from shelf.skills.executor import SkillExecutor
from shelf.skills.registry import SkillRegistry
from shelf.skills.state import ExecutionState, StateKeyError

__all__ = [
    "BaseSkill",
    "FunctionSkill",
    "SkillContext",
    "SkillHandler",
    "SkillResult",
    "SkillExecutor",
    "SkillRegistry",
    "ExecutionState",
    "StateKeyError",
]
