"""
Base classes for the Skills System

Defines the interface every skill implements and the context it receives
on each invocation.
"""

import asyncio
import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from shelf.core.logger import AgentLogger
from shelf.schemas.plan import AgentPlan, PlanStep, TaskRequest
from shelf.skills.state import ExecutionState


@dataclass
class SkillResult:
    """
    Result of a single skill attempt

    Attributes:
        success: Whether the attempt succeeded
        data: Value returned by the skill
        error: Error message if the attempt failed
        exception: Exception raised by the skill, if any
    """

    success: bool
    data: Any | None = None
    error: str | None = None
    exception: BaseException | None = None


@dataclass(frozen=True)
class SkillContext:
    """
    Per-invocation view handed to a skill

    Attributes:
        task: The original task request
        plan: The plan being executed
        step: The step this skill is running for
        attempt: Current attempt number, starting at 1
        max_attempts: Attempt cap for this step
        state: Shared state for the whole run (mutable, by reference)
        logger: Structured event logger
        signal: Optional cancellation signal shared by the run
    """

    task: TaskRequest
    plan: AgentPlan
    step: PlanStep
    attempt: int
    max_attempts: int
    state: ExecutionState
    logger: AgentLogger
    signal: asyncio.Event | None = None

    @property
    def cancelled(self) -> bool:
        return self.signal is not None and self.signal.is_set()


SkillHandler = Callable[[dict[str, Any] | None, SkillContext], Any]


class BaseSkill(ABC):
    """
    Abstract base class for all skills

    Attributes:
        name: Unique identifier, matched against PlanStep.use
        description: Human-readable description of what the skill does
        max_attempts: Per-skill attempt cap, overrides run options when set
        requires: State keys the skill reads and cannot work without
        provides: State keys the skill guarantees to set on success
    """

    name: str
    description: str = ""
    max_attempts: int | None = None
    requires: tuple[str, ...] = ()
    provides: tuple[str, ...] = ()

    @abstractmethod
    async def run(self, args: dict[str, Any] | None, context: SkillContext) -> Any:
        """
        Run the skill once

        Args:
            args: Step arguments (may be None)
            context: Invocation context with the shared state

        Returns:
            Any value; an Outcome for integration skills

        Raises:
            Any exception is treated as a retryable failure of the attempt
        """


class FunctionSkill(BaseSkill):
    """Skill backed by a plain sync or async callable"""

    def __init__(
        self,
        name: str,
        handler: SkillHandler,
        max_attempts: int | None = None,
        description: str = "",
    ) -> None:
        self.name = name
        self.handler = handler
        self.max_attempts = max_attempts
        self.description = description

    async def run(self, args: dict[str, Any] | None, context: SkillContext) -> Any:
        result = self.handler(args, context)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"FunctionSkill(name={self.name!r}, max_attempts={self.max_attempts!r})"
