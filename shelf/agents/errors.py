"""
Agent engine errors

A run either returns its full result or raises exactly one AgentError.
"""

from shelf.schemas.plan import PlanStep


class AgentError(Exception):
    """Base class for errors raised by the plan engine"""

    pass


class PlanningError(AgentError):
    """Raised when a plan cannot be built for a request"""

    pass


class ExecutionError(AgentError):
    """
    Raised when a step cannot complete; halts the whole plan

    Attributes:
        step: The failing step
        attempt: Last attempt number (0 when the skill was never invoked)
        cause: Underlying exception
    """

    def __init__(self, step: PlanStep, attempt: int, cause: BaseException) -> None:
        description = f" ({step.description})" if step.description else ""
        super().__init__(f"Agent step '{step.use}' failed after attempt {attempt}{description}")
        self.step = step
        self.attempt = attempt
        self.cause = cause


class SkillNotFoundError(ExecutionError):
    """Raised when no skill is registered for a step; never retried"""

    def __init__(self, step: PlanStep) -> None:
        super().__init__(step, 0, LookupError(f"No skill registered for '{step.use}'"))


class PlanCancelledError(AgentError):
    """Raised when the cancellation signal is observed before a step or attempt"""

    def __init__(self, step: PlanStep | None = None) -> None:
        where = f" before step '{step.use}'" if step is not None else ""
        super().__init__(f"Agent plan aborted{where}")
        self.step = step
