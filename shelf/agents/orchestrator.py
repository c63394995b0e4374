"""
Plan Orchestrator - runs an agent plan step by step

The orchestrator is responsible for:
1. Building (or accepting) the plan for a task
2. Resolving each step's skill in the registry
3. Running attempts with bounded retry and backoff
4. Threading one ExecutionState through every step
5. Honoring a cooperative cancellation signal

A run is strictly sequential: one step at a time, one attempt at a time.
The signal is checked before each step and each attempt; an attempt that
has started always runs to completion.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from shelf.agents.errors import ExecutionError, PlanCancelledError, SkillNotFoundError
from shelf.agents.planner import Planner, coerce_request
from shelf.core.config import Settings, get_settings
from shelf.core.logger import AgentLogger
from shelf.schemas.outcome import Outcome
from shelf.schemas.plan import AgentPlan, PlanStep, TaskRequest
from shelf.skills.base import BaseSkill, SkillContext, SkillResult
from shelf.skills.executor import SkillExecutor
from shelf.skills.registry import SkillRegistry
from shelf.skills.state import ExecutionState

BackoffWait = Callable[[float, asyncio.Event | None], Awaitable[None]]


@dataclass
class RunPlanResult:
    """Result of a completed run"""

    plan: AgentPlan
    state: ExecutionState


def backoff_delay(attempt: int, base: float = 0.2, max_delay: float = 2.0) -> float:
    """
    Delay in seconds after failed attempt number ``attempt``

    min(max_delay, base * attempt^2); with the defaults that is
    0.2s, 0.8s, 1.8s, then 2.0s for every later attempt.
    """
    return min(max_delay, base * attempt * attempt)


async def wait_backoff(delay: float, signal: asyncio.Event | None = None) -> None:
    """Sleep for ``delay`` seconds, returning early if ``signal`` is set"""
    if signal is None:
        await asyncio.sleep(delay)
        return

    try:
        await asyncio.wait_for(signal.wait(), timeout=delay)
    except TimeoutError:
        pass


class PlanOrchestrator:
    """
    Executes agent plans against an injected skill registry

    Several runs may share one orchestrator (and registry) concurrently;
    each run gets its own ExecutionState.
    """

    def __init__(
        self,
        registry: SkillRegistry,
        planner: Planner | None = None,
        skill_executor: SkillExecutor | None = None,
        settings: Settings | None = None,
        backoff_wait: BackoffWait | None = None,
    ):
        """
        Initialize orchestrator with dependencies

        Args:
            registry: Registry used to resolve each step's skill
            planner: Planner for requests without a plan override
            skill_executor: Runs single attempts
            settings: Attempt and backoff defaults
            backoff_wait: Coroutine used to wait between attempts
        """
        self.registry = registry
        self.planner = planner or Planner()
        self.skill_executor = skill_executor or SkillExecutor()
        self.settings = settings or get_settings()
        self.backoff_wait = backoff_wait or wait_backoff

    async def run_plan(
        self,
        request: TaskRequest | Mapping[str, Any],
        *,
        logger: Any | None = None,
        signal: asyncio.Event | None = None,
        plan_override: AgentPlan | None = None,
        max_attempts: int | None = None,
    ) -> RunPlanResult:
        """
        Run a task to completion

        Args:
            request: Task request (or equivalent mapping)
            logger: Optional event sink, see AgentLogger
            signal: Optional cancellation signal
            plan_override: Pre-built plan used instead of the planner
            max_attempts: Attempt cap for skills that do not set their own

        Returns:
            RunPlanResult with the plan and the accumulated state

        Raises:
            PlanCancelledError: The signal was set before a step or attempt
            PlanningError: No plan could be built for the request
            ExecutionError: A step had no skill or exhausted its attempts
        """
        agent_logger = AgentLogger.wrap(logger)

        if signal is not None and signal.is_set():
            raise PlanCancelledError()

        task = coerce_request(request)
        plan = plan_override if plan_override is not None else self.planner.build_plan(task)
        state = ExecutionState()

        agent_logger.debug(
            "agent.plan.generated",
            {
                "kind": task.kind.value if task.kind else None,
                "version": plan.version,
                "steps": [step.use for step in plan.steps],
            },
        )

        for step in plan.steps:
            await self._run_step(
                step=step,
                task=task,
                plan=plan,
                state=state,
                agent_logger=agent_logger,
                signal=signal,
                max_attempts=max_attempts,
            )

        agent_logger.info(
            "agent.plan.completed",
            {"kind": task.kind.value if task.kind else None, "steps": len(plan.steps)},
        )

        return RunPlanResult(plan=plan, state=state)

    async def _run_step(
        self,
        *,
        step: PlanStep,
        task: TaskRequest,
        plan: AgentPlan,
        state: ExecutionState,
        agent_logger: AgentLogger,
        signal: asyncio.Event | None,
        max_attempts: int | None,
    ) -> SkillResult:
        """Run one step through its attempts; returns the successful result"""
        skill = self.registry.get(step.use)
        if skill is None:
            error = SkillNotFoundError(step)
            agent_logger.error(
                "agent.plan.failed", {"step": step.use, "attempt": 0, "error": str(error.cause)}
            )
            raise error

        attempts = self._resolve_max_attempts(skill, max_attempts)

        for attempt in range(1, attempts + 1):
            if signal is not None and signal.is_set():
                agent_logger.warning("agent.plan.aborted", {"step": step.use, "attempt": attempt})
                raise PlanCancelledError(step)

            agent_logger.debug("agent.step.start", {"step": step.use, "attempt": attempt})

            context = SkillContext(
                task=task,
                plan=plan,
                step=step,
                attempt=attempt,
                max_attempts=attempts,
                state=state,
                logger=agent_logger,
                signal=signal,
            )
            result = await self.skill_executor.execute(skill, step.args, context)

            if result.success:
                if isinstance(result.data, Outcome) and result.data.is_skipped:
                    agent_logger.info(
                        "agent.step.skipped", {"step": step.use, "reason": result.data.reason}
                    )
                agent_logger.debug("agent.step.success", {"step": step.use, "attempt": attempt})
                return result

            agent_logger.warning(
                "agent.step.retry",
                {
                    "step": step.use,
                    "attempt": attempt,
                    "max_attempts": attempts,
                    "error": result.error,
                },
            )

            if attempt >= attempts:
                agent_logger.error(
                    "agent.plan.failed",
                    {"step": step.use, "attempt": attempt, "error": result.error},
                )
                cause = result.exception or RuntimeError(result.error or "Skill reported failure")
                raise ExecutionError(step, attempt, cause) from cause

            await self.backoff_wait(self._backoff_delay(attempt), signal)

        # Unreachable: attempts is at least 1
        raise ExecutionError(step, 0, RuntimeError("No attempts were made"))

    def _resolve_max_attempts(self, skill: BaseSkill, max_attempts: int | None) -> int:
        """Skill value, else run option, else configured default; at least 1"""
        if skill.max_attempts is not None:
            resolved = skill.max_attempts
        elif max_attempts is not None:
            resolved = max_attempts
        else:
            resolved = self.settings.AGENT_MAX_ATTEMPTS
        return max(1, resolved)

    def _backoff_delay(self, attempt: int) -> float:
        return backoff_delay(
            attempt,
            base=self.settings.AGENT_BACKOFF_BASE_SECONDS,
            max_delay=self.settings.AGENT_BACKOFF_MAX_SECONDS,
        )


async def run_plan(
    request: TaskRequest | Mapping[str, Any],
    *,
    registry: SkillRegistry,
    logger: Any | None = None,
    signal: asyncio.Event | None = None,
    plan_override: AgentPlan | None = None,
    max_attempts: int | None = None,
) -> RunPlanResult:
    """Run a task with a one-off orchestrator over ``registry``"""
    orchestrator = PlanOrchestrator(registry)
    return await orchestrator.run_plan(
        request,
        logger=logger,
        signal=signal,
        plan_override=plan_override,
        max_attempts=max_attempts,
    )
