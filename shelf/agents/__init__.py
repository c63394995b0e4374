"""
Agent plan engine

Plans a task into ordered steps and runs them through registered skills
with retry, backoff and cooperative cancellation.
"""

from shelf.agents.errors import (
    AgentError,
    ExecutionError,
    PlanCancelledError,
    PlanningError,
    SkillNotFoundError,
)
from shelf.agents.orchestrator import (
    PlanOrchestrator,
    RunPlanResult,
    backoff_delay,
    run_plan,
    wait_backoff,
)
from shelf.agents.planner import PLAN_BUILDERS, Planner, build_plan

__all__ = [
    "PLAN_BUILDERS",
    "Planner",
    "build_plan",
    "PlanOrchestrator",
    "RunPlanResult",
    "backoff_delay",
    "wait_backoff",
    "run_plan",
    "AgentError",
    "PlanningError",
    "ExecutionError",
    "SkillNotFoundError",
    "PlanCancelledError",
]
