"""Pydantic schemas for plans, outcomes and link payloads."""

from shelf.schemas.links import (
    HydratedContent,
    HydrationResult,
    ParsedUrlInfo,
    PersistLinkInput,
    Provider,
)
from shelf.schemas.outcome import Outcome, OutcomeStatus
from shelf.schemas.plan import AgentPlan, PlanStep, TaskKind, TaskRequest

__all__ = [
    "AgentPlan",
    "PlanStep",
    "TaskKind",
    "TaskRequest",
    "Outcome",
    "OutcomeStatus",
    "Provider",
    "ParsedUrlInfo",
    "HydratedContent",
    "HydrationResult",
    "PersistLinkInput",
]
