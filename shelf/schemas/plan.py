"""
Plan schemas

A TaskRequest is the immutable input to planning; an AgentPlan is the
ordered list of steps the orchestrator runs for it.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskKind(str, Enum):
    """Kinds of agent tasks the planner knows how to build"""

    HYDRATE = "hydrate"
    SUMMARIZE = "summarize"
    SEARCH = "search"


class TaskRequest(BaseModel):
    """Request for an agent run"""

    # Accepts the camelCase wire form ({"linkId": ...}) as well as field names
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    # Optional here so the planner can report a missing kind itself
    kind: TaskKind | None = Field(default=None, description="What the agent should do")
    link_id: str | None = Field(default=None, description="Existing link to operate on")
    url: str | None = Field(default=None, description="URL to hydrate")
    query: str | None = Field(default=None, description="Search query")
    note: str | None = Field(default=None, description="User note attached to the link")


class PlanStep(BaseModel):
    """One unit of work in a plan, resolved to a skill by name at run time"""

    use: str = Field(..., min_length=1, description="Name of the skill to run")
    args: dict[str, Any] | None = Field(default=None, description="Per-step skill arguments")
    description: str | None = Field(default=None, description="Human-readable purpose")


class AgentPlan(BaseModel):
    """Versioned, ordered list of steps"""

    model_config = ConfigDict(populate_by_name=True)

    version: int = Field(default=1, description="Plan format version")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="createdAt",
        description="When the plan was built",
    )
    steps: list[PlanStep] = Field(..., min_length=1, description="Steps in execution order")
