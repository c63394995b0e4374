"""
Planner - turns a task request into an ordered list of steps

Each task kind has a builder returning a literal step list. The order of
steps encodes which state keys each step can rely on being produced by
the steps before it.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from shelf.agents.errors import PlanningError
from shelf.schemas.plan import AgentPlan, PlanStep, TaskKind, TaskRequest

PLAN_VERSION = 1

PlanBuilder = Callable[[TaskRequest], list[PlanStep]]


def _hydrate_steps(request: TaskRequest) -> list[PlanStep]:
    return [
        PlanStep(use="parse_url", description="Normalize the URL and detect provider"),
        PlanStep(
            use="hydrate_provider",
            description="Fetch provider-specific content and metadata",
        ),
        PlanStep(
            use="upsert_link",
            description="Persist link shell, content payload, and status",
        ),
        PlanStep(use="upsert_embedding", description="Store embeddings for hybrid search"),
    ]


def _summarize_steps(request: TaskRequest) -> list[PlanStep]:
    return [
        PlanStep(use="load_link", description="Load link and contents for summarization"),
        PlanStep(
            use="summarize_on_open",
            description="Generate or refresh cached summary via LLM",
        ),
    ]


def _search_steps(request: TaskRequest) -> list[PlanStep]:
    return [
        PlanStep(use="search_rewrite", description="Rewrite user query into structured intents"),
        PlanStep(use="search_merge", description="Blend hybrid search results"),
    ]


PLAN_BUILDERS: dict[TaskKind, PlanBuilder] = {
    TaskKind.HYDRATE: _hydrate_steps,
    TaskKind.SUMMARIZE: _summarize_steps,
    TaskKind.SEARCH: _search_steps,
}


def coerce_request(request: TaskRequest | Mapping[str, Any]) -> TaskRequest:
    """
    Accept a TaskRequest or a plain mapping with the same fields

    Raises:
        PlanningError: If the mapping is not a valid task request
    """
    if isinstance(request, TaskRequest):
        return request

    try:
        return TaskRequest.model_validate(dict(request))
    except ValidationError as e:
        raise PlanningError(f"Invalid agent task request: {e}") from e


class Planner:
    """
    Builds plans from task requests

    Pure apart from the creation timestamp; builders only look at the
    request's kind.
    """

    def __init__(self, builders: Mapping[TaskKind, PlanBuilder] | None = None) -> None:
        """
        Args:
            builders: Step builders per task kind. Defaults to PLAN_BUILDERS.
        """
        self.builders: dict[TaskKind, PlanBuilder] = dict(
            PLAN_BUILDERS if builders is None else builders
        )

    def build_plan(self, request: TaskRequest | Mapping[str, Any]) -> AgentPlan:
        """
        Build the plan for a request

        Args:
            request: Task request (or equivalent mapping)

        Returns:
            A version 1 plan with at least one step

        Raises:
            PlanningError: Missing kind, no builder for the kind, or no steps
        """
        task = coerce_request(request)

        if task.kind is None:
            raise PlanningError("Agent task kind is required")

        builder = self.builders.get(task.kind)
        if builder is None:
            raise PlanningError(f"No plan builder registered for kind '{task.kind.value}'")

        steps = list(builder(task))
        if not steps:
            raise PlanningError(f"Plan builder for '{task.kind.value}' produced no steps")

        return AgentPlan(version=PLAN_VERSION, steps=steps)


_default_planner = Planner()


def build_plan(request: TaskRequest | Mapping[str, Any]) -> AgentPlan:
    """Build a plan with the default builders"""
    return _default_planner.build_plan(request)
