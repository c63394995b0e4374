"""Shared fixtures for the shelf test suite."""

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from shelf.agents.planner import build_plan
from shelf.core.config import Settings
from shelf.core.logger import AgentLogger
from shelf.schemas.plan import PlanStep, TaskKind, TaskRequest
from shelf.skills.base import SkillContext
from shelf.skills.state import ExecutionState


class RecordingSink:
    """Log sink that keeps every event for assertions"""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, message: str, meta: dict[str, Any]) -> None:
        self.events.append(("debug", message, meta))

    def info(self, message: str, meta: dict[str, Any]) -> None:
        self.events.append(("info", message, meta))

    def warning(self, message: str, meta: dict[str, Any]) -> None:
        self.events.append(("warning", message, meta))

    def error(self, message: str, meta: dict[str, Any]) -> None:
        self.events.append(("error", message, meta))

    def messages(self, level: str | None = None) -> list[str]:
        return [message for lvl, message, _ in self.events if level is None or lvl == level]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment's provider credentials"""
    return Settings(
        _env_file=None,
        REDDIT_ACCESS_TOKEN=None,
        X_BEARER_TOKEN=None,
        AGENT_MAX_ATTEMPTS=3,
        AGENT_BACKOFF_BASE_SECONDS=0.2,
        AGENT_BACKOFF_MAX_SECONDS=2.0,
    )


@pytest.fixture
def make_context(sink: RecordingSink) -> Callable[..., SkillContext]:
    """Factory for SkillContext objects used to call skills directly"""

    def _make(
        task: TaskRequest | None = None,
        state: ExecutionState | None = None,
        step: str = "test_step",
        attempt: int = 1,
        max_attempts: int = 3,
        signal: asyncio.Event | None = None,
    ) -> SkillContext:
        task = task or TaskRequest(kind=TaskKind.HYDRATE)
        return SkillContext(
            task=task,
            plan=build_plan(TaskRequest(kind=TaskKind.HYDRATE)),
            step=PlanStep(use=step),
            attempt=attempt,
            max_attempts=max_attempts,
            state=state if state is not None else ExecutionState(),
            logger=AgentLogger(sink),
            signal=signal,
        )

    return _make
