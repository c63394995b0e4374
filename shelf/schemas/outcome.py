"""
Outcome protocol for integration skills

Skills that depend on an external capability report one of two results:

- ok: the payload was produced in full
- skipped: nothing (or only a partial payload) could be produced, with a
  human-readable reason

A skipped outcome is a normal return value. It never fails or retries the
step; consumers treat the related state key as optional.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

PayloadT = TypeVar("PayloadT")


class OutcomeStatus(str, Enum):
    """Status of an integration outcome"""

    OK = "ok"
    SKIPPED = "skipped"


class Outcome(BaseModel, Generic[PayloadT]):
    """
    Two-case result of an integration skill

    Attributes:
        status: ok or skipped
        content: Full payload (ok) or optional partial payload (skipped)
        reason: Why the work was skipped (skipped only)
    """

    status: OutcomeStatus
    content: PayloadT | None = Field(default=None)
    reason: str | None = Field(default=None)

    @model_validator(mode="after")
    def check_shape(self) -> "Outcome[PayloadT]":
        """An ok outcome needs content, a skipped one needs a reason."""
        if self.status == OutcomeStatus.OK and self.content is None:
            raise ValueError("An ok outcome must carry content")
        if self.status == OutcomeStatus.SKIPPED and not self.reason:
            raise ValueError("A skipped outcome must carry a reason")
        return self

    @classmethod
    def ok(cls, content: PayloadT) -> "Outcome[PayloadT]":
        return cls(status=OutcomeStatus.OK, content=content)

    @classmethod
    def skipped(cls, reason: str, content: PayloadT | None = None) -> "Outcome[PayloadT]":
        return cls(status=OutcomeStatus.SKIPPED, reason=reason, content=content)

    @property
    def is_ok(self) -> bool:
        return self.status == OutcomeStatus.OK

    @property
    def is_skipped(self) -> bool:
        return self.status == OutcomeStatus.SKIPPED
