"""
Logging helpers

AgentLogger is the structured event sink handed to every skill through its
context. It accepts a stdlib logger or any object exposing some subset of
debug/info/warning/error(message, meta) and silently skips the levels the
sink does not implement.
"""

import logging
from typing import Any

from shelf.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class AgentLogger:
    """
    Structured event logger used by the plan orchestrator and skills

    Attributes:
        sink: Destination for events. Defaults to the "shelf.agents" logger.
    """

    def __init__(self, sink: Any | None = None) -> None:
        self.sink = sink if sink is not None else logging.getLogger("shelf.agents")

    @classmethod
    def wrap(cls, sink: Any | None) -> "AgentLogger":
        """Return sink unchanged if it already is an AgentLogger"""
        if isinstance(sink, cls):
            return sink
        return cls(sink)

    def debug(self, message: str, meta: dict[str, Any] | None = None) -> None:
        self._emit("debug", message, meta)

    def info(self, message: str, meta: dict[str, Any] | None = None) -> None:
        self._emit("info", message, meta)

    def warning(self, message: str, meta: dict[str, Any] | None = None) -> None:
        self._emit("warning", message, meta)

    def error(self, message: str, meta: dict[str, Any] | None = None) -> None:
        self._emit("error", message, meta)

    def _emit(self, level: str, message: str, meta: dict[str, Any] | None) -> None:
        meta = meta or {}

        if isinstance(self.sink, (logging.Logger, logging.LoggerAdapter)):
            extra = {"event": message, "meta": meta}
            if meta:
                self.sink.log(_LEVELS[level], "%s %s", message, meta, extra=extra)
            else:
                self.sink.log(_LEVELS[level], "%s", message, extra=extra)
            return

        method = getattr(self.sink, level, None)
        if method is None and level == "warning":
            # Sinks shaped like console objects spell it "warn"
            method = getattr(self.sink, "warn", None)

        if callable(method):
            method(message, meta)


def configure_logging(level: str | None = None) -> None:
    """
    Configure console logging for the shelf package

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to settings.LOG_LEVEL.
    """
    level_name = (level or get_settings().LOG_LEVEL).upper()

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("shelf").setLevel(level_name)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
