"""Core configuration and logging utilities."""

from shelf.core.config import Settings, get_settings
from shelf.core.logger import AgentLogger, configure_logging

__all__ = ["Settings", "get_settings", "AgentLogger", "configure_logging"]
