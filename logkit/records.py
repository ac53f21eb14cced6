"""Severity levels and the immutable log event handed to sinks."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any


class Level(IntEnum):
    """Ordered log severity. Values match the stdlib logging numbering."""

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_method(cls, method_name: str) -> "Level":
        """Resolve a structlog method name (``info``, ``warning``...) to a level."""
        try:
            return _METHOD_LEVELS[method_name]
        except KeyError:
            raise ValueError(f"Unknown log method: {method_name}") from None


_METHOD_LEVELS: dict[str, Level] = {
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
    "exception": Level.ERROR,
    "critical": Level.ERROR,
}


@dataclass(frozen=True)
class LogEvent:
    """A single log record.

    Attributes:
        time: When the event was emitted (timezone-aware, local time).
        level: Event severity.
        message: Human-readable message.
        attributes: Ordered (key, value) pairs attached at the call site.
    """

    time: datetime
    level: Level
    message: str
    attributes: tuple[tuple[str, Any], ...] = field(default_factory=tuple)
