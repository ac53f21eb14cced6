"""Colorized, human-readable console handler for local development.

Each event is first encoded by an inner JSON handler into a buffer shared by
the handler and all of its narrowed copies, parsed back into an attribute
snapshot, then printed as a colored header line followed by an indented JSON
block:

    [Mon Jan 2 2006 15:04:05] INFO: created
    {
      "op": "CreateWidget"
    }
"""

import copy
import io
import json
import sys
import threading
from collections.abc import Sequence
from datetime import datetime
from typing import Any, TextIO

from logkit.colors import DARK_GRAY, LIGHT_GRAY, WHITE, colorize, level_color
from logkit.handlers import (
    LEVEL_KEY,
    MESSAGE_KEY,
    TIME_KEY,
    Handler,
    HandlerError,
    JSONHandler,
    ReplaceAttr,
)
from logkit.records import Level, LogEvent

_DEFAULT_KEYS = frozenset({TIME_KEY, LEVEL_KEY, MESSAGE_KEY})

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_time(moment: datetime) -> str:
    """Render a timestamp as ``[Mon Jan 2 2006 15:04:05]``."""
    weekday = _WEEKDAYS[moment.weekday()]
    month = _MONTHS[moment.month - 1]
    return f"[{weekday} {month} {moment.day} {moment.year} {moment:%H:%M:%S}]"


def suppress_defaults(next_replace: ReplaceAttr | None = None) -> ReplaceAttr:
    """Drop the top-level time, level and message fields already shown on the header line."""

    def replace(groups: tuple[str, ...], key: str, value: Any) -> tuple[str, Any] | None:
        if not groups and key in _DEFAULT_KEYS:
            return None
        if next_replace is None:
            return key, value
        return next_replace(groups, key, value)

    return replace


class ColorConsoleHandler:
    """Pretty, colored console output backed by a strict JSON encoder.

    The encode buffer and its lock are created once and shared with every
    handler returned by ``with_attrs``/``with_group``, so there is exactly one
    buffer per output stream. The buffer is only touched while holding the
    lock, and it is reset before the lock is released.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        level: Level = Level.DEBUG,
        replace_attr: ReplaceAttr | None = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self._buffer = io.StringIO()
        self._lock = threading.Lock()
        self._handler: Handler = JSONHandler(
            self._buffer, level=level, replace_attr=suppress_defaults(replace_attr)
        )

    def enabled(self, level: Level) -> bool:
        return self._handler.enabled(level)

    def with_attrs(self, attrs: Sequence[tuple[str, Any]]) -> "ColorConsoleHandler":
        return self._narrowed(self._handler.with_attrs(attrs))

    def with_group(self, name: str) -> "ColorConsoleHandler":
        return self._narrowed(self._handler.with_group(name))

    def handle(self, event: LogEvent) -> None:
        """Print one header line and one attribute block for the event.

        Raises:
            HandlerError: If the inner encoder fails, its output cannot be parsed,
                or the output stream rejects the write.
        """
        attrs = self._compute_attrs(event)
        block = json.dumps(attrs, indent=2, ensure_ascii=False)

        header = "{} {}: {}".format(
            colorize(LIGHT_GRAY, format_time(event.time)),
            colorize(level_color(event.level), event.level.label),
            colorize(WHITE, event.message),
        )
        try:
            self.stream.write(f"{header}\n{colorize(DARK_GRAY, block)}\n")
            self.stream.flush()
        except (OSError, ValueError) as exc:
            raise HandlerError(f"Failed to write log record: {exc}") from exc

    def _compute_attrs(self, event: LogEvent) -> dict[str, Any]:
        with self._lock:
            try:
                self._handler.handle(event)
                attrs = json.loads(self._buffer.getvalue())
            except json.JSONDecodeError as exc:
                raise HandlerError(f"Failed to parse encoded log record: {exc}") from exc
            finally:
                self._buffer.seek(0)
                self._buffer.truncate()

        if not isinstance(attrs, dict):
            raise HandlerError(f"Encoded log record is not an object: {type(attrs).__name__}")
        return attrs

    def _narrowed(self, handler: Handler) -> "ColorConsoleHandler":
        clone = copy.copy(self)
        clone._handler = handler
        return clone
