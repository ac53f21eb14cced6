"""Log sinks: the handler protocol, the JSON Lines handler and the discard handler.

A handler receives fully built ``LogEvent`` values from a ``Logger``. Handlers
are immutable; ``with_attrs`` and ``with_group`` return narrowed copies that
share the underlying stream and its write lock.
"""

import copy
import threading
from collections.abc import Callable, Sequence
from typing import Any, Protocol, TextIO, runtime_checkable

import structlog

from logkit.records import Level, LogEvent

TIME_KEY = "time"
LEVEL_KEY = "level"
MESSAGE_KEY = "msg"

# (groups, key, value) -> replacement (key, value), or None to drop the attribute.
ReplaceAttr = Callable[[tuple[str, ...], str, Any], tuple[str, Any] | None]


class HandlerError(Exception):
    """Raised when a handler cannot encode or render a single event.

    Only that event is lost; the handler stays usable.
    """


@runtime_checkable
class Handler(Protocol):
    """Capability set every log sink implements."""

    def enabled(self, level: Level) -> bool: ...

    def handle(self, event: LogEvent) -> None: ...

    def with_attrs(self, attrs: Sequence[tuple[str, Any]]) -> "Handler": ...

    def with_group(self, name: str) -> "Handler": ...


class JSONHandler:
    """Writes each event as one JSON object per line.

    The record starts with ``time``, ``level`` and ``msg``, followed by the
    attributes bound with ``with_attrs`` and then the event's own attributes.
    Attributes added after ``with_group(name)`` are nested under ``name``.
    Repeated keys keep the last value.
    """

    def __init__(
        self,
        stream: TextIO,
        level: Level = Level.INFO,
        replace_attr: ReplaceAttr | None = None,
    ) -> None:
        self.stream = stream
        self.level = level
        self.replace_attr = replace_attr
        self._renderer = structlog.processors.JSONRenderer()
        self._lock = threading.Lock()
        self._bound: tuple[tuple[tuple[str, ...], str, Any], ...] = ()
        self._groups: tuple[str, ...] = ()

    def enabled(self, level: Level) -> bool:
        return level >= self.level

    def handle(self, event: LogEvent) -> None:
        """Encode the event and write it to the stream.

        Raises:
            HandlerError: If the record cannot be serialized to JSON or the
                stream rejects the write.
        """
        record: dict[str, Any] = {}
        self._put(record, (), TIME_KEY, event.time.isoformat())
        self._put(record, (), LEVEL_KEY, event.level.label)
        self._put(record, (), MESSAGE_KEY, event.message)
        for groups, key, value in self._bound:
            self._put(record, groups, key, value)
        for key, value in event.attributes:
            self._put(record, self._groups, key, value)

        try:
            line = self._renderer(None, event.level.name.lower(), record)
        except (TypeError, ValueError) as exc:
            raise HandlerError(f"Failed to encode log record: {exc}") from exc

        try:
            with self._lock:
                self.stream.write(line + "\n")
                self.stream.flush()
        except (OSError, ValueError) as exc:
            raise HandlerError(f"Failed to write log record: {exc}") from exc

    def with_attrs(self, attrs: Sequence[tuple[str, Any]]) -> "JSONHandler":
        if not attrs:
            return self
        clone = copy.copy(self)
        clone._bound = self._bound + tuple((self._groups, key, value) for key, value in attrs)
        return clone

    def with_group(self, name: str) -> "JSONHandler":
        if not name:
            return self
        clone = copy.copy(self)
        clone._groups = self._groups + (name,)
        return clone

    def _put(
        self,
        record: dict[str, Any],
        groups: tuple[str, ...],
        key: str,
        value: Any,
    ) -> None:
        if self.replace_attr is not None:
            replaced = self.replace_attr(groups, key, value)
            if replaced is None:
                return
            key, value = replaced

        target = record
        for group in groups:
            nested = target.get(group)
            if not isinstance(nested, dict):
                nested = target[group] = {}
            target = nested
        target[key] = value


class DiscardHandler:
    """Accepts and drops every event."""

    def enabled(self, level: Level) -> bool:
        return False

    def handle(self, event: LogEvent) -> None:
        return None

    def with_attrs(self, attrs: Sequence[tuple[str, Any]]) -> "DiscardHandler":
        return self

    def with_group(self, name: str) -> "DiscardHandler":
        return self
