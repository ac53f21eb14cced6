"""structlog-based logger that delivers events to a ``Handler``.

``Logger`` is an immutable bound logger: ``bind`` returns a new view sharing
the same sink, and bound attributes can be shadowed but never removed.
"""

import sys
from datetime import datetime
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from logkit.handlers import Handler, HandlerError
from logkit.records import Level, LogEvent


def to_event(logger: Any, method_name: str, event_dict: EventDict) -> tuple[tuple[LogEvent], dict]:
    """Final processor: turn the structlog event dict into a ``LogEvent``."""
    message = event_dict.pop("event", None)
    event = LogEvent(
        time=datetime.now().astimezone(),
        level=Level.from_method(method_name),
        message="" if message is None else str(message),
        attributes=tuple(event_dict.items()),
    )
    return (event,), {}


PROCESSORS: tuple[Processor, ...] = (
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    to_event,
)


class HandlerLogger:
    """Wrapped logger that forwards ``LogEvent`` values to a handler.

    A handler failure drops the event and is reported on stderr; it never
    reaches the code that logged.
    """

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    def msg(self, event: LogEvent) -> None:
        try:
            self.handler.handle(event)
        except HandlerError as exc:
            print(
                f"logkit: dropped {event.level.label} record {event.message!r}: {exc}",
                file=sys.stderr,
            )

    log = debug = info = warn = warning = error = critical = msg


class Logger(structlog.BoundLoggerBase):
    """Bound logger over a ``HandlerLogger``.

    Level filtering is delegated to the handler and happens before any
    processor runs.
    """

    _logger: HandlerLogger

    @property
    def handler(self) -> Handler:
        return self._logger.handler

    def enabled(self, level: Level) -> bool:
        return self._logger.handler.enabled(level)

    def debug(self, event: str | None = None, **kw: Any) -> Any:
        return self._emit("debug", event, **kw)

    def info(self, event: str | None = None, **kw: Any) -> Any:
        return self._emit("info", event, **kw)

    def warning(self, event: str | None = None, **kw: Any) -> Any:
        return self._emit("warning", event, **kw)

    warn = warning

    def error(self, event: str | None = None, **kw: Any) -> Any:
        return self._emit("error", event, **kw)

    def exception(self, event: str | None = None, **kw: Any) -> Any:
        kw.setdefault("exc_info", True)
        return self._emit("error", event, **kw)

    def with_group(self, name: str) -> "Logger":
        """Nest attributes bound or logged from now on under ``name``."""
        if not name:
            return self
        handler = self._logger.handler
        if self._context:
            handler = handler.with_attrs(list(self._context.items()))
        return self.__class__(HandlerLogger(handler.with_group(name)), self._processors, {})

    def unbind(self, *keys: str) -> "Logger":
        raise TypeError("Bound log attributes cannot be removed, only shadowed with bind()")

    def try_unbind(self, *keys: str) -> "Logger":
        raise TypeError("Bound log attributes cannot be removed, only shadowed with bind()")

    def new(self, **new_values: Any) -> "Logger":
        raise TypeError("Bound log attributes cannot be cleared, use bind() on the base logger")

    def _emit(self, method_name: str, event: str | None, **kw: Any) -> Any:
        if not self.enabled(Level.from_method(method_name)):
            return None
        return self._proxy_to_logger(method_name, event, **kw)


def make_logger(handler: Handler) -> Logger:
    """Create a root logger with no bound attributes writing to ``handler``."""
    return Logger(HandlerLogger(handler), list(PROCESSORS), {})
