"""Contextual structured logging for the statistic service.

Build the process logger once with ``new`` (or ``config.logging.configure_logging``),
pass it to collaborators, and derive call-site loggers with ``wrap``.
"""

from logkit.console import ColorConsoleHandler
from logkit.context import RequestContext
from logkit.enrich import error_attr, with_any, with_ctx, with_op, wrap
from logkit.factory import UnknownEnvironmentError, new
from logkit.handlers import DiscardHandler, Handler, HandlerError, JSONHandler
from logkit.logger import Logger, make_logger
from logkit.records import Level, LogEvent

__all__ = [
    "ColorConsoleHandler",
    "DiscardHandler",
    "Handler",
    "HandlerError",
    "JSONHandler",
    "Level",
    "LogEvent",
    "Logger",
    "RequestContext",
    "UnknownEnvironmentError",
    "error_attr",
    "make_logger",
    "new",
    "with_any",
    "with_ctx",
    "with_op",
    "wrap",
]
