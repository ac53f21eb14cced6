"""Enrichment composer: derive loggers carrying operation, request and ad-hoc context.

Usage:
    log = wrap(base_log, with_op("StatisticServer.GetStatistics"), with_ctx(ctx))
    log.info("statistics requested", form_id=form_id)

Options are resolved in a fixed order regardless of how they are passed:
operation first, then request context, then explicit attributes in the order
given. A later attribute with the same key shadows an earlier one.
"""

from dataclasses import dataclass
from typing import Any

from logkit.context import REQUEST_ID_KEY, USERNAME_KEY, RequestContext
from logkit.logger import Logger

OP_KEY = "op"
ERROR_KEY = "error"


@dataclass(frozen=True)
class OperationTag:
    """Tags every event with the operation (call site) that emitted it."""

    name: str


@dataclass(frozen=True)
class ContextTag:
    """Tags every event with the request id and principal of a request."""

    ctx: RequestContext


@dataclass(frozen=True)
class ExplicitAttribute:
    """Tags every event with a fixed key/value pair."""

    key: str
    value: Any


Option = OperationTag | ContextTag | ExplicitAttribute


def with_op(name: str) -> OperationTag:
    if not isinstance(name, str):
        raise TypeError(f"Operation name must be a string, got {type(name).__name__}")
    return OperationTag(name)


def with_ctx(ctx: RequestContext) -> ContextTag:
    if not isinstance(ctx, RequestContext):
        raise TypeError(f"Expected RequestContext, got {type(ctx).__name__}")
    return ContextTag(ctx)


def with_any(key: str, value: Any) -> ExplicitAttribute:
    return ExplicitAttribute(key, value)


def wrap(log: Logger, *options: Option) -> Logger:
    """Return a logger that adds the attributes implied by ``options`` to every event.

    Wrapping an already wrapped logger keeps its attributes; same-keyed
    attributes are shadowed, never removed. No I/O happens here.

    Args:
        log: Base (or previously wrapped) logger.
        *options: Options built with ``with_op``, ``with_ctx`` and ``with_any``.

    Returns:
        The derived logger.

    Raises:
        TypeError: If an option is not one of the recognized kinds.
    """
    op: str | None = None
    ctx: RequestContext | None = None
    attributes: dict[str, Any] = {}

    for option in options:
        if isinstance(option, OperationTag):
            op = option.name
        elif isinstance(option, ContextTag):
            ctx = option.ctx
        elif isinstance(option, ExplicitAttribute):
            attributes[option.key] = option.value
        else:
            raise TypeError(f"Unsupported wrap option: {option!r}")

    if op is not None:
        log = log.bind(**{OP_KEY: op})

    if ctx is not None:
        log = log.bind(**{REQUEST_ID_KEY: ctx.request_id, USERNAME_KEY: ctx.username})

    if attributes:
        log = log.bind(**attributes)

    return log


def error_attr(err: BaseException) -> dict[str, str]:
    """Standard ``error`` attribute: ``log.error("failed", **error_attr(exc))``."""
    return {ERROR_KEY: str(err)}
