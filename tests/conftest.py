"""Shared test fixtures for the logging core."""

import io
import json
import re
from datetime import datetime, timezone
from typing import Any

import pytest

from logkit.console import ColorConsoleHandler
from logkit.context import USERNAME_KEY, RequestContext
from logkit.handlers import JSONHandler
from logkit.logger import Logger, make_logger
from logkit.records import Level, LogEvent

ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


def json_lines(stream: io.StringIO) -> list[dict[str, Any]]:
    """Parse every line written by a JSONHandler."""
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def console_blocks(stream: io.StringIO) -> list[tuple[str, dict[str, Any]]]:
    """Split ColorConsoleHandler output into (header, attributes) pairs."""
    blocks = []
    lines = strip_ansi(stream.getvalue()).splitlines()
    i = 0
    while i < len(lines):
        header = lines[i]
        body = [lines[i + 1]]
        i += 2
        if body[0] != "{}":
            while body[-1] != "}":
                body.append(lines[i])
                i += 1
        blocks.append((header, json.loads("\n".join(body))))
    return blocks


def make_event(
    message: str = "hello",
    level: Level = Level.INFO,
    attributes: tuple[tuple[str, Any], ...] = (),
) -> LogEvent:
    return LogEvent(
        time=datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc),
        level=level,
        message=message,
        attributes=attributes,
    )


@pytest.fixture
def stream() -> io.StringIO:
    """In-memory output stream."""
    return io.StringIO()


@pytest.fixture
def json_handler(stream: io.StringIO) -> JSONHandler:
    """A JSON Lines handler that accepts every level."""
    return JSONHandler(stream, level=Level.DEBUG)


@pytest.fixture
def json_logger(json_handler: JSONHandler) -> Logger:
    """A root logger writing JSON Lines to the stream fixture."""
    return make_logger(json_handler)


@pytest.fixture
def console_handler(stream: io.StringIO) -> ColorConsoleHandler:
    """A colorized console handler writing to the stream fixture."""
    return ColorConsoleHandler(stream, level=Level.DEBUG)


@pytest.fixture
def console_logger(console_handler: ColorConsoleHandler) -> Logger:
    """A root logger writing colored console output to the stream fixture."""
    return make_logger(console_handler)


@pytest.fixture
def request_ctx() -> RequestContext:
    """Context of an authenticated request."""
    return RequestContext(request_id="abc-123", values={USERNAME_KEY: "alice"})
