"""Logger factory: choose a sink for the deployment environment."""

import sys
from typing import TextIO

from config.settings import EnvType
from logkit.console import ColorConsoleHandler
from logkit.handlers import DiscardHandler, Handler, JSONHandler
from logkit.logger import Logger, make_logger
from logkit.records import Level


class UnknownEnvironmentError(ValueError):
    """Raised when no sink is defined for an environment tag."""

    def __init__(self, env: object) -> None:
        self.env = env
        known = ", ".join(e.value for e in EnvType)
        super().__init__(f"Unknown environment {env!r}, expected one of: {known}")


def new(env: EnvType | str, stream: TextIO | None = None) -> Logger:
    """Create an independently configured root logger.

    - ``local``: colored console output, DEBUG and above.
    - ``dev``: one JSON object per line, INFO and above.
    - ``testing``: everything is discarded.

    Args:
        env: Environment tag.
        stream: Output stream, ``sys.stdout`` by default.

    Raises:
        UnknownEnvironmentError: If ``env`` is not a known environment.
    """
    try:
        env_type = EnvType(env)
    except ValueError:
        raise UnknownEnvironmentError(env) from None

    if stream is None:
        stream = sys.stdout

    handler: Handler
    if env_type is EnvType.LOCAL:
        handler = ColorConsoleHandler(stream, level=Level.DEBUG)
    elif env_type is EnvType.DEV:
        handler = JSONHandler(stream, level=Level.INFO)
    else:
        handler = DiscardHandler()

    return make_logger(handler)
