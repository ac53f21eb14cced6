"""Process logger construction (composition root).

Console output in local development, JSON Lines in dev, nothing under test.
Call once at startup and pass the returned logger to every collaborator.
"""

from typing import TextIO

from config.settings import AppSettings
from logkit import Logger, new, with_any, wrap


def configure_logging(settings: AppSettings | None = None, stream: TextIO | None = None) -> Logger:
    """Build the application logger.

    Args:
        settings: Application settings. Loaded from the environment when omitted.
        stream: Output stream, stdout by default.

    Returns:
        Root logger tagged with the application name.
    """
    settings = settings or AppSettings()
    log = wrap(new(settings.env, stream=stream), with_any("app", settings.application_name))
    log.debug("logging configured", env=settings.env.value)
    return log
