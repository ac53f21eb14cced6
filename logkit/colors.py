"""ANSI terminal colors for the local console handler."""

from logkit.records import Level

RESET = "\033[0m"

CYAN = 36
LIGHT_GRAY = 37
DARK_GRAY = 90
LIGHT_RED = 91
LIGHT_YELLOW = 93
WHITE = 97

_LEVEL_COLORS: dict[Level, int] = {
    Level.DEBUG: DARK_GRAY,
    Level.INFO: CYAN,
    Level.WARN: LIGHT_YELLOW,
    Level.ERROR: LIGHT_RED,
}


def colorize(color_code: int, text: str) -> str:
    """Wrap text in an ANSI color escape sequence."""
    return f"\033[{color_code}m{text}{RESET}"


def level_color(level: Level) -> int:
    """Return the color code used to render a severity label."""
    return _LEVEL_COLORS[level]
