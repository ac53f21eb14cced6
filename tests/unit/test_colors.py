"""Unit tests for the color formatter."""

import pytest

from logkit.colors import (
    CYAN,
    DARK_GRAY,
    LIGHT_RED,
    LIGHT_YELLOW,
    RESET,
    colorize,
    level_color,
)
from logkit.records import Level


class TestColorize:
    def test_wraps_text_in_escape_sequence(self) -> None:
        assert colorize(CYAN, "INFO") == "\033[36mINFO\033[0m"

    def test_ends_with_reset(self) -> None:
        assert colorize(97, "message").endswith(RESET)

    def test_empty_text(self) -> None:
        assert colorize(37, "") == "\033[37m\033[0m"


class TestLevelColor:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (Level.DEBUG, DARK_GRAY),
            (Level.INFO, CYAN),
            (Level.WARN, LIGHT_YELLOW),
            (Level.ERROR, LIGHT_RED),
        ],
    )
    def test_color_per_level(self, level: Level, expected: int) -> None:
        assert level_color(level) == expected


class TestLevel:
    def test_levels_are_ordered(self) -> None:
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR

    def test_from_method(self) -> None:
        assert Level.from_method("warning") is Level.WARN
        assert Level.from_method("exception") is Level.ERROR

    def test_from_unknown_method(self) -> None:
        with pytest.raises(ValueError):
            Level.from_method("trace")

    def test_label(self) -> None:
        assert Level.WARN.label == "WARN"
