from __future__ import annotations

import pytest

from needletail_logger.application.use_cases.format_message import DEBUG_DIVIDER, format_message, paginate
from needletail_logger.domain.levels import LogLevel


def test_short_message_stays_on_one_line() -> None:
    assert paginate("all systems nominal", 80) == "all systems nominal"


def test_pagination_breaks_before_exceeding_width() -> None:
    text = "alpha beta gamma delta epsilon zeta eta theta"
    result = paginate(text, 16)
    assert result == "alpha beta gamma\ndelta epsilon\nzeta eta theta"
    assert all(len(line) <= 16 for line in result.split("\n"))


def test_line_of_exactly_width_is_allowed() -> None:
    assert paginate("abcd efgh", 9) == "abcd efgh"
    assert paginate("abcd efgh", 8) == "abcd\nefgh"


def test_oversized_token_stands_alone_unsplit() -> None:
    long_token = "x" * 30
    result = paginate(f"short {long_token} tail", 10)
    assert result.split("\n") == ["short", long_token, "tail"]


def test_whitespace_is_normalised_and_no_trailing_newline() -> None:
    result = paginate("  one\ttwo\n\nthree   ", 80)
    assert result == "one two three"
    assert not result.endswith("\n")


def test_empty_message_paginates_to_empty_string() -> None:
    assert paginate("", 10) == ""


def test_non_positive_width_is_rejected() -> None:
    with pytest.raises(ValueError, match="width must be positive"):
        paginate("text", 0)


@pytest.mark.parametrize("width", [1, 5, 12, 40])
def test_no_line_exceeds_width_unless_single_token(width: int) -> None:
    text = "the quick brown fox jumps over the extraordinarily lazy dog again and again"
    for line in paginate(text, width).split("\n"):
        assert len(line) <= width or " " not in line


@pytest.mark.parametrize("level", [LogLevel.ERROR, LogLevel.CRITICAL])
def test_error_and_critical_bodies_are_uppercased(level: LogLevel) -> None:
    formatted = format_message(level, "Disk nearly full", max_line_width=80)
    assert formatted.body == "DISK NEARLY FULL"


@pytest.mark.parametrize("level", [LogLevel.TRACE, LogLevel.INFO, LogLevel.NOTICE, LogLevel.WARNING])
def test_other_levels_preserve_case(level: LogLevel) -> None:
    formatted = format_message(level, "Disk nearly full", max_line_width=80)
    assert formatted.body == "Disk nearly full"


def test_debug_body_is_wrapped_in_dividers() -> None:
    formatted = format_message(LogLevel.DEBUG, "State dump", max_line_width=80)
    assert formatted.body == f"{DEBUG_DIVIDER}\nState dump\n{DEBUG_DIVIDER}"
    assert len(DEBUG_DIVIDER) == 20


def test_icon_prefix_matches_level_and_can_be_suppressed() -> None:
    with_icon = format_message(LogLevel.WARNING, "careful", max_line_width=80)
    without_icon = format_message(LogLevel.WARNING, "careful", max_line_width=80, display_icons=False)
    assert with_icon.icon == LogLevel.WARNING.icon
    assert with_icon.text == f"{LogLevel.WARNING.icon} careful"
    assert without_icon.icon == ""
    assert without_icon.text == "careful"


def test_uppercasing_happens_before_pagination() -> None:
    formatted = format_message(LogLevel.ERROR, "straße straße", max_line_width=7)
    assert all(len(line) <= 7 for line in formatted.body.split("\n"))
    assert formatted.body == "STRASSE\nSTRASSE"
