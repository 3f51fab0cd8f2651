import io
import sys
from datetime import timedelta

import pytest

from topicctl.pretty import (
    in_terminal,
    pretty_duration,
    pretty_rate,
    render_table,
    truncate_string_middle,
    truncate_string_suffix,
)


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        (timedelta(milliseconds=5), "5ms"),
        (timedelta(seconds=25, milliseconds=410), "25s"),
        (timedelta(minutes=30, seconds=10), "30m"),
        (timedelta(minutes=60 * 6 + 15), "6h"),
    ],
)
def test_pretty_duration(duration, expected):
    assert pretty_duration(duration) == expected


@pytest.mark.parametrize(
    ("count", "duration", "expected"),
    [
        (300, timedelta(0), ""),
        (0, timedelta(seconds=1), "0"),
        (300, timedelta(seconds=1), "300/sec"),
        (3, timedelta(seconds=1, milliseconds=100), "2.7/sec"),
        (35, timedelta(minutes=1), "35/min"),
        (3, timedelta(minutes=1), "3.0/min"),
        (3, timedelta(hours=1), "3.0/hour"),
        (1, timedelta(hours=1000), "~0"),
    ],
)
def test_pretty_rate(count, duration, expected):
    assert pretty_rate(count, duration) == expected


def test_truncate_string_suffix():
    assert truncate_string_suffix("01234567890123456789", 10) == ("0123456...", 13)
    assert truncate_string_suffix("012345", 10) == ("012345", 0)


def test_truncate_string_middle():
    assert truncate_string_middle("01234567890123456789", 10, 3) == ("0123...789", 13)
    assert truncate_string_middle("012345", 10, 3) == ("012345", 0)


def test_truncate_string_middle_suffix_too_long():
    with pytest.raises(ValueError):
        truncate_string_middle("01234567890123456789", 5, 4)


def test_in_terminal_false_for_non_tty(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert in_terminal() is False


def test_render_table_pinned():
    table = render_table([["a", "1"]], header=["Group", "Coordinator"])
    border = "--------+-------------"
    assert table.split("\n") == [
        border,
        "  GROUP | COORDINATOR ",
        border,
        "  a     | 1           ",
        border,
    ]


def test_render_table_lines_have_equal_width():
    table = render_table(
        [["first", "x"], ["a", "longer value"], ["b"]],
        header=["Name", "Value"],
    )
    lines = table.split("\n")
    assert len({len(line) for line in lines}) == 1
    assert not table.endswith("\n")


def test_render_table_without_border_or_header():
    table = render_table([["a", "b"]], bordered=False)
    assert table == "  a | b "


def test_render_table_wraps_long_cells():
    cell = " ".join(["alpha"] * 10)
    wrapped = render_table([[cell]], bordered=False, auto_wrap=True).split("\n")
    unwrapped = render_table([[cell]], bordered=False, auto_wrap=False).split("\n")
    assert len(wrapped) == 2
    assert len(unwrapped) == 1
    assert all(len(line.strip()) <= 30 for line in wrapped)


def test_render_table_multiline_cells():
    table = render_table([["one\ntwo", "x"]], bordered=False)
    lines = table.split("\n")
    assert len(lines) == 2
    assert "two" in lines[1]


def test_render_table_empty():
    assert render_table([]) == ""