"""Human-friendly formatting helpers: durations, rates, truncation and tables."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Iterable, Sequence
from datetime import timedelta

_MILLISECOND = timedelta(milliseconds=1)
_MAX_CELL_WIDTH = 30


def pretty_duration(duration: timedelta) -> str:
    """Return a short, human-formatted string for a duration."""
    seconds = duration.total_seconds()

    if seconds < 1.0:
        return f"{int(duration / _MILLISECOND)}ms"
    if seconds < 240.0:
        return f"{int(seconds)}s"
    if seconds < 2.0 * 60.0 * 60.0:
        return f"{int(seconds / 60.0)}m"
    return f"{int(seconds / 3600.0)}h"


def pretty_rate(count: int, duration: timedelta) -> str:
    """Return a human-formatted rate for a count over a duration."""
    seconds = duration.total_seconds()
    if seconds == 0:
        return ""
    if count == 0:
        return "0"

    per_sec = count / seconds
    per_min = count / (seconds / 60.0)
    per_hour = count / (seconds / 3600.0)

    if per_sec >= 10.0:
        return f"{int(per_sec)}/sec"
    if per_sec >= 1.0:
        return f"{per_sec:0.1f}/sec"
    if per_min >= 10.0:
        return f"{int(per_min)}/min"
    if per_min >= 1.0:
        return f"{per_min:0.1f}/min"
    if per_hour >= 0.1:
        return f"{per_hour:0.1f}/hour"
    return "~0"


def truncate_string_suffix(value: str, max_len: int) -> tuple[str, int]:
    """Replace trailing characters with "..." if needed.

    Returns the (possibly) truncated string and the number of characters omitted.
    """
    if len(value) - 3 <= max_len:
        return value, 0
    if max_len < 3:
        raise ValueError(f"max_len must be at least 3, got {max_len}")

    omitted = len(value) - (max_len - 3)
    return f"{value[:max_len - 3]}...", omitted


def truncate_string_middle(value: str, max_len: int, suffix_len: int) -> tuple[str, int]:
    """Replace characters in the middle with "..." if needed.

    Returns the (possibly) truncated string and the number of characters omitted.
    """
    if len(value) - 3 <= max_len:
        return value, 0
    prefix_len = max_len - suffix_len - 3
    if suffix_len < 0 or prefix_len < 0:
        raise ValueError(
            f"Cannot keep a suffix of {suffix_len} characters within {max_len} characters"
        )

    suffix = value[len(value) - suffix_len:]
    prefix = value[:prefix_len]
    omitted = len(value) - len(prefix) - len(suffix)
    return f"{prefix}...{suffix}", omitted


def in_terminal() -> bool:
    """Return whether standard output is attached to a terminal."""
    stream = sys.stdout
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


def _cell_lines(cell: str, wrap: bool) -> list[str]:
    lines = cell.split("\n")
    if not wrap:
        return lines
    wrapped: list[str] = []
    for line in lines:
        wrapped.extend(
            textwrap.wrap(
                line,
                _MAX_CELL_WIDTH,
                break_long_words=False,
                break_on_hyphens=False,
            )
            or [""]
        )
    return wrapped


def render_table(
    rows: Iterable[Sequence[object]],
    header: Sequence[str] | None = None,
    bordered: bool = True,
    auto_wrap: bool = False,
) -> str:
    """Render rows as a plain-text table with "|" column separators.

    Header cells are upper-cased and centred; body cells are left-aligned.
    When ``bordered`` is set, dashed lines are drawn above and below the table.
    When ``auto_wrap`` is set, long cells are wrapped on word boundaries.
    The result carries no trailing newline.
    """
    header_cells = [str(cell).upper() for cell in header] if header else []
    body = [[str(cell) for cell in row] for row in rows]

    num_columns = max([len(header_cells), *(len(row) for row in body)], default=0)
    if num_columns == 0:
        return ""

    def padded(cells: list[str]) -> list[str]:
        return cells + [""] * (num_columns - len(cells))

    header_lines = [_cell_lines(cell, False) for cell in padded(header_cells)] if header_cells else []
    body_lines = [[_cell_lines(cell, auto_wrap) for cell in padded(row)] for row in body]

    widths = [0] * num_columns
    for row in ([header_lines] if header_lines else []) + body_lines:
        for index, lines in enumerate(row):
            widths[index] = max(widths[index], *(len(line) for line in lines))

    def render_row(row: list[list[str]], centred: bool) -> list[str]:
        height = max(len(lines) for lines in row)
        output = []
        for position in range(height):
            parts = []
            for lines, width in zip(row, widths):
                text = lines[position] if position < len(lines) else ""
                text = text.center(width) if centred else text.ljust(width)
                parts.append(f" {text} ")
            output.append(" " + "|".join(parts))
        return output

    border = "-" + "+".join("-" * (width + 2) for width in widths)

    out: list[str] = []
    if bordered:
        out.append(border)
    if header_lines:
        out.extend(render_row(header_lines, True))
        out.append(border)
    for row in body_lines:
        out.extend(render_row(row, False))
    if bordered:
        out.append(border)
    return "\n".join(out)