"""Partition bounds and tail statistics, with table formatting for both."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from topicctl.pretty import pretty_duration, pretty_rate, render_table

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _resolve(moment: datetime | None) -> datetime:
    """Return an aware time; None stands for the zero time."""
    if moment is None:
        return _ZERO_TIME
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _is_zero(moment: datetime | None) -> bool:
    return moment is None or _resolve(moment) == _ZERO_TIME


def _rfc3339(moment: datetime | None) -> str:
    """Format a time as RFC 3339 with second precision."""
    text = _resolve(moment).replace(microsecond=0).isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass
class Bounds:
    """The first and last messages of a partition."""

    partition: int
    first_offset: int = 0
    first_time: datetime | None = None
    last_offset: int = 0
    last_time: datetime | None = None

    @property
    def is_empty(self) -> bool:
        """Whether the partition holds no messages within these bounds."""
        return self.first_offset == self.last_offset


@dataclass
class TailPartitionStats:
    """Counters for the messages fetched from a single partition."""

    total_errors: int = 0
    total_messages: int = 0
    total_message_bytes: int = 0
    total_messages_filtered: int = 0
    total_message_bytes_filtered: int = 0
    first_offset: int = 0
    first_time: datetime | None = None
    last_offset: int = 0
    last_time: datetime | None = None


@dataclass
class TailStats:
    """Counters for every partition that is tailed."""

    partition_stats: dict[int, TailPartitionStats] = field(default_factory=dict)

    @classmethod
    def for_partitions(cls, partitions: Iterable[int]) -> TailStats:
        """Return empty stats for each of the given partitions."""
        return cls({partition: TailPartitionStats() for partition in partitions})


def format_tail_stats(stats: TailStats, filtered: bool) -> str:
    """Render a table of the partitions that had messages tailed, in partition order."""
    if filtered:
        header = [
            "Partition",
            "Messages Tailed\n(Total)",
            "Messages Tailed\n(Filtered)",
            "First Offset",
            "First Time",
            "Last Offset",
            "Last Time",
        ]
    else:
        header = [
            "Partition",
            "Messages Tailed",
            "First Offset",
            "First Time",
            "Last Offset",
            "Last Time",
        ]

    partition_stats: Mapping[int, TailPartitionStats] = stats.partition_stats
    rows = []
    for partition in sorted(partition_stats):
        entry = partition_stats[partition]
        if entry.total_messages == 0:
            continue
        row = [str(partition), str(entry.total_messages)]
        if filtered:
            row.append(str(entry.total_messages_filtered))
        row.extend(
            [
                str(entry.first_offset),
                _rfc3339(entry.first_time),
                str(entry.last_offset),
                _rfc3339(entry.last_time),
            ]
        )
        rows.append(row)

    return render_table(rows, header, bordered=True, auto_wrap=False)


def format_bounds(bounds_list: Iterable[Bounds]) -> str:
    """Render a table of the bounds of each partition."""
    rows = []
    for bounds in bounds_list:
        if bounds.is_empty:
            rows.append(
                [
                    str(bounds.partition),
                    str(bounds.first_offset),
                    "",
                    str(bounds.last_offset),
                    "",
                    "0",
                    "",
                    "",
                ]
            )
            continue

        num_messages = bounds.last_offset - bounds.first_offset
        duration = _resolve(bounds.last_time) - _resolve(bounds.first_time)
        rows.append(
            [
                str(bounds.partition),
                str(bounds.first_offset),
                _rfc3339(bounds.first_time),
                str(bounds.last_offset),
                _rfc3339(bounds.last_time),
                str(num_messages),
                pretty_duration(duration),
                pretty_rate(num_messages, duration),
            ]
        )

    return render_table(
        rows,
        [
            "Partition",
            "First Offset",
            "First Time",
            "Last Offset",
            "Last Time",
            "Messages",
            "Duration",
            "Avg Rate",
        ],
        bordered=True,
        auto_wrap=False,
    )


def format_bound_totals(bounds_list: Iterable[Bounds]) -> str:
    """Render the totals across all partitions; empty if there are no messages."""
    total_messages = 0
    earliest: datetime | None = None
    latest: datetime | None = None

    for bounds in bounds_list:
        if bounds.first_offset >= bounds.last_offset:
            continue
        total_messages += bounds.last_offset - bounds.first_offset

        first = _resolve(bounds.first_time)
        last = _resolve(bounds.last_time)
        if _is_zero(earliest) or first < _resolve(earliest):
            earliest = first
        if _is_zero(latest) or last > _resolve(latest):
            latest = last

    if total_messages == 0:
        return ""

    duration = _resolve(latest) - _resolve(earliest)
    return render_table(
        [
            [
                _rfc3339(earliest),
                _rfc3339(latest),
                str(total_messages),
                pretty_duration(duration),
                pretty_rate(total_messages, duration),
            ]
        ],
        ["Earliest Time", "Latest Time", "Total Messages", "Duration", "Avg Rate"],
        bordered=True,
        auto_wrap=False,
    )