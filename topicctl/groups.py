"""Consumer group models and table formatting for groups, members and lags."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from termcolor import colored

from topicctl.pretty import in_terminal, pretty_duration, render_table, truncate_string_middle

logger = logging.getLogger(__name__)

_ZERO_TIME_RFC3339 = "0001-01-01T00:00:00Z"


def _rfc3339(moment: datetime | None) -> str:
    """Format a time as RFC 3339 with second precision; None is the zero time."""
    if moment is None:
        return _ZERO_TIME_RFC3339
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.replace(microsecond=0).isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


@dataclass(frozen=True)
class GroupCoordinator:
    """The coordinator broker for a single consumer group."""

    group_id: str
    coordinator: int


@dataclass
class MemberInfo:
    """Information about a single consumer group member."""

    member_id: str = ""
    client_id: str = ""
    client_host: str = ""
    topic_partitions: dict[str, list[int]] = field(default_factory=dict)

    def topics(self) -> list[str]:
        """Return the topics this member consumes from, sorted."""
        return sorted(self.topic_partitions)

    @property
    def total_partitions(self) -> int:
        """The number of partitions assigned to this member across all topics."""
        return sum(len(partitions) for partitions in self.topic_partitions.values())


@dataclass
class GroupDetails:
    """The state and members of a consumer group."""

    group_id: str = ""
    state: str = ""
    members: list[MemberInfo] = field(default_factory=list)

    def topics_map(self) -> set[str]:
        """Return every topic consumed by the members of this group."""
        return {topic for member in self.members for topic in member.topics()}

    def partition_members(self, topic: str) -> dict[int, MemberInfo]:
        """Return the member assigned to each partition of a topic."""
        members: dict[int, MemberInfo] = {}
        for member in self.members:
            for partition in member.topic_partitions.get(topic, []):
                if partition in members:
                    logger.warning("Multiple members assigned to partition %d", partition)
                members[partition] = member
        return members


@dataclass
class MemberPartitionLag:
    """The lag for a single topic, partition and group member combination."""

    topic: str
    partition: int
    member_id: str = ""
    newest_offset: int = 0
    newest_time: datetime | None = None
    member_offset: int = 0
    member_time: datetime | None = None

    def offset_lag(self) -> int:
        """Return how many offsets the member is behind the newest one."""
        return self.newest_offset - self.member_offset

    def time_lag(self) -> timedelta:
        """Return the time between the newest message and the member's message.

        An unset time on either side saturates to the largest possible span.
        """
        if self.newest_time is None and self.member_time is None:
            return timedelta(0)
        if self.member_time is None:
            return timedelta.max
        if self.newest_time is None:
            return timedelta.min
        return self.newest_time - self.member_time


def _format_topic_partitions(topic_partitions: Mapping[str, list[int]]) -> str:
    items = (
        f"{topic}:[{' '.join(str(partition) for partition in topic_partitions[topic])}]"
        for topic in sorted(topic_partitions)
    )
    return f"map[{' '.join(items)}]"


def format_group_coordinators(coordinators: Iterable[GroupCoordinator]) -> str:
    """Render a table of groups and their coordinator brokers."""
    rows = [[coordinator.group_id, str(coordinator.coordinator)] for coordinator in coordinators]
    return render_table(rows, ["Group", "Coordinator"], bordered=True, auto_wrap=False)


def format_group_members(members: Iterable[MemberInfo], full: bool) -> str:
    """Render a table of group members and their partition assignments."""
    rows = []
    for member in members:
        client_host = member.client_host.removeprefix("/")
        if full:
            member_id = member.member_id
        else:
            member_id, _ = truncate_string_middle(member.member_id, 40, 5)
        rows.append(
            [
                member_id,
                client_host,
                str(member.total_partitions),
                _format_topic_partitions(member.topic_partitions),
            ]
        )
    return render_table(
        rows,
        ["Member ID", "Client Host", "Num\nPartitions", "Partition\nAssignments"],
        bordered=True,
        auto_wrap=True,
    )


def format_member_partition_counts(members: Iterable[MemberInfo]) -> str:
    """Render how many members consume each number of partitions."""
    counts = Counter(member.total_partitions for member in members)
    rows = [[str(count), str(counts[count])] for count in sorted(counts)]
    return render_table(rows, ["Num Partitions", "Num Members"], bordered=True, auto_wrap=True)


def format_member_lags(member_lags: Iterable[MemberPartitionLag], full: bool) -> str:
    """Render a table of per-partition lags for a consumer group."""
    rows = []
    for lag in member_lags:
        member_id = ""
        if lag.member_id:
            if full:
                member_id = lag.member_id
            else:
                member_id, _ = truncate_string_middle(lag.member_id, 30, 5)

        if member_id or not in_terminal():
            member_cell = member_id
        else:
            member_cell = colored("None", "red")

        member_time_str = ""
        time_lag_str = ""
        # The time of the member's last message is not always set.
        if lag.member_time is not None:
            member_time_str = _rfc3339(lag.member_time)
            time_lag_str = pretty_duration(lag.time_lag())

        rows.append(
            [
                str(lag.partition),
                member_cell,
                str(lag.member_offset),
                member_time_str,
                str(lag.newest_offset),
                _rfc3339(lag.newest_time),
                str(lag.offset_lag()),
                time_lag_str,
            ]
        )
    return render_table(
        rows,
        [
            "Partition",
            "Member ID",
            "Member Offset",
            "Member Time",
            "Latest Offset",
            "Latest Time",
            "Offset Lag",
            "Time Lag",
        ],
        bordered=True,
        auto_wrap=True,
    )


def format_partition_offsets(partition_offsets: Mapping[int, int]) -> str:
    """Render the proposed new offset for each partition, ordered by partition."""
    rows = [
        [str(partition), str(partition_offsets[partition])]
        for partition in sorted(partition_offsets)
    ]
    return render_table(rows, ["Partition", "New Offset"], bordered=True, auto_wrap=False)