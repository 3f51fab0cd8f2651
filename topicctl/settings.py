"""Topic config settings: validation, conversion and comparison with cluster state."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

logger = logging.getLogger(__name__)

RETENTION_KEY = "retention.ms"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_MESSAGE_FORMAT_VERSIONS = frozenset(
    {
        "0.8.0",
        "0.8.1",
        "0.8.2",
        "0.9.0",
        "0.10.0-IV0",
        "0.10.0-IV1",
        "0.10.1-IV0",
        "0.10.1-IV1",
        "0.10.1-IV2",
        "0.10.2-IV0",
        "0.11.0-IV0",
        "0.11.0-IV1",
        "0.11.0-IV2",
        "1.0-IV0",
        "1.1-IV0",
        "2.0-IV0",
        "2.0-IV1",
        "2.1-IV0",
        "2.1-IV1",
        "2.1-IV2",
        "2.2-IV0",
        "2.2-IV1",
        "2.3-IV0",
        "2.3-IV1",
        "2.4-IV0",
        "2.4-IV1",
        "2.5-IV0",
        "2.6-IV0",
    }
)


class ValidationError(ValueError):
    """Raised when one or more checks fail; ``errors`` holds every message."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class ConfigEntry:
    """A single config name and its string value."""

    name: str
    value: str


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"Invalid integer: {text!r}")
    return int(text)


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text or not text:
        raise ValueError(f"Invalid float: {text!r}")
    return float(text)


def _parse_bool(text: str) -> bool:
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean: {text!r}")


def _int_at_least(minimum: int) -> Callable[[str], bool]:
    def check(value: str) -> bool:
        try:
            return _parse_int(value) >= minimum
        except ValueError:
            return False

    return check


def _one_of(*choices: str) -> Callable[[str], bool]:
    allowed = frozenset(choices)
    return lambda value: value in allowed


def _is_bool(value: str) -> bool:
    try:
        _parse_bool(value)
    except ValueError:
        return False
    return True


def _cleanup_policy(value: str) -> bool:
    parts = value.split(",")
    return len(parts) <= 2 and all(part in ("compact", "delete") for part in parts)


def _throttled_replicas(value: str) -> bool:
    for item in value.split(","):
        elements = item.split(":")
        if len(elements) != 2:
            return False
        try:
            for element in elements:
                _parse_int(element)
        except ValueError:
            return False
    return True


def _dirty_ratio(value: str) -> bool:
    try:
        ratio = _parse_float(value)
    except ValueError:
        return False
    return 0.0 <= ratio <= 1.0


_KEY_VALIDATORS: dict[str, Callable[[str], bool]] = {
    "cleanup.policy": _cleanup_policy,
    "compression.type": _one_of(
        "uncompressed", "zstd", "lz4", "snappy", "gzip", "producer"
    ),
    "delete.retention.ms": _int_at_least(0),
    "file.delete.delay.ms": _int_at_least(0),
    "flush.messages": _int_at_least(0),
    "flush.ms": _int_at_least(0),
    "follower.replication.throttled.replicas": _throttled_replicas,
    "index.interval.bytes": _int_at_least(0),
    "leader.replication.throttled.replicas": _throttled_replicas,
    "max.compaction.lag.ms": _int_at_least(1),
    "max.message.bytes": _int_at_least(0),
    "message.format.version": lambda value: value in _MESSAGE_FORMAT_VERSIONS,
    "message.timestamp.difference.max.ms": _int_at_least(0),
    "message.timestamp.type": _one_of("CreateTime", "LogAppendTime"),
    "min.cleanable.dirty.ratio": _dirty_ratio,
    "min.compaction.lag.ms": _int_at_least(0),
    "min.insync.replicas": _int_at_least(1),
    "preallocate": _is_bool,
    "retention.bytes": _int_at_least(-1),
    "retention.ms": _int_at_least(-1),
    "segment.bytes": _int_at_least(14),
    "segment.index.bytes": _int_at_least(0),
    "segment.jitter.ms": _int_at_least(0),
    "segment.ms": _int_at_least(-1),
    "unclean.leader.election.enable": _is_bool,
}


def value_to_string(value: Any) -> str:
    """Convert a setting value to the string form the cluster uses.

    Whole floats become integers, other floats keep two decimals, lists are
    joined with commas. Raises ValueError for unsupported types.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value == int(value):
            return str(int(value))
        return f"{value:.2f}"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ",".join(value_to_string(item) for item in value)
    raise ValueError(f"Invalid setting value: {value!r} ({type(value).__name__})")


def value_to_int(value: Any) -> int:
    """Convert a setting value to an integer; floats are truncated.

    Raises ValueError for unparseable strings and unsupported types.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Could not convert value {value!r} (type bool) to int")
    if isinstance(value, float):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _parse_int(value)
    raise ValueError(
        f"Could not convert value {value!r} (type {type(value).__name__}) to int"
    )


class TopicSettings(dict):
    """Key/value pairs that correspond to Kafka topic config settings."""

    def validate(self) -> None:
        """Raise ValidationError listing every unknown key or invalid value."""
        errors: list[str] = []

        for key, value in self.items():
            validator = _KEY_VALIDATORS.get(key)
            if validator is None:
                errors.append(f"Key {key} is not recognized topic config setting")
                continue

            try:
                value_str = value_to_string(value)
            except ValueError as exc:
                errors.append(f"Could not convert value for key {key} to string: {exc}")
                continue

            if value_str == "":
                continue

            if not validator(value_str):
                errors.append(f"Invalid value for key {key}: {value_str}")

        if errors:
            raise ValidationError(errors)

    def to_config_entries(self, keys: Iterable[str] | None = None) -> list[ConfigEntry]:
        """Convert the given keys (all keys if None) to config entries.

        Raises KeyError for a missing key and ValueError for an unconvertible value.
        """
        selected = list(self) if keys is None else list(keys)
        entries = []

        for key in selected:
            if key not in self:
                raise KeyError(f"Key {key} not found")
            try:
                value_str = value_to_string(self[key])
            except ValueError as exc:
                raise ValueError(f"Error converting value for key {key}: {exc}") from exc
            entries.append(ConfigEntry(key, value_str))

        return entries

    def get_value_str(self, key: str) -> str:
        """Return the string value for a key; raises KeyError if it is not set."""
        if key not in self:
            raise KeyError(f"Key {key} not found")
        return value_to_string(self[key])

    def config_map_diffs(self, config_map: Mapping[str, str]) -> tuple[list[str], list[str]]:
        """Compare with a config map from the cluster.

        Returns the keys set here whose values differ in the cluster, and the keys
        set in the cluster but not here.
        """
        diff_keys = [
            key
            for key, value in self.items()
            if value_to_string(value) != config_map.get(key, "")
        ]
        missing_keys = [key for key in config_map if key not in self]
        return diff_keys, missing_keys

    def reduce_retention_drop(self, config_map: Mapping[str, str], step: timedelta) -> bool:
        """Limit a retention decrease to at most ``step`` below the current value.

        Returns whether the retention in these settings was changed.
        """
        if step <= timedelta(0):
            return False

        current_str = config_map.get(RETENTION_KEY, "")
        if not current_str:
            return False
        current_ms = _parse_int(current_str)

        desired = self.get(RETENTION_KEY)
        if desired is None:
            return False
        desired_ms = value_to_int(desired)

        max_drop_ms = step // timedelta(milliseconds=1)

        if current_ms - desired_ms > max_drop_ms:
            logger.debug(
                "Updating retention from %d to %d ms", desired_ms, current_ms - max_drop_ms
            )
            self[RETENTION_KEY] = current_ms - max_drop_ms
            return True

        return False

    def copy(self) -> TopicSettings:
        """Return a shallow copy of these settings."""
        return TopicSettings(self)


def from_config_map(config_map: Mapping[str, str]) -> TopicSettings:
    """Build settings from a string config map fetched from the cluster."""
    return TopicSettings(config_map)