"""Helpers for ordering the keys of integer maps and comparing integer lists."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Callable, Iterable, Mapping

KeySorter = Callable[[Mapping[int, int]], list[int]]

_FNV64_OFFSET = 14695981039346656037
_FNV64_PRIME = 1099511628211
_MASK64 = (1 << 64) - 1


def _fnv1_64(data: bytes) -> int:
    value = _FNV64_OFFSET
    for byte in data:
        value = (value * _FNV64_PRIME) & _MASK64
        value ^= byte
    return value


def sorted_keys(mapping: Mapping[int, int]) -> list[int]:
    """Return the keys of the mapping in ascending order."""
    return sorted(mapping)


def shuffled_keys(mapping: Mapping[int, int], seed: str) -> list[int]:
    """Return the keys of the mapping in a repeatable order derived from ``seed``."""
    keys = sorted_keys(mapping)
    random.Random(_fnv1_64(seed.encode("utf-8"))).shuffle(keys)
    return keys


def sorted_keys_by_value(
    mapping: Mapping[int, int],
    ascending: bool = True,
    key_sorter: KeySorter = sorted_keys,
) -> list[int]:
    """Return the keys sorted by their values.

    Keys are first ordered by ``key_sorter``; that order breaks ties between equal values.
    """
    keys = key_sorter(mapping)
    return sorted(keys, key=mapping.__getitem__, reverse=not ascending)


def same_elements(first: Iterable[int], second: Iterable[int]) -> bool:
    """Return whether both collections hold the same elements, in any order."""
    return Counter(first) == Counter(second)