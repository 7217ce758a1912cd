"""Merge the legacy field index table with dynamically discovered field names."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

FieldIndexMap = dict[str, int]


def merge_field_index(legacy_map: Any, dynamic_names: Any = None) -> FieldIndexMap:
    """Return ``legacy_map`` extended with indices for unseen ``dynamic_names``.

    Legacy entries keep their index. New names are numbered after the highest
    legacy index, in the order first encountered; repeats are ignored. Input
    of the wrong shape is treated as empty rather than raising.
    """
    merged: FieldIndexMap = dict(legacy_map) if isinstance(legacy_map, Mapping) else {}

    if isinstance(dynamic_names, (str, bytes)) or not isinstance(dynamic_names, Sequence):
        return merged
    if not dynamic_names:
        return merged

    indexes = [value for value in merged.values() if isinstance(value, int)]
    next_index = max(indexes) + 1 if indexes else 0
    for name in dynamic_names:
        if not isinstance(name, str) or name in merged:
            continue
        merged[name] = next_index
        next_index += 1

    return merged


def ordered_names(index_map: Mapping[str, int]) -> list[str]:
    return [name for name, _ in sorted(index_map.items(), key=lambda item: (item[1], item[0]))]


def index_drift(previous: Mapping[str, int], current: Mapping[str, int]) -> dict[str, tuple[int, int]]:
    drift: dict[str, tuple[int, int]] = {}
    for name, old_index in previous.items():
        new_index = current.get(name)
        if new_index is not None and new_index != old_index:
            drift[name] = (old_index, new_index)
    return drift
