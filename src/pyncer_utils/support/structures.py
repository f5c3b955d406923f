"""Helpers for nested mapping/list structures."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def _as_mapping(value: list[Any]) -> dict[str, Any]:
    return {str(index): item for index, item in enumerate(value)}


def _merge_pair(base: Any, override: Any) -> Any:
    if isinstance(base, list) and isinstance(override, list):
        merged_list = list(base)
        for index, item in enumerate(override):
            if index < len(merged_list):
                merged_list[index] = _merge_pair(merged_list[index], item)
            else:
                merged_list.append(item)
        return merged_list

    # A list meeting a mapping merges key-wise, the list acting as {"0": ..., "1": ...}
    if isinstance(base, list) and isinstance(override, Mapping):
        base = _as_mapping(base)
    elif isinstance(base, Mapping) and isinstance(override, list):
        override = _as_mapping(override)

    if isinstance(base, Mapping) and isinstance(override, Mapping):
        merged = dict(base)
        for key, item in override.items():
            merged[key] = _merge_pair(merged[key], item) if key in merged else item
        return merged

    return override


def merge_recursive(*structures: Mapping[Any, Any]) -> dict[Any, Any]:
    """Deep-merge mappings from left to right.

    Scalars at matching keys are overwritten by the later mapping, nested
    mappings are merged recursively and lists are merged position by
    position (extra items are appended).

    Args:
        *structures: Mappings to merge.

    Returns:
        A new dict; the inputs are not modified.
    """
    merged: dict[Any, Any] = {}
    for structure in structures:
        merged = _merge_pair(merged, structure)
    return merged


def ensure_list(value: Any, empty: Iterable[Any] = (None,)) -> list[Any]:
    """Coerce a scalar, an iterable or an "empty" marker into a list.

    Strings and bytes count as scalars. Mappings contribute their values.

    Args:
        value: The value to coerce.
        empty: Values that mean "nothing" and produce an empty list.

    Returns:
        A new list.
    """
    if any(value is marker or value == marker for marker in empty):
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def is_empty_value(value: Any) -> bool:
    """Return True for None, "", False, 0, 0.0 and empty lists/tuples/dicts."""
    if value is None:
        return True
    return isinstance(value, (str, bool, int, float, list, tuple, dict)) and not value


def unset_empty(values: Iterable[Any]) -> list[Any]:
    """Return the items of ``values`` that are not empty (see `is_empty_value`)."""
    return [value for value in values if not is_empty_value(value)]
