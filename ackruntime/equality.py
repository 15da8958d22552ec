"""Equality helpers for maps, string lists and object metadata."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any


def _mapping_equal(a: Mapping[str, Any] | None, b: Mapping[str, Any] | None) -> bool:
    a = a or {}
    b = b or {}
    if len(a) != len(b):
        return False
    return all(key in b and b[key] == value for key, value in a.items())


def map_string_string_equal(
    a: Mapping[str, str] | None, b: Mapping[str, str] | None
) -> bool:
    """Return True if the maps hold the same keys and values; None counts as empty."""
    return _mapping_equal(a, b)


def map_string_string_p_equal(
    a: Mapping[str, str | None] | None, b: Mapping[str, str | None] | None
) -> bool:
    """Return True if the maps of optional strings hold equal keys and values."""
    return _mapping_equal(a, b)


def _sequence_equal(a: Sequence[Any] | None, b: Sequence[Any] | None) -> bool:
    a = list(a or [])
    b = list(b or [])
    if len(a) != len(b):
        return False
    return sorted(a) == sorted(b)


def slice_string_equal(a: Sequence[str] | None, b: Sequence[str] | None) -> bool:
    """Return True if the lists hold the same strings regardless of order."""
    return _sequence_equal(a, b)


def slice_string_p_equal(a: Sequence[str] | None, b: Sequence[str] | None) -> bool:
    """Return True if the lists of referenced strings hold equal values regardless of order."""
    return _sequence_equal(a, b)


def is_nil(value: Any) -> bool:
    """Return True if ``value`` is absent."""
    return value is None


def is_not_nil(value: Any) -> bool:
    """Return True if ``value`` is present."""
    return not is_nil(value)


def has_nil_difference(a: Any, b: Any) -> bool:
    """Return True if exactly one of ``a`` and ``b`` is absent."""
    return is_nil(a) != is_nil(b)


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"object of type {type(value).__name__} is not serializable")


def _marshal(obj: Any) -> str:
    return json.dumps(obj, default=_encode, sort_keys=True, separators=(",", ":"))


def meta_v1_object_equal(a: Any, b: Any) -> bool:
    """Return True if two object metadata values serialise to the same JSON.

    Raises TypeError if either value cannot be serialised.
    """
    if is_nil(a) and is_nil(b):
        return True
    if has_nil_difference(a, b):
        return False
    return _marshal(a) == _marshal(b)