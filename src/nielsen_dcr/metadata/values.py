"""Typed access to loosely-typed event property maps.

Event ``properties`` and ``options`` arrive as JSON-shaped dicts. The
helpers here are total: a missing key or a value of the wrong type comes
back as None, never as an exception.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, Union

# JSON-shaped values found in event maps
PropertyValue = Union[str, bool, int, float, None, Mapping[str, Any], list]
PropertyMap = Mapping[str, Any]


def has_value(src: PropertyMap, key: str) -> bool:
    """True if key is present with a non-null value."""
    return src.get(key) is not None


def get_str(src: PropertyMap, key: str) -> str | None:
    """Get a value only if it is a string."""
    value = src.get(key)
    if isinstance(value, str):
        return value
    return None


def get_bool(src: PropertyMap, key: str) -> bool | None:
    """Get a value only if it is a boolean."""
    value = src.get(key)
    if isinstance(value, bool):
        return value
    return None


def get_number(src: PropertyMap, key: str) -> int | float | None:
    """Get a value only if it is a finite number (booleans excluded)."""
    value = src.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def get_int(src: PropertyMap, key: str) -> int | None:
    """Get a numeric value truncated to an int."""
    value = get_number(src, key)
    if value is None:
        return None
    return int(value)


def get_text(src: PropertyMap, key: str) -> str | None:
    """Get a scalar value rendered as a string.

    Strings are returned as-is, booleans and numbers are stringified.
    Maps, lists and null yield None.
    """
    value = src.get(key)
    if isinstance(value, (str, bool, int, float)):
        return stringify(value)
    return None


def get_map(src: PropertyMap, key: str) -> dict[str, Any] | None:
    """Get a nested map."""
    value = src.get(key)
    if isinstance(value, Mapping):
        return dict(value)
    return None


def stringify(value: Any) -> str:
    """Render any property value as the string Nielsen expects.

    Examples:
        >>> stringify(True)
        'true'
        >>> stringify(1800.0)
        '1800'
        >>> stringify(None)
        ''
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)
    return str(value)


def coerce_to_string(record: Mapping[str, Any]) -> dict[str, str]:
    """Return a copy of record with every value stringified.

    The SDK only accepts string values; this runs on every metadata record
    before it is handed over.
    """
    return {key: stringify(value) for key, value in record.items()}
