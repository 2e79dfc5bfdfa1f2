"""Lenient field access for records written by other producers.

Producers and this gateway drift apart over time: a field gets renamed
(``nowCost`` → ``price``), a number arrives as a string, a count goes
missing. ``pick`` walks a prioritized list of source names and returns the
first non-null value; the ``as_*`` helpers coerce with a default instead of
raising.
"""

import math
from collections.abc import Mapping
from typing import Any

_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "t"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "n", "f", ""})


def pick(data: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        value = data.get(name)
        if value is not None:
            return value
    return default


def as_float(value: Any, default: float | None = 0.0) -> float | None:
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def as_int(value: Any, default: int | None = 0) -> int | None:
    number = as_float(value, None)
    if number is None:
        return default
    return int(number)


def as_str(value: Any, default: str | None = "") -> str | None:
    if value is None:
        return default
    return str(value)


def as_bool(value: Any, default: bool | None = False) -> bool | None:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return default


def as_mapping(value: Any) -> Mapping[str, Any] | None:
    return value if isinstance(value, Mapping) else None
