"""Cache key derivation.

Keys embed their full content (no hashing), so two keys collide only when
the normalized inputs are equal:

    events:id:7
    events:list:{"filter":{"finished":true},"limit":50,"offset":0}
    PlayerValue:20250101
    live:player:302:12

Pagination is clamped before it is folded into a key, so raw inputs that
clamp to the same window share one cache entry.
"""

import json
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 200
DEFAULT_OFFSET = 0


def stable_stringify(value: Any) -> str:
    """Canonical JSON-like encoding: object keys sorted, arrays kept in order."""
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(stable_stringify(v) for v in value) + "]"
    if isinstance(value, Mapping):
        entries = [
            f"{json.dumps(str(k))}:{stable_stringify(value[k])}"
            for k in sorted(value, key=str)
        ]
        return "{" + ",".join(entries) + "}"
    if isinstance(value, BaseModel):
        return stable_stringify(value.model_dump(by_alias=True))
    if isinstance(value, (datetime, date)):
        return json.dumps(value.isoformat())
    return json.dumps(value)


def normalize_filter(filter_: Mapping[str, Any] | BaseModel | None) -> dict[str, Any] | None:
    """Drop None-valued fields; an empty or missing filter normalizes to None.

    Pydantic filters are dumped by alias so keys match the wire names
    (``teamId`` rather than ``team_id``).
    """
    if filter_ is None:
        return None
    raw = filter_.model_dump(by_alias=True) if isinstance(filter_, BaseModel) else dict(filter_)
    cleaned = {k: v for k, v in raw.items() if v is not None}
    return cleaned or None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clamp_limit(limit: Any, *, default: int = DEFAULT_LIMIT, upper: int = MAX_LIMIT) -> int:
    number = _as_number(limit)
    safe = int(number) if number is not None else default
    return min(max(safe, MIN_LIMIT), upper)


def clamp_offset(offset: Any) -> int:
    number = _as_number(offset)
    safe = int(number) if number is not None else DEFAULT_OFFSET
    return max(safe, 0)


def identity_key(domain: str, entity_id: Any) -> str:
    return f"{domain}:id:{entity_id}"


def scoped_key(domain: str, operation: str, *parts: Any) -> str:
    """Generic ``domain:operation[:part...]`` key for single-purpose lookups."""
    return ":".join([domain, operation, *(str(p) for p in parts)])


def list_key(
    domain: str,
    filter_: Mapping[str, Any] | BaseModel | None,
    limit: Any,
    offset: Any,
) -> str:
    payload = {
        "filter": normalize_filter(filter_),
        "limit": clamp_limit(limit),
        "offset": clamp_offset(offset),
    }
    return f"{domain}:list:{stable_stringify(payload)}"


def date_token(value: date | datetime | None = None) -> str:
    """Compact ``YYYYMMDD`` token; defaults to today's local date."""
    if value is None:
        value = datetime.now()
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y%m%d")


def dated_key(prefix: str, value: date | datetime | None = None) -> str:
    return f"{prefix}:{date_token(value)}"
