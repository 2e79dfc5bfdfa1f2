"""Heterogeneous cache decoder.

Feed producers have written the same logical collection as a JSON string,
a hash of id → JSON, a list, or a set. ``decode_shape`` turns any of those
into a list of domain records with one shared code path:

    shape              per-record source
    ----------------   ------------------------------------------
    StringShape        JSON array elements, or JSON object values
    HashShape          each field value (JSON)
    ListShape          each element (JSON), order preserved
    SetShape           each member (JSON), order undefined

A malformed record is skipped with one warning; it never fails the batch.
An unsupported native type is logged at error and yields no records.
"""

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from src.fpl_cache.shapes import (
    Absent,
    CacheShape,
    HashShape,
    ListShape,
    SetShape,
    StringShape,
    UnsupportedShape,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Returns None when the payload is structurally not a record (e.g. a bare number).
ItemParser = Callable[[Any], T | None]

_ITEM_ERRORS = (ValueError, TypeError, KeyError, ValidationError)


class DecodeStatus(str, Enum):
    FOUND = "FOUND"
    ABSENT = "ABSENT"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass
class DecodeResult(Generic[T]):
    key: str
    status: DecodeStatus
    records: list[T] = field(default_factory=list)
    skipped: int = 0

    @property
    def found(self) -> bool:
        return self.status is DecodeStatus.FOUND


def _parse_item(
    key: str,
    source: str,
    payload: Any,
    parse_item: ItemParser[T],
) -> T | None:
    try:
        record = parse_item(payload)
    except _ITEM_ERRORS as exc:
        logger.warning("Skipping invalid cache record: key=%s source=%s err=%s", key, source, exc)
        return None
    if record is None:
        logger.warning("Skipping invalid cache record: key=%s source=%s", key, source)
    return record


def _parse_json_items(
    key: str,
    raw_items: Iterable[tuple[str, str]],
    parse_item: ItemParser[T],
) -> tuple[list[T], int]:
    records: list[T] = []
    skipped = 0
    for source, raw in raw_items:
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping malformed JSON in cache: key=%s source=%s err=%s", key, source, exc)
            skipped += 1
            continue
        record = _parse_item(key, source, payload, parse_item)
        if record is None:
            skipped += 1
        else:
            records.append(record)
    return records, skipped


def _decode_string(shape: StringShape, parse_item: ItemParser[T]) -> tuple[list[T], int]:
    try:
        parsed = json.loads(shape.text)
    except ValueError as exc:
        logger.warning("Cache string is not valid JSON: key=%s err=%s", shape.key, exc)
        return [], 0

    if isinstance(parsed, list):
        items: Iterable[tuple[str, Any]] = ((str(i), v) for i, v in enumerate(parsed))
    elif isinstance(parsed, dict):
        items = ((str(k), v) for k, v in parsed.items())
    else:
        logger.warning(
            "Cache string holds neither array nor object: key=%s type=%s",
            shape.key,
            type(parsed).__name__,
        )
        return [], 0

    records: list[T] = []
    skipped = 0
    for source, payload in items:
        record = _parse_item(shape.key, source, payload, parse_item)
        if record is None:
            skipped += 1
        else:
            records.append(record)
    return records, skipped


def decode_shape(
    shape: CacheShape,
    parse_item: ItemParser[T],
    *,
    sort_key: Callable[[T], Any] | None = None,
) -> DecodeResult[T]:
    """Decode a cache entry of any supported shape into domain records."""
    if isinstance(shape, Absent):
        return DecodeResult(shape.key, DecodeStatus.ABSENT)

    if isinstance(shape, UnsupportedShape):
        logger.error("Unsupported cache type: key=%s type=%s", shape.key, shape.type_name)
        return DecodeResult(shape.key, DecodeStatus.UNSUPPORTED)

    if isinstance(shape, StringShape):
        records, skipped = _decode_string(shape, parse_item)
    elif isinstance(shape, HashShape):
        records, skipped = _parse_json_items(shape.key, shape.fields.items(), parse_item)
    elif isinstance(shape, ListShape):
        records, skipped = _parse_json_items(
            shape.key, ((str(i), v) for i, v in enumerate(shape.items)), parse_item
        )
    elif isinstance(shape, SetShape):
        records, skipped = _parse_json_items(
            shape.key, ((str(i), v) for i, v in enumerate(shape.members)), parse_item
        )
    else:
        raise TypeError(f"Unknown cache shape: {shape!r}")

    if sort_key is not None:
        records.sort(key=sort_key)

    logger.info(
        "Decoded cache entry: key=%s type=%s records=%d skipped=%d",
        shape.key,
        type(shape).__name__,
        len(records),
        skipped,
    )
    return DecodeResult(shape.key, DecodeStatus.FOUND, records, skipped)
