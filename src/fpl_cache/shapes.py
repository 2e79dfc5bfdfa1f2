"""Tagged representation of a cache entry's native Redis type.

    CacheShape = Absent | StringShape | HashShape | ListShape | SetShape | UnsupportedShape

The decoder dispatches on these classes only, never on the domain that
owns the key.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Absent:
    key: str


@dataclass(frozen=True)
class StringShape:
    key: str
    text: str


@dataclass(frozen=True)
class HashShape:
    key: str
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ListShape:
    key: str
    items: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SetShape:
    key: str
    members: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UnsupportedShape:
    """zset, stream, or any type this gateway does not know how to read."""

    key: str
    type_name: str


CacheShape = Absent | StringShape | HashShape | ListShape | SetShape | UnsupportedShape
