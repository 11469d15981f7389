from __future__ import annotations
"""Data models representing bucket listings and stored objects."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import BinaryIO, Optional


class InvariantViolationError(RuntimeError):
    """Raised when storage data breaks a contract the listing relies on."""


class EntryKind(IntEnum):
    """Entry tag; the integer value is the display rank."""

    DIRECTORY = 0
    FILE = 1


@dataclass(frozen=True)
class ListingEntry:
    """A directory (common prefix) or a file (stored object) in a listing."""

    key: str
    kind: EntryKind
    size: Optional[int] = None
    uploaded: Optional[datetime] = None

    @classmethod
    def directory(cls, key: str) -> "ListingEntry":
        return cls(key=key, kind=EntryKind.DIRECTORY)

    @classmethod
    def file(cls, key: str, *, size: int, uploaded: datetime) -> "ListingEntry":
        return cls(key=key, kind=EntryKind.FILE, size=size, uploaded=uploaded)

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def sort_key(self) -> tuple:
        """Return the ordering key ``(rank, payload, key)``.

        Directories rank before files. Files are then ordered by
        ``(size, uploaded)``; directories carry no payload. The full key
        breaks any remaining tie.
        """
        if self.is_directory:
            return (int(self.kind), (), self.key)
        return (int(self.kind), (self.size, self.uploaded), self.key)

    def display_name(self, query_prefix: str) -> str:
        if not self.key.startswith(query_prefix):
            raise InvariantViolationError(
                f"Key '{self.key}' does not start with prefix '{query_prefix}'"
            )
        name = self.key[len(query_prefix):]
        if not name:
            raise InvariantViolationError(f"Key '{self.key}' has an empty display name")
        return name


@dataclass(frozen=True)
class ListingResult:
    """Sorted entries plus the request-scoped prefixes used to render them."""

    query_prefix: str
    display_prefix: str
    entries: tuple[ListingEntry, ...] = ()


@dataclass(frozen=True)
class StoredObject:
    """An object as reported by a storage listing."""

    key: str
    size: int
    uploaded_epoch_ms: int


@dataclass
class ObjectListing:
    """Raw result of a delimiter-bounded prefix listing."""

    prefixes: list[str] = field(default_factory=list)
    objects: list[StoredObject] = field(default_factory=list)


@dataclass
class ObjectBody:
    """Byte stream and pass-through metadata for a fetched object."""

    key: str
    stream: Optional[BinaryIO]
    content_type: Optional[str] = None
    content_length: Optional[int] = None
