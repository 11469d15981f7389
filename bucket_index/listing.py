from __future__ import annotations
"""Builds the sorted listing for a prefix from storage results."""
from datetime import datetime, timedelta, timezone
import logging
from typing import Protocol

from .models import InvariantViolationError, ListingEntry, ListingResult, ObjectBody, ObjectListing

LOGGER = logging.getLogger(__name__)

DELIMITER = "/"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ListingNotFoundError(LookupError):
    """Raised when a prefix has neither sub-prefixes nor objects."""


class Storage(Protocol):
    def list(self, prefix: str, delimiter: str) -> ObjectListing: ...

    def get(self, key: str) -> ObjectBody | None: ...


def uploaded_from_epoch_ms(epoch_ms: int) -> datetime:
    try:
        return EPOCH + timedelta(milliseconds=int(epoch_ms))
    except (OverflowError, TypeError, ValueError) as exc:
        raise InvariantViolationError(f"Invalid upload timestamp: {epoch_ms!r}") from exc


def build_listing(storage: Storage, query_prefix: str, display_prefix: str) -> ListingResult:
    """Return directories and files directly under ``query_prefix``.

    Raises:
        ListingNotFoundError: when the listing is empty.
        InvariantViolationError: when storage reports an invalid timestamp.
    """
    raw = storage.list(query_prefix, DELIMITER)
    entries = [ListingEntry.directory(prefix) for prefix in raw.prefixes]
    for obj in raw.objects:
        if obj.key == query_prefix:
            # Folder marker object standing for the listed prefix itself.
            LOGGER.debug("Skipping folder marker '%s'", obj.key)
            continue
        entries.append(
            ListingEntry.file(
                obj.key,
                size=obj.size,
                uploaded=uploaded_from_epoch_ms(obj.uploaded_epoch_ms),
            )
        )
    if not entries:
        raise ListingNotFoundError(f"Nothing stored under '{query_prefix}'")

    entries.sort(key=ListingEntry.sort_key)
    LOGGER.debug(
        "Listed '%s': %d directories, %d files",
        query_prefix,
        len(raw.prefixes),
        len(raw.objects),
    )
    return ListingResult(
        query_prefix=query_prefix,
        display_prefix=display_prefix,
        entries=tuple(entries),
    )
