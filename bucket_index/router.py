from __future__ import annotations
"""Maps an HTTP method and request path to a browsing operation."""
from dataclasses import dataclass
import logging
from typing import Union
from urllib.parse import unquote

LOGGER = logging.getLogger(__name__)

ROOT_DISPLAY_PREFIX = "/"


@dataclass(frozen=True)
class ListDirectory:
    prefix: str
    display_prefix: str


@dataclass(frozen=True)
class FetchObject:
    key: str


@dataclass(frozen=True)
class Reject:
    reason: str
    status: int


Operation = Union[ListDirectory, FetchObject, Reject]


def route(method: str, raw_path: str) -> Operation:
    """Decide whether ``raw_path`` lists a prefix or fetches an object.

    Only ``GET`` is served. The path is percent-decoded as strict UTF-8 and
    its leading slashes are stripped to form the storage key; nothing else
    about the key is normalized.
    """
    if method.upper() != "GET":
        return Reject("method not allowed", 400)
    try:
        path = unquote(raw_path, encoding="utf-8", errors="strict")
    except UnicodeDecodeError:
        LOGGER.debug("Rejecting undecodable path %r", raw_path)
        return Reject("bad path encoding", 500)

    key = path.lstrip("/")
    display_prefix = key or ROOT_DISPLAY_PREFIX
    if display_prefix.endswith("/"):
        LOGGER.debug("Listing prefix '%s'", key)
        return ListDirectory(prefix=key, display_prefix=display_prefix)
    LOGGER.debug("Fetching object '%s'", key)
    return FetchObject(key=key)
