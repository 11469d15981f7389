from __future__ import annotations
"""Formatting helpers for listing pages."""
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UNIT_BASES = {
    "decimal": (1000, ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")),
    "binary": (1024, ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")),
}


@dataclass(frozen=True)
class SizeFormatOptions:
    unit_base: str = "decimal"
    decimal_places: int = 2

    def __post_init__(self) -> None:
        if self.unit_base not in UNIT_BASES:
            raise ValueError(f"unit_base must be one of {sorted(UNIT_BASES)}")
        if self.decimal_places < 0:
            raise ValueError("decimal_places must be zero or greater")


DEFAULT_SIZE_FORMAT = SizeFormatOptions()


def format_size(size: int, options: SizeFormatOptions = DEFAULT_SIZE_FORMAT) -> str:
    """Render a byte count such as ``1536`` as ``1.54 KB``.

    Plain byte counts stay integral; scaled values are rounded to
    ``options.decimal_places`` with trailing zeroes dropped.
    """
    base, units = UNIT_BASES[options.unit_base]
    size = max(int(size), 0)
    if size < base:
        return f"{size} B"
    value = float(size)
    unit = units[0]
    for unit in units[1:]:
        value /= base
        if value < base:
            break
    text = f"{value:.{options.decimal_places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {unit}"


def format_uploaded(uploaded: datetime) -> str:
    if uploaded.tzinfo is not None:
        uploaded = uploaded.astimezone(timezone.utc)
    return uploaded.strftime(DATE_FORMAT)


def encode_href(path: str) -> str:
    """Percent-encode a key for use as an absolute link, keeping ``/``."""
    return "/" + quote(path, safe="/")
