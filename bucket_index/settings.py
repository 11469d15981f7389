from __future__ import annotations
"""Application settings loading helpers."""

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path

from .formatting import UNIT_BASES, SizeFormatOptions

BUCKET_ENV_VAR = "BUCKET"


@dataclass
class AppSettings:
    """Container for server settings."""

    bucket_name: str = ""
    profile_name: str = ""
    host: str = "127.0.0.1"
    port: int = 8080
    size_unit_base: str = "decimal"
    size_decimal_places: int = 2
    log_level: str = "INFO"

    def size_format_options(self) -> SizeFormatOptions:
        return SizeFormatOptions(
            unit_base=self.size_unit_base,
            decimal_places=self.size_decimal_places,
        )

    def resolve_bucket_name(self, environ=None) -> str:
        environ = os.environ if environ is None else environ
        return environ.get(BUCKET_ENV_VAR) or self.bucket_name


def _int_or_default(value, default: int, *, minimum: int, maximum: int | None = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < minimum or (maximum is not None and number > maximum):
        return default
    return number


def _str_or_default(value, default: str) -> str:
    return value if isinstance(value, str) else default


def _sanitize(data: dict) -> AppSettings:
    defaults = AppSettings()
    unit_base = data.get("size_unit_base", defaults.size_unit_base)
    if unit_base not in UNIT_BASES:
        unit_base = defaults.size_unit_base
    log_level = _str_or_default(data.get("log_level"), defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        log_level = defaults.log_level
    return AppSettings(
        bucket_name=_str_or_default(data.get("bucket_name"), defaults.bucket_name),
        profile_name=_str_or_default(data.get("profile_name"), defaults.profile_name),
        host=_str_or_default(data.get("host"), defaults.host) or defaults.host,
        port=_int_or_default(data.get("port"), defaults.port, minimum=1, maximum=65535),
        size_unit_base=unit_base,
        size_decimal_places=_int_or_default(
            data.get("size_decimal_places"), defaults.size_decimal_places, minimum=0
        ),
        log_level=log_level,
    )


class SettingsStorage:
    """Loads :class:`AppSettings` from a JSON file."""

    def __init__(self, storage_path: str | Path | None = None):
        if storage_path is None:
            storage_path = Path.home() / ".bucket_index_settings.json"
        self._path = Path(storage_path)

    def load(self) -> AppSettings:
        if not self._path.exists():
            return AppSettings()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return AppSettings()
        if not isinstance(data, dict):
            return AppSettings()
        return _sanitize(data)

