"""xray.store.factory

Selects the record store backend from settings (json|sqlite).
"""

from __future__ import annotations

import logging

from xray.config import Settings
from xray.contracts.store_base import RecordStore
from xray.errors import ConfigError
from xray.store.json_store import JsonRecordStore
from xray.store.sqlite_store import SqliteRecordStore


def build_store(settings: Settings, logger: logging.Logger | None = None) -> RecordStore:
    if settings.store_backend == "json":
        return JsonRecordStore(settings.traces_dir, logger=logger)
    if settings.store_backend == "sqlite":
        return SqliteRecordStore(settings.sqlite_path, logger=logger)
    raise ConfigError(f"Unsupported XRAY_STORE_BACKEND: {settings.store_backend!r} (expected json|sqlite)")
