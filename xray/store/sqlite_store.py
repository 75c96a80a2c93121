"""xray.store.sqlite_store

SQLite-backed record store (single file, handy when a directory of small JSON
files is inconvenient). Refs are identical to the JSON store's file names.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from xray.contracts.models import StepRecord, StoredRecord
from xray.contracts.store_base import RecordStore, check_ref, newest_first, record_ref
from xray.errors import MalformedRecord, NotFound, StorageError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS step_records (
    ref TEXT PRIMARY KEY,
    timestamp INTEGER NOT NULL,
    body TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS ix_step_records_timestamp ON step_records (timestamp);
"""


def _decode(ref: str, body: str) -> StepRecord:
    try:
        obj = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedRecord(f"{ref}: {e}") from e
    return StepRecord.from_dict(obj)


class SqliteRecordStore(RecordStore):
    """One row per record; body holds the same JSON the file store writes."""

    def __init__(self, sqlite_path: str | Path, logger: logging.Logger | None = None, timeout_seconds: int = 5):
        self.sqlite_path = str(sqlite_path)
        self.logger = logger or logging.getLogger(__name__)
        try:
            if self.sqlite_path != ":memory:":
                Path(self.sqlite_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.sqlite_path, timeout=timeout_seconds)
            self._conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as e:
            raise StorageError(f"Cannot open {self.sqlite_path}: {e}") from e

    def append(self, record: StepRecord) -> str:
        ref = record_ref(record)
        body = json.dumps(record.to_dict(), default=str)
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO step_records (ref, timestamp, body) VALUES (?, ?, ?)",
                    (ref, record.timestamp, body),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write {ref}: {e}") from e
        self.logger.info("Trace saved: %s (%s)", ref, record.status)
        return ref

    def list(self) -> list[StoredRecord]:
        try:
            rows = self._conn.execute("SELECT ref, body FROM step_records").fetchall()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read {self.sqlite_path}: {e}") from e

        out: list[StoredRecord] = []
        for ref, body in rows:
            try:
                out.append(StoredRecord(ref=ref, record=_decode(ref, body)))
            except MalformedRecord as e:
                self.logger.warning("Skipping malformed trace %s: %s", ref, e)
        return newest_first(out)

    def get(self, ref: str) -> StoredRecord:
        check_ref(ref)
        try:
            row = self._conn.execute("SELECT body FROM step_records WHERE ref = ?", (ref,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read {ref}: {e}") from e
        if row is None:
            raise NotFound(f"No such trace: {ref}")
        return StoredRecord(ref=ref, record=_decode(ref, row[0]))

    def clear(self) -> None:
        try:
            with self._conn:
                cur = self._conn.execute("DELETE FROM step_records")
        except sqlite3.Error as e:
            raise StorageError(f"Cannot clear {self.sqlite_path}: {e}") from e
        self.logger.info("All previous traces cleared (%d rows).", cur.rowcount)

    def close(self) -> None:
        self._conn.close()
