"""xray.store.json_store

Directory-backed record store: one pretty-printed JSON file per record.

The directory is the database. Files that are not `*.json` are ignored;
`*.json` files that fail to parse are logged and skipped by `list()`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from xray.contracts.models import StepRecord, StoredRecord
from xray.contracts.store_base import RecordStore, check_ref, newest_first, record_ref
from xray.errors import MalformedRecord, NotFound, StorageError


def _load(path: Path) -> StepRecord:
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRecord(f"{path.name}: {e}") from e
    return StepRecord.from_dict(obj)


class JsonRecordStore(RecordStore):
    """File-per-record store under `traces_dir`."""

    def __init__(self, traces_dir: str | Path, logger: logging.Logger | None = None):
        self.traces_dir = Path(traces_dir).expanduser()
        self.logger = logger or logging.getLogger(__name__)
        try:
            self.traces_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create traces directory {self.traces_dir}: {e}") from e

    def append(self, record: StepRecord) -> str:
        ref = record_ref(record)
        path = self.traces_dir / ref
        try:
            path.write_text(json.dumps(record.to_dict(), indent=2, default=str), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
        self.logger.info("Trace saved: %s (%s)", ref, record.status)
        return ref

    def list(self) -> list[StoredRecord]:
        if not self.traces_dir.exists():
            return []
        try:
            paths = [p for p in self.traces_dir.glob("*.json") if p.is_file()]
        except OSError as e:
            raise StorageError(f"Cannot read {self.traces_dir}: {e}") from e

        out: list[StoredRecord] = []
        for p in paths:
            try:
                out.append(StoredRecord(ref=p.name, record=_load(p)))
            except MalformedRecord as e:
                self.logger.warning("Skipping malformed trace %s: %s", p.name, e)
            except OSError as e:
                raise StorageError(f"Cannot read {p}: {e}") from e
        return newest_first(out)

    def get(self, ref: str) -> StoredRecord:
        path = self.traces_dir / check_ref(ref)
        if not path.is_file():
            raise NotFound(f"No such trace: {ref}")
        try:
            return StoredRecord(ref=ref, record=_load(path))
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def clear(self) -> None:
        if not self.traces_dir.exists():
            return
        removed = 0
        try:
            for p in self.traces_dir.iterdir():
                if p.is_file():
                    p.unlink()
                    removed += 1
        except OSError as e:
            raise StorageError(f"Cannot clear {self.traces_dir}: {e}") from e
        self.logger.info("All previous traces cleared (%d files).", removed)
