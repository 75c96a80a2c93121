"""xray.contracts.store_base

Record store interface. Append-only: records are written once and only ever
removed all together by `clear()`.
"""

from __future__ import annotations
import re
from abc import ABC, abstractmethod

from xray.errors import NotFound
from .models import StepRecord, StoredRecord

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def record_ref(record: StepRecord) -> str:
    """Stable ref for a record: `<service>_<operation>_<id>.json`."""
    safe_operation = _UNSAFE_CHARS.sub("_", record.operation).lower()
    return f"{record.service}_{safe_operation}_{record.id}.json"


def check_ref(ref: str) -> str:
    """Reject refs that could escape the store (path separators, dot segments)."""
    if not ref or not isinstance(ref, str):
        raise NotFound("Empty trace ref")
    if "/" in ref or "\\" in ref or ref.startswith(".") or not ref.endswith(".json"):
        raise NotFound(f"No such trace: {ref}")
    return ref


class RecordStore(ABC):
    """Durable append / enumerate / clear of StepRecords."""

    @abstractmethod
    def append(self, record: StepRecord) -> str:
        """Persist one record and return its ref. Raises StorageError."""
        raise NotImplementedError

    @abstractmethod
    def list(self) -> list[StoredRecord]:
        """All valid records, newest first. Malformed entries are skipped."""
        raise NotImplementedError

    @abstractmethod
    def get(self, ref: str) -> StoredRecord:
        """Fetch one record. Raises NotFound or MalformedRecord."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Delete every record. Clearing an empty store is a no-op."""
        raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def newest_first(entries: list[StoredRecord]) -> list[StoredRecord]:
    ordered = sorted(entries, key=lambda e: e.ref)
    return sorted(ordered, key=lambda e: e.record.timestamp, reverse=True)
