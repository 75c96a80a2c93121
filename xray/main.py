"""xray.main

Wiring for settings + logging + record store, and the run lookup service the UI
talks to.

Each call fetches a fresh snapshot from the store; nothing is cached between
requests, so concurrent page loads never share mutable state.
"""

from __future__ import annotations

import logging

from xray.config import Settings
from xray.contracts.models import RunDetail, StepRecord, StoredRecord
from xray.contracts.store_base import RecordStore
from xray.correlation.engine import DEFAULT_POLICY, CorrelationPolicy, reconstruct_run
from xray.correlation.listing import RunListing, RunSummary, list_runs, recent_runs
from xray.env_loader import load_env
from xray.errors import MalformedRecord, NotFound
from xray.logging_utils import build_logger
from xray.store.factory import build_store
from xray.tracing import XRayTracer


class TraceService:
    """Run lookup API over one explicitly constructed store."""

    def __init__(self, store: RecordStore, policy: CorrelationPolicy = DEFAULT_POLICY, logger: logging.Logger | None = None):
        self.store = store
        self.policy = policy
        self.logger = logger or logging.getLogger(__name__)

    def list_records(self) -> list[StoredRecord]:
        return self.store.list()

    def _fetch(self, ref: str) -> StoredRecord:
        # malformed records are skipped by list(), so a corrupt anchor is as good as absent
        try:
            return self.store.get(ref)
        except MalformedRecord as e:
            self.logger.warning("Trace %s is malformed: %s", ref, e)
            raise NotFound(f"No such trace: {ref}") from e

    def get_record(self, ref: str) -> StepRecord:
        return self._fetch(ref).record

    def reconstruct(self, ref: str) -> RunDetail:
        """Reconstruct the run around the record at `ref`. Raises NotFound/StorageError."""
        anchor = self._fetch(ref)
        entries = self.store.list()
        view = reconstruct_run([e.record for e in entries], anchor.record, self.policy)

        refs = {e.record.id: e for e in entries}
        steps = [refs[s.id] for s in view.steps if s.id in refs]
        self.logger.info(
            "Reconstructed %s: mode=%s outcome=%s steps=%d", ref, view.mode, view.outcome, len(view.steps)
        )
        return RunDetail(anchor=anchor, view=view, steps=steps)

    def listing(self) -> RunListing:
        return list_runs(self.store.list(), self.policy)

    def recent_runs(self) -> list[RunSummary]:
        return recent_runs(self.store.list(), self.policy)

    def clear(self) -> None:
        self.store.clear()


def build_service(settings: Settings | None = None) -> TraceService:
    if settings is None:
        load_env()  # load .env if present
        settings = Settings.load()
    logger = build_logger(settings.log_dir)
    store = build_store(settings, logger=logger)
    return TraceService(store, policy=settings.correlation_policy(), logger=logger)


def build_tracer(settings: Settings | None = None) -> XRayTracer:
    if settings is None:
        load_env()
        settings = Settings.load()
    logger = build_logger(settings.log_dir)
    return XRayTracer(build_store(settings, logger=logger), logger=logger)
