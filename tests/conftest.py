"""Shared fixtures: record factory, stores on tmp_path, a scripted clock."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import pytest

from xray.contracts.models import StepRecord
from xray.store.json_store import JsonRecordStore
from xray.store.sqlite_store import SqliteRecordStore


def make_record(
    id: str,
    service: str,
    timestamp: int,
    status: str = "success",
    price: Any = None,
    operation: str | None = None,
    **kwargs: Any,
) -> StepRecord:
    """Build a StepRecord; `price` puts a reference product into the input."""
    ops = {
        "keyword-service": "keyword_generation",
        "search-service": "candidate_search",
        "ranking-service": "filter_and_rank",
    }
    step_input = kwargs.pop("input", None)
    if price is not None:
        step_input = {"reference_product": {"title": "Ref", "price": price}, "candidates_count": 8}
    return StepRecord(
        id=id,
        timestamp=timestamp,
        service=service,
        operation=operation or ops.get(service, "op"),
        status=status,
        input=step_input,
        **kwargs,
    )


class ScriptedClock:
    """Returns the given timestamps in order, one per call."""

    def __init__(self, values: Iterable[int]):
        self._values = iter(values)

    def __call__(self) -> int:
        return next(self._values)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("xray.tests")


@pytest.fixture
def json_store(tmp_path, logger) -> JsonRecordStore:
    return JsonRecordStore(tmp_path / "traces", logger=logger)


@pytest.fixture
def sqlite_store(tmp_path, logger):
    store = SqliteRecordStore(tmp_path / "traces.db", logger=logger)
    yield store
    store.close()


@pytest.fixture(params=["json", "sqlite"])
def store(request, json_store, sqlite_store):
    return json_store if request.param == "json" else sqlite_store
