import re

import pytest

from conftest import ScriptedClock

from xray.tracing import XRayTracer, new_token


def test_tokens_are_short_base36():
    tokens = {new_token() for _ in range(50)}
    assert len(tokens) == 50
    assert all(re.fullmatch(r"[a-z0-9]{9}", t) for t in tokens)


def test_complete_step_writes_one_record(json_store):
    tracer = XRayTracer(json_store, clock=ScriptedClock([1234]))
    token = tracer.begin_step("keyword-service", "keyword_generation", {"title": "x"})
    assert json_store.list() == []

    ref = tracer.complete_step(
        token, "keyword-service", "keyword_generation", "success",
        ["a", "b"], {"reasoning": "because"}, {"title": "x"},
    )
    rec = json_store.get(ref).record
    assert rec.id == token
    assert rec.timestamp == 1234
    assert rec.output == ["a", "b"]
    assert rec.metadata == {"reasoning": "because"}
    assert rec.input == {"title": "x"}


def test_invalid_status_writes_nothing(json_store):
    tracer = XRayTracer(json_store, clock=ScriptedClock([1]))
    with pytest.raises(ValueError):
        tracer.complete_step("tok", "s", "o", "done")
    assert json_store.list() == []


def test_clear_delegates_to_store(json_store):
    tracer = XRayTracer(json_store, clock=ScriptedClock([1]))
    tracer.complete_step(tracer.begin_step("s", "o"), "s", "o")
    tracer.clear()
    assert json_store.list() == []
