import pytest

from conftest import make_record

from xray.errors import NotFound
from xray.main import TraceService


def _seed(store):
    refs = {}
    for rec in (
        make_record("kw1", "keyword-service", 400),
        make_record("search1", "search-service", 700),
        make_record("rank1", "ranking-service", 1000, price=29.99),
    ):
        refs[rec.id] = store.append(rec)
    return refs


def test_reconstruct_maps_steps_to_refs(json_store):
    refs = _seed(json_store)
    service = TraceService(json_store)
    detail = service.reconstruct(refs["kw1"])
    assert detail.anchor.ref == refs["kw1"]
    assert [e.ref for e in detail.steps] == [refs["kw1"], refs["search1"], refs["rank1"]]
    assert detail.view.outcome == "good"


def test_unknown_ref_is_not_found(json_store):
    with pytest.raises(NotFound):
        TraceService(json_store).reconstruct("missing.json")
    with pytest.raises(NotFound):
        TraceService(json_store).get_record("missing.json")


def test_clear_then_everything_is_empty(store):
    refs = _seed(store)
    service = TraceService(store)
    anchor = service.get_record(refs["kw1"])
    service.clear()
    assert service.list_records() == []
    assert service.listing().total_records == 0
    assert service.recent_runs() == []

    from xray.correlation.engine import reconstruct_run
    view = reconstruct_run([e.record for e in service.list_records()], anchor)
    assert view.steps == [] and view.outcome == "unknown"


def test_corrupt_anchor_is_not_found(json_store):
    _seed(json_store)
    (json_store.traces_dir / "bad.json").write_text("{not json", encoding="utf-8")
    service = TraceService(json_store)
    with pytest.raises(NotFound):
        service.reconstruct("bad.json")
    with pytest.raises(NotFound):
        service.get_record("bad.json")
    assert len(service.list_records()) == 3
