from conftest import make_record

from xray.contracts.models import StoredRecord
from xray.correlation.listing import list_runs, recent_runs


def _entries(*records):
    ordered = sorted(records, key=lambda r: r.timestamp, reverse=True)
    return [StoredRecord(ref=f"{r.id}.json", record=r) for r in ordered]


def test_listing_picks_newest_representative_per_class():
    entries = _entries(
        make_record("g1", "ranking-service", 1000, price=29.99),
        make_record("g2", "ranking-service", 90000, price=29.99),
        make_record("b1", "ranking-service", 50000, status="warning", price=3.0),
        make_record("k1", "keyword-service", 900),
    )
    listing = list_runs(entries)
    assert listing.good.ref == "g2.json" and listing.good.count == 2
    assert listing.bad.ref == "b1.json" and listing.bad.count == 1
    assert listing.total_records == 4


def test_listing_of_empty_pool():
    listing = list_runs([])
    assert not listing.good.has_data and listing.good.ref is None
    assert not listing.bad.has_data
    assert listing.total_records == 0


def test_error_status_is_neither_good_nor_bad():
    listing = list_runs(_entries(make_record("e1", "ranking-service", 1, status="error", price=29.99)))
    assert listing.good.count == 0 and listing.bad.count == 0


def test_recent_runs_lists_decision_records_only():
    entries = _entries(
        make_record("g1", "ranking-service", 1000, price=29.99, metadata={"qualified_count": 5}),
        make_record("b1", "ranking-service", 2000, status="warning", price=3.0),
        make_record("x1", "ranking-service", 3000, input={}),
        make_record("k1", "keyword-service", 900),
    )
    rows = recent_runs(entries)
    assert [r.ref for r in rows] == ["b1.json", "g1.json"]
    assert [r.outcome for r in rows] == ["bad", "good"]
    assert rows[1].qualified_count == 5
    assert rows[0].qualified_count is None
