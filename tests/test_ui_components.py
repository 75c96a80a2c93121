from conftest import make_record

from xray.contracts.models import Evaluation
from ui.components import (
    evaluations_frame,
    is_fallback,
    run_title,
    selected_competitor,
    status_badge_html,
    step_title,
)


def test_status_badge_unknown_status_renders_as_success():
    assert "xray-status-warning" in status_badge_html("warning")
    assert "xray-status-success" in status_badge_html("weird")


def test_step_title():
    rec = make_record("a", "ranking-service", 1, status="warning")
    assert step_title(rec) == "⚠ FILTER AND RANK · ranking-service"


def test_run_title():
    assert run_title(True) == "Bad Run (No Competitor)"
    assert run_title(False) == "Good Run"


def test_evaluations_frame_formats_columns():
    df = evaluations_frame([Evaluation(title="A", price=4.5, rating=4.2, reviews=1234, passed=False)])
    assert list(df.columns) == ["Title", "Price", "Rating", "Reviews", "Passed"]
    assert df.iloc[0].tolist() == ["A", "$4.50", "4.2★", "1,234", "✗"]


def test_selected_competitor_and_fallback():
    assert selected_competitor({"title": "Bottle", "price": 1}) == "Bottle"
    assert selected_competitor({"fallback": True}) is None
    assert selected_competitor(["not", "a", "dict"]) is None
    assert is_fallback({"fallback": True, "message": "No competitor found"})
    assert not is_fallback({"title": "Bottle"})
