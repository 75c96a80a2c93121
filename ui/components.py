"""ui.components

Pure helpers that turn step records into display pieces. Kept free of
Streamlit calls so they can be unit-tested.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

from xray.contracts.models import Evaluation, StepRecord

_ICONS = {"success": "✓", "warning": "⚠", "error": "✗"}


def status_badge_html(status: str) -> str:
    key = status if status in _ICONS else "success"
    return f"<span class='xray-status xray-status-{key}'>{_ICONS[key]} {key.capitalize()}</span>"


def step_title(record: StepRecord) -> str:
    return f"{_ICONS.get(record.status, '')} {record.operation.replace('_', ' ').upper()} · {record.service}"


def run_title(is_bad: bool) -> str:
    return "Bad Run (No Competitor)" if is_bad else "Good Run"


def evaluations_frame(evaluations: list[Evaluation]) -> pd.DataFrame:
    columns = ["Title", "Price", "Rating", "Reviews", "Passed"]
    rows = [
        [e.title, f"${e.price:.2f}", f"{e.rating}★", f"{e.reviews:,}", "✓" if e.passed else "✗"]
        for e in evaluations
    ]
    return pd.DataFrame(rows, columns=columns)


def selected_competitor(output: Any) -> Optional[str]:
    if isinstance(output, dict) and isinstance(output.get("title"), str):
        return output["title"]
    return None


def is_fallback(output: Any) -> bool:
    return isinstance(output, dict) and bool(output.get("fallback"))
