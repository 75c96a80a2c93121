"""xray.correlation.listing

Entry points for the overview screen.

Runs have no identity of their own, so the dashboard links to a representative
decision record per class and lets `reconstruct_run` do the rest.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from xray.contracts.models import Outcome, StepExplanation, StoredRecord
from xray.correlation.engine import DEFAULT_POLICY, CorrelationPolicy, classify, decision_price


@dataclass(frozen=True)
class RunEntry:
    has_data: bool
    ref: Optional[str]  # newest representative
    count: int


@dataclass(frozen=True)
class RunListing:
    good: RunEntry
    bad: RunEntry
    total_records: int


@dataclass(frozen=True)
class RunSummary:
    """One decision record, shown as a row in the recent-runs table."""
    ref: str
    timestamp: int
    status: str
    outcome: Outcome
    price: float
    qualified_count: Optional[int]


def _entry(matches: list[StoredRecord]) -> RunEntry:
    return RunEntry(has_data=bool(matches), ref=matches[0].ref if matches else None, count=len(matches))


def list_runs(entries: list[StoredRecord], policy: CorrelationPolicy = DEFAULT_POLICY) -> RunListing:
    """Good/bad representatives by decision status. `entries` must be newest first."""
    decisions = [e for e in entries if e.record.operation == policy.decision_operation]
    good = [e for e in decisions if e.record.status == "success"]
    bad = [e for e in decisions if e.record.status == "warning"]
    return RunListing(good=_entry(good), bad=_entry(bad), total_records=len(entries))


def recent_runs(entries: list[StoredRecord], policy: CorrelationPolicy = DEFAULT_POLICY) -> list[RunSummary]:
    out: list[RunSummary] = []
    for e in entries:
        price = decision_price(e.record, policy)
        if price is None:
            continue
        out.append(RunSummary(
            ref=e.ref,
            timestamp=e.record.timestamp,
            status=e.record.status,
            outcome=classify(price, policy),
            price=price,
            qualified_count=StepExplanation.from_metadata(e.record.metadata).qualified_count,
        ))
    return out
