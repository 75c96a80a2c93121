"""xray.correlation.engine

Reconstructs which step records belong to the same pipeline run.

Records carry no run id, so membership is inferred:

1. Resolve the run's decision record. If the anchor is itself a decision record
   (decision service + numeric `input.reference_product.price`) it is the target;
   otherwise the nearest decision record within the loose anchor window is.
2. Classify the target good/bad by the price threshold, look it up among the
   records of the same class (by id, else the first one) and take its timestamp T.
3. Members are records within the tight stitch window of T, at most one per
   service. The target always owns the decision-service slot and the anchor
   always owns its own slot.
4. With no decision record nearby, or an anchor that cannot sit in the stitched
   run, fall back to everything within the loose window of the anchor.

Everything here is a pure function over an in-memory snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from xray.contracts.models import Outcome, ReferenceProduct, RunView, StepRecord


@dataclass(frozen=True)
class CorrelationPolicy:
    decision_service: str = "ranking-service"
    decision_operation: str = "filter_and_rank"
    price_threshold: float = 10.0
    anchor_window_ms: int = 15000
    stitch_window_ms: int = 3000


DEFAULT_POLICY = CorrelationPolicy()


def decision_price(record: StepRecord, policy: CorrelationPolicy = DEFAULT_POLICY) -> Optional[float]:
    """Reference price of a decision record, or None for any other record."""
    if record.service != policy.decision_service:
        return None
    ref = ReferenceProduct.from_input(record.input)
    return ref.price if ref else None


def classify(price: float, policy: CorrelationPolicy = DEFAULT_POLICY) -> Outcome:
    return "good" if price > policy.price_threshold else "bad"


def _outcome_of(record: StepRecord, policy: CorrelationPolicy) -> Optional[Outcome]:
    price = decision_price(record, policy)
    return classify(price, policy) if price is not None else None


def _near(a: int, b: int, window_ms: int) -> bool:
    return abs(a - b) < window_ms


def resolve_target(
    pool: list[StepRecord],
    anchor: StepRecord,
    policy: CorrelationPolicy = DEFAULT_POLICY,
) -> Optional[StepRecord]:
    """Decision record that determines the anchor's run, or None."""
    if decision_price(anchor, policy) is not None:
        return anchor

    candidates = [
        r for r in pool
        if decision_price(r, policy) is not None
        and _near(r.timestamp, anchor.timestamp, policy.anchor_window_ms)
    ]
    if not candidates:
        return None
    # min() keeps the first of equally close candidates (pool order)
    return min(candidates, key=lambda r: abs(r.timestamp - anchor.timestamp))


def _stitch(
    window: list[StepRecord],
    target: StepRecord,
    anchor: StepRecord,
    policy: CorrelationPolicy,
) -> list[StepRecord]:
    slots: dict[str, StepRecord] = {}
    for r in window:
        if r.service not in slots:
            slots[r.service] = r
        elif r.service == policy.decision_service and r.id == target.id:
            slots[r.service] = r
        elif r.id == anchor.id and r.service != policy.decision_service:
            slots[r.service] = r
    return list(slots.values())


def _by_time(records: Iterable[StepRecord]) -> list[StepRecord]:
    return sorted(records, key=lambda r: r.timestamp)


def _fallback(pool: list[StepRecord], anchor: StepRecord, policy: CorrelationPolicy) -> RunView:
    steps = [r for r in pool if _near(r.timestamp, anchor.timestamp, policy.anchor_window_ms)]
    return RunView(steps=_by_time(steps), outcome="unknown", mode="fallback" if steps else "empty")


def reconstruct_run(
    pool: Iterable[StepRecord],
    anchor: StepRecord,
    policy: CorrelationPolicy = DEFAULT_POLICY,
) -> RunView:
    """Return the run containing (or nearest to) `anchor`.

    Never raises for a well-formed pool; the worst case is an `unknown` run.
    """
    records = list(pool)
    target = resolve_target(records, anchor, policy)
    if target is None:
        return _fallback(records, anchor, policy)

    outcome = classify(decision_price(target, policy), policy)
    same_class = [r for r in records if _outcome_of(r, policy) == outcome]
    stitched = next((r for r in same_class if r.id == target.id), same_class[0] if same_class else target)

    t = stitched.timestamp
    anchor_fits = _near(anchor.timestamp, t, policy.stitch_window_ms) and (
        anchor.service != policy.decision_service or anchor.id == stitched.id
    )
    if not anchor_fits:
        return _fallback(records, anchor, policy)

    window = [r for r in records if _near(r.timestamp, t, policy.stitch_window_ms)]
    steps = _by_time(_stitch(window, stitched, anchor, policy))
    return RunView(steps=steps, outcome=outcome, mode="primary", target=stitched)
