"""xray.contracts.models

Shared models for the store, the tracer, the correlation engine and the UI.

A StepRecord mirrors the persisted JSON shape exactly:
    {id, timestamp, duration, service, operation, status, input, output, metadata}
`input`, `output` and `metadata` stay opaque dicts/values; the typed views at the
bottom of this module read the few known paths (reference price, evaluations).
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, get_args

from xray.errors import MalformedRecord

Status = Literal["success", "warning", "error"]
Outcome = Literal["good", "bad", "unknown"]
RunMode = Literal["primary", "fallback", "empty"]

STATUSES: tuple[str, ...] = get_args(Status)


def _is_number(v: Any) -> bool:
    """Finite int or float. bool, NaN and infinities (which json.loads accepts) are not numbers here."""
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or (isinstance(v, float) and math.isfinite(v))


@dataclass(frozen=True)
class StepRecord:
    """One completed (or failed) unit of work inside a pipeline run."""
    id: str
    timestamp: int  # completion time, ms since epoch
    service: str
    operation: str
    status: Status
    input: Any = None
    output: Any = None
    metadata: Optional[dict[str, Any]] = None
    duration: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "duration": self.duration,
            "service": self.service,
            "operation": self.operation,
            "status": self.status,
            "input": self.input,
            "output": self.output,
            "metadata": self.metadata,
        }

    @staticmethod
    def from_dict(obj: Any) -> "StepRecord":
        """Validate a decoded JSON object and build a StepRecord.

        Raises MalformedRecord on any shape violation.
        """
        if not isinstance(obj, dict):
            raise MalformedRecord(f"Expected an object, got {type(obj).__name__}")

        for key in ("id", "service", "operation", "status"):
            if not isinstance(obj.get(key), str):
                raise MalformedRecord(f"Field '{key}' must be a string")
        if obj["status"] not in STATUSES:
            raise MalformedRecord(f"Unknown status: {obj['status']!r}")

        ts = obj.get("timestamp")
        if not _is_number(ts) or int(ts) != ts:
            raise MalformedRecord("Field 'timestamp' must be an integer")

        duration = obj.get("duration", 0)
        if not _is_number(duration):
            raise MalformedRecord("Field 'duration' must be an integer")

        metadata = obj.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise MalformedRecord("Field 'metadata' must be an object")

        return StepRecord(
            id=obj["id"],
            timestamp=int(ts),
            service=obj["service"],
            operation=obj["operation"],
            status=obj["status"],
            input=obj.get("input"),
            output=obj.get("output"),
            metadata=metadata,
            duration=int(duration),
        )


@dataclass(frozen=True)
class StoredRecord:
    """A record paired with the stable ref the store can re-fetch it by."""
    ref: str
    record: StepRecord


@dataclass
class RunView:
    """Result of reconstructing one run around an anchor record."""
    steps: list[StepRecord]
    outcome: Outcome
    mode: RunMode
    target: Optional[StepRecord] = None  # resolved decision record (primary mode only)

    @property
    def is_bad(self) -> bool:
        """Display badge: bad iff any member step ended in a warning."""
        return any(s.status == "warning" for s in self.steps)

    @property
    def services(self) -> list[str]:
        return [s.service for s in self.steps]


@dataclass
class RunDetail:
    """RunView plus the store refs of its steps, for the detail page."""
    anchor: StoredRecord
    view: RunView
    steps: list[StoredRecord] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Typed views over known payload paths
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReferenceProduct:
    title: str
    price: float
    asin: str = ""
    rating: float = 0.0
    reviews: int = 0

    @staticmethod
    def from_input(payload: Any) -> Optional["ReferenceProduct"]:
        """Read `input.reference_product`; None when absent or the price is not numeric."""
        if not isinstance(payload, dict):
            return None
        ref = payload.get("reference_product")
        if not isinstance(ref, dict) or not _is_number(ref.get("price")):
            return None
        return ReferenceProduct(
            title=str(ref.get("title", "")),
            price=ref["price"],
            asin=str(ref.get("asin", "")),
            rating=float(ref["rating"]) if _is_number(ref.get("rating")) else 0.0,
            reviews=int(ref["reviews"]) if _is_number(ref.get("reviews")) else 0,
        )


@dataclass(frozen=True)
class Evaluation:
    """Per-candidate filter result recorded by the ranking step."""
    title: str
    price: float
    rating: float
    reviews: int
    passed: bool
    details: dict[str, Any] = field(default_factory=dict)
    asin: str = ""

    @staticmethod
    def from_dict(obj: Any) -> Optional["Evaluation"]:
        if not isinstance(obj, dict):
            return None
        if not all(_is_number(obj.get(k)) for k in ("price", "rating", "reviews")):
            return None
        details = obj.get("details")
        return Evaluation(
            title=str(obj.get("title", "")),
            price=float(obj["price"]),
            rating=float(obj["rating"]),
            reviews=int(obj["reviews"]),
            passed=bool(obj.get("passed", False)),
            details=details if isinstance(details, dict) else {},
            asin=str(obj.get("asin", "")),
        )


@dataclass(frozen=True)
class StepExplanation:
    """Explanatory context from `metadata`; every field is optional."""
    reasoning: Optional[str] = None
    evaluations: Optional[list[Evaluation]] = None
    qualified_count: Optional[int] = None
    filters_applied: Optional[dict[str, Any]] = None

    @staticmethod
    def from_metadata(metadata: Optional[dict[str, Any]]) -> "StepExplanation":
        if not metadata:
            return StepExplanation()
        reasoning = metadata.get("reasoning")
        raw_evals = metadata.get("evaluations")
        evaluations: Optional[list[Evaluation]] = None
        if isinstance(raw_evals, list):
            parsed = (Evaluation.from_dict(e) for e in raw_evals)
            evaluations = [e for e in parsed if e is not None]
        qc = metadata.get("qualified_count")
        filters = metadata.get("filters_applied")
        return StepExplanation(
            reasoning=reasoning if isinstance(reasoning, str) and reasoning else None,
            evaluations=evaluations,
            qualified_count=int(qc) if _is_number(qc) else None,
            filters_applied=filters if isinstance(filters, dict) else None,
        )
