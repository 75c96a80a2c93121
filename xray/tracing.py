"""xray.tracing

Record ingestion for instrumented pipeline stages.

Each stage calls `begin_step` before doing work and `complete_step` when done;
`complete_step` writes one immutable StepRecord to the store. The token only lets
the caller pair its own begin/end calls; nothing is kept between the two.
"""

from __future__ import annotations
import logging
import secrets
import string
import time
from typing import Any, Callable, Optional

from xray.contracts.models import STATUSES, StepRecord, Status
from xray.contracts.store_base import RecordStore

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits
_TOKEN_LEN = 9


def new_token() -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(_TOKEN_LEN))


def now_ms() -> int:
    return int(time.time() * 1000)


class XRayTracer:
    """Writes step records through an explicitly supplied store."""

    def __init__(self, store: RecordStore, logger: logging.Logger | None = None, clock: Callable[[], int] | None = None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or now_ms

    def begin_step(self, service: str, operation: str, input: Any = None) -> str:
        token = new_token()
        self.logger.debug("Step started: %s/%s (%s)", service, operation, token)
        return token

    def complete_step(
        self,
        token: str,
        service: str,
        operation: str,
        status: Status = "success",
        output: Any = None,
        metadata: Optional[dict[str, Any]] = None,
        input: Any = None,
    ) -> str:
        """Stamp completion time and persist the record. Returns the store ref."""
        if status not in STATUSES:
            raise ValueError(f"Invalid step status: {status!r}")
        record = StepRecord(
            id=token,
            timestamp=self.clock(),
            service=service,
            operation=operation,
            status=status,
            input=input,
            output=output,
            metadata=metadata,
        )
        return self.store.append(record)

    def shifted(self, offset_ms: int) -> "XRayTracer":
        """Tracer on the same store whose clock runs `offset_ms` ahead (negative: behind)."""
        clock = self.clock
        return XRayTracer(self.store, self.logger, clock=lambda: clock() + offset_ms)

    def clear(self) -> None:
        self.store.clear()
