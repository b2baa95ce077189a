"""Measurement data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RoundTrip:
    """Timing of one record: send to reply."""

    message_id: int
    worker_id: int
    sent_at: datetime
    received_at: datetime
    latency_ms: float  # monotonic clock
    response: str


@dataclass
class BatchReport:
    """Outcome of dispatching one batch."""

    message_count: int
    worker_count: int
    started_at: datetime
    finished_at: datetime
    elapsed_ms: float
    round_trips: list[RoundTrip] = field(default_factory=list)
    failures: list[tuple[int, BaseException]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures
