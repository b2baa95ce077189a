"""In-memory latency tracker."""

import statistics
from dataclasses import dataclass
from typing import Protocol

from ..models import RoundTrip


def percentile(values: list[float], pct: float) -> float:
    """Nearest-rank percentile; 0.0 for an empty list."""
    if not values:
        return 0.0
    ordered = sorted(values)
    idx = int(round((pct / 100.0) * (len(ordered) - 1)))
    idx = max(0, min(len(ordered) - 1, idx))
    return ordered[idx]


@dataclass(frozen=True)
class LatencySummary:
    """Aggregate latency figures in milliseconds."""

    count: int
    min_ms: float
    mean_ms: float
    p50_ms: float
    p95_ms: float
    p99_ms: float
    max_ms: float

    def describe(self) -> str:
        """One-line human readable form."""
        return (
            f"count={self.count} min={self.min_ms:.3f} mean={self.mean_ms:.3f} "
            f"p50={self.p50_ms:.3f} p95={self.p95_ms:.3f} "
            f"p99={self.p99_ms:.3f} max={self.max_ms:.3f} ms"
        )


class ILatencyTracker(Protocol):
    """Collecting round trips reported by workers."""

    def record(self, round_trip: RoundTrip) -> None:
        """Store a round trip."""
        ...

    def summary(self) -> LatencySummary:
        """Summarize everything recorded so far."""
        ...

    def reset(self) -> None:
        """Forget recorded round trips."""
        ...


class LatencyTracker:
    """Collects RoundTrips from all workers of a batch.

    Only touched from the event loop thread, so no locking.
    """

    def __init__(self) -> None:
        self._round_trips: list[RoundTrip] = []

    def record(self, round_trip: RoundTrip) -> None:
        """Store a round trip."""
        self._round_trips.append(round_trip)

    @property
    def round_trips(self) -> list[RoundTrip]:
        return self._round_trips.copy()

    def summary(self) -> LatencySummary:
        """Summarize everything recorded so far."""
        latencies = [rt.latency_ms for rt in self._round_trips]
        if not latencies:
            return LatencySummary(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

        return LatencySummary(
            count=len(latencies),
            min_ms=min(latencies),
            mean_ms=statistics.fmean(latencies),
            p50_ms=statistics.median(latencies),
            p95_ms=percentile(latencies, 95),
            p99_ms=percentile(latencies, 99),
            max_ms=max(latencies),
        )

    def per_worker_totals(self) -> dict[int, float]:
        """Sum of latencies per worker id."""
        totals: dict[int, float] = {}
        for rt in self._round_trips:
            totals[rt.worker_id] = totals.get(rt.worker_id, 0.0) + rt.latency_ms
        return totals

    def reset(self) -> None:
        """Forget recorded round trips."""
        self._round_trips.clear()
