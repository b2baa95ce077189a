"""Message Sender: TCP round-trip load generator."""

from .batch import create_messages
from .config import SenderSettings
from .console import ConsoleSession
from .dispatch import (
    DispatchError,
    Dispatcher,
    DispatchWorker,
    IDispatchWorker,
    WorkerAborted,
    partition,
    worker_count_for,
)
from .models import BatchReport, MessagePayload, MessageRecord, RoundTrip
from .tracker import ILatencyTracker, LatencySummary, LatencyTracker

__all__ = [
    # Configuration
    "SenderSettings",
    # Models
    "MessagePayload",
    "MessageRecord",
    "RoundTrip",
    "BatchReport",
    # Components
    "create_messages",
    "partition",
    "worker_count_for",
    "IDispatchWorker",
    "DispatchWorker",
    "Dispatcher",
    "DispatchError",
    "WorkerAborted",
    "ILatencyTracker",
    "LatencyTracker",
    "LatencySummary",
    "ConsoleSession",
]
