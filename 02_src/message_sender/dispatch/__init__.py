"""Dispatch module."""

from .orchestrator import DispatchError, Dispatcher
from .partition import partition, worker_count_for
from .worker import DispatchWorker, IDispatchWorker, WorkerAborted, WorkerFactory

__all__ = [
    "DispatchError",
    "Dispatcher",
    "DispatchWorker",
    "IDispatchWorker",
    "WorkerAborted",
    "WorkerFactory",
    "partition",
    "worker_count_for",
]
