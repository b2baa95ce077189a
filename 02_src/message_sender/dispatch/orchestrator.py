"""Dispatch orchestrator: fan records out to workers and join them."""

import asyncio
import time
from datetime import datetime
from typing import Sequence

from ..config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_RECV_BUFFER,
    SenderSettings,
)
from ..logging_config import get_logger
from ..models import BatchReport, MessageRecord, RoundTrip
from ..tracker import ILatencyTracker
from .partition import partition, worker_count_for
from .worker import DispatchWorker, IDispatchWorker, WorkerAborted, WorkerFactory

logger = get_logger(__name__)


class DispatchError(RuntimeError):
    """One or more workers failed; raised after every worker has finished."""

    def __init__(self, report: BatchReport):
        self.report = report
        self.failures = report.failures
        worker_ids = ", ".join(str(worker_id) for worker_id, _ in self.failures)
        first = self.failures[0][1]
        super().__init__(
            f"{len(self.failures)} of {report.worker_count} workers failed "
            f"(workers: {worker_ids}); first error: {first!r}"
        )


class Dispatcher:
    """Partitions a batch across workers, runs them concurrently, waits for all."""

    def __init__(
        self,
        host: str,
        port: int,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_workers: int = DEFAULT_MAX_WORKERS,
        recv_buffer_size: int = DEFAULT_RECV_BUFFER,
        tracker: ILatencyTracker | None = None,
        worker_factory: WorkerFactory | None = None,
    ):
        self._host = host
        self._port = port
        self._batch_size = batch_size
        self._max_workers = max_workers
        self._recv_buffer_size = recv_buffer_size
        self._tracker = tracker
        self._worker_factory = worker_factory or self._create_worker

    @classmethod
    def from_settings(
        cls,
        settings: SenderSettings,
        host: str | None = None,
        port: int | None = None,
        tracker: ILatencyTracker | None = None,
    ) -> "Dispatcher":
        """Create a dispatcher, overriding the endpoint if given."""
        return cls(
            host=host or settings.host,
            port=port or settings.port,
            batch_size=settings.batch_size,
            max_workers=settings.max_workers,
            recv_buffer_size=settings.recv_buffer_size,
            tracker=tracker,
        )

    def _create_worker(self, worker_id: int) -> IDispatchWorker:
        return DispatchWorker(
            worker_id=worker_id,
            host=self._host,
            port=self._port,
            recv_buffer_size=self._recv_buffer_size,
            tracker=self._tracker,
        )

    async def send(self, records: Sequence[MessageRecord]) -> BatchReport:
        """
        Send all records and report the elapsed wall-clock time.

        Raises:
            ValueError: records is empty.
            DispatchError: at least one worker failed. Raised only after
                every worker has finished; carries the partial report,
                including replies an aborted worker got before failing.
        """
        if not records:
            raise ValueError("records must not be empty")

        worker_count = worker_count_for(
            len(records), self._batch_size, self._max_workers
        )
        slices = partition(len(records), worker_count)
        workers = [self._worker_factory(i) for i in range(worker_count)]

        logger.debug(
            "Dispatching %s records over %s workers to %s:%s",
            len(records),
            worker_count,
            self._host,
            self._port,
        )

        started_at = datetime.now()
        start = time.perf_counter()
        results = await asyncio.gather(
            *[
                worker.run(records[index_range.start : index_range.stop])
                for worker, index_range in zip(workers, slices)
            ],
            return_exceptions=True,
        )
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        finished_at = datetime.now()

        round_trips: list[RoundTrip] = []
        failures: list[tuple[int, BaseException]] = []
        for worker, result in zip(workers, results):
            if not isinstance(result, BaseException):
                round_trips.extend(result)
                continue

            error = result
            if isinstance(result, WorkerAborted):
                round_trips.extend(result.round_trips)
                error = result.cause
            logger.error(
                "Worker %s failed: %s",
                worker.worker_id,
                result,
                exc_info=(type(error), error, error.__traceback__),
            )
            failures.append((worker.worker_id, error))

        report = BatchReport(
            message_count=len(records),
            worker_count=worker_count,
            started_at=started_at,
            finished_at=finished_at,
            elapsed_ms=elapsed_ms,
            round_trips=sorted(round_trips, key=lambda rt: rt.message_id),
            failures=failures,
        )

        if failures:
            raise DispatchError(report)
        return report
