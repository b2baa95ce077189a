"""Dispatch worker: one connection, one slice of records."""

import asyncio
import contextlib
import time
from datetime import datetime
from typing import Callable, Protocol, Sequence

from ..config import DEFAULT_RECV_BUFFER
from ..logging_config import get_logger
from ..models import MessageRecord, RoundTrip
from ..tracker import ILatencyTracker

logger = get_logger(__name__)


class WorkerAborted(RuntimeError):
    """A worker lost its connection partway through its slice."""

    def __init__(self, worker_id: int, round_trips: list[RoundTrip], cause: OSError):
        self.worker_id = worker_id
        self.round_trips = round_trips
        self.cause = cause
        super().__init__(
            f"Worker {worker_id} aborted after {len(round_trips)} replies: {cause!r}"
        )


class IDispatchWorker(Protocol):
    """Sends a slice of records over its own connection."""

    @property
    def worker_id(self) -> int:
        """Worker identifier."""
        ...

    async def run(self, records: Sequence[MessageRecord]) -> list[RoundTrip]:
        """Send every record in order, awaiting one reply per record."""
        ...


# Builds the worker for a given worker id
WorkerFactory = Callable[[int], IDispatchWorker]


class DispatchWorker:
    """Write-then-read loop over a single TCP connection."""

    def __init__(
        self,
        worker_id: int,
        host: str,
        port: int,
        recv_buffer_size: int = DEFAULT_RECV_BUFFER,
        tracker: ILatencyTracker | None = None,
    ):
        self._worker_id = worker_id
        self._host = host
        self._port = port
        self._recv_buffer_size = recv_buffer_size
        self._tracker = tracker

    @property
    def worker_id(self) -> int:
        return self._worker_id

    async def run(self, records: Sequence[MessageRecord]) -> list[RoundTrip]:
        """
        Send every record in order, awaiting one reply per record.

        Raises:
            WorkerAborted: the connection failed. The remaining records of
                this slice are not sent; the round trips completed so far
                travel with the exception.
        """
        round_trips: list[RoundTrip] = []
        try:
            reader, writer = await asyncio.open_connection(self._host, self._port)
        except OSError as e:
            raise WorkerAborted(self._worker_id, round_trips, e) from e

        logger.debug(
            "Worker %s connected to %s:%s (%s records)",
            self._worker_id,
            self._host,
            self._port,
            len(records),
        )

        try:
            for record in records:
                round_trips.append(await self._round_trip(reader, writer, record))
        except OSError as e:
            raise WorkerAborted(self._worker_id, round_trips, e) from e
        finally:
            writer.close()
            # The peer may already have reset the connection
            with contextlib.suppress(ConnectionError):
                await writer.wait_closed()

        return round_trips

    async def _round_trip(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        record: MessageRecord,
    ) -> RoundTrip:
        """Send one record and wait for whatever the server answers."""
        data = record.encode()

        sent_at = datetime.now()
        start = time.perf_counter()
        writer.write(data)
        await writer.drain()

        # No framing: a single read of up to the buffer size is the reply
        reply = await reader.read(self._recv_buffer_size)
        if not reply:
            raise ConnectionResetError(
                f"Server closed the connection before replying to message {record.id}"
            )
        response = reply.decode("utf-8", errors="replace")

        latency_ms = (time.perf_counter() - start) * 1000.0
        received_at = datetime.now()

        round_trip = RoundTrip(
            message_id=record.id,
            worker_id=self._worker_id,
            sent_at=sent_at,
            received_at=received_at,
            latency_ms=latency_ms,
            response=response,
        )

        context = {
            "worker_id": self._worker_id,
            "message_id": record.id,
            "latency_ms": latency_ms,
        }
        logger.info("Reply received: %s", response, extra={"context": context})
        logger.info(
            "Latency for message %s: %.3f ms",
            record.id,
            latency_ms,
            extra={"context": context},
        )

        if self._tracker:
            self._tracker.record(round_trip)

        return round_trip
