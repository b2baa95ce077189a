"""Interactive console session: prompts, batches, reports."""

import asyncio
from datetime import datetime
from typing import Callable

from ..batch import create_messages
from ..config import SenderSettings
from ..dispatch import Dispatcher
from ..logging_config import get_logger
from ..models import BatchReport
from ..tracker import LatencyTracker

logger = get_logger(__name__)

ReadLine = Callable[[], str]
WriteLine = Callable[[str], None]

# Conventional status for a session ended by Ctrl+C
INTERRUPTED = 130


def format_timestamp(moment: datetime) -> str:
    """yyyy-MM-dd HH:mm:ss.fff"""
    return moment.strftime("%Y-%m-%d %H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


class ConsoleSession:
    """Asks for the endpoint once, then sends batches until told to stop.

    Console input is read on the main thread, outside any event loop; each
    batch gets its own asyncio.run().
    """

    def __init__(
        self,
        settings: SenderSettings | None = None,
        read_line: ReadLine = input,
        write_line: WriteLine = print,
    ):
        self._settings = settings or SenderSettings()
        self._read_line = read_line
        self._write = write_line
        self._tracker = LatencyTracker()

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line().strip()

    def run(self) -> int:
        """Run the interactive loop. Returns a process exit code."""
        try:
            return self._run()
        except EOFError:
            logger.debug("Console input closed")
            return 1
        except KeyboardInterrupt:
            logger.debug("Interrupted")
            return INTERRUPTED

    def _run(self) -> int:
        host = self._ask(f"Enter the server address (e.g. {self._settings.host}):")
        host = host or self._settings.host

        port = self._parse_port(self._ask(f"Enter the port (e.g. {self._settings.port}):"))
        if port is None:
            self._write("Invalid port.")
            return 1

        dispatcher = Dispatcher.from_settings(
            self._settings, host=host, port=port, tracker=self._tracker
        )

        while True:
            message_count = self._parse_count(
                self._ask("Enter the number of messages to send:")
            )
            if message_count is None:
                self._write("Invalid message count.")
                return 1

            self.send_batch(dispatcher, message_count)

            answer = self._ask("Send more messages? (y/n):")
            if answer.lower() != "y":
                return 0

    def send_batch(self, dispatcher: Dispatcher, message_count: int) -> BatchReport:
        """Generate, send and report one batch."""
        messages = create_messages(message_count)
        self._tracker.reset()

        self._write(
            f"[{format_timestamp(datetime.now())}] "
            f"Sending {message_count} messages..."
        )
        report = asyncio.run(dispatcher.send(messages))

        self._write(
            f"[{format_timestamp(report.finished_at)}] "
            f"Sending {message_count} messages finished."
        )
        self._write(
            f"Sending {message_count} messages took {report.elapsed_ms:.3f} milliseconds."
        )
        self._write(f"Latency: {self._tracker.summary().describe()}")
        logger.debug(
            "Batch done",
            extra={
                "context": {
                    "message_count": message_count,
                    "worker_count": report.worker_count,
                    "elapsed_ms": report.elapsed_ms,
                }
            },
        )
        return report

    def _parse_port(self, raw: str) -> int | None:
        if not raw:
            return self._settings.port
        try:
            port = int(raw)
        except ValueError:
            return None
        return port if 1 <= port <= 65535 else None

    @staticmethod
    def _parse_count(raw: str) -> int | None:
        try:
            count = int(raw)
        except ValueError:
            return None
        return count if count >= 1 else None
