"""Pytest configuration and fixtures."""

import asyncio
import socketserver
import sys
import threading
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class EchoServer:
    """Local TCP server echoing every chunk it reads, recording per connection."""

    def __init__(self, close_after: int | None = None):
        # close_after: drop each connection after this many replies
        self._close_after = close_after
        self._server: asyncio.Server | None = None
        self.connections: list[list[bytes]] = []
        self.host = "127.0.0.1"
        self.port = 0

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, host=self.host, port=0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        if self._server:
            self._server.close()
            await self._server.wait_closed()

    @property
    def received(self) -> list[bytes]:
        return [chunk for conn in self.connections for chunk in conn]

    async def _handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        chunks: list[bytes] = []
        self.connections.append(chunks)
        try:
            while True:
                if self._close_after is not None and len(chunks) >= self._close_after:
                    break
                data = await reader.read(4096)
                if not data:
                    break
                chunks.append(data)
                writer.write(b"ECHO " + data)
                await writer.drain()
        except ConnectionError:
            pass
        finally:
            writer.close()


class ThreadedEchoServer(socketserver.ThreadingTCPServer):
    """Echo server on its own thread, for code that runs its own event loop."""

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), _EchoHandler)
        self.host, self.port = self.server_address
        self.received: list[bytes] = []
        self._lock = threading.Lock()

    def record(self, data: bytes) -> None:
        with self._lock:
            self.received.append(data)


class _EchoHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        while True:
            try:
                data = self.request.recv(4096)
            except ConnectionError:
                return
            if not data:
                return
            self.server.record(data)
            self.request.sendall(b"ECHO " + data)


@pytest_asyncio.fixture
async def echo_server():
    """Start an echo server on a free local port."""
    server = EchoServer()
    await server.start()
    yield server
    await server.stop()


@pytest_asyncio.fixture
async def closing_server():
    """Server that hangs up before answering anything."""
    server = EchoServer(close_after=0)
    await server.start()
    yield server
    await server.stop()


@pytest_asyncio.fixture
async def dropping_server():
    """Server that answers once per connection, then hangs up."""
    server = EchoServer(close_after=1)
    await server.start()
    yield server
    await server.stop()


@pytest.fixture
def unused_port():
    """A local port with nothing listening on it."""
    import socket

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def tracker():
    """Create an empty LatencyTracker."""
    from message_sender.tracker import LatencyTracker

    return LatencyTracker()


@pytest.fixture
def threaded_echo_server():
    """Echo server running outside the test's event loop."""
    server = ThreadedEchoServer()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def threaded_settings(threaded_echo_server):
    """Settings pointing at the threaded echo server."""
    from message_sender.config import SenderSettings

    return SenderSettings(
        host=threaded_echo_server.host, port=threaded_echo_server.port
    )
