"""
Shared pytest fixtures for tcping-mcp tests.

Real sockets are only opened against 127.0.0.1. Everything else that
needs a particular network behaviour (fixed response times, refusals,
targets that never answer) swaps out the connection primitive instead.
"""

import asyncio
import socket
from typing import Callable, List, Tuple

import pytest
import pytest_asyncio

from tcping_mcp.models import ProbeOutcome
from tcping_mcp.plugins import probe


@pytest_asyncio.fixture
async def listener():
    """A local TCP listener. Yields (port, closed) where ``closed`` is a
    list that receives one entry each time a client disconnects."""
    closed: List[bool] = []

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        await reader.read()
        closed.append(True)
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port, closed
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def closed_port() -> int:
    """A port on 127.0.0.1 that nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def unresponsive(monkeypatch):
    """Make every connect hang until it is cancelled."""
    async def hang(host, port, **kwargs):
        await asyncio.Event().wait()

    monkeypatch.setattr(asyncio, "open_connection", hang)


@pytest.fixture
def fake_connect(monkeypatch) -> Callable[[Callable[[str, int], ProbeOutcome]], List[Tuple[str, int, int]]]:
    """Replace ``probe.tcp_connect`` with a scripted one.

    Call the fixture with a function mapping (host, port) to a
    ProbeOutcome; it returns the list that records every call as
    (host, port, timeout_ms).
    """
    def install(behaviour: Callable[[str, int], ProbeOutcome]) -> List[Tuple[str, int, int]]:
        calls: List[Tuple[str, int, int]] = []

        async def connect(host: str, port: int, timeout_ms: int = probe.DEFAULT_TIMEOUT_MS) -> ProbeOutcome:
            calls.append((host, port, timeout_ms))
            return behaviour(host, port)

        monkeypatch.setattr(probe, "tcp_connect", connect)
        return calls

    return install


@pytest.fixture
def no_sleep(monkeypatch) -> List[float]:
    """Record the delays tcping asks for instead of waiting them out."""
    delays: List[float] = []

    async def sleep(seconds, result=None):
        delays.append(seconds)
        return result

    monkeypatch.setattr(probe.asyncio, "sleep", sleep)
    return delays


def connected(ms: int) -> ProbeOutcome:
    return ProbeOutcome(success=True, response_time_ms=ms)


def refused(message: str = "Connection refused") -> ProbeOutcome:
    return ProbeOutcome(success=False, error_message=message)
