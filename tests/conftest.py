"""Shared fixtures for the netprobe test suite."""

import asyncio
import socket
from contextlib import asynccontextmanager

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that need real internet access",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-network"):
        return
    skip_network = pytest.mark.skip(reason="needs --run-network")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


@asynccontextmanager
async def _local_tcp_server():
    """Listen on an ephemeral localhost port; yields (port, accepted_peers)."""
    accepted = []

    async def handle(reader, writer):
        accepted.append(writer.get_extra_info("peername"))
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port, accepted
    finally:
        server.close()
        await server.wait_closed()


@pytest.fixture
def tcp_server():
    """Factory for a throwaway localhost TCP server (use with `async with`)."""
    return _local_tcp_server


@pytest.fixture
def closed_port():
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return port
