"""Tests for the DNS and TCP connectivity probes."""

import asyncio
import socket
import time
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from netprobe.core.probes import (check_by_connect, check_by_name,
                                  has_connection_by_connect,
                                  has_connection_by_name)
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import ValidationError

ADDRINFO = [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]


async def _hang(*args, **kwargs):
    await asyncio.sleep(10)


class TestCheckByName:
    @pytest.mark.asyncio
    async def test_addresses_mean_connected(self):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=ADDRINFO)) as mock_resolve:
            status = await check_by_name(host="example.com", timeout=1)

        assert status is ConnectivityStatus.CONNECTED
        mock_resolve.assert_awaited_once_with("example.com")

    @pytest.mark.asyncio
    async def test_empty_result_means_disconnected(self):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=[])):
            assert await check_by_name(host="example.com") is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
            OSError("network unreachable"),
            RuntimeError("unexpected"),
        ],
    )
    async def test_errors_mean_disconnected(self, error):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(side_effect=error)):
            assert await check_by_name(host="example.com") is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_timeout_is_enforced(self):
        with patch("netprobe.core.probes._resolve", new=_hang):
            start = time.monotonic()
            status = await check_by_name(host="example.com", timeout=0.05)
            elapsed = time.monotonic() - start

        assert status is ConnectivityStatus.DISCONNECTED
        assert elapsed < 2.0

    @pytest.mark.asyncio
    async def test_timedelta_timeout(self):
        with patch("netprobe.core.probes._resolve", new=_hang):
            status = await check_by_name(host="example.com", timeout=timedelta(milliseconds=20))

        assert status is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("host", ["", "   "])
    async def test_empty_host_raises_without_lookup(self, host):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=ADDRINFO)) as mock_resolve:
            with pytest.raises(ValidationError):
                await check_by_name(host=host)

        mock_resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_url_is_reduced_to_hostname(self):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=ADDRINFO)) as mock_resolve:
            from_url = await check_by_name(host="https://www.example.com/path")
            from_host = await check_by_name(host="www.example.com")

        assert from_url is from_host is ConnectivityStatus.CONNECTED
        assert [c.args for c in mock_resolve.await_args_list] == [("www.example.com",), ("www.example.com",)]

    @pytest.mark.asyncio
    async def test_defaults(self):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=ADDRINFO)) as mock_resolve:
            await check_by_name()

        mock_resolve.assert_awaited_once_with("google.com")

    @pytest.mark.asyncio
    async def test_localhost_resolves(self):
        """Real resolver, no internet needed."""
        assert await check_by_name(host="localhost", timeout=5) is ConnectivityStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_has_connection_returns_bool(self):
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=ADDRINFO)):
            assert await has_connection_by_name(host="example.com") is True
        with patch("netprobe.core.probes._resolve", new=AsyncMock(return_value=[])):
            assert await has_connection_by_name(host="example.com") is False


class TestCheckByConnect:
    @pytest.mark.asyncio
    async def test_listening_port_means_connected(self, tcp_server):
        async with tcp_server() as (port, accepted):
            status = await check_by_connect(host="127.0.0.1", port=port, timeout=2)
            # Give the server a moment to register the connection
            for _ in range(50):
                if accepted:
                    break
                await asyncio.sleep(0.01)

        assert status is ConnectivityStatus.CONNECTED
        assert len(accepted) == 1

    @pytest.mark.asyncio
    async def test_refused_means_disconnected(self, closed_port):
        status = await check_by_connect(host="127.0.0.1", port=closed_port, timeout=2)
        assert status is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_connection_is_closed(self):
        writer = MagicMock()
        writer.wait_closed = AsyncMock()
        with patch("netprobe.core.probes.asyncio.open_connection", new=AsyncMock(return_value=(MagicMock(), writer))):
            status = await check_by_connect(host="8.8.8.8", port=53, timeout=1)

        assert status is ConnectivityStatus.CONNECTED
        writer.close.assert_called_once()
        writer.wait_closed.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_error_still_connected(self):
        writer = MagicMock()
        writer.wait_closed = AsyncMock(side_effect=ConnectionResetError("reset"))
        with patch("netprobe.core.probes.asyncio.open_connection", new=AsyncMock(return_value=(MagicMock(), writer))):
            assert await check_by_connect(host="8.8.8.8") is ConnectivityStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_timeout_is_enforced(self):
        with patch("netprobe.core.probes.asyncio.open_connection", new=_hang):
            start = time.monotonic()
            status = await check_by_connect(host="8.8.8.8", port=53, timeout=0.05)
            elapsed = time.monotonic() - start

        assert status is ConnectivityStatus.DISCONNECTED
        assert elapsed < 2.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [ConnectionRefusedError(), OSError("unreachable"), RuntimeError("boom")])
    async def test_errors_mean_disconnected(self, error):
        with patch("netprobe.core.probes.asyncio.open_connection", new=AsyncMock(side_effect=error)):
            assert await check_by_connect(host="8.8.8.8") is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("port", [0, 65536])
    async def test_invalid_port_raises_without_connecting(self, port):
        with patch("netprobe.core.probes.asyncio.open_connection", new=AsyncMock()) as mock_open:
            with pytest.raises(ValidationError):
                await check_by_connect(host="8.8.8.8", port=port)

        mock_open.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_host_raises(self):
        with pytest.raises(ValidationError):
            await check_by_connect(host="")

    @pytest.mark.asyncio
    async def test_defaults(self):
        writer = MagicMock()
        writer.wait_closed = AsyncMock()
        with patch(
            "netprobe.core.probes.asyncio.open_connection", new=AsyncMock(return_value=(MagicMock(), writer))
        ) as mock_open:
            await check_by_connect()

        mock_open.assert_awaited_once_with("8.8.8.8", 53)

    @pytest.mark.asyncio
    async def test_has_connection_returns_bool(self, tcp_server, closed_port):
        async with tcp_server() as (port, _):
            assert await has_connection_by_connect(host="127.0.0.1", port=port, timeout=2) is True
        assert await has_connection_by_connect(host="127.0.0.1", port=closed_port, timeout=2) is False

    @pytest.mark.asyncio
    async def test_repeated_calls_agree(self, tcp_server):
        async with tcp_server() as (port, _):
            results = [await check_by_connect(host="127.0.0.1", port=port, timeout=2) for _ in range(3)]

        assert results == [ConnectivityStatus.CONNECTED] * 3


@pytest.mark.network
class TestRealNetwork:
    @pytest.mark.asyncio
    async def test_resolves_google(self):
        assert await check_by_name(host="google.com", timeout=5) is ConnectivityStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_url_host(self):
        assert await check_by_name(host="https://www.google.com/search", timeout=5) is ConnectivityStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_nonexistent_domain(self):
        status = await check_by_name(host="thisdomaindoesnotexist12345xyz.com", timeout=3)
        assert status is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_one_millisecond_dns_timeout(self):
        start = time.monotonic()
        status = await check_by_name(host="google.com", timeout=0.001)
        assert status is ConnectivityStatus.DISCONNECTED
        assert time.monotonic() - start < 3.0

    @pytest.mark.asyncio
    async def test_google_dns_socket(self):
        assert await check_by_connect(host="8.8.8.8", port=53, timeout=3) is ConnectivityStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_documentation_address_unreachable(self):
        status = await check_by_connect(host="192.0.2.1", port=53, timeout=1)
        assert status is ConnectivityStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_one_millisecond_socket_timeout(self):
        start = time.monotonic()
        status = await check_by_connect(host="8.8.8.8", port=53, timeout=0.001)
        assert status is ConnectivityStatus.DISCONNECTED
        assert time.monotonic() - start < 2.0
