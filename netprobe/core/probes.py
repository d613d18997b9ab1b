"""
Connectivity probes.

Two interchangeable one-shot checks:
- check_by_name: resolves a hostname (DNS lookup)
- check_by_connect: opens and immediately closes a TCP connection

Each call races the network operation against its timeout. Environmental
failures (lookup errors, refused connections, timeouts, anything unexpected)
map to DISCONNECTED. Only ValidationError escapes to the caller.
"""
import asyncio
import socket

from loguru import logger

from netprobe.core.constants import (DEFAULT_DNS_HOST, DEFAULT_DNS_TIMEOUT,
                                     DEFAULT_SOCKET_HOST, DEFAULT_SOCKET_PORT,
                                     DEFAULT_SOCKET_TIMEOUT)
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import (Duration, normalize_host, to_seconds,
                                      validate_host, validate_port)


async def _resolve(host: str) -> list:
    """Resolve host to a list of getaddrinfo entries."""
    loop = asyncio.get_running_loop()
    return await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)


async def _close_quietly(writer: asyncio.StreamWriter) -> None:
    """Close a probe connection, ignoring errors from the teardown itself."""
    writer.close()
    try:
        await writer.wait_closed()
    except OSError as e:
        logger.debug(f"[Probe] Error while closing probe connection: {e}")


async def check_by_name(
    host: str = DEFAULT_DNS_HOST,
    timeout: Duration = DEFAULT_DNS_TIMEOUT,
) -> ConnectivityStatus:
    """
    Check connectivity by resolving a hostname.

    Args:
        host: Domain name to resolve. A URL is accepted; its scheme and path are stripped.
        timeout: Maximum time for the lookup (seconds or timedelta)

    Returns:
        CONNECTED if the lookup returned at least one address, DISCONNECTED otherwise

    Raises:
        ValidationError: If host is empty
    """
    clean_host = normalize_host(host)
    timeout_s = to_seconds(timeout)

    try:
        addresses = await asyncio.wait_for(_resolve(clean_host), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.debug(f"[Probe] DNS lookup for {clean_host} timed out after {timeout_s}s")
        return ConnectivityStatus.DISCONNECTED
    except OSError as e:
        logger.debug(f"[Probe] DNS lookup for {clean_host} failed: {e}")
        return ConnectivityStatus.DISCONNECTED
    except Exception as e:
        logger.debug(f"[Probe] Unexpected error resolving {clean_host}: {e!r}")
        return ConnectivityStatus.DISCONNECTED

    if not addresses:
        logger.debug(f"[Probe] DNS lookup for {clean_host} returned no addresses")
        return ConnectivityStatus.DISCONNECTED

    logger.debug(f"[Probe] {clean_host} resolved to {len(addresses)} address(es)")
    return ConnectivityStatus.CONNECTED


async def has_connection_by_name(
    host: str = DEFAULT_DNS_HOST,
    timeout: Duration = DEFAULT_DNS_TIMEOUT,
) -> bool:
    """Return True if check_by_name reports CONNECTED."""
    status = await check_by_name(host=host, timeout=timeout)
    return status.is_connected


async def check_by_connect(
    host: str = DEFAULT_SOCKET_HOST,
    port: int = DEFAULT_SOCKET_PORT,
    timeout: Duration = DEFAULT_SOCKET_TIMEOUT,
) -> ConnectivityStatus:
    """
    Check connectivity by opening a TCP connection.

    The connection is closed as soon as it is established.

    Args:
        host: IP address or hostname to connect to
        port: TCP port (1-65535)
        timeout: Maximum time for the connection attempt (seconds or timedelta)

    Returns:
        CONNECTED if the connection was established, DISCONNECTED otherwise

    Raises:
        ValidationError: If host is empty or port is out of range
    """
    validate_host(host)
    validate_port(port)
    timeout_s = to_seconds(timeout)
    target = host.strip()

    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(target, port), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.debug(f"[Probe] Connection to {target}:{port} timed out after {timeout_s}s")
        return ConnectivityStatus.DISCONNECTED
    except OSError as e:
        logger.debug(f"[Probe] Connection to {target}:{port} failed: {e}")
        return ConnectivityStatus.DISCONNECTED
    except Exception as e:
        logger.debug(f"[Probe] Unexpected error connecting to {target}:{port}: {e!r}")
        return ConnectivityStatus.DISCONNECTED

    await _close_quietly(writer)
    logger.debug(f"[Probe] Connection to {target}:{port} succeeded")
    return ConnectivityStatus.CONNECTED


async def has_connection_by_connect(
    host: str = DEFAULT_SOCKET_HOST,
    port: int = DEFAULT_SOCKET_PORT,
    timeout: Duration = DEFAULT_SOCKET_TIMEOUT,
) -> bool:
    """Return True if check_by_connect reports CONNECTED."""
    status = await check_by_connect(host=host, port=port, timeout=timeout)
    return status.is_connected
