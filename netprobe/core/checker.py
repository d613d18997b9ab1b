"""Connectivity checker service."""

from typing import Optional

from netprobe.core import monitor, probes
from netprobe.core.config import Config
from netprobe.core.monitor import ChangeCallback, StatusMonitor
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import Duration


class ConnectivityChecker:
    """
    Stateless front-end to the probes and monitors.

    Arguments left as None fall back to the config values under
    ``dns.*``, ``socket.*`` and ``monitor.interval``. Instances share
    nothing and any number may coexist.
    """

    def __init__(self, config: Optional[Config] = None):
        """Initialize the checker.

        Args:
            config: Configuration instance. If None, built-in defaults are used.
        """
        self.config = config or Config()

    def _dns_args(self, host, timeout) -> dict:
        return {
            "host": host if host is not None else self.config.get("dns.host"),
            "timeout": timeout if timeout is not None else self.config.get("dns.timeout"),
        }

    def _socket_args(self, host, port, timeout) -> dict:
        return {
            "host": host if host is not None else self.config.get("socket.host"),
            "port": port if port is not None else self.config.get("socket.port"),
            "timeout": timeout if timeout is not None else self.config.get("socket.timeout"),
        }

    def _interval(self, interval) -> Duration:
        return interval if interval is not None else self.config.get("monitor.interval")

    async def check_by_name(
        self, host: Optional[str] = None, timeout: Optional[Duration] = None
    ) -> ConnectivityStatus:
        """Check connectivity with a DNS lookup."""
        return await probes.check_by_name(**self._dns_args(host, timeout))

    async def has_connection_by_name(self, host: Optional[str] = None, timeout: Optional[Duration] = None) -> bool:
        status = await self.check_by_name(host=host, timeout=timeout)
        return status.is_connected

    async def check_by_connect(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[Duration] = None,
    ) -> ConnectivityStatus:
        """Check connectivity with a TCP connection attempt."""
        return await probes.check_by_connect(**self._socket_args(host, port, timeout))

    async def has_connection_by_connect(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[Duration] = None,
    ) -> bool:
        status = await self.check_by_connect(host=host, port=port, timeout=timeout)
        return status.is_connected

    def monitor_by_name(
        self,
        interval: Optional[Duration] = None,
        host: Optional[str] = None,
        timeout: Optional[Duration] = None,
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> StatusMonitor:
        """Create a DNS-based status monitor."""
        return monitor.monitor_by_name(
            self._interval(interval), on_change=on_change, **self._dns_args(host, timeout)
        )

    def monitor_by_connect(
        self,
        interval: Optional[Duration] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[Duration] = None,
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> StatusMonitor:
        """Create a TCP-based status monitor."""
        return monitor.monitor_by_connect(
            self._interval(interval), on_change=on_change, **self._socket_args(host, port, timeout)
        )
