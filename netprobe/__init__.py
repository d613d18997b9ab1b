"""netprobe - Internet connectivity probes and change monitoring for asyncio applications."""

__version__ = "0.1.0"
__author__ = "netprobe contributors"
__description__ = "DNS and TCP connectivity checks with change-only monitoring"

from netprobe.core.checker import ConnectivityChecker
from netprobe.core.config import Config
from netprobe.core.logger import disable_logging, enable_logging
from netprobe.core.monitor import StatusMonitor, monitor_by_connect, monitor_by_name
from netprobe.core.probes import (check_by_connect, check_by_name,
                                  has_connection_by_connect,
                                  has_connection_by_name)
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import ValidationError

__all__ = [
    "Config",
    "ConnectivityChecker",
    "ConnectivityStatus",
    "StatusMonitor",
    "ValidationError",
    "check_by_connect",
    "check_by_name",
    "disable_logging",
    "enable_logging",
    "has_connection_by_connect",
    "has_connection_by_name",
    "monitor_by_connect",
    "monitor_by_name",
    "__version__",
]
