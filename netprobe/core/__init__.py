"""Core functionality for netprobe."""

from netprobe.core.checker import ConnectivityChecker
from netprobe.core.config import Config
from netprobe.core.monitor import StatusMonitor
from netprobe.core.status import ConnectivityStatus
from netprobe.core.validators import ValidationError

__all__ = ["Config", "ConnectivityChecker", "ConnectivityStatus", "StatusMonitor", "ValidationError"]
