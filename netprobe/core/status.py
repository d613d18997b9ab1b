"""Connectivity status values."""
from enum import Enum


class ConnectivityStatus(Enum):
    """Result of a connectivity probe."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    UNKNOWN = "unknown"  # Not produced by the current probes

    def __str__(self):
        return self.value

    @property
    def is_connected(self) -> bool:
        return self is ConnectivityStatus.CONNECTED

    @property
    def is_disconnected(self) -> bool:
        return self is ConnectivityStatus.DISCONNECTED

    @property
    def is_unknown(self) -> bool:
        return self is ConnectivityStatus.UNKNOWN
