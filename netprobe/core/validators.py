"""Validators - Pure functions for validation (exception-based)."""
from datetime import timedelta
from typing import Union

from netprobe.core.constants import MAX_PORT, MIN_PORT, URL_SCHEMES

Duration = Union[int, float, timedelta]


class ValidationError(ValueError):
    """Raised when a probe is called with invalid arguments."""

    pass


def validate_host(host: str) -> None:
    """Validate host is a non-blank string."""
    if not isinstance(host, str):
        raise ValidationError("Host must be a string")
    if not host.strip():
        raise ValidationError("Host cannot be empty")


def validate_port(port: int) -> None:
    """Validate port is in the TCP range."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValidationError("Port must be an integer")
    if not (MIN_PORT <= port <= MAX_PORT):
        raise ValidationError(f"Port must be between {MIN_PORT} and {MAX_PORT}, got {port}")


def validate_interval(interval: Duration) -> None:
    """Validate a monitor interval is a positive duration."""
    if to_seconds(interval) <= 0:
        raise ValidationError(f"Interval must be positive, got {interval}")


def to_seconds(value: Duration) -> float:
    """Convert a duration (seconds or timedelta) to float seconds."""
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Duration must be a number of seconds or a timedelta, got {value!r}")
    return float(value)


def normalize_host(host: str) -> str:
    """
    Reduce a host or URL to the bare hostname used for resolution.

    Strips an http:// or https:// scheme and anything from the first "/"
    onwards. Ports embedded in the authority are left as-is.

    Raises:
        ValidationError: If host is blank or nothing remains after stripping
    """
    validate_host(host)

    clean_host = host.strip()
    for scheme in URL_SCHEMES:
        if clean_host.startswith(scheme):
            clean_host = clean_host[len(scheme):]
            break

    if "/" in clean_host:
        clean_host = clean_host.split("/", 1)[0]

    if not clean_host:
        raise ValidationError(f"No hostname in {host!r}")

    return clean_host
