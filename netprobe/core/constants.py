"""Default probe targets and timings."""

# Name-resolution probe
DEFAULT_DNS_HOST = "google.com"
DEFAULT_DNS_TIMEOUT = 10.0  # seconds

# Raw-connection probe (Google public DNS)
DEFAULT_SOCKET_HOST = "8.8.8.8"
DEFAULT_SOCKET_PORT = 53
DEFAULT_SOCKET_TIMEOUT = 3.0  # seconds

# Change monitor
DEFAULT_MONITOR_INTERVAL = 30.0  # seconds

# Valid TCP port range
MIN_PORT = 1
MAX_PORT = 65535

URL_SCHEMES = ("http://", "https://")
