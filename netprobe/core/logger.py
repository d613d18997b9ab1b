import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

# Library is silent until the host application opts in
logger.disable("netprobe")

_handler_id = None


def enable_logging(level: str = "DEBUG", sink=None) -> int:
    """
    Turn on netprobe log output.

    Args:
        level: Minimum level to emit
        sink: Any loguru sink; defaults to stderr

    Returns:
        The loguru handler id
    """
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)

    _handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        format=LOG_FORMAT,
        level=level.upper(),
        filter="netprobe",
    )
    logger.enable("netprobe")
    return _handler_id


def disable_logging() -> None:
    """Silence netprobe log output and drop its handler."""
    global _handler_id

    logger.disable("netprobe")
    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
