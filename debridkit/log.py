"""
Logging setup
The library logs through loguru and stays silent until setup_logging() is called.
"""
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", sink=sys.stdout) -> int:
    """Route debridkit logs to sink. Returns the loguru handler id."""
    logger.enable("debridkit")
    logger.remove()
    return logger.add(sink, format=LOG_FORMAT, level=level.upper())
