"""Utility functions for td-client."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """Configure loguru sinks and enable td-client's own log output.

    Args:
        log_level: Minimum level for all sinks
        log_file: Optional path of a rotating log file
        console: Whether to log to stderr
    """
    logger.remove()

    if console:
        logger.add(sys.stderr, level=log_level, format=LOG_FORMAT, colorize=True)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )

    logger.enable("td_client")
    logger.debug(f"Logging configured: level={log_level} file={log_file}")
