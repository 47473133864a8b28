"""
Logging configuration module
"""

import sys
from typing import Optional

from loguru import logger

from github_agent.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None):
    """configure logging system

    level and log_file override LOG_LEVEL and LOG_FILE; debug mode forces DEBUG
    on the console.
    """
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    # remove default log handler
    logger.remove()

    logger.add(sys.stderr, level="DEBUG" if settings.debug else level, format=CONSOLE_FORMAT)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=FILE_FORMAT,
            rotation="1 day",
            retention="30 days",
            compression="zip",
            enqueue=True,
        )
        logger.debug(f"Writing logs to {log_file}")
