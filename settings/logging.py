"""Logging configuration."""

import os
import sys
from pathlib import Path

from loguru import logger

from settings import LOG_DIR


def setup_logging(level: str | None = None, to_file: bool = True, log_dir: Path = LOG_DIR):
    """Configure console logging plus an optional rotating engine log file.

    Level falls back to ``SWING_LOG_LEVEL`` and then INFO.
    """
    level = level or os.getenv("SWING_LOG_LEVEL", "INFO")
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{name}</cyan> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        log_dir.mkdir(exist_ok=True)
        logger.add(
            log_dir / "swing_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="00:00",
            retention="7 days",
            compression="gz",
        )
        logger.info("Engine log file in {}", log_dir)

    return logger
