"""Logging setup"""
import logging
from typing import Optional

from rxreminder.core.config import Config

LOGGER_NAME = "rxreminder"


def setup_logging(level: Optional[str] = None, log_to_file: bool = True) -> logging.Logger:
    """
    Configure the package logger once

    Args:
        level: Logging level name (defaults to Config.LOG_LEVEL)
        log_to_file: Also write to LOG_DIR/<log file>

    Returns:
        The configured 'rxreminder' logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or Config.LOG_LEVEL).upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        Config.get("logging", "format", default="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_to_file:
        Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = Config.LOG_DIR / Config.get("logging", "filename", default="rxreminder.log")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
