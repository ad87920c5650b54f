# qregsim/logging_config.py
"""
Logging configuration for qregsim.

Library modules only ask for child loggers; handlers are attached by the
caller (or the benchmark CLI) through ``setup_logging``.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "qregsim"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``qregsim`` logger.

    Args:
        level: Logging level (default: INFO).
        log_file: Optional file to write logs to.
        format_string: Optional custom format string.

    Returns:
        Configured logger instance.
    """
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    formatter = logging.Formatter(format_string)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under ``qregsim``; ``name`` is usually ``__name__``."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
