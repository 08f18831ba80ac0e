"""Shared utility functions for gdelt_events."""

import logging
import re
from datetime import datetime
from pathlib import Path

import pytz

GDELT_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

_TIMESTAMP_PATTERN = re.compile(r"(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})")


def setup_logger(
    name: str, log_file: Path | None = None, level: int | str = logging.INFO
) -> logging.Logger:
    """Set up logger with console and file handlers.

    Handlers are attached only once per logger name, so repeated calls
    (e.g. several collectors of the same class) do not duplicate output.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level (int constant or string name like 'DEBUG', 'INFO')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Convert string level to int if needed
    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)
    else:
        logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def parse_gdelt_timestamp(value: int) -> datetime:
    """Convert a decimal YYYYMMDDHHMMSS value to an aware UTC datetime.

    The value is zero-padded to 14 digits before parsing, so small integers
    produce year 0 and are rejected.

    Raises:
        ValueError: If the padded value is not a valid calendar timestamp.
    """
    text = f"{value:014d}"
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"expected 14 digits in {GDELT_TIMESTAMP_FORMAT} format, got {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute, second, tzinfo=pytz.UTC)
