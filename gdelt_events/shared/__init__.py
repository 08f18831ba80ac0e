"""Shared utilities and configuration."""

from gdelt_events.shared.config import Config
from gdelt_events.shared.utils import parse_gdelt_timestamp, setup_logger

__all__ = ["Config", "setup_logger", "parse_gdelt_timestamp"]
