"""Configuration management for gdelt_events."""

import os
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    ROOT_DIR = Path(__file__).parent.parent.parent
    DATA_DIR = ROOT_DIR / "data"
    LOGS_DIR = ROOT_DIR / "logs"

    # GDELT 2.0 manifest listing the latest export, mentions and gkg files
    GDELT_LAST_UPDATE_URL: str = os.getenv(
        "GDELT_LAST_UPDATE_URL", "http://data.gdeltproject.org/gdeltv2/lastupdate.txt"
    )

    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if urlparse(cls.GDELT_LAST_UPDATE_URL).scheme not in ("http", "https"):
            raise ValueError(
                f"GDELT_LAST_UPDATE_URL must be an http(s) URL, got {cls.GDELT_LAST_UPDATE_URL!r}"
            )
        if cls.REQUEST_TIMEOUT <= 0:
            raise ValueError(f"REQUEST_TIMEOUT must be positive, got {cls.REQUEST_TIMEOUT}")
