# File: calendar_summary/core/config_manager.py
"""
Centralized configuration management for Calendar Summary.
Loads settings from environment variables and the optional .env file.
"""

import os
import re
from pathlib import Path
from typing import List, Optional

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer setting, keeping the default on garbage."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw) if raw else None


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from calendar_summary/core/

    OUTPUT_DIR = BASE_DIR / "output"
    SUMMARY_OUTPUT_FILE = OUTPUT_DIR / "activity_summary.json"

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR: Optional[Path] = _env_path("LOG_DIR")

    # Application Settings
    TIMEZONE = os.getenv("TIMEZONE", "UTC")
    LOCALES: List[str] = [
        code.strip().lower()
        for code in os.getenv("LOCALES", "ru,en").split(",")
        if code.strip()
    ]
    REQUEST_TIMEOUT = _env_int("REQUEST_TIMEOUT", 30)

    # Traversal bounds (ancestor climbs stop after this many levels)
    MAX_ANCESTOR_DEPTH = _env_int("MAX_ANCESTOR_DEPTH", 20)
    COLOR_ANCESTOR_DEPTH = _env_int("COLOR_ANCESTOR_DEPTH", 5)

    # Event defaults
    DEFAULT_SLOT_MINUTES = 60
    MINUTES_IN_DAY = 24 * 60

    # Accepted calendar years
    MIN_YEAR = 1900
    MAX_YEAR = 2100

    DATE_PATTERNS = [
    # ISO and standard formats
    ("%Y-%m-%d", re.compile(r"^\d{4}-\d{2}-\d{2}$")),  # 2025-11-18
    ("%d-%m-%Y", re.compile(r"^\d{2}-\d{2}-\d{4}$")),  # 18-11-2025
    ("%d/%m/%Y", re.compile(r"^\d{2}/\d{2}/\d{4}$")),  # 18/11/2025
    ("%m/%d/%Y", re.compile(r"^\d{2}/\d{2}/\d{4}$")),  # 11/18/2025 (US format)
    ("%Y/%m/%d", re.compile(r"^\d{4}/\d{2}/\d{2}$")),  # 2025/11/18
    ("%Y%m%d", re.compile(r"^\d{8}$")),                # 20251118

    # Dot separators
    ("%d.%m.%Y", re.compile(r"^\d{2}\.\d{2}\.\d{4}$")),  # 18.11.2025
    ("%m.%d.%Y", re.compile(r"^\d{2}\.\d{2}\.\d{4}$")),  # 11.18.2025
    ("%Y.%m.%d", re.compile(r"^\d{4}\.\d{2}\.\d{2}$"))]  # 2025.11.18

    @classmethod
    def validate(cls) -> bool:
        """Validate that all configuration values are usable."""
        errors = []

        if cls.TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"Unknown TIMEZONE: {cls.TIMEZONE}")

        if not cls.LOCALES:
            errors.append("LOCALES must name at least one locale")

        if cls.MAX_ANCESTOR_DEPTH < 1:
            errors.append("MAX_ANCESTOR_DEPTH must be positive")

        if cls.COLOR_ANCESTOR_DEPTH < 0:
            errors.append("COLOR_ANCESTOR_DEPTH cannot be negative")

        if cls.REQUEST_TIMEOUT <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True
