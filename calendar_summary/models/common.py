# File: calendar_summary/models/common.py

from datetime import date, datetime
from typing import Optional, Union

from calendar_summary.core.config_manager import Config


def is_valid_date(value: Optional[Union[date, datetime]]) -> bool:
    """Check that a value is a date within the accepted year range."""
    if value is None or not isinstance(value, date):
        return False
    return Config.MIN_YEAR <= value.year <= Config.MAX_YEAR


def normalize_date(value: Union[date, datetime]) -> date:
    """Drop the time of day, keeping only the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a leading YYYY-MM-DD (time or offset suffixes are ignored)."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None
