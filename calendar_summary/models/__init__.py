from .enums import GroupingMode
from .common import is_valid_date, normalize_date, parse_iso_date
from .calendar import CalendarEvent, DateRange
from .summary import ActivitySummary, SummaryResponse
from .palette import (
    COLOR_MAP,
    COLOR_NAMES,
    DEFAULT_COLOR,
    DEFAULT_COLOR_NAME,
    color_from_id,
    color_display_name,
)
from .locale import LocaleRules, LOCALE_RULES, get_locales

__all__ = [
    "GroupingMode",
    "is_valid_date",
    "normalize_date",
    "parse_iso_date",
    "CalendarEvent",
    "DateRange",
    "ActivitySummary",
    "SummaryResponse",
    "COLOR_MAP",
    "COLOR_NAMES",
    "DEFAULT_COLOR",
    "DEFAULT_COLOR_NAME",
    "color_from_id",
    "color_display_name",
    "LocaleRules",
    "LOCALE_RULES",
    "get_locales"
]
