# File: calendar_summary/processors/time_parser.py
"""
Time span parsing.
Turns attribute values and label text into minutes since midnight.
"""

import re
from typing import Callable, List, NamedTuple, Optional, Sequence

from bs4 import Tag

from calendar_summary.models.locale import LocaleRules, get_locales
from calendar_summary.services.document import get_attr
from calendar_summary.utils.logger import LoggerMixin

GENERIC_SPAN = re.compile(
    r"(\d{1,2}):(\d{2})(?:\s*(AM|PM)\b)?.*?(\d{1,2}):(\d{2})(?:\s*(AM|PM)\b)?",
    re.IGNORECASE
)
ANY_TWO_TIMES = re.compile(r"(\d{1,2}):(\d{2}).*?(\d{1,2}):(\d{2})")
SINGLE_TIME = re.compile(r"(\d{1,2}):(\d{2})")


class TimeSpan(NamedTuple):
    start_minutes: Optional[int]
    end_minutes: Optional[int]

    @property
    def is_complete(self) -> bool:
        return self.start_minutes is not None and self.end_minutes is not None


EMPTY_SPAN = TimeSpan(None, None)


def time_to_minutes(time_str: Optional[str]) -> Optional[int]:
    """Convert the first H:MM token of a string to minutes since midnight."""
    if not time_str:
        return None
    match = SINGLE_TIME.search(time_str)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def convert_to_24_hour(hour: int, minute: int, am_pm: Optional[str] = None) -> int:
    """
    Convert a 12-hour clock reading to minutes since midnight.

    12 AM is midnight, 12 PM stays noon, other PM hours add 12.
    Without a marker the hour is taken as 24-hour time.
    """
    marker = (am_pm or '').upper()
    h24 = hour
    if marker == 'PM' and hour != 12:
        h24 += 12
    elif marker == 'AM' and hour == 12:
        h24 = 0
    return h24 * 60 + minute


class TimeSpanParser(LoggerMixin):
    """Parses event time spans in every supported text dialect."""

    def __init__(self, locales: Optional[Sequence[LocaleRules]] = None):
        self.locales = tuple(locales) if locales else get_locales()
        self.rules: List[Callable[[str, Optional[Tag]], Optional[TimeSpan]]] = [
            self._from_attributes,
            self._from_locale_range,
            self._from_generic_text,
            self._from_aria_label,
        ]

    def parse(self, time_text: str, element: Optional[Tag] = None) -> TimeSpan:
        """
        Parse a time span, trying each rule in order.

        Args:
            time_text: Time-bearing text found for the event
            element: Candidate node (for start/end attributes and aria-label)

        Returns:
            TimeSpan with None members when nothing matched
        """
        time_text = time_text or ''
        for rule in self.rules:
            span = rule(time_text, element)
            if span is not None and span.is_complete:
                self.logger.debug(f"{rule.__name__} parsed {span} from {time_text!r}")
                return span

        self.logger.debug(f"Could not parse time from: {time_text!r}")
        return EMPTY_SPAN

    def _from_attributes(self, time_text: str, element: Optional[Tag]) -> Optional[TimeSpan]:
        if element is None:
            return None
        start = time_to_minutes(get_attr(element, 'data-start-time'))
        end = time_to_minutes(get_attr(element, 'data-end-time'))
        if start is None or end is None:
            return None
        return TimeSpan(start, end)

    def _from_locale_range(self, time_text: str, element: Optional[Tag]) -> Optional[TimeSpan]:
        for locale in self.locales:
            match = locale.range_pattern.search(time_text)
            if not match:
                continue
            groups = match.groupdict()
            start = convert_to_24_hour(int(groups['sh']), int(groups['sm']), groups.get('sap'))
            end = convert_to_24_hour(int(groups['eh']), int(groups['em']), groups.get('eap'))
            return TimeSpan(start, end)
        return None

    def _from_generic_text(self, time_text: str, element: Optional[Tag]) -> Optional[TimeSpan]:
        match = GENERIC_SPAN.search(time_text)
        if not match:
            return None
        start = convert_to_24_hour(int(match.group(1)), int(match.group(2)), match.group(3))
        end = convert_to_24_hour(int(match.group(4)), int(match.group(5)), match.group(6))
        return TimeSpan(start, end)

    def _from_aria_label(self, time_text: str, element: Optional[Tag]) -> Optional[TimeSpan]:
        if element is None:
            return None
        match = ANY_TWO_TIMES.search(get_attr(element, 'aria-label'))
        if not match:
            return None
        start = int(match.group(1)) * 60 + int(match.group(2))
        end = int(match.group(3)) * 60 + int(match.group(4))
        return TimeSpan(start, end)
