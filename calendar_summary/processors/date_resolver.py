# File: calendar_summary/processors/date_resolver.py
"""
Date resolution module.
Recovers the calendar day of an event from text, attributes, column
header geometry or the page URL, falling back to today.
"""

import datetime
import re
from typing import Callable, List, Optional, Sequence

import pytz
from bs4 import Tag
from dateutil import parser as dateutil_parser

from calendar_summary.core.config_manager import Config
from calendar_summary.models.common import is_valid_date, parse_iso_date
from calendar_summary.models.locale import TIME_TOKEN, LocaleRules, get_locales
from calendar_summary.services.document import CalendarDocument, get_attr, iter_ancestors
from calendar_summary.utils.logger import LoggerMixin

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
FOUR_DIGIT_YEAR = re.compile(r"\b\d{4}\b")

DateRule = Callable[[Tag, str], Optional[datetime.date]]


def today(timezone: Optional[str] = None) -> datetime.date:
    """Today's date in the configured timezone."""
    tz = pytz.timezone(timezone or Config.TIMEZONE)
    return datetime.datetime.now(tz).date()


class DateResolver(LoggerMixin):
    """Resolves event dates; never returns None."""

    HEADER_SELECTOR = '[role="columnheader"][data-date]'
    SECONDARY_ATTRIBUTES = ('data-day', 'data-start-time', 'aria-label')

    def __init__(
        self,
        document: CalendarDocument,
        locales: Optional[Sequence[LocaleRules]] = None,
        max_depth: Optional[int] = None
    ):
        """
        Initialize the resolver.

        Args:
            document: Page being read (headers, geometry, URL)
            locales: Locale rules for month names and relative words
            max_depth: Ancestor levels to inspect for date attributes
        """
        self.document = document
        self.locales = tuple(locales) if locales else get_locales()
        self.max_depth = max_depth or Config.MAX_ANCESTOR_DEPTH
        self.rules: List[DateRule] = [
            self._from_time_text,
            self._from_date_attribute,
            self._from_secondary_attributes,
            self._from_column_header,
            self._from_url,
        ]

    def resolve(self, element: Tag, time_text: str = '') -> datetime.date:
        """
        Resolve the date of an event node.

        Args:
            element: Candidate event node
            time_text: Time-bearing text already collected for the node

        Returns:
            A validated date (today when nothing else validates)
        """
        for rule in self.rules:
            try:
                resolved = rule(element, time_text or '')
            except (ValueError, OverflowError) as e:
                self.logger.debug(f"{rule.__name__} failed: {e}")
                continue
            if is_valid_date(resolved):
                self.logger.debug(f"{rule.__name__} resolved date {resolved}")
                return resolved

        fallback = today()
        self.logger.debug(f"Using today as fallback: {fallback}")
        return fallback

    # ---------------------------------------------------------------
    # Text parsing helpers
    # ---------------------------------------------------------------

    def parse_locale_date(self, text: str) -> Optional[datetime.date]:
        """Find a "26 ноября 2025" / "November 26, 2025" style date."""
        if not text:
            return None
        for locale in self.locales:
            for pattern in locale.date_patterns:
                match = pattern.search(text)
                if not match:
                    continue
                month = locale.month_lookup.get(match.group('month').lower())
                day = int(match.group('day'))
                year = int(match.group('year'))
                if month is None or not 1 <= day <= 31:
                    continue
                try:
                    candidate = datetime.date(year, month, day)
                except ValueError:
                    continue
                if is_valid_date(candidate):
                    return candidate
        return None

    def parse_structured_date(self, value: str) -> Optional[datetime.date]:
        """Parse a data-date value: ISO first, then the generic parser."""
        value = (value or '').strip()
        if not value:
            return None
        if ISO_DATE_PREFIX.match(value):
            parsed = parse_iso_date(value)
            if is_valid_date(parsed):
                return parsed
        return self.parse_date_string(value)

    def parse_date_string(self, value: str) -> Optional[datetime.date]:
        """
        Generic date parsing for free-form attribute values.

        Strings that carry a time token are rejected outright, since they
        describe a time of day rather than a day.
        """
        value = (value or '').strip()
        if not value or TIME_TOKEN.search(value):
            return None

        for locale in self.locales:
            if any(word in value for word in locale.today_words):
                return today()
            if any(word in value for word in locale.tomorrow_words):
                return today() + datetime.timedelta(days=1)

        for fmt, pattern in Config.DATE_PATTERNS:
            if pattern.match(value):
                try:
                    parsed = datetime.datetime.strptime(value, fmt).date()
                except ValueError:
                    continue
                if is_valid_date(parsed):
                    return parsed

        localized = self.parse_locale_date(value)
        if localized is not None:
            return localized

        # dateutil guesses missing parts from today; demand an explicit year
        if not FOUR_DIGIT_YEAR.search(value):
            return None
        try:
            parsed = dateutil_parser.parse(value).date()
        except (ValueError, OverflowError):
            return None
        return parsed if is_valid_date(parsed) else None

    # ---------------------------------------------------------------
    # Resolution rules, in precedence order
    # ---------------------------------------------------------------

    def _from_time_text(self, element: Tag, time_text: str) -> Optional[datetime.date]:
        return self.parse_locale_date(time_text)

    def _from_date_attribute(self, element: Tag, time_text: str) -> Optional[datetime.date]:
        for node in iter_ancestors(element, self.max_depth):
            parsed = self.parse_structured_date(get_attr(node, 'data-date'))
            if parsed is not None:
                return parsed
        return None

    def _from_secondary_attributes(self, element: Tag, time_text: str) -> Optional[datetime.date]:
        for node in iter_ancestors(element, self.max_depth):
            for attribute in self.SECONDARY_ATTRIBUTES:
                parsed = self.parse_date_string(get_attr(node, attribute))
                if parsed is not None:
                    return parsed
        return None

    def _from_column_header(self, element: Tag, time_text: str) -> Optional[datetime.date]:
        headers = self.document.select(self.HEADER_SELECTOR)
        if not headers:
            return None

        event_box = self.document.bounding_box(element)
        if event_box is None:
            return None

        for header in headers:
            header_box = self.document.bounding_box(header)
            if header_box is None or not header_box.contains(event_box):
                continue
            parsed = self.parse_structured_date(get_attr(header, 'data-date'))
            if parsed is not None:
                return parsed
        return None

    def _from_url(self, element: Tag, time_text: str) -> Optional[datetime.date]:
        date_param = self.document.query_param('date')
        if not date_param:
            return None
        return self.parse_structured_date(date_param)
