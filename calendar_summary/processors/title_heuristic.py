# File: calendar_summary/processors/title_heuristic.py
"""
Title heuristics.
Decides which fragment of an event label is the activity name, rather
than a time stamp, a date, a placeholder or a metadata line.
"""

import re
from typing import Optional, Sequence

from calendar_summary.models.locale import (
    COMMON_ACTIVITY_WORDS,
    TIME_AT_START,
    TIME_RANGE_AT_START,
    LocaleRules,
    get_locales,
)
from calendar_summary.utils.logger import LoggerMixin

# Ordered: earlier separators are tried first
TEXT_SEPARATORS = (',', ';', '|', '–', '-', '—')

TIME_RANGE_IN_TEXT = re.compile(
    r"\d{1,2}:\d{2}(?:\s*(?:AM|PM)\b)?\s*[–—-]\s*\d{1,2}:\d{2}(?:\s*(?:AM|PM)\b)?",
    re.IGNORECASE
)
TIME_IN_TEXT = re.compile(r"\d{1,2}:\d{2}(?:\s*(?:AM|PM)\b)?", re.IGNORECASE)
EDGE_NOISE = " \t\r\n,;|–—-•·"


class TitleHeuristic(LoggerMixin):
    """Title extraction and validation across the supported locales."""

    def __init__(self, locales: Optional[Sequence[LocaleRules]] = None):
        self.locales = tuple(locales) if locales else get_locales()

    def is_generic_title(self, candidate: Optional[str]) -> bool:
        """True for "N events" style placeholders in any locale."""
        if not candidate:
            return False
        text = candidate.strip()
        return any(locale.placeholder_pattern.match(text) for locale in self.locales)

    def is_time_token(self, candidate: str) -> bool:
        """True when the text starts with a time ("10:00", "С 10:00", "from 10:00")."""
        text = candidate.strip()
        if TIME_AT_START.match(text) or TIME_RANGE_AT_START.match(text):
            return True
        for locale in self.locales:
            pattern = locale.prefixed_time_pattern
            if pattern is not None and pattern.match(text):
                return True
        return False

    def contains_date(self, candidate: str) -> bool:
        return any(
            pattern.search(candidate)
            for locale in self.locales
            for pattern in locale.date_patterns
        )

    def has_metadata_marker(self, candidate: str) -> bool:
        return any(
            marker in candidate
            for locale in self.locales
            for marker in locale.metadata_markers
        )

    def is_person_name(self, candidate: str) -> bool:
        """Bare "First Last" names, unless they carry a known activity word."""
        text = candidate.strip()
        for locale in self.locales:
            if locale.person_name is not None and locale.person_name.match(text):
                activity_words = COMMON_ACTIVITY_WORDS + tuple(
                    word for rules in self.locales for word in rules.activity_words
                )
                return not any(word in text for word in activity_words)
        return False

    def is_valid_title(self, candidate: Optional[str]) -> bool:
        """
        Check whether a fragment can serve as an activity title.

        Rejects single characters, generic placeholders, time tokens,
        dates, location/color metadata and bare attendee names.
        """
        if not candidate:
            return False
        text = candidate.strip()
        if len(text) <= 1:
            return False
        if self.is_generic_title(text):
            return False
        if self.is_time_token(text):
            return False
        if self.contains_date(text) or self.has_metadata_marker(text):
            return False
        if self.is_person_name(text):
            return False
        return True

    def is_plausible_raw_text(self, text: Optional[str]) -> bool:
        """Stricter check for arbitrary text nodes met during the deep search."""
        if not text:
            return False
        trimmed = text.strip()
        return len(trimmed) > 2 and self.is_valid_title(trimmed)

    def strip_time_and_date(self, text: str) -> str:
        """Remove every recognized time and date fragment."""
        remainder = text
        for locale in self.locales:
            remainder = locale.range_pattern.sub(' ', remainder)
        remainder = TIME_RANGE_IN_TEXT.sub(' ', remainder)
        remainder = TIME_IN_TEXT.sub(' ', remainder)
        for locale in self.locales:
            for pattern in locale.date_patterns:
                remainder = pattern.sub(' ', remainder)
        remainder = re.sub(r"\s+", " ", remainder)
        return remainder.strip(EDGE_NOISE)

    def extract_title(self, text: Optional[str]) -> Optional[str]:
        """
        Pull the activity title out of a label.

        Handles "С 12:00 до 12:15, Daily, Person, 26 ноября 2025",
        "Daily, 12:00" and "Arbeit10:00–13:00" alike.
        """
        if not text:
            return None

        # Comma-separated labels lead with the time part
        if ',' in text:
            for part in text.split(',')[1:]:
                candidate = part.strip()
                if self.is_valid_title(candidate):
                    return candidate

        remainder = self.strip_time_and_date(text)
        if self.is_valid_title(remainder):
            return remainder

        for separator in TEXT_SEPARATORS:
            if separator not in remainder:
                continue
            for part in remainder.split(separator):
                candidate = part.strip(EDGE_NOISE)
                if self.is_valid_title(candidate):
                    return candidate

        return None

    def leading_text_title(self, text: str) -> Optional[str]:
        """
        Title from raw node text: the first comma part, cut before a
        "from" connector, as long as it is not a time or placeholder.
        """
        text = (text or '').strip()
        if not text or self.is_time_token(text):
            return None

        candidate = text.split(',')[0]
        for locale in self.locales:
            for connector in locale.from_connectors:
                candidate = candidate.split(connector)[0]
        candidate = candidate.strip()

        if not candidate or TIME_AT_START.match(candidate) or self.is_generic_title(candidate):
            return None
        return candidate
