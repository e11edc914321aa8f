# File: calendar_summary/models/locale.py
"""
Locale-specific text rules for reading calendar markup.

Each supported locale contributes month names, its "from X to Y" time
connector, the wording of the generic "N events" placeholder and the
markers that flag metadata lines. Adding a locale means adding one entry
to LOCALE_RULES.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Pattern, Tuple

# Shared time token regexes
TIME_TOKEN = re.compile(r"\d{1,2}:\d{2}")
TIME_AT_START = re.compile(r"^\d{1,2}:\d{2}")
TIME_RANGE_AT_START = re.compile(r"^\d{1,2}:\d{2}\s*[–—-]\s*\d{1,2}:\d{2}")

# Activity names that look like "First Last" but are real titles
COMMON_ACTIVITY_WORDS: Tuple[str, ...] = (
    'Arbeit', 'Frühstück', 'Mittagessen', 'Abendessen',
)


@dataclass(frozen=True)
class LocaleRules:
    """Text rules for one locale."""
    code: str
    months: Tuple[str, ...]
    range_pattern: Pattern
    placeholder_words: str  # regex alternation, e.g. "events?"
    metadata_markers: Tuple[str, ...] = ()
    today_words: Tuple[str, ...] = ()
    tomorrow_words: Tuple[str, ...] = ()
    from_connectors: Tuple[str, ...] = ()
    time_prefix: Optional[str] = None  # regex placed before a time token
    person_name: Optional[Pattern] = None
    activity_words: Tuple[str, ...] = ()
    extra_month_names: Mapping[str, int] = field(default_factory=dict)

    @cached_property
    def month_lookup(self) -> Dict[str, int]:
        """Lowercased month name -> month number (1-12)."""
        lookup = {name.lower(): index + 1 for index, name in enumerate(self.months)}
        lookup.update({name.lower(): number for name, number in self.extra_month_names.items()})
        return lookup

    @cached_property
    def month_alternation(self) -> str:
        names = sorted(self.month_lookup, key=len, reverse=True)
        return "|".join(re.escape(name) for name in names)

    @cached_property
    def date_patterns(self) -> Tuple[Pattern, ...]:
        """Day/month/year patterns using this locale's month names."""
        months = self.month_alternation
        return (
            re.compile(rf"(?P<day>\d{{1,2}})\s+(?P<month>{months})\.?\s+(?P<year>\d{{4}})", re.IGNORECASE),
            re.compile(rf"\b(?P<month>{months})\.?\s+(?P<day>\d{{1,2}}),?\s+(?P<year>\d{{4}})", re.IGNORECASE),
        )

    @cached_property
    def placeholder_pattern(self) -> Pattern:
        return re.compile(rf"^\d+\s*(?:{self.placeholder_words})(?!\w)", re.IGNORECASE)

    @cached_property
    def prefixed_time_pattern(self) -> Optional[Pattern]:
        """Matches a connector-prefixed time token such as "С 13:00"."""
        if not self.time_prefix:
            return None
        return re.compile(rf"{self.time_prefix}\s*\d{{1,2}}:\d{{2}}")


RUSSIAN = LocaleRules(
    code="ru",
    months=(
        'января', 'февраля', 'марта', 'апреля', 'мая', 'июня',
        'июля', 'августа', 'сентября', 'октября', 'ноября', 'декабря',
    ),
    range_pattern=re.compile(
        r"[Сс]\s*(?P<sh>\d{1,2}):(?P<sm>\d{2})\s+до\s+(?P<eh>\d{1,2}):(?P<em>\d{2})",
        re.IGNORECASE,
    ),
    placeholder_words=r"мероприяти[йея]|событи[йея]",
    metadata_markers=('Место', 'цвет'),
    today_words=('Сегодня',),
    tomorrow_words=('Завтра',),
    from_connectors=('С ', 'с '),
    time_prefix=r"[Сс]",
    person_name=re.compile(r"^[А-ЯЁ][а-яё]+\s+[А-ЯЁ][а-яё]+$"),
    activity_words=('Подъем', 'Поездка', 'Психолог', 'Подолог'),
)

ENGLISH = LocaleRules(
    code="en",
    months=(
        'January', 'February', 'March', 'April', 'May', 'June',
        'July', 'August', 'September', 'October', 'November', 'December',
    ),
    range_pattern=re.compile(
        r"\bfrom\s+(?P<sh>\d{1,2}):(?P<sm>\d{2})(?:\s*(?P<sap>AM|PM)\b)?\s+(?:to|until)\s+"
        r"(?P<eh>\d{1,2}):(?P<em>\d{2})(?:\s*(?P<eap>AM|PM)\b)?",
        re.IGNORECASE,
    ),
    placeholder_words=r"events?",
    metadata_markers=('Location:', 'Color:'),
    today_words=('Today',),
    tomorrow_words=('Tomorrow',),
    time_prefix=r"\bfrom",
    person_name=re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$"),
    activity_words=('Daily', 'Weekly', 'Planning'),
    extra_month_names=MappingProxyType({
        'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'jun': 6, 'jul': 7,
        'aug': 8, 'sep': 9, 'sept': 9, 'oct': 10, 'nov': 11, 'dec': 12,
    }),
)

LOCALE_RULES: Mapping[str, LocaleRules] = MappingProxyType({
    RUSSIAN.code: RUSSIAN,
    ENGLISH.code: ENGLISH,
})


def get_locales(codes: Optional[Iterable[str]] = None) -> Tuple[LocaleRules, ...]:
    """
    Resolve locale codes to their rules, primary locale first.

    Unknown codes are ignored; an empty result falls back to every known locale.
    """
    if codes is None:
        from calendar_summary.core.config_manager import Config
        codes = Config.LOCALES

    selected = tuple(LOCALE_RULES[code] for code in codes if code in LOCALE_RULES)
    return selected or tuple(LOCALE_RULES.values())
