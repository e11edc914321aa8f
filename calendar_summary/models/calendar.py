# File: calendar_summary/models/calendar.py

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .common import is_valid_date, normalize_date

MINUTES_IN_DAY = 24 * 60


@dataclass(frozen=True)
class CalendarEvent:
    """A single activity block read from the calendar page."""
    title: str
    start_minutes: int
    end_minutes: int
    date: date
    color: Optional[str] = None
    duration: int = field(init=False)

    def __post_init__(self):
        """Validate event data and derive the duration."""
        title = (self.title or "").strip()
        if not title:
            raise ValueError("Event title cannot be empty")
        object.__setattr__(self, 'title', title)

        if not 0 <= self.start_minutes < MINUTES_IN_DAY:
            raise ValueError(f"Start time out of range for {title}: {self.start_minutes}")
        if not self.start_minutes < self.end_minutes <= MINUTES_IN_DAY:
            raise ValueError(f"Event end time must be after start time: {title}")

        if not is_valid_date(self.date):
            raise ValueError(f"Event date out of range for {title}: {self.date}")
        object.__setattr__(self, 'date', normalize_date(self.date))

        object.__setattr__(self, 'duration', self.end_minutes - self.start_minutes)

    def overlaps_with(self, other: 'CalendarEvent') -> bool:
        """Check if this event overlaps with another on the same day."""
        return (self.date == other.date and
                self.start_minutes < other.end_minutes and
                self.end_minutes > other.start_minutes)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            'title': self.title,
            'startMinutes': self.start_minutes,
            'endMinutes': self.end_minutes,
            'date': self.date.isoformat(),
            'duration': self.duration,
            'color': self.color,
        }


@dataclass(frozen=True)
class DateRange:
    """Visible date range supplied by the page-state collaborator."""
    start: date
    end: date

    def __post_init__(self):
        object.__setattr__(self, 'start', normalize_date(self.start))
        object.__setattr__(self, 'end', normalize_date(self.end))
        if self.start > self.end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        return self.start <= normalize_date(day) <= self.end

    def to_dict(self) -> dict:
        return {'start': self.start.isoformat(), 'end': self.end.isoformat()}
