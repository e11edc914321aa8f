# File: calendar_summary/models/summary.py
"""
Data models for summary results handed to the UI collaborator.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .calendar import DateRange


@dataclass(frozen=True)
class ActivitySummary:
    """Total time spent on one activity (or one color)."""
    name: str
    total_minutes: int
    count: int
    formatted_duration: str
    color: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the response shape, omitting an absent color."""
        data = {
            'name': self.name,
            'totalMinutes': self.total_minutes,
            'count': self.count,
            'formattedDuration': self.formatted_duration,
        }
        if self.color:
            data['color'] = self.color
        return data


@dataclass
class SummaryResponse:
    """Response for a summary request."""
    summaries: List[ActivitySummary] = field(default_factory=list)
    date_range: Optional[DateRange] = None
    error: Optional[str] = None

    def is_success(self) -> bool:
        """Check if the request produced a result without error."""
        return self.error is None

    @property
    def total_minutes(self) -> int:
        return sum(s.total_minutes for s in self.summaries)

    def to_dict(self) -> dict:
        return {
            'summaries': [s.to_dict() for s in self.summaries],
            'dateRange': self.date_range.to_dict() if self.date_range else None,
            'error': self.error,
        }
