# File: calendar_summary/processors/aggregator.py
"""
Time aggregation module.
Groups events by activity name or color and totals their durations.
"""

import datetime
from collections import defaultdict
from typing import Dict, List, Optional, Union

from calendar_summary.models.calendar import CalendarEvent, DateRange
from calendar_summary.models.common import is_valid_date, normalize_date
from calendar_summary.models.enums import GroupingMode
from calendar_summary.models.palette import DEFAULT_COLOR, color_display_name
from calendar_summary.models.summary import ActivitySummary
from calendar_summary.processors.color_resolver import to_hex
from calendar_summary.utils.logger import LoggerMixin


def format_duration(minutes: int) -> str:
    """
    Format a duration for display.

    Examples: 30 -> "30m", 120 -> "2h", 90 -> "1h 30m"
    """
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def normalize_activity_name(name: str) -> str:
    return (name or '').strip()


def normalize_color(color: Optional[str]) -> str:
    """Canonical grouping key for a color, the default color when absent."""
    return to_hex(color) or DEFAULT_COLOR


class Aggregator(LoggerMixin):
    """Builds activity summaries from extracted events."""

    def summarize(
        self,
        events: List[CalendarEvent],
        mode: Union[GroupingMode, str] = GroupingMode.BY_NAME
    ) -> List[ActivitySummary]:
        """
        Group events and total their time.

        Args:
            events: Validated, deduplicated events
            mode: Group by activity name or by color

        Returns:
            Summaries sorted by total time, largest first (ties keep
            the order in which groups were first seen)
        """
        mode = GroupingMode.from_value(mode)

        # Insertion order gives the tie order
        grouped: Dict[str, List[CalendarEvent]] = defaultdict(list)
        for event in events:
            if mode == GroupingMode.BY_COLOR:
                key = normalize_color(event.color)
            else:
                key = normalize_activity_name(event.title)
            grouped[key].append(event)

        summaries: List[ActivitySummary] = []
        for key, group in grouped.items():
            total_minutes = sum(event.duration for event in group)

            if mode == GroupingMode.BY_COLOR:
                name = color_display_name(key)
                color = key
            else:
                name = key
                color = next((event.color for event in group if event.color), None)

            summaries.append(ActivitySummary(
                name=name,
                total_minutes=total_minutes,
                count=len(group),
                formatted_duration=format_duration(total_minutes),
                color=color
            ))

        self.logger.info(f"Summarized {len(events)} events into {len(summaries)} groups ({mode.value})")
        return sorted(summaries, key=lambda s: s.total_minutes, reverse=True)

    def filter_by_date_range(
        self,
        events: List[CalendarEvent],
        start: Optional[datetime.date],
        end: Optional[datetime.date]
    ) -> List[CalendarEvent]:
        """
        Keep events whose day falls within [start, end].

        Invalid bounds leave the list unchanged; events with invalid dates
        are skipped.
        """
        if not is_valid_date(start) or not is_valid_date(end):
            self.logger.warning("Invalid date range for filtering, returning all events")
            return list(events)

        start_day, end_day = normalize_date(start), normalize_date(end)
        if start_day > end_day:
            self.logger.warning(f"Date range start {start_day} is after end {end_day}, returning all events")
            return list(events)
        date_range = DateRange(start_day, end_day)

        filtered: List[CalendarEvent] = []
        for event in events:
            if not is_valid_date(getattr(event, 'date', None)):
                self.logger.warning(f"Skipping event with invalid date: {event}")
                continue
            if date_range.contains(event.date):
                filtered.append(event)

        self.logger.debug(f"Date filter {date_range.start}..{date_range.end} kept {len(filtered)}/{len(events)} events")
        return filtered
