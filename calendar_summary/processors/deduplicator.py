# File: calendar_summary/processors/deduplicator.py
"""
Deduplication of events found by more than one scan strategy.
"""

from typing import Hashable, List, Set, Tuple

from calendar_summary.models.calendar import CalendarEvent
from calendar_summary.models.common import is_valid_date
from calendar_summary.utils.logger import setup_logger

logger = setup_logger(__name__)


def event_key(event: CalendarEvent) -> Tuple[Hashable, ...]:
    """Identity of a logical event: title, calendar day and start time."""
    return (event.title, event.date, event.start_minutes)


def dedupe(events: List[CalendarEvent]) -> List[CalendarEvent]:
    """
    Remove repeated detections of the same event.

    The first occurrence wins, so the earliest scan strategy decides the
    end time when detections disagree. Events without a usable date are
    dropped.

    Args:
        events: Events in detection order

    Returns:
        Events with duplicates removed, order preserved
    """
    seen: Set[Tuple[Hashable, ...]] = set()
    unique: List[CalendarEvent] = []
    dropped = 0

    for event in events:
        try:
            if not is_valid_date(getattr(event, 'date', None)):
                logger.warning(f"Skipping event with invalid date in deduplication: {event}")
                continue

            key = event_key(event)
            if key in seen:
                dropped += 1
                continue

            seen.add(key)
            unique.append(event)
        except (AttributeError, TypeError) as e:
            logger.error(f"Error in deduplication for {event!r}: {e}")

    if dropped:
        logger.debug(f"Removed {dropped} duplicate detections")
    return unique
