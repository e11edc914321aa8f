# File: calendar_summary/core/orchestrator.py
"""
Main orchestrator module for Calendar Summary.
Coordinates extraction, filtering and aggregation for one summary request.
"""

import datetime
import json
from pathlib import Path
from typing import List, Optional, Union

from calendar_summary.core.config_manager import Config
from calendar_summary.models.calendar import CalendarEvent, DateRange
from calendar_summary.models.common import is_valid_date
from calendar_summary.models.enums import GroupingMode
from calendar_summary.models.summary import SummaryResponse
from calendar_summary.processors.aggregator import Aggregator
from calendar_summary.processors.event_extractor import EventExtractor
from calendar_summary.services.document import CalendarDocument
from calendar_summary.utils.logger import setup_logger

logger = setup_logger(__name__)


def is_valid_event(event: CalendarEvent) -> bool:
    """Final check before aggregation: usable title, positive duration, valid day."""
    return (bool(event.title and event.title.strip()) and
            event.end_minutes > event.start_minutes and
            is_valid_date(event.date))


class SummaryService:
    """
    Caller-facing boundary for summary requests.

    Runs extract, validate, filter and summarize, and reports failures in
    the response instead of raising.
    """

    def __init__(self, aggregator: Optional[Aggregator] = None):
        self.aggregator = aggregator or Aggregator()

    def get_summary_data(
        self,
        document: CalendarDocument,
        grouping_mode: Union[GroupingMode, str] = GroupingMode.BY_NAME,
        date_range: Optional[DateRange] = None
    ) -> SummaryResponse:
        """
        Build the activity summary for a page.

        Args:
            document: Rendered calendar page
            grouping_mode: Group by activity name or by color
            date_range: Optional inclusive day filter (None = no filter)

        Returns:
            SummaryResponse; on failure it carries an empty list and the error text
        """
        logger.info("=" * 60)
        logger.info("Starting summary generation")
        logger.info("=" * 60)

        try:
            events = EventExtractor(document).extract()
        except Exception as e:
            logger.error(f"Error parsing events: {e}", exc_info=True)
            return SummaryResponse(summaries=[], date_range=date_range, error=f"Error parsing events: {e}")

        try:
            valid_events = self.validate_events(events)

            if date_range is not None:
                valid_events = self.aggregator.filter_by_date_range(
                    valid_events, date_range.start, date_range.end
                )
                logger.info(f"Filtered to {len(valid_events)} events within {date_range.start}..{date_range.end}")

            summaries = self.aggregator.summarize(valid_events, grouping_mode)
        except Exception as e:
            logger.error(f"Error calculating summaries: {e}", exc_info=True)
            return SummaryResponse(summaries=[], date_range=date_range, error=f"Error calculating summaries: {e}")

        logger.info(f"Summary ready: {len(summaries)} activities from {len(valid_events)} events")
        return SummaryResponse(summaries=summaries, date_range=date_range)

    def validate_events(self, events: List[CalendarEvent]) -> List[CalendarEvent]:
        """Drop events that fail the final check, logging each one."""
        valid: List[CalendarEvent] = []
        for event in events:
            if is_valid_event(event):
                valid.append(event)
            else:
                logger.warning(f"Filtering out invalid event: {event}")

        if len(valid) != len(events):
            logger.warning(f"Filtered out {len(events) - len(valid)} invalid events")
        return valid

    def save_summary(
        self,
        response: SummaryResponse,
        filepath: Path = Config.SUMMARY_OUTPUT_FILE
    ) -> bool:
        """
        Save a summary response as JSON.

        Args:
            response: Response to save
            filepath: Output file path

        Returns:
            True if successful, False otherwise
        """
        try:
            data_to_save = response.to_dict()
            data_to_save["generated_at"] = datetime.datetime.now().isoformat()

            filepath = Path(filepath)
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w', encoding="utf-8") as f:
                json.dump(data_to_save, f, indent=2, default=str, ensure_ascii=False)

            logger.info(f"Summary saved to {filepath}")
            return True
        except OSError as e:
            logger.error(f"Could not save summary: {e}", exc_info=True)
            return False
