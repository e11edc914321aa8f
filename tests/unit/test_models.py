# File: tests/unit/test_models.py
"""
Unit tests for data models.
Tests all dataclasses and their methods.
"""

import pytest
from datetime import date, datetime
from calendar_summary.models.calendar import CalendarEvent, DateRange
from calendar_summary.models.common import is_valid_date, normalize_date, parse_iso_date
from calendar_summary.models.enums import GroupingMode
from calendar_summary.models.summary import ActivitySummary, SummaryResponse


# ==================== CalendarEvent Tests ====================

class TestCalendarEvent:
    """Tests for CalendarEvent dataclass."""

    def test_event_creation(self, event_day):
        """Test basic event creation and derived duration."""
        event = CalendarEvent("Gym", 420, 480, event_day, "#5484ed")

        assert event.title == "Gym"
        assert event.duration == 60
        assert event.color == "#5484ed"

    def test_title_is_trimmed(self, event_day):
        event = CalendarEvent("  Gym \n", 420, 480, event_day)
        assert event.title == "Gym"

    def test_empty_title_rejected(self, event_day):
        with pytest.raises(ValueError, match="title"):
            CalendarEvent("   ", 420, 480, event_day)

    def test_end_before_start_rejected(self, event_day):
        with pytest.raises(ValueError, match="end time"):
            CalendarEvent("Gym", 480, 420, event_day)

    def test_zero_duration_rejected(self, event_day):
        with pytest.raises(ValueError):
            CalendarEvent("Gym", 480, 480, event_day)

    def test_start_out_of_range_rejected(self, event_day):
        with pytest.raises(ValueError):
            CalendarEvent("Gym", 1440, 1500, event_day)

    def test_event_may_end_at_midnight(self, event_day):
        event = CalendarEvent("Late review", 1380, 1440, event_day)
        assert event.end_minutes == 1440
        assert event.duration == 60

    def test_date_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="date"):
            CalendarEvent("Gym", 420, 480, date(1850, 1, 1))

    def test_datetime_is_normalized_to_date(self):
        event = CalendarEvent("Gym", 420, 480, datetime(2025, 1, 10, 15, 30))
        assert event.date == date(2025, 1, 10)
        assert not isinstance(event.date, datetime)

    def test_event_is_immutable(self, event_day):
        event = CalendarEvent("Gym", 420, 480, event_day)
        with pytest.raises(AttributeError):
            event.title = "Run"

    def test_duration_cannot_be_passed(self, event_day):
        with pytest.raises(TypeError):
            CalendarEvent("Gym", 420, 480, event_day, duration=10)

    def test_overlap_detection(self, create_test_event):
        first = create_test_event("A", start=600, duration=60)
        second = create_test_event("B", start=630, duration=60)
        third = create_test_event("C", start=660, duration=30)

        assert first.overlaps_with(second)
        assert not first.overlaps_with(third)

    def test_to_dict(self, event_day):
        event = CalendarEvent("Gym", 420, 480, event_day, "#5484ed")
        assert event.to_dict() == {
            'title': 'Gym',
            'startMinutes': 420,
            'endMinutes': 480,
            'date': '2025-01-10',
            'duration': 60,
            'color': '#5484ed',
        }


# ==================== DateRange Tests ====================

class TestDateRange:
    """Tests for DateRange dataclass."""

    def test_range_is_inclusive(self):
        date_range = DateRange(date(2025, 1, 6), date(2025, 1, 12))

        assert date_range.contains(date(2025, 1, 6))
        assert date_range.contains(date(2025, 1, 12))
        assert not date_range.contains(date(2025, 1, 13))

    def test_single_day_range(self):
        date_range = DateRange(date(2025, 1, 6), date(2025, 1, 6))
        assert date_range.contains(datetime(2025, 1, 6, 23, 59))

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError):
            DateRange(date(2025, 1, 12), date(2025, 1, 6))

    def test_to_dict_uses_iso_dates(self):
        date_range = DateRange(date(2025, 1, 6), date(2025, 1, 12))
        assert date_range.to_dict() == {'start': '2025-01-06', 'end': '2025-01-12'}


# ==================== Summary Tests ====================

class TestActivitySummary:
    """Tests for ActivitySummary dataclass."""

    def test_to_dict_with_color(self):
        summary = ActivitySummary("Gym", 90, 2, "1h 30m", "#5484ed")
        assert summary.to_dict() == {
            'name': 'Gym',
            'totalMinutes': 90,
            'count': 2,
            'formattedDuration': '1h 30m',
            'color': '#5484ed',
        }

    def test_to_dict_omits_missing_color(self):
        summary = ActivitySummary("Run", 45, 1, "45m")
        assert 'color' not in summary.to_dict()


class TestSummaryResponse:
    """Tests for SummaryResponse dataclass."""

    def test_successful_response(self):
        response = SummaryResponse(
            summaries=[ActivitySummary("Gym", 90, 2, "1h 30m"), ActivitySummary("Run", 45, 1, "45m")],
            date_range=DateRange(date(2025, 1, 6), date(2025, 1, 12))
        )

        assert response.is_success()
        assert response.total_minutes == 135
        data = response.to_dict()
        assert [s['name'] for s in data['summaries']] == ["Gym", "Run"]
        assert data['dateRange'] == {'start': '2025-01-06', 'end': '2025-01-12'}
        assert data['error'] is None

    def test_error_response(self):
        response = SummaryResponse(error="Error parsing events: boom")

        assert not response.is_success()
        assert response.to_dict() == {
            'summaries': [],
            'dateRange': None,
            'error': "Error parsing events: boom",
        }


# ==================== Enum Tests ====================

class TestGroupingMode:
    """Tests for GroupingMode enum."""

    @pytest.mark.parametrize("value, expected", [
        ("byName", GroupingMode.BY_NAME),
        ("byColor", GroupingMode.BY_COLOR),
        ("color", GroupingMode.BY_COLOR),
        ("NAME", GroupingMode.BY_NAME),
        (GroupingMode.BY_COLOR, GroupingMode.BY_COLOR),
        ("unknown", GroupingMode.BY_NAME),
        (None, GroupingMode.BY_NAME),
    ])
    def test_from_value(self, value, expected):
        assert GroupingMode.from_value(value) is expected

    def test_wire_values(self):
        assert GroupingMode.BY_NAME.value == "byName"
        assert GroupingMode.BY_COLOR.value == "byColor"


# ==================== Date Helper Tests ====================

class TestDateHelpers:
    """Tests for shared date helpers."""

    def test_is_valid_date(self):
        assert is_valid_date(date(2025, 1, 10))
        assert is_valid_date(date(1900, 1, 1))
        assert is_valid_date(date(2100, 12, 31))
        assert not is_valid_date(date(1899, 12, 31))
        assert not is_valid_date(date(2101, 1, 1))
        assert not is_valid_date(None)
        assert not is_valid_date("2025-01-10")

    def test_normalize_date(self):
        assert normalize_date(datetime(2025, 1, 10, 8, 0)) == date(2025, 1, 10)
        assert normalize_date(date(2025, 1, 10)) == date(2025, 1, 10)

    def test_parse_iso_date(self):
        assert parse_iso_date("2025-01-10") == date(2025, 1, 10)
        assert parse_iso_date("2025-01-10T08:00:00+03:00") == date(2025, 1, 10)
        assert parse_iso_date("10.01.2025") is None
        assert parse_iso_date("") is None
        assert parse_iso_date(None) is None
