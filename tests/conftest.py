# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable calendar pages and events for all tests.
"""

import pytest
from datetime import date
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from calendar_summary.models import CalendarEvent
from calendar_summary.services.document import CalendarDocument


# ==================== Page Fixtures ====================

RUSSIAN_WEEK_BODY = """
<div role="row">
  <div role="columnheader" data-date="2025-01-06">пн, 6</div>
  <div role="columnheader" data-date="2025-01-07">вт, 7</div>
</div>
<div role="row">
  <div role="gridcell">
    <div data-eventid="ev1" data-color-id="9" role="button">
      <div class="event-time">С 9:00 до 10:00, Спортзал, Иван Петров</div>
    </div>
    <div data-eventid="ev2" data-color-id="10" role="button">
      <div class="event-time">С 13:00 до 13:30, Standup, J. Doe</div>
    </div>
  </div>
  <div role="gridcell">
    <div data-eventid="ev3" data-color-id="9" role="button">
      <div class="event-time">С 18:00 до 18:30, Спортзал</div>
    </div>
    <div data-eventid="ev4" role="button" aria-label="С 20:00 до 20:45, Пробежка, 7 января 2025"></div>
  </div>
</div>
"""

ENGLISH_GRID_BODY = """
<div role="grid">
  <div role="row">
    <div role="columnheader" aria-colindex="1" data-date="2025-03-03">Mon</div>
    <div role="columnheader" aria-colindex="2" data-date="2025-03-04">Tue</div>
  </div>
  <div role="row">
    <div role="gridcell" aria-colindex="1">
      <div role="button" class="color-11"
           aria-label="from 9:30 AM to 10:00 AM, Design review, Location: Room 4"></div>
    </div>
    <div role="gridcell" aria-colindex="2">
      <div role="button" aria-label="1:00 PM - 2:30 PM, Lunch"
           style="border-left: 4px solid rgb(81, 183, 73)"></div>
      <div role="button" aria-label="3 events"></div>
    </div>
  </div>
</div>
"""

EVENT_CLASS_BODY = """
<div class="day" data-date="2025-02-10">
  <div class="event">
    <span class="event-time">10:00 - 11:00</span>
    <span class="event-title">Lunch</span>
  </div>
  <div class="event">
    <span class="event-time">14:00 - 15:30</span>
    <span class="event-title">Code review</span>
  </div>
</div>
"""

TIME_SLOT_BODY = """
<div class="day-column" data-date="2025-04-01">
  <div data-hour="8"><div role="button"><span>Focus block</span></div></div>
  <div data-hour="9"><div role="button" data-start-time="09:15" data-end-time="09:45">Standup</div></div>
  <div data-hour="23"><div role="button">Late review</div></div>
  <div data-hour="x"><div role="button">Broken</div></div>
</div>
"""


def wrap_html(body: str) -> str:
    """Wrap a body fragment into a full page."""
    return f"<html><head><title>Calendar</title></head><body>{body}</body></html>"


@pytest.fixture
def make_document():
    """Factory fixture building a CalendarDocument from a body fragment."""
    def _make(body: str, url: str = None, **kwargs) -> CalendarDocument:
        return CalendarDocument.from_html(wrap_html(body), url=url, **kwargs)

    return _make


@pytest.fixture
def russian_week_document(make_document):
    """Week view in Russian with data-eventid events and column headers."""
    return make_document(RUSSIAN_WEEK_BODY)


@pytest.fixture
def english_grid_document(make_document):
    """Grid view in English with aria-labelled buttons."""
    return make_document(ENGLISH_GRID_BODY)


@pytest.fixture
def event_class_document(make_document):
    """Layout that only marks events with class names."""
    return make_document(EVENT_CLASS_BODY)


@pytest.fixture
def time_slot_document(make_document):
    """Hour slots with untimed buttons."""
    return make_document(TIME_SLOT_BODY)


@pytest.fixture
def russian_week_file(tmp_path):
    """Russian week page saved to disk."""
    page = tmp_path / "week.html"
    page.write_text(wrap_html(RUSSIAN_WEEK_BODY), encoding="utf-8")
    return page


# ==================== Event Fixtures ====================

@pytest.fixture
def event_day():
    """Day used by the sample events."""
    return date(2025, 1, 10)


@pytest.fixture
def create_test_event(event_day):
    """Factory fixture for creating test events."""
    def _create(
        title: str = "Test Event",
        start: int = 600,
        duration: int = 60,
        day: date = None,
        color: str = None
    ) -> CalendarEvent:
        return CalendarEvent(
            title=title,
            start_minutes=start,
            end_minutes=start + duration,
            date=day or event_day,
            color=color
        )

    return _create


@pytest.fixture
def sample_events(create_test_event):
    """Gym 60, Gym 30 and Run 45 minutes."""
    return [
        create_test_event("Gym", start=420, duration=60, color="#5484ed"),
        create_test_event("Gym", start=1080, duration=30, color="#5484ed"),
        create_test_event("Run", start=600, duration=45),
    ]


# ==================== Date/Time Fixtures ====================

@pytest.fixture
def fixed_today(monkeypatch):
    """Pin the resolver's notion of today."""
    pinned = date(2025, 1, 15)
    monkeypatch.setattr("calendar_summary.processors.date_resolver.today", lambda timezone=None: pinned)
    return pinned


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
