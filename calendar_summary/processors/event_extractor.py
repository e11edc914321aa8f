# File: calendar_summary/processors/event_extractor.py
"""
Event extraction module.
Scans a rendered calendar page for event nodes and turns each one into a
CalendarEvent, using several scan strategies because no single markup
pattern is reliable across views and layouts.
"""

from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from calendar_summary.core.config_manager import Config
from calendar_summary.models.calendar import CalendarEvent
from calendar_summary.models.locale import TIME_TOKEN, LocaleRules, get_locales
from calendar_summary.processors.color_resolver import ColorResolver
from calendar_summary.processors.date_resolver import DateResolver
from calendar_summary.processors.deduplicator import dedupe
from calendar_summary.processors.time_parser import TimeSpan, TimeSpanParser
from calendar_summary.processors.title_heuristic import TitleHeuristic
from calendar_summary.services.document import CalendarDocument, get_attr, iter_ancestors, text_of
from calendar_summary.utils.logger import LoggerMixin


class ScanStrategy(NamedTuple):
    name: str
    selector: str


# Tried in order; the first one that yields events ends the search
PRIMARY_STRATEGIES = (
    ScanStrategy("event-id", '[data-eventid]'),
    ScanStrategy("grid-button", '[role="gridcell"] [role="button"][aria-label]'),
    ScanStrategy("event-class", '.event-container, .event, [class*="event"]'),
)

TIME_SLOT_SELECTOR = '[data-hour]'
SLOT_EVENT_SELECTOR = '[role="button"]'
TIME_ELEMENT_SELECTORS = ('[data-time]', '.event-time', '[class*="time"]')
TITLE_ELEMENT_SELECTORS = ('[data-event-title]', '.event-title')

# Text climbs stop below these; their text spans the whole page
PAGE_ROOT_TAGS = frozenset({"body", "html", "head"})


class CandidateContext(NamedTuple):
    """Text gathered from a candidate node and its ancestors."""
    time_text: str
    aria_label: str

    @property
    def label(self) -> str:
        return self.time_text or self.aria_label


TitleRule = Callable[[Tag, CandidateContext], Optional[str]]


class EventExtractor(LoggerMixin):
    """Extracts calendar events from a CalendarDocument."""

    def __init__(
        self,
        document: CalendarDocument,
        locales: Optional[Sequence[LocaleRules]] = None,
        max_depth: Optional[int] = None
    ):
        """
        Initialize the extractor and its heuristics.

        Args:
            document: Page to read (never modified)
            locales: Locale rules (default: Config.LOCALES)
            max_depth: Bound on every ancestor climb
        """
        self.document = document
        self.locales = tuple(locales) if locales else get_locales()
        self.max_depth = max_depth or Config.MAX_ANCESTOR_DEPTH

        self.titles = TitleHeuristic(self.locales)
        self.time_parser = TimeSpanParser(self.locales)
        self.date_resolver = DateResolver(document, self.locales, self.max_depth)
        self.color_resolver = ColorResolver(document)

        self.title_rules: List[TitleRule] = [
            self._title_from_label,
            self._title_from_title_markup,
            self._title_from_text_content,
        ]

    def extract(self) -> List[CalendarEvent]:
        """
        Extract all visible events from the page.

        Returns:
            Deduplicated events in detection order
        """
        self.logger.info("Starting to parse events")
        events: List[CalendarEvent] = []

        for strategy in PRIMARY_STRATEGIES:
            nodes = self.document.select(strategy.selector)
            found = self._parse_nodes(nodes)
            self.logger.info(
                f"Strategy {strategy.name}: {len(nodes)} candidates, {len(found)} events"
            )
            if found:
                events.extend(found)
                break

        slot_events = self._scan_time_slots()
        self.logger.info(f"Strategy time-slot: {len(slot_events)} events")
        events.extend(slot_events)

        unique = dedupe(events)
        self.logger.info(f"Final result: {len(unique)} events after deduplication")
        return unique

    def parse_candidate(
        self,
        element: Tag,
        default_span: Optional[TimeSpan] = None
    ) -> Optional[CalendarEvent]:
        """
        Build an event from one candidate node.

        Args:
            element: Candidate node
            default_span: Span to use when no time can be parsed

        Returns:
            CalendarEvent, or None when the node is not a usable event
        """
        try:
            return self._build_event(element, default_span)
        except Exception as e:
            self.logger.warning(f"Error parsing event element <{element.name}>: {e}", exc_info=True)
            return None

    def _parse_nodes(self, nodes: Sequence[Tag]) -> List[CalendarEvent]:
        events = []
        for node in nodes:
            event = self.parse_candidate(node)
            if event is not None:
                events.append(event)
        return events

    def _scan_time_slots(self) -> List[CalendarEvent]:
        """Events inside hour slots; unparseable times default to the slot hour."""
        events: List[CalendarEvent] = []
        for slot in self.document.select(TIME_SLOT_SELECTOR):
            try:
                hour = int(get_attr(slot, 'data-hour').strip())
            except ValueError:
                self.logger.debug(f"Skipping slot with bad hour: {get_attr(slot, 'data-hour')!r}")
                continue
            if not 0 <= hour < 24:
                continue

            start = hour * 60
            default_span = TimeSpan(start, min(start + Config.DEFAULT_SLOT_MINUTES, Config.MINUTES_IN_DAY))
            for node in self.document.select(SLOT_EVENT_SELECTOR, root=slot):
                event = self.parse_candidate(node, default_span=default_span)
                if event is not None:
                    events.append(event)
        return events

    def _build_event(self, element: Tag, default_span: Optional[TimeSpan]) -> Optional[CalendarEvent]:
        context = self.collect_context(element)

        title = self.resolve_title(element, context)
        if not title:
            self.logger.debug(f"Skipping event with generic/invalid title near {context.label!r}")
            return None

        span = self.time_parser.parse(context.time_text, element)
        if not span.is_complete:
            if default_span is None:
                self.logger.debug(f"Could not parse time for event: {title}")
                return None
            span = default_span

        start, end = span.start_minutes, span.end_minutes
        if not 0 <= start < Config.MINUTES_IN_DAY or not start < end <= Config.MINUTES_IN_DAY:
            self.logger.debug(f"Invalid time range for {title}: {start}-{end}")
            return None

        event_date = self.date_resolver.resolve(element, context.time_text)
        color = self.color_resolver.resolve(element)

        event = CalendarEvent(
            title=title,
            start_minutes=start,
            end_minutes=end,
            date=event_date,
            color=color
        )
        self.logger.debug(f"Event parsed: {event}")
        return event

    def _climb(self, element: Tag) -> Iterator[Tag]:
        """The node and its ancestors, bounded by max_depth and the page body."""
        for node in iter_ancestors(element, self.max_depth):
            if node.name in PAGE_ROOT_TAGS:
                return
            yield node

    # ---------------------------------------------------------------
    # Context collection
    # ---------------------------------------------------------------

    def collect_context(self, element: Tag) -> CandidateContext:
        """Find the first time-bearing text and the first aria-label up the tree."""
        time_text = ''
        aria_label = ''

        for node in self._climb(element):
            if not time_text:
                time_element = None
                for selector in TIME_ELEMENT_SELECTORS:
                    time_element = node.select_one(selector)
                    if time_element is not None:
                        break
                candidate = (text_of(time_element) or
                             get_attr(node, 'aria-label') or
                             get_attr(node, 'title') or
                             text_of(node))
                if candidate and TIME_TOKEN.search(candidate):
                    time_text = candidate.strip()

            if not aria_label:
                aria_label = get_attr(node, 'aria-label').strip()

            if time_text and aria_label:
                break

        return CandidateContext(time_text, aria_label)

    # ---------------------------------------------------------------
    # Title resolution
    # ---------------------------------------------------------------

    def resolve_title(self, element: Tag, context: CandidateContext) -> Optional[str]:
        """
        Resolve the event title through the ordered title rules, falling
        back to a deep search when only a placeholder was found.
        """
        title = None
        for rule in self.title_rules:
            title = rule(element, context)
            if title:
                break

        if title and self.titles.is_generic_title(title):
            self.logger.debug(f"Found generic title, searching for the real one: {title}")
            title = self.deep_title_search(element)

        if not title:
            return None
        title = title.strip()
        if len(title) <= 1 or self.titles.is_generic_title(title):
            return None
        return title

    def _title_from_label(self, element: Tag, context: CandidateContext) -> Optional[str]:
        return self.titles.extract_title(context.label)

    def _title_from_title_markup(self, element: Tag, context: CandidateContext) -> Optional[str]:
        for node in self._climb(element):
            data_title = get_attr(node, 'data-event-title').strip()
            if data_title:
                return data_title

            for selector in TITLE_ELEMENT_SELECTORS:
                title_element = node.select_one(selector)
                if title_element is None:
                    continue
                title = text_of(title_element) or get_attr(title_element, 'title').strip()
                if title:
                    return title
        return None

    def _title_from_text_content(self, element: Tag, context: CandidateContext) -> Optional[str]:
        for node in self._climb(element):
            title = self.titles.leading_text_title(text_of(node))
            if title:
                return title
        return None

    def deep_title_search(self, element: Tag) -> Optional[str]:
        """
        Look through descendant and ancestor text for a real title.

        Climbs at most max_depth levels. At each level every descendant
        element text and text node is tried (skipping bare person names),
        then the parent's aria-label or title attribute.
        """
        for node in self._climb(element):
            texts = [text_of(child) for child in node.find_all(True)]
            texts.extend(node.stripped_strings)

            for text in texts:
                # Bare names here are attendees, not titles
                if not text or self.titles.is_person_name(text):
                    continue
                extracted = self.titles.extract_title(text)
                if extracted and not self.titles.is_generic_title(extracted):
                    self.logger.debug(f"Extracted title from text node: {extracted}")
                    return extracted
                if self.titles.is_plausible_raw_text(text):
                    self.logger.debug(f"Found valid title in text node: {text.strip()}")
                    return text.strip()

            parent = node.parent
            if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
                label = get_attr(parent, 'aria-label') or get_attr(parent, 'title')
                extracted = self.titles.extract_title(label)
                if extracted and not self.titles.is_generic_title(extracted):
                    self.logger.debug(f"Extracted title from parent: {extracted}")
                    return extracted

        return None
