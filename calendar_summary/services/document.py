# File: calendar_summary/services/document.py
"""
Read-only view of a rendered calendar page.

Wraps the parsed BeautifulSoup tree together with the page URL and two
pluggable providers that a static snapshot cannot answer by itself:
computed styles and element geometry.
"""

import re
from typing import Dict, Iterator, List, Mapping, NamedTuple, Optional
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup, Tag

from calendar_summary.utils.logger import setup_logger

logger = setup_logger(__name__)

COLOR_VALUE = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)|\btransparent\b", re.IGNORECASE)


class Box(NamedTuple):
    """Horizontal bounds of an element."""
    left: float
    right: float

    def contains(self, other: 'Box') -> bool:
        return self.left <= other.left and other.right <= self.right


def get_attr(tag: Tag, name: str) -> str:
    """Attribute value as a string ('' when absent); multi-valued attributes are joined."""
    value = tag.get(name)
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    return str(value)


def text_of(tag: Optional[Tag]) -> str:
    """Trimmed text content of a node."""
    if tag is None:
        return ''
    return tag.get_text().strip()


def iter_ancestors(tag: Tag, max_depth: int, include_self: bool = True) -> Iterator[Tag]:
    """Yield the node (optionally) and its element ancestors, at most max_depth nodes."""
    current = tag if include_self else tag.parent
    depth = 0
    while isinstance(current, Tag) and not isinstance(current, BeautifulSoup) and depth < max_depth:
        yield current
        current = current.parent
        depth += 1


def parse_style_declarations(style: str) -> Dict[str, str]:
    """Split an inline style attribute into {property: value}."""
    declarations: Dict[str, str] = {}
    for chunk in (style or '').split(';'):
        if ':' not in chunk:
            continue
        prop, value = chunk.split(':', 1)
        prop = prop.strip().lower()
        value = value.strip()
        if prop and value:
            declarations[prop] = value
    return declarations


class InlineStyleProvider:
    """
    Computed style built from the element's own style attribute.

    Shorthand declarations (background, border, border-left) contribute
    their color component to the matching longhand properties.
    """

    SHORTHANDS = {
        'background': 'background-color',
        'border-left': 'border-left-color',
        'border': 'border-color',
    }

    def computed_style(self, tag: Tag) -> Dict[str, str]:
        declarations = parse_style_declarations(get_attr(tag, 'style'))
        computed = dict(declarations)
        for shorthand, longhand in self.SHORTHANDS.items():
            if shorthand in declarations and longhand not in computed:
                match = COLOR_VALUE.search(declarations[shorthand])
                if match:
                    computed[longhand] = match.group(0)
        return computed


class GridLayout:
    """
    Geometry inferred from grid structure.

    Column headers and grid cells are laid out as unit-width columns by
    aria-colindex when present, otherwise by their position among siblings
    of the same role. Other nodes take the box of their nearest cell.
    """

    ROLES = ('gridcell', 'columnheader')

    def __init__(self, max_depth: int = 50):
        self.max_depth = max_depth

    def bounding_box(self, tag: Tag) -> Optional[Box]:
        cell = next(
            (node for node in iter_ancestors(tag, self.max_depth) if get_attr(node, 'role') in self.ROLES),
            None,
        )
        if cell is None:
            return None

        colindex = get_attr(cell, 'aria-colindex')
        if colindex.isdigit():
            index = int(colindex) - 1
        else:
            role = get_attr(cell, 'role')
            siblings = [
                node for node in cell.parent.find_all(True, recursive=False)
                if get_attr(node, 'role') == role
            ] if cell.parent is not None else [cell]
            index = next((i for i, node in enumerate(siblings) if node is cell), 0)

        return Box(float(index), float(index + 1))


class BoxLayout:
    """Geometry captured elsewhere (e.g. by a headless browser), keyed by element id."""

    def __init__(self, boxes: Mapping[str, Box], max_depth: int = 50):
        self.boxes = dict(boxes)
        self.max_depth = max_depth

    def bounding_box(self, tag: Tag) -> Optional[Box]:
        for node in iter_ancestors(tag, self.max_depth):
            element_id = get_attr(node, 'id') or get_attr(node, 'data-eventid')
            if element_id and element_id in self.boxes:
                return self.boxes[element_id]
        return None


class CalendarDocument:
    """The parsed page plus the context the heuristics need."""

    def __init__(
        self,
        soup: BeautifulSoup,
        url: Optional[str] = None,
        style_provider=None,
        layout=None
    ):
        """
        Initialize the document view.

        Args:
            soup: Parsed page tree (never modified)
            url: Location the page was rendered at, if known
            style_provider: Object exposing computed_style(tag) -> dict
            layout: Object exposing bounding_box(tag) -> Optional[Box]
        """
        self.soup = soup
        self.url = url
        self.style_provider = style_provider or InlineStyleProvider()
        self.layout = layout or GridLayout()

    @classmethod
    def from_html(cls, html: str, url: Optional[str] = None, **kwargs) -> 'CalendarDocument':
        """Parse an HTML string into a document."""
        return cls(BeautifulSoup(html, "html.parser"), url=url, **kwargs)

    def select(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        """CSS selection over the whole page or a subtree."""
        return (root or self.soup).select(selector)

    def computed_style(self, tag: Tag) -> Dict[str, str]:
        return self.style_provider.computed_style(tag)

    def bounding_box(self, tag: Tag) -> Optional[Box]:
        return self.layout.bounding_box(tag)

    def query_param(self, name: str) -> Optional[str]:
        """First value of a query parameter in the page URL."""
        if not self.url:
            return None
        values = parse_qs(urlparse(self.url).query).get(name)
        return values[0] if values else None
