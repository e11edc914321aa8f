# File: calendar_summary/processors/color_resolver.py
"""
Color resolution module.
Finds the color tag of an event from palette IDs, raw color attributes,
color classes, computed style or inline style declarations.
"""

import re
from typing import Callable, Iterable, List, Optional

from bs4 import Tag

from calendar_summary.core.config_manager import Config
from calendar_summary.models.palette import color_from_id
from calendar_summary.services.document import (
    CalendarDocument,
    get_attr,
    iter_ancestors,
)
from calendar_summary.utils.logger import LoggerMixin

HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
RGB_COLOR = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)", re.IGNORECASE)
COLOR_TOKEN = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]*\)", re.IGNORECASE)
COLOR_CLASS = re.compile(r"^(?:event-)?color-(\w+)$")
INLINE_BACKGROUND = re.compile(r"background(?:-color)?\s*:\s*([^;]+)", re.IGNORECASE)
INLINE_BORDER = re.compile(r"border(?:-left)?(?:-color)?\s*:\s*([^;]+)", re.IGNORECASE)

# Default chrome colors carry no information about the event
NO_SIGNAL_COLORS = frozenset({'#ffffff', '#000000'})

ColorRule = Callable[[Iterable[Tag]], Optional[str]]


def to_hex(color: Optional[str]) -> Optional[str]:
    """
    Convert a CSS color value to canonical lowercase #rrggbb.

    Accepts #rgb, #rrggbb, #rrggbbaa, rgb() and rgba(). Fully transparent
    values and anything unrecognized return None.
    """
    if not color:
        return None
    value = color.strip()

    hex_match = HEX_COLOR.match(value)
    if hex_match:
        digits = hex_match.group(1).lower()
        if len(digits) == 3:
            digits = ''.join(ch * 2 for ch in digits)
        elif len(digits) == 8:
            if digits[6:] == '00':
                return None
            digits = digits[:6]
        return f"#{digits}"

    rgb_match = RGB_COLOR.search(value)
    if rgb_match:
        alpha = rgb_match.group(4)
        if alpha is not None and float(alpha) == 0:
            return None
        channels = [min(int(rgb_match.group(i)), 255) for i in (1, 2, 3)]
        return '#' + ''.join(f"{channel:02x}" for channel in channels)

    return None


def signal_color(value: Optional[str]) -> Optional[str]:
    """Canonical color, or None for transparent, white and black."""
    hex_color = to_hex(value)
    if hex_color is None or hex_color in NO_SIGNAL_COLORS:
        return None
    return hex_color


class ColorResolver(LoggerMixin):
    """Resolves the canonical color of an event node."""

    def __init__(self, document: CalendarDocument, ancestor_depth: Optional[int] = None):
        self.document = document
        self.ancestor_depth = Config.COLOR_ANCESTOR_DEPTH if ancestor_depth is None else ancestor_depth
        self.rules: List[ColorRule] = [
            self._from_color_id,
            self._from_raw_color,
            self._from_color_class,
            self._from_computed_style,
            self._from_inline_style,
        ]
        self.ancestor_rules: List[ColorRule] = [
            self._from_color_id,
            self._from_color_class,
        ]

    def resolve(self, element: Tag) -> Optional[str]:
        """
        Resolve the color of an event node.

        Each rule scans the node and all of its descendants before the next
        rule runs. When nothing matches, ancestors are checked for palette
        IDs and color classes only.
        """
        subtree = [element] + element.find_all(True)
        for rule in self.rules:
            color = rule(subtree)
            if color:
                self.logger.debug(f"{rule.__name__} found color {color}")
                return color

        ancestors = list(iter_ancestors(element, self.ancestor_depth, include_self=False))
        for rule in self.ancestor_rules:
            color = rule(ancestors)
            if color:
                self.logger.debug(f"{rule.__name__} found ancestor color {color}")
                return color

        return None

    def _from_color_id(self, nodes: Iterable[Tag]) -> Optional[str]:
        for node in nodes:
            color = color_from_id(node.get('data-color-id'))
            if color:
                return color
        return None

    def _from_raw_color(self, nodes: Iterable[Tag]) -> Optional[str]:
        for node in nodes:
            color = to_hex(get_attr(node, 'data-color'))
            if color:
                return color
        return None

    def _from_color_class(self, nodes: Iterable[Tag]) -> Optional[str]:
        for node in nodes:
            for css_class in get_attr(node, 'class').split():
                match = COLOR_CLASS.match(css_class)
                if not match:
                    continue
                color = color_from_id(match.group(1))
                if color:
                    return color
        return None

    def _from_computed_style(self, nodes: Iterable[Tag]) -> Optional[str]:
        for node in nodes:
            style = self.document.computed_style(node)
            border = signal_color(style.get('border-left-color') or style.get('border-color'))
            if border:
                return border
            background = signal_color(style.get('background-color'))
            if background:
                return background
        return None

    def _from_inline_style(self, nodes: Iterable[Tag]) -> Optional[str]:
        for node in nodes:
            inline = get_attr(node, 'style')
            if not inline:
                continue
            for pattern in (INLINE_BACKGROUND, INLINE_BORDER):
                match = pattern.search(inline)
                if not match:
                    continue
                token = COLOR_TOKEN.search(match.group(1))
                color = signal_color(token.group(0) if token else match.group(1))
                if color:
                    return color
        return None
