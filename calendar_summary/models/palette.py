# File: calendar_summary/models/palette.py
"""
Host calendar color palette.
Read-only lookup tables shared by the color resolver and the aggregator.
"""

from types import MappingProxyType
from typing import Mapping, Optional

# Color IDs as used by the calendar markup (data-color-id, color-<id> classes)
COLOR_MAP: Mapping[str, str] = MappingProxyType({
    '1': '#a4bdfc',   # Lavender
    '2': '#7ae7bf',   # Sage
    '3': '#dbadff',   # Grape
    '4': '#ff887c',   # Flamingo
    '5': '#fbd75b',   # Banana
    '6': '#ffb878',   # Tangerine
    '7': '#46d6db',   # Peacock
    '8': '#e1e1e1',   # Graphite
    '9': '#5484ed',   # Blueberry
    '10': '#51b749',  # Basil
    '11': '#dc2127',  # Tomato
    '12': '#ff9800',  # Orange
    '13': '#9c27b0',  # Purple
    '14': '#00bcd4',  # Cyan
    '15': '#4caf50',  # Green
    '16': '#f44336',  # Red
    '17': '#2196f3',  # Blue
    '18': '#ffc107',  # Amber
    '19': '#795548',  # Brown
    '20': '#607d8b',  # Blue Grey
    '21': '#00ff00',  # Lime
})

COLOR_NAMES: Mapping[str, str] = MappingProxyType({
    '#a4bdfc': 'Lavender',
    '#7ae7bf': 'Sage',
    '#dbadff': 'Grape',
    '#ff887c': 'Flamingo',
    '#fbd75b': 'Banana',
    '#ffb878': 'Tangerine',
    '#46d6db': 'Peacock',
    '#e1e1e1': 'Graphite',
    '#5484ed': 'Blueberry',
    '#51b749': 'Basil',
    '#dc2127': 'Tomato',
    '#ff9800': 'Orange',
    '#9c27b0': 'Purple',
    '#00bcd4': 'Cyan',
    '#4caf50': 'Green',
    '#f44336': 'Red',
    '#2196f3': 'Blue',
    '#ffc107': 'Amber',
    '#795548': 'Brown',
    '#607d8b': 'Blue Grey',
})

DEFAULT_COLOR = '#e1e1e1'
DEFAULT_COLOR_NAME = 'Graphite'


def color_from_id(color_id: Optional[str]) -> Optional[str]:
    """Map a palette ID ("9", " 9 ") to its hex color, or None if unknown."""
    if color_id is None:
        return None
    return COLOR_MAP.get(str(color_id).strip())


def color_display_name(color: Optional[str]) -> str:
    """Human-readable name for a canonical color."""
    if not color:
        return DEFAULT_COLOR_NAME
    normalized = color.strip().lower()
    if not normalized.startswith('#'):
        normalized = f"#{normalized}"
    return COLOR_NAMES.get(normalized, f"Color {normalized.upper()}")
