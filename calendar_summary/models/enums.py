# File: calendar_summary/models/enums.py

from enum import Enum


class GroupingMode(Enum):
    """Aggregation key selector for activity summaries."""
    BY_NAME = "byName"
    BY_COLOR = "byColor"

    @classmethod
    def from_value(cls, value) -> "GroupingMode":
        """Accept enum members, wire values ("byColor") or CLI names ("color")."""
        if isinstance(value, cls):
            return value
        aliases = {
            "byname": cls.BY_NAME,
            "by_name": cls.BY_NAME,
            "name": cls.BY_NAME,
            "bycolor": cls.BY_COLOR,
            "by_color": cls.BY_COLOR,
            "color": cls.BY_COLOR,
        }
        # Unknown values fall back to grouping by name
        return aliases.get(str(value or "").strip().lower(), cls.BY_NAME)
