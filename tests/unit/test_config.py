# File: tests/unit/test_config.py
"""
Unit tests for configuration, lookup tables and logging setup.
"""

import logging
import pytest
from calendar_summary.core.config_manager import Config
from calendar_summary.models.locale import ENGLISH, LOCALE_RULES, RUSSIAN, get_locales
from calendar_summary.models.palette import (
    COLOR_MAP,
    DEFAULT_COLOR,
    color_display_name,
    color_from_id,
)
from calendar_summary.utils.logger import LoggerMixin, setup_logger


# ==================== Config Tests ====================

class TestConfig:
    """Tests for Config class."""

    def test_defaults_are_usable(self):
        assert Config.MAX_ANCESTOR_DEPTH > 0
        assert Config.COLOR_ANCESTOR_DEPTH >= 0
        assert Config.DEFAULT_SLOT_MINUTES == 60
        assert Config.MINUTES_IN_DAY == 1440

    def test_validate_accepts_defaults(self, monkeypatch):
        monkeypatch.setattr(Config, "TIMEZONE", "Europe/Moscow")
        monkeypatch.setattr(Config, "LOCALES", ["ru", "en"])
        monkeypatch.setattr(Config, "MAX_ANCESTOR_DEPTH", 20)
        monkeypatch.setattr(Config, "COLOR_ANCESTOR_DEPTH", 5)
        monkeypatch.setattr(Config, "REQUEST_TIMEOUT", 30)

        assert Config.validate() is True

    def test_validate_rejects_unknown_timezone(self, monkeypatch, capsys):
        monkeypatch.setattr(Config, "TIMEZONE", "Mars/Olympus_Mons")

        assert Config.validate() is False
        assert "Unknown TIMEZONE" in capsys.readouterr().out

    def test_validate_rejects_bad_depth(self, monkeypatch):
        monkeypatch.setattr(Config, "TIMEZONE", "UTC")
        monkeypatch.setattr(Config, "MAX_ANCESTOR_DEPTH", 0)

        assert Config.validate() is False

    def test_date_patterns_cover_compact_dates(self):
        formats = [fmt for fmt, _ in Config.DATE_PATTERNS]
        assert "%Y-%m-%d" in formats
        assert "%Y%m%d" in formats


# ==================== Palette Tests ====================

class TestPalette:
    """Tests for palette lookups."""

    def test_known_color_id(self):
        assert color_from_id("9") == "#5484ed"
        assert color_from_id(" 9 ") == "#5484ed"

    def test_unknown_color_id(self):
        assert color_from_id("99") is None
        assert color_from_id(None) is None

    def test_display_names(self):
        assert color_display_name("#5484ed") == "Blueberry"
        assert color_display_name("#5484ED") == "Blueberry"
        assert color_display_name("5484ed") == "Blueberry"
        assert color_display_name(DEFAULT_COLOR) == "Graphite"
        assert color_display_name(None) == "Graphite"

    def test_unnamed_color(self):
        assert color_display_name("#123456") == "Color #123456"

    def test_palette_is_read_only(self):
        with pytest.raises(TypeError):
            COLOR_MAP['1'] = '#000000'


# ==================== Locale Tests ====================

class TestLocales:
    """Tests for locale rule tables."""

    def test_month_lookup(self):
        assert RUSSIAN.month_lookup['ноября'] == 11
        assert ENGLISH.month_lookup['november'] == 11
        assert ENGLISH.month_lookup['sept'] == 9

    def test_get_locales_selects_codes(self):
        assert get_locales(["en"]) == (ENGLISH,)
        assert get_locales(["en", "ru"]) == (ENGLISH, RUSSIAN)

    def test_get_locales_ignores_unknown_codes(self):
        assert get_locales(["de", "ru"]) == (RUSSIAN,)
        assert get_locales(["de"]) == tuple(LOCALE_RULES.values())

    def test_get_locales_defaults_to_config(self, monkeypatch):
        monkeypatch.setattr(Config, "LOCALES", ["en"])
        assert get_locales() == (ENGLISH,)

    def test_locale_table_is_read_only(self):
        with pytest.raises(TypeError):
            LOCALE_RULES['de'] = ENGLISH


# ==================== Logger Tests ====================

class TestLogger:
    """Tests for logging setup."""

    def test_setup_logger_adds_handler_once(self):
        logger = setup_logger("calendar_summary.tests.once")
        again = setup_logger("calendar_summary.tests.once")

        assert logger is again
        assert len(logger.handlers) >= 1
        handler_count = len(logger.handlers)
        setup_logger("calendar_summary.tests.once")
        assert len(logger.handlers) == handler_count

    def test_explicit_level(self):
        logger = setup_logger("calendar_summary.tests.level", level=logging.WARNING)
        assert logger.level <= logging.WARNING

    def test_logger_mixin(self):
        class Widget(LoggerMixin):
            pass

        widget = Widget()
        assert widget.logger.name == "calendar_summary.Widget"
        assert widget.logger is widget.logger
