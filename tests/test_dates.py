"""
Scribe - Date Formatter Tests
=============================

Tests for locale-aware transcript dates.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.services.transcripts.dates import format_instant, resolve_locale


INSTANT = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestFormatInstant:
    """Tests for format_instant."""

    def test_full_style_en_gb(self):
        """Test full style has the long date and the time."""
        result = format_instant(INSTANT, "en-GB", "full")
        assert "Friday, 1 March 2024" in result
        assert "12:00:00" in result

    def test_short_style_en_gb(self):
        """Test short style has the numeric date and the time."""
        result = format_instant(INSTANT, "en-GB", "short")
        assert "01/03/2024" in result
        assert "12:00:00" in result

    def test_other_locale(self):
        """Test the guild locale picks the language."""
        result = format_instant(INSTANT, "de", "full")
        assert "März" in result
        assert "Freitag" in result

    def test_unknown_locale_falls_back(self):
        """Test an unknown locale formats like the fallback."""
        assert format_instant(INSTANT, "xx-ZZ", "full") == format_instant(INSTANT, "en-GB", "full")
        assert format_instant(INSTANT, None, "short") == format_instant(INSTANT, "en-GB", "short")

    def test_always_utc(self):
        """Test instants in other zones are shown in UTC."""
        plus_two = INSTANT.astimezone(timezone(timedelta(hours=2)))
        assert format_instant(plus_two, "en-GB", "full") == format_instant(INSTANT, "en-GB", "full")

    def test_naive_is_utc(self):
        naive = INSTANT.replace(tzinfo=None)
        assert format_instant(naive, "en-GB", "short") == format_instant(INSTANT, "en-GB", "short")

    def test_missing_instant(self):
        """Test a missing instant renders empty."""
        assert format_instant(None, "en-GB", "full") == ""

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            format_instant(INSTANT, "en-GB", "medium")

    def test_no_literal_quotes(self):
        """Test quoted literals in locale patterns are unquoted."""
        assert "'" not in format_instant(INSTANT, "en-GB", "full")


class TestResolveLocale:
    """Tests for locale parsing."""

    def test_discord_style_tag(self):
        locale = resolve_locale("pt-BR")
        assert (locale.language, locale.territory) == ("pt", "BR")

    def test_fallback(self):
        locale = resolve_locale("not a locale", "de")
        assert locale.language == "de"
