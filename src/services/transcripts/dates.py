"""
Scribe - Date Formatter
=======================

Locale-aware date/time strings for transcripts.

DESIGN:
    A pure function of (instant, locale, style). The renderer binds it to
    the ticket's instants lazily, so a template that never prints a date
    never formats one. Output is always in UTC; the guild locale only picks
    the language and layout, with a fixed fallback for unknown locales.
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_time, get_datetime_format, get_timezone

from src.core.constants import FALLBACK_LOCALE


UTC = get_timezone("Etc/UTC")

# style -> (date width, time width)
STYLES: Dict[str, Tuple[str, str]] = {
    "full": ("full", "long"),
    "short": ("short", "long"),
}


def resolve_locale(locale: Optional[str], fallback: str = FALLBACK_LOCALE) -> Locale:
    """
    Parse a Discord style locale ("en-GB", "pt-BR"), falling back when it is
    missing or unknown.
    """
    for candidate in (locale, fallback, FALLBACK_LOCALE):
        if not candidate:
            continue
        try:
            return Locale.parse(candidate.replace("-", "_"))
        except (UnknownLocaleError, ValueError):
            continue
    return Locale("en", "GB")


def format_instant(
    instant: Optional[datetime],
    locale: Optional[str],
    style: str,
    fallback_locale: str = FALLBACK_LOCALE,
) -> str:
    """
    Format an instant for a transcript.

    Args:
        instant: Moment to format; naive values are taken as UTC.
        locale: Guild locale, may be None.
        style: "full" (full date, long time) or "short" (short date, long time).
        fallback_locale: Locale used when `locale` is missing or unknown.

    Returns:
        The formatted string, or "" when there is no instant.
    """
    if instant is None:
        return ""
    try:
        date_width, time_width = STYLES[style]
    except KeyError:
        raise ValueError(f"Unknown date style: {style}") from None

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    instant = instant.astimezone(UTC)
    loc = resolve_locale(locale, fallback_locale)

    date_part = format_date(instant.date(), format=date_width, locale=loc)
    time_part = format_time(instant, format=time_width, tzinfo=UTC, locale=loc)
    pattern = get_datetime_format(date_width, locale=loc).replace("'", "")
    return pattern.replace("{0}", time_part).replace("{1}", date_part)


__all__ = [
    "UTC",
    "STYLES",
    "resolve_locale",
    "format_instant",
]
