"""
Scribe - Template Renderer
==========================

Binds a resolved ticket to a Mustache template.

DESIGN:
    The renderer is configured with an identity escape: transcripts are
    plain text/markup documents and the archived text is written out as
    it was sent. This is a renderer setting, not a patch to pystache's
    module state, so other renderers in the process keep HTML escaping.

    Template text is read once per process and parsed once per renderer;
    both are shared read-only between concurrent renders.

    Dates are exposed as zero-argument callables that pystache evaluates
    only when a template prints them. They are bound on the ticket and on
    every message, so inside the message loop `{{created_at_timestamp}}`
    prints the message's own time.
"""

from functools import lru_cache, partial
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import pystache

from src.core.constants import FALLBACK_LOCALE, TEMPLATE_SUFFIX
from .dates import format_instant
from .models import ArchivedUser, Ticket, TranscriptMessage


# =============================================================================
# Template Loading
# =============================================================================

def template_path(templates_dir: Path, template_id: str) -> Path:
    """File holding the template for an identifier like "transcript.md"."""
    return Path(templates_dir) / f"{template_id}{TEMPLATE_SUFFIX}"


@lru_cache(maxsize=None)
def load_template(path: Path) -> str:
    """Read template source; cached for the life of the process."""
    return Path(path).read_text(encoding="utf-8")


def _no_escape(text: str) -> str:
    return text


# =============================================================================
# Context Building
# =============================================================================

def _iso(value) -> str:
    return value.isoformat() if value is not None else ""


def _user_context(user: Optional[ArchivedUser]) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {
        "user_id": user.user_id,
        "username": user.username,
        "display_name": user.display_name or "",
        "avatar": user.avatar or "",
        "bot": user.bot,
        "role_id": user.role_id or "",
    }


def _date_callables(instant, locale: Optional[str], fallback: str, prefix: str) -> Dict[str, Any]:
    return {
        f"{prefix}_full": partial(format_instant, instant, locale, "full", fallback),
        f"{prefix}_timestamp": partial(format_instant, instant, locale, "short", fallback),
    }


def _message_context(message: TranscriptMessage, locale: Optional[str], fallback: str) -> Dict[str, Any]:
    context = {
        "id": message.id,
        "number": message.number,
        "text": message.text,
        "author": _user_context(message.author),
        "created_at": _iso(message.created_at),
        "edited": message.edited,
        "attachments": list(message.content.attachments),
        "embeds_count": len(message.content.embeds),
    }
    context.update(_date_callables(message.created_at, locale, fallback, "created_at"))
    return context


def build_context(
    ticket: Ticket,
    thread: Sequence[TranscriptMessage],
    channel_name: str,
    pinned: str,
    guild_name: Optional[str],
    fallback_locale: str = FALLBACK_LOCALE,
) -> Dict[str, Any]:
    """
    Rendering context for a decrypted ticket and its reconstructed thread.

    Top-level keys: channel_name, pinned, guild_name, ticket and the lazy
    date callables created_at_full, closed_at_full, created_at_timestamp.
    """
    locale = ticket.guild.locale
    feedback = ticket.feedback

    ticket_context: Dict[str, Any] = {
        "id": ticket.id,
        "number": ticket.number,
        "topic": ticket.topic or "",
        "closed_reason": ticket.closed_reason or "",
        "created_at": _iso(ticket.created_at),
        "closed_at": _iso(ticket.closed_at),
        "guild": {
            "id": ticket.guild.id,
            "name": ticket.guild.name or "",
            "locale": locale or "",
        },
        "category": {
            "id": ticket.category.id,
            "name": ticket.category.name,
            "channel_name": ticket.category.channel_name,
        },
        "created_by": _user_context(ticket.created_by),
        "claimed_by": _user_context(ticket.claimed_by),
        "closed_by": _user_context(ticket.closed_by),
        "feedback": {
            "rating": feedback.rating,
            "comment": feedback.comment or "",
        } if feedback else None,
        "question_answers": [
            {"question": qa.question, "value": qa.value or ""}
            for qa in ticket.question_answers
        ],
        "archived_users": [_user_context(u) for u in ticket.archived_users],
        "archived_channels": [
            {"channel_id": c.channel_id, "name": c.name} for c in ticket.archived_channels
        ],
        "archived_roles": [
            {"role_id": r.role_id, "name": r.name, "colour": r.colour} for r in ticket.archived_roles
        ],
        "messages": [_message_context(m, locale, fallback_locale) for m in thread],
        "has_question_answers": bool(ticket.question_answers),
        "message_count": len(thread),
    }
    ticket_dates: Dict[str, Any] = {}
    ticket_dates.update(_date_callables(ticket.created_at, locale, fallback_locale, "created_at"))
    ticket_dates["closed_at_full"] = partial(format_instant, ticket.closed_at, locale, "full", fallback_locale)
    ticket_context.update(ticket_dates)

    context: Dict[str, Any] = {
        "channel_name": channel_name,
        "pinned": pinned,
        "guild_name": guild_name or "",
        "ticket": ticket_context,
    }
    context.update(ticket_dates)
    return context


# =============================================================================
# Renderer
# =============================================================================

class TemplateRenderer:
    """
    Renders transcripts from one parsed template.

    Args:
        source: Mustache template text.
        fallback_locale: Locale for dates when the guild has none.
    """

    def __init__(self, source: str, fallback_locale: str = FALLBACK_LOCALE) -> None:
        self._template = pystache.parse(source)
        self._renderer = pystache.Renderer(escape=_no_escape, missing_tags="ignore")
        self.fallback_locale = fallback_locale

    @classmethod
    def from_file(
        cls,
        templates_dir: Path,
        template_id: str,
        fallback_locale: str = FALLBACK_LOCALE,
    ) -> "TemplateRenderer":
        """Build a renderer for a configured template identifier."""
        return cls(load_template(template_path(templates_dir, template_id)), fallback_locale)

    def render_context(self, context: Dict[str, Any]) -> str:
        return self._renderer.render(self._template, context)

    def render(
        self,
        ticket: Ticket,
        thread: Sequence[TranscriptMessage],
        channel_name: str,
        pinned: str,
        guild_name: Optional[str] = None,
    ) -> str:
        """Render a decrypted ticket and its thread into the final document."""
        context = build_context(
            ticket,
            thread,
            channel_name=channel_name,
            pinned=pinned,
            guild_name=guild_name,
            fallback_locale=self.fallback_locale,
        )
        return self.render_context(context)


__all__ = [
    "template_path",
    "load_template",
    "build_context",
    "TemplateRenderer",
]
