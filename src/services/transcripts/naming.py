"""
Scribe - Name Resolver
======================

Derives the ticket channel name, the transcript file name and the public
transcript URL.

DESIGN:
    Tokens live in a small declarative table (pattern -> resolver) so new
    tokens can be added without touching the substitution loop. Patterns are
    case-insensitive and tolerate surrounding whitespace and repeated braces,
    e.g. "{{ Username }}" and "{username}" are the same token. Anything the
    table does not recognize is left in the name as written.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

from .models import ArchivedUser


@dataclass(frozen=True)
class NamingContext:
    """Values a channel name pattern can refer to."""
    username: str
    display_name: str
    number: int

    @classmethod
    def for_creator(cls, creator: Optional[ArchivedUser], number: int) -> "NamingContext":
        """Build from the decrypted ticket creator; a missing creator yields empty names."""
        if creator is None:
            return cls(username="", display_name="", number=number)
        return cls(
            username=creator.username,
            display_name=creator.display_name or creator.username,
            number=number,
        )


@dataclass(frozen=True)
class NameToken:
    """One entry of the token table."""
    name: str
    pattern: Pattern[str]
    resolve: Callable[[NamingContext], str]


NAME_TOKENS: Tuple[NameToken, ...] = (
    NameToken(
        name="username",
        pattern=re.compile(r"\{+\s*(?:user)?name\s*\}+", re.IGNORECASE),
        resolve=lambda ctx: ctx.username,
    ),
    NameToken(
        name="displayname",
        pattern=re.compile(r"\{+\s*(?:nick|display)(?:name)?\s*\}+", re.IGNORECASE),
        resolve=lambda ctx: ctx.display_name,
    ),
    NameToken(
        name="number",
        pattern=re.compile(r"\{+\s*num(?:ber)?\s*\}+", re.IGNORECASE),
        resolve=lambda ctx: str(ctx.number),
    ),
)


def resolve_channel_name(
    pattern: str,
    context: NamingContext,
    tokens: Tuple[NameToken, ...] = NAME_TOKENS,
) -> str:
    """Substitute every recognized token in a channel name pattern."""
    name = pattern
    for token in tokens:
        value = token.resolve(context)
        # callable replacement so backslashes in names are taken literally
        name = token.pattern.sub(lambda _match, value=value: value, name)
    return name


def file_extension(template_id: str) -> str:
    """Output extension: the trailing dot-segment of the template identifier."""
    return template_id.rsplit(".", 1)[-1]


def build_file_name(channel_name: str, template_id: str) -> str:
    """File name a transcript is delivered under."""
    return f"{channel_name}.{file_extension(template_id)}"


def transcript_url(base_url: str, ticket_id: str, extension: str) -> str:
    """Public link of a transcript: {base}/tickets/transcript-{id}.{ext}."""
    return f"{base_url.rstrip('/')}/tickets/transcript-{ticket_id}.{extension}"


__all__ = [
    "NamingContext",
    "NameToken",
    "NAME_TOKENS",
    "resolve_channel_name",
    "file_extension",
    "build_file_name",
    "transcript_url",
]
