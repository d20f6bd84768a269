"""
Scribe - Transcript Views
=========================

Reply embed and link button for /transcript.
"""

from typing import Optional

import discord

from src.core.constants import COLOR_GOLD
from src.services.transcripts.models import TranscriptFile


# =============================================================================
# Embed
# =============================================================================

def parse_colour(value: Optional[str], default: int = COLOR_GOLD) -> int:
    """Guild colour like "#009999" or "009999" as an int, else the default."""
    if not value:
        return default
    try:
        return int(value.lstrip("#"), 16)
    except ValueError:
        return default


def build_transcript_embed(transcript: TranscriptFile, url: Optional[str]) -> discord.Embed:
    """Embed naming the ticket owner and linking the transcript."""
    embed = discord.Embed(color=parse_colour(transcript.colour))
    embed.add_field(
        name="Ticket Owner",
        value=f"<@{transcript.owner_id}>" if transcript.owner_id else "Unknown",
        inline=True,
    )
    if url:
        embed.add_field(
            name="Transcript URL",
            value=f"[Link to Transcript]({url})",
            inline=True,
        )
    return embed


# =============================================================================
# Link Button View
# =============================================================================

class TranscriptLinkView(discord.ui.View):
    """View with a single link button to the hosted transcript."""

    def __init__(self, url: str):
        super().__init__(timeout=None)

        self.add_item(discord.ui.Button(
            label="Link to Ticket Transcript",
            url=url,
            style=discord.ButtonStyle.link,
        ))


__all__ = ["parse_colour", "build_transcript_embed", "TranscriptLinkView"]
