"""
Scribe - Transcript Cog
=======================

TranscriptCog class with the /transcript command.
"""

import io
from typing import TYPE_CHECKING, Any, Dict, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.services.transcripts import TranscriptService, get_transcript_service
from src.utils.error_handler import ErrorHandler

from .autocomplete import ticket_autocomplete
from .views import TranscriptLinkView, build_transcript_embed

if TYPE_CHECKING:
    from src.bot import ScribeBot


class TranscriptCog(commands.Cog):
    """Transcript command implementation."""

    def __init__(self, bot: "ScribeBot", service: Optional[TranscriptService] = None) -> None:
        self.bot = bot
        self.service = service or get_transcript_service()

    # =========================================================================
    # /transcript Command
    # =========================================================================

    @app_commands.command(name="transcript", description="Get the transcript of a closed ticket")
    @app_commands.describe(
        ticket="The ticket to get the transcript of",
        member="Whose tickets to search (defaults to you)",
    )
    @app_commands.autocomplete(ticket=ticket_autocomplete)
    @app_commands.guild_only()
    async def transcript(
        self,
        interaction: discord.Interaction,
        ticket: str,
        member: Optional[discord.Member] = None,
    ) -> None:
        """Generate a ticket transcript and reply with it privately."""
        await self.send_transcript(interaction, ticket)

    async def send_transcript(self, interaction: discord.Interaction, ticket_id: str) -> None:
        """Generate the transcript and send it as an ephemeral follow-up."""
        await interaction.response.defer(ephemeral=True)

        try:
            transcript = await self.service.generate_transcript(ticket_id)
        except Exception as e:
            ErrorHandler.handle(
                e,
                location="TranscriptCog.transcript",
                ticket_id=ticket_id,
                user=f"{interaction.user.name} ({interaction.user.id})",
            )
            await interaction.followup.send(ErrorHandler.user_message(e), ephemeral=True)
            return

        url = self.service.transcript_url(ticket_id)
        kwargs: Dict[str, Any] = {
            "embed": build_transcript_embed(transcript, url),
            "file": discord.File(io.BytesIO(transcript.to_bytes()), filename=transcript.file_name),
            "ephemeral": True,
        }
        if url:
            kwargs["view"] = TranscriptLinkView(url)

        await interaction.followup.send(**kwargs)

        logger.tree("Transcript Sent", [
            ("Ticket ID", ticket_id),
            ("File", transcript.file_name),
            ("User", f"{interaction.user.name} ({interaction.user.id})"),
            ("Guild", interaction.guild.name if interaction.guild else "Unknown"),
        ], emoji="📨")


__all__ = ["TranscriptCog"]
