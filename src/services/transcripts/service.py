"""
Scribe - Transcript Service
===========================

Orchestrates transcript generation for one archived ticket.

DESIGN:
    generate_transcript() is a straight pipeline over one immutable
    snapshot:

        load -> decrypt -> reconstruct thread -> resolve pinned
             -> resolve names -> render

    Loading and the CPU-bound decryption run off the event loop so the bot
    keeps serving other interactions. Any failure ends the invocation;
    nothing is retried or partially returned.
"""

import asyncio
from typing import Callable, Optional, Protocol

from src.core.config import get_config
from src.core.logger import logger
from .crypto import FieldDecryptor, decrypt_ticket
from .errors import NotFoundError
from .messages import reconstruct_messages
from .models import Ticket, TranscriptFile
from .naming import (
    NamingContext,
    build_file_name,
    file_extension,
    resolve_channel_name,
    transcript_url,
)
from .pinned import join_pinned, resolve_pinned
from .renderer import TemplateRenderer


GuildNameResolver = Callable[[str], Optional[str]]


class TicketLoader(Protocol):
    """Anything that can load a fully assembled ticket aggregate."""

    def load_ticket(self, ticket_id: str) -> Optional[Ticket]:
        ...


class TranscriptService:
    """
    Generates transcripts from the ticket archive.

    Args:
        loader: Source of ticket aggregates (the sqlite archive in production).
        decryptor: Field decryptor keyed with the deployment secret.
        renderer: Renderer holding the parsed template.
        template_id: Configured template identifier, e.g. "transcript.md".
        tickets_url: Public base URL transcripts are linked from.
        guild_name_resolver: Live guild name lookup (the bot's guild cache).
    """

    def __init__(
        self,
        loader: TicketLoader,
        decryptor: FieldDecryptor,
        renderer: TemplateRenderer,
        template_id: str,
        tickets_url: Optional[str] = None,
        guild_name_resolver: Optional[GuildNameResolver] = None,
    ) -> None:
        self.loader = loader
        self.decryptor = decryptor
        self.renderer = renderer
        self.template_id = template_id
        self.tickets_url = tickets_url
        self.guild_name_resolver = guild_name_resolver

    @property
    def extension(self) -> str:
        return file_extension(self.template_id)

    # =========================================================================
    # Public API
    # =========================================================================

    async def generate_transcript(self, ticket_id: str) -> TranscriptFile:
        """
        Generate the transcript of an archived ticket.

        Raises:
            NotFoundError: No ticket has this id.
            DecryptionError: A stored field could not be decrypted.
            MalformedContentError: A message blob is not valid JSON.
        """
        ticket = await asyncio.to_thread(self.loader.load_ticket, ticket_id)
        if ticket is None:
            raise NotFoundError(ticket_id)
        return await asyncio.to_thread(self.build_transcript, ticket)

    def build_transcript(self, ticket: Ticket) -> TranscriptFile:
        """Run the pipeline on an already loaded ticket."""
        decrypted = decrypt_ticket(ticket, self.decryptor)

        thread = reconstruct_messages(decrypted.archived_messages, decrypted.archived_users)
        pinned = join_pinned(resolve_pinned(decrypted.pinned_message_ids, thread))

        naming = NamingContext.for_creator(decrypted.created_by, decrypted.number)
        channel_name = resolve_channel_name(decrypted.category.channel_name, naming)
        file_name = build_file_name(channel_name, self.template_id)

        content = self.renderer.render(
            decrypted,
            thread,
            channel_name=channel_name,
            pinned=pinned,
            guild_name=self._guild_name(decrypted),
        )

        logger.tree("Transcript Generated", [
            ("Ticket ID", ticket.id),
            ("Number", str(ticket.number)),
            ("Messages", str(len(thread))),
            ("Pinned", str(len(decrypted.pinned_message_ids))),
            ("File", file_name),
        ], emoji="📜")

        return TranscriptFile(
            file_name=file_name,
            content=content,
            ticket_id=ticket.id,
            owner_id=ticket.created_by_id,
            colour=ticket.guild.primary_colour,
        )

    def transcript_url(self, ticket_id: str) -> Optional[str]:
        """Public link of a ticket's transcript, if a base URL is configured."""
        if not self.tickets_url:
            return None
        return transcript_url(self.tickets_url, ticket_id, self.extension)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _guild_name(self, ticket: Ticket) -> Optional[str]:
        if self.guild_name_resolver is not None:
            name = self.guild_name_resolver(ticket.guild.id)
            if name:
                return name
        return ticket.guild.name


# =============================================================================
# Global Instance
# =============================================================================

_service: Optional[TranscriptService] = None


def get_transcript_service() -> TranscriptService:
    """
    Get the process-wide transcript service, building it from config.

    DESIGN:
        The template is read and parsed once here and shared by every
        request for the life of the process.
    """
    global _service
    if _service is None:
        from src.core.database import get_db

        config = get_config()
        _service = TranscriptService(
            loader=get_db(),
            decryptor=FieldDecryptor(config.encryption_key),
            renderer=TemplateRenderer.from_file(
                config.templates_dir,
                config.transcript_template,
                fallback_locale=config.default_locale,
            ),
            template_id=config.transcript_template,
            tickets_url=config.tickets_url,
        )
        logger.tree("Transcript Service Initialized", [
            ("Template", config.transcript_template),
            ("Extension", _service.extension),
            ("Links", config.tickets_url or "Disabled"),
        ], emoji="📜")
    return _service


__all__ = [
    "TicketLoader",
    "TranscriptService",
    "get_transcript_service",
]
