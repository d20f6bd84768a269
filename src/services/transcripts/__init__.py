"""
Scribe - Transcripts
====================

Transcript generation for archived tickets.

DESIGN:
    Each stage of the pipeline is its own module with pure functions over
    immutable models; service.py wires them together and is the only
    module that touches the archive or the event loop.

Modules:
    models: Ticket aggregate and reconstructed thread
    crypto: Field decryption
    messages: Thread reconstruction and labels
    pinned: Pinned message references
    naming: Channel name, file name and URL
    dates: Locale-aware date formatting
    renderer: Mustache rendering
    service: Orchestrator
"""

from .errors import (
    TranscriptError,
    NotFoundError,
    DecryptionError,
    MalformedContentError,
    CorruptRecordError,
)
from .models import Ticket, TranscriptFile, TranscriptMessage
from .crypto import FieldDecryptor, decrypt_ticket
from .renderer import TemplateRenderer
from .service import TranscriptService, get_transcript_service

__all__ = [
    "TranscriptError",
    "NotFoundError",
    "DecryptionError",
    "MalformedContentError",
    "CorruptRecordError",
    "Ticket",
    "TranscriptFile",
    "TranscriptMessage",
    "FieldDecryptor",
    "decrypt_ticket",
    "TemplateRenderer",
    "TranscriptService",
    "get_transcript_service",
]
