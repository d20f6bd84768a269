"""
Scribe - Services Package
=========================

Application services used by the bot and the API.

Available Services:
    TranscriptService: Generates transcripts from the ticket archive
"""

from .transcripts import TranscriptService, get_transcript_service

__all__ = [
    "TranscriptService",
    "get_transcript_service",
]
