"""
Scribe - API Dependencies
=========================

FastAPI dependency injection utilities.
"""

from typing import TYPE_CHECKING, Optional

from src.api.errors import APIError, ErrorCode
from src.services.transcripts import TranscriptService

if TYPE_CHECKING:
    from src.bot import ScribeBot


# =============================================================================
# Bot Reference
# =============================================================================

_bot_instance: Optional["ScribeBot"] = None


def set_bot(bot: Optional["ScribeBot"]) -> None:
    """Set the bot instance for dependency injection."""
    global _bot_instance
    _bot_instance = bot


def get_bot() -> Optional["ScribeBot"]:
    """Get the bot instance, if the API runs inside the bot."""
    return _bot_instance


# =============================================================================
# Transcript Service
# =============================================================================

_transcript_service: Optional[TranscriptService] = None


def set_transcript_service(service: Optional[TranscriptService]) -> None:
    """Set the transcript service the routes render with."""
    global _transcript_service
    _transcript_service = service


def get_transcript_service() -> TranscriptService:
    """Get the transcript service."""
    if _transcript_service is None:
        raise APIError(ErrorCode.SERVICE_NOT_INITIALIZED)
    return _transcript_service


__all__ = [
    "set_bot",
    "get_bot",
    "set_transcript_service",
    "get_transcript_service",
]
