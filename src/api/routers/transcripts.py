"""
Scribe - Transcripts Router
===========================

Public transcript links: GET /tickets/transcript-{ticket_id}.{ext}

DESIGN:
    The transcript is rendered on every request from the archive, so the
    link always reflects the configured template. Only the extension the
    template produces is served; any other extension is a 404.
"""

import mimetypes
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.core.logger import logger
from src.api.dependencies import get_transcript_service
from src.api.errors import APIError, ErrorCode
from src.api.models import ErrorResponse
from src.services.transcripts import NotFoundError, TranscriptService


router = APIRouter(prefix="/tickets", tags=["Transcripts"])


def media_type_for(file_name: str) -> str:
    """Content type served for a transcript file name."""
    guessed, _ = mimetypes.guess_type(file_name)
    if guessed is None:
        return "text/plain; charset=utf-8"
    if guessed.startswith("text/"):
        return f"{guessed}; charset=utf-8"
    return guessed


@router.get(
    "/transcript-{ticket_id}.{ext}",
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_transcript(
    ticket_id: str,
    ext: str,
    service: TranscriptService = Depends(get_transcript_service),
) -> Response:
    """
    Render the transcript of a ticket.

    This is a public endpoint; the ticket id is the only lookup key.
    """
    if ext.lower() != service.extension.lower():
        raise APIError(ErrorCode.TICKET_TRANSCRIPT_NOT_FOUND, details={"ext": ext})

    try:
        transcript = await service.generate_transcript(ticket_id)
    except NotFoundError:
        logger.debug("Transcript Not Found", [
            ("Ticket ID", ticket_id),
        ])
        raise APIError(ErrorCode.TICKET_NOT_FOUND) from None
    except Exception as e:
        logger.error("Transcript Render Failed", [
            ("Ticket ID", ticket_id),
            ("Error Type", type(e).__name__),
            ("Error", str(e)[:100]),
        ])
        raise APIError(ErrorCode.TICKET_TRANSCRIPT_FAILED) from None

    return Response(
        content=transcript.to_bytes(),
        media_type=media_type_for(transcript.file_name),
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(transcript.file_name)}"},
    )


__all__ = ["router", "media_type_for"]
