"""
Scribe - Transcript Errors
==========================

Failures of the transcript pipeline. None of them are retried or recovered
inside the pipeline; they propagate to the command or API layer.
"""


class TranscriptError(Exception):
    """Base class for transcript pipeline failures."""

    pass


class NotFoundError(TranscriptError):
    """No archived ticket matches the requested id."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(f"Ticket {ticket_id} does not exist")
        self.ticket_id = ticket_id


class DecryptionError(TranscriptError):
    """
    A stored field could not be decrypted.

    DESIGN:
        Raised for malformed ciphertext and for a wrong key alike, so the
        message never hints at which one it was.
    """

    pass


class MalformedContentError(TranscriptError):
    """A decrypted message blob is not the expected JSON object."""

    def __init__(self, message_id: str, reason: str) -> None:
        super().__init__(f"Message {message_id} has malformed content: {reason}")
        self.message_id = message_id


class CorruptRecordError(TranscriptError):
    """A stored ticket column does not hold the shape the archive writes."""

    def __init__(self, ticket_id: str, column: str, reason: str) -> None:
        super().__init__(f"Ticket {ticket_id} has a corrupt {column} column: {reason}")
        self.ticket_id = ticket_id
        self.column = column


__all__ = [
    "TranscriptError",
    "NotFoundError",
    "DecryptionError",
    "MalformedContentError",
    "CorruptRecordError",
]
