"""
Scribe - Transcript Models
==========================

Data classes for the archived ticket aggregate and the reconstructed thread.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any


# =============================================================================
# Supporting Records
# =============================================================================

@dataclass(frozen=True)
class Guild:
    """Guild a ticket belongs to."""
    id: str
    name: Optional[str] = None
    locale: Optional[str] = None
    primary_colour: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Ticket category; channel_name is the naming pattern for its tickets."""
    id: int
    name: str
    channel_name: str


@dataclass(frozen=True)
class Feedback:
    """Feedback left on a closed ticket. comment is encrypted at rest."""
    rating: int
    comment: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class QuestionAnswer:
    """Answer to a category question asked when the ticket was opened."""
    question: str
    value: Optional[str] = None


@dataclass(frozen=True)
class ArchivedUser:
    """Ticket-scoped snapshot of a participant. Names are encrypted at rest."""
    user_id: str
    username: str
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    bot: bool = False
    role_id: Optional[str] = None


@dataclass(frozen=True)
class ArchivedChannel:
    """Snapshot of a channel referenced in the ticket."""
    channel_id: str
    name: str


@dataclass(frozen=True)
class ArchivedRole:
    """Snapshot of a role referenced in the ticket."""
    role_id: str
    name: str
    colour: str = "5865F2"


@dataclass(frozen=True)
class ArchivedMessage:
    """
    Snapshot of a ticket message.

    content is an encrypted JSON blob of {"content", "attachments", "embeds"}.
    external messages (system-injected) never appear in the thread.
    """
    id: str
    author_id: str
    created_at: datetime
    content: str
    edited: bool = False
    external: bool = False


# =============================================================================
# Ticket Aggregate
# =============================================================================

@dataclass(frozen=True)
class Ticket:
    """
    Closed ticket and everything archived with it.

    DESIGN:
        created_by/claimed_by/closed_by are weak references resolved by id
        into archived_users, so the same participant is never duplicated.
    """
    id: str
    number: int
    guild: Guild
    category: Category
    created_at: datetime
    closed_at: Optional[datetime] = None
    topic: Optional[str] = None
    closed_reason: Optional[str] = None
    created_by_id: Optional[str] = None
    claimed_by_id: Optional[str] = None
    closed_by_id: Optional[str] = None
    pinned_message_ids: List[str] = field(default_factory=list)
    feedback: Optional[Feedback] = None
    question_answers: List[QuestionAnswer] = field(default_factory=list)
    archived_users: List[ArchivedUser] = field(default_factory=list)
    archived_channels: List[ArchivedChannel] = field(default_factory=list)
    archived_roles: List[ArchivedRole] = field(default_factory=list)
    archived_messages: List[ArchivedMessage] = field(default_factory=list)

    def find_user(self, user_id: Optional[str]) -> Optional[ArchivedUser]:
        """Weak lookup of a participant by id."""
        if user_id is None:
            return None
        return next((u for u in self.archived_users if u.user_id == user_id), None)

    @property
    def created_by(self) -> Optional[ArchivedUser]:
        return self.find_user(self.created_by_id)

    @property
    def claimed_by(self) -> Optional[ArchivedUser]:
        return self.find_user(self.claimed_by_id)

    @property
    def closed_by(self) -> Optional[ArchivedUser]:
        return self.find_user(self.closed_by_id)


# =============================================================================
# Reconstructed Thread
# =============================================================================

@dataclass(frozen=True)
class MessageContent:
    """Decrypted, parsed message blob."""
    content: str = ""
    attachments: List[Dict[str, Any]] = field(default_factory=list)
    embeds: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class TranscriptMessage:
    """A message as it appears in the transcript, with its thread label."""
    id: str
    author: Optional[ArchivedUser]
    created_at: datetime
    content: MessageContent
    text: str
    number: str
    edited: bool = False


@dataclass(frozen=True)
class TranscriptFile:
    """Rendered transcript and the name it is delivered under."""
    file_name: str
    content: str
    ticket_id: Optional[str] = None
    owner_id: Optional[str] = None
    colour: Optional[str] = None

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")


__all__ = [
    "Guild",
    "Category",
    "Feedback",
    "QuestionAnswer",
    "ArchivedUser",
    "ArchivedChannel",
    "ArchivedRole",
    "ArchivedMessage",
    "Ticket",
    "MessageContent",
    "TranscriptMessage",
    "TranscriptFile",
]
