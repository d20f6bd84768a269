"""
Scribe - Database Ticket Archive Module
=======================================

Read operations over the ticket archive.

DESIGN:
    load_ticket() assembles the whole aggregate in one call so the
    transcript pipeline never goes back to the database. Rows are returned
    exactly as stored: encrypted columns stay encrypted until the field
    decryptor runs.
"""

import json
from datetime import datetime, timezone
from typing import Optional, List, Any, TYPE_CHECKING

from src.core.constants import MAX_AUTOCOMPLETE_CHOICES
from src.core.database.models import ClosedTicketRecord
from src.services.transcripts.errors import CorruptRecordError
from src.services.transcripts.models import (
    ArchivedChannel,
    ArchivedMessage,
    ArchivedRole,
    ArchivedUser,
    Category,
    Feedback,
    Guild,
    QuestionAnswer,
    Ticket,
)

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


# =============================================================================
# Helper Functions
# =============================================================================

def _parse_pinned_ids(ticket_id: str, value: Optional[str]) -> List[str]:
    """
    Parse the stored JSON array of pinned message ids.

    Raises:
        CorruptRecordError: If the column is not a JSON array.
    """
    if value is None:
        return []
    try:
        ids = json.loads(value)
    except (json.JSONDecodeError, TypeError) as e:
        raise CorruptRecordError(ticket_id, "pinned_message_ids", str(e)) from None
    if not isinstance(ids, list):
        raise CorruptRecordError(ticket_id, "pinned_message_ids", "expected a JSON array")
    return [str(i) for i in ids]


def _to_datetime(value: Optional[float]) -> Optional[datetime]:
    """Epoch seconds to an aware UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


# =============================================================================
# Tickets Mixin
# =============================================================================

class TicketsMixin:
    """Mixin for ticket archive operations."""

    def load_ticket(self: "DatabaseManager", ticket_id: str) -> Optional[Ticket]:
        """
        Load a ticket and everything archived with it.

        Args:
            ticket_id: Ticket identifier.

        Returns:
            The ticket aggregate, or None if no ticket has this id.
            Messages exclude external ones and are in ascending creation order.

        Raises:
            CorruptRecordError: If pinned_message_ids is not a JSON array.
        """
        row = self.fetchone(
            """SELECT t.*,
                      g.name AS guild_name,
                      g.locale AS guild_locale,
                      g.primary_colour AS guild_primary_colour,
                      c.name AS category_name,
                      c.channel_name AS category_channel_name
               FROM tickets t
               JOIN guilds g ON g.id = t.guild_id
               JOIN categories c ON c.id = t.category_id
               WHERE t.id = ?""",
            (ticket_id,)
        )
        if not row:
            return None

        users = [
            ArchivedUser(
                user_id=r["user_id"],
                username=r["username"],
                display_name=r["display_name"],
                avatar=r["avatar"],
                bot=bool(r["bot"]),
                role_id=r["role_id"],
            )
            for r in self.fetchall(
                "SELECT * FROM archived_users WHERE ticket_id = ?", (ticket_id,)
            )
        ]

        channels = [
            ArchivedChannel(channel_id=r["channel_id"], name=r["name"])
            for r in self.fetchall(
                "SELECT * FROM archived_channels WHERE ticket_id = ?", (ticket_id,)
            )
        ]

        roles = [
            ArchivedRole(role_id=r["role_id"], name=r["name"], colour=r["colour"])
            for r in self.fetchall(
                "SELECT * FROM archived_roles WHERE ticket_id = ?", (ticket_id,)
            )
        ]

        messages = [
            ArchivedMessage(
                id=r["id"],
                author_id=r["author_id"],
                created_at=_to_datetime(r["created_at"]),
                content=r["content"],
                edited=bool(r["edited"]),
                external=bool(r["external"]),
            )
            for r in self.fetchall(
                """SELECT * FROM archived_messages
                   WHERE ticket_id = ? AND external = 0
                   ORDER BY created_at ASC""",
                (ticket_id,)
            )
        ]

        feedback_row = self.fetchone(
            "SELECT * FROM feedback WHERE ticket_id = ?", (ticket_id,)
        )
        feedback = Feedback(
            rating=feedback_row["rating"],
            comment=feedback_row["comment"],
            user_id=feedback_row["user_id"],
            created_at=_to_datetime(feedback_row["created_at"]),
        ) if feedback_row else None

        answers = [
            QuestionAnswer(question=r["question"], value=r["value"])
            for r in self.fetchall(
                "SELECT * FROM question_answers WHERE ticket_id = ? ORDER BY id ASC",
                (ticket_id,)
            )
        ]

        pinned = _parse_pinned_ids(row["id"], row["pinned_message_ids"])

        return Ticket(
            id=row["id"],
            number=row["number"],
            guild=Guild(
                id=row["guild_id"],
                name=row["guild_name"],
                locale=row["guild_locale"],
                primary_colour=row["guild_primary_colour"],
            ),
            category=Category(
                id=row["category_id"],
                name=row["category_name"],
                channel_name=row["category_channel_name"],
            ),
            created_at=_to_datetime(row["created_at"]),
            closed_at=_to_datetime(row["closed_at"]),
            topic=row["topic"],
            closed_reason=row["closed_reason"],
            created_by_id=row["created_by_id"],
            claimed_by_id=row["claimed_by_id"],
            closed_by_id=row["closed_by_id"],
            pinned_message_ids=pinned,
            feedback=feedback,
            question_answers=answers,
            archived_users=users,
            archived_channels=channels,
            archived_roles=roles,
            archived_messages=messages,
        )

    def get_closed_tickets(
        self: "DatabaseManager",
        guild_id: str,
        user_id: Optional[str] = None,
        query: str = "",
        limit: int = MAX_AUTOCOMPLETE_CHOICES,
    ) -> List[ClosedTicketRecord]:
        """
        Closed tickets of a guild, newest first.

        Args:
            guild_id: Guild to search.
            user_id: Only tickets created by this user, if given.
            query: Case-insensitive match on id, number or category name.
            limit: Maximum rows returned.
        """
        sql = """SELECT t.id, t.number, t.created_by_id, t.closed_at,
                        c.name AS category_name
                 FROM tickets t
                 JOIN categories c ON c.id = t.category_id
                 WHERE t.guild_id = ? AND t.open = 0"""
        params: List[Any] = [guild_id]

        if user_id is not None:
            sql += " AND t.created_by_id = ?"
            params.append(user_id)

        if query:
            pattern = f"%{query.lower()}%"
            sql += """ AND (LOWER(t.id) LIKE ?
                            OR CAST(t.number AS TEXT) LIKE ?
                            OR LOWER(c.name) LIKE ?)"""
            params.extend([pattern, pattern, pattern])

        sql += " ORDER BY t.closed_at DESC, t.number DESC LIMIT ?"
        params.append(limit)

        return [dict(row) for row in self.fetchall(sql, tuple(params))]
