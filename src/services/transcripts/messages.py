"""
Scribe - Message Reconstructor
==============================

Turns decrypted archived messages into the numbered transcript thread.

DESIGN:
    The thread holds only non-external messages, ordered by creation time.
    That order is authoritative: labels are assigned from it and nothing
    downstream re-sorts the thread.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from src.core.constants import EMBED_PLACEHOLDER, MESSAGE_LABEL_PREFIX
from .errors import MalformedContentError
from .models import ArchivedMessage, ArchivedUser, MessageContent, TranscriptMessage


def indent_newlines(text: str) -> str:
    """Indent continuation lines by one tab so they nest under template blocks."""
    return text.replace("\n", "\n\t")


def message_label(index: int, total: int) -> str:
    """
    Label for the message at a zero-based position in a thread of `total`.

    Width is the digit count of the total: 9 messages give M1..M9,
    10 give M01..M10.
    """
    width = len(str(total))
    return f"{MESSAGE_LABEL_PREFIX}{str(index + 1).zfill(width)}"


def parse_message_content(message_id: str, plaintext: str) -> MessageContent:
    """
    Parse a decrypted message blob.

    Raises:
        MalformedContentError: If the blob is not a JSON object of the
            expected shape.
    """
    try:
        data = json.loads(plaintext)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedContentError(message_id, str(e)) from None

    if not isinstance(data, dict):
        raise MalformedContentError(message_id, "expected a JSON object")

    text = data.get("content") or ""
    attachments = data.get("attachments") or []
    embeds = data.get("embeds") or []
    if not isinstance(text, str):
        raise MalformedContentError(message_id, "content must be a string")
    if not isinstance(attachments, list) or not isinstance(embeds, list):
        raise MalformedContentError(message_id, "attachments and embeds must be lists")

    return MessageContent(content=text, attachments=attachments, embeds=embeds)


def build_display_text(content: MessageContent) -> str:
    """
    Text shown for a message: its body, then one line per attachment URL,
    then one placeholder line per embed.
    """
    lines = [indent_newlines(content.content)]
    for attachment in content.attachments:
        url = attachment.get("url", "") if isinstance(attachment, dict) else str(attachment)
        lines.append(url)
    lines.extend(EMBED_PLACEHOLDER for _ in content.embeds)
    return "\n\t".join(lines)


def reconstruct_messages(
    messages: Sequence[ArchivedMessage],
    users: Sequence[ArchivedUser],
) -> List[TranscriptMessage]:
    """
    Build the labeled thread from decrypted archived messages.

    Args:
        messages: Archived messages whose content is decrypted JSON text.
        users: Decrypted participants for author lookup.

    Returns:
        Non-external messages in ascending creation order, each with its
        resolved author, display text and label.
    """
    thread = sorted(
        (m for m in messages if not m.external),
        key=lambda m: m.created_at,
    )
    users_by_id: Dict[str, ArchivedUser] = {}
    for user in users:
        users_by_id.setdefault(user.user_id, user)

    total = len(thread)
    reconstructed: List[TranscriptMessage] = []
    for index, message in enumerate(thread):
        content = parse_message_content(message.id, message.content)
        author: Optional[ArchivedUser] = users_by_id.get(message.author_id)
        reconstructed.append(TranscriptMessage(
            id=message.id,
            author=author,
            created_at=message.created_at,
            content=content,
            text=build_display_text(content),
            number=message_label(index, total),
            edited=message.edited,
        ))

    return reconstructed


def find_message(thread: Sequence[TranscriptMessage], message_id: Any) -> Optional[TranscriptMessage]:
    """First thread message with the given id, if any."""
    return next((m for m in thread if m.id == message_id), None)


__all__ = [
    "indent_newlines",
    "message_label",
    "parse_message_content",
    "build_display_text",
    "reconstruct_messages",
    "find_message",
]
