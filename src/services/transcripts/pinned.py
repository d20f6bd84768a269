"""
Scribe - Pinned Reference Resolver
==================================

Maps pinned message ids to their thread labels.
"""

from typing import List, Sequence

from src.core.constants import PINNED_SEPARATOR
from .messages import find_message
from .models import TranscriptMessage


def resolve_pinned(pinned_ids: Sequence[str], thread: Sequence[TranscriptMessage]) -> List[str]:
    """
    Resolve each pinned id to the label of its thread message.

    DESIGN:
        Output is positional: one entry per input id, duplicates kept, and
        an empty string where the message is not in the thread (external or
        deleted). Entries are never dropped.
    """
    labels: List[str] = []
    for message_id in pinned_ids:
        message = find_message(thread, message_id)
        labels.append(message.number if message else "")
    return labels


def join_pinned(labels: Sequence[str]) -> str:
    """Join labels for display, keeping empty entries in place."""
    return PINNED_SEPARATOR.join(labels)


__all__ = [
    "resolve_pinned",
    "join_pinned",
]
