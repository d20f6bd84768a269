"""
Scribe - Transcript Autocomplete
================================

Autocomplete for the `ticket` option of /transcript.
"""

from datetime import datetime
from typing import List

import discord
from discord import app_commands

from src.core.config import get_config, UTC_TZ
from src.core.constants import MAX_AUTOCOMPLETE_CHOICES, MAX_CHOICE_NAME_LENGTH
from src.core.database import ClosedTicketRecord, get_db
from src.core.logger import logger


def format_ticket_choice(record: ClosedTicketRecord) -> str:
    """Choice label: number, category and close date."""
    label = f"#{record['number']} · {record['category_name']}"
    closed_at = record.get("closed_at")
    if closed_at:
        label += f" · {datetime.fromtimestamp(closed_at, UTC_TZ):%Y-%m-%d}"
    return label[:MAX_CHOICE_NAME_LENGTH]


async def ticket_autocomplete(
    interaction: discord.Interaction,
    current: str,
) -> List[app_commands.Choice[str]]:
    """
    Closed tickets of the guild, created by the `member` option if given,
    otherwise by the invoking user.
    """
    if interaction.guild is None:
        return []

    member = getattr(interaction.namespace, "member", None)
    owner_id = member.id if member is not None else interaction.user.id

    try:
        limit = min(get_config().autocomplete_limit, MAX_AUTOCOMPLETE_CHOICES)
        records = get_db().get_closed_tickets(
            str(interaction.guild.id),
            user_id=str(owner_id),
            query=current.strip(),
            limit=limit,
        )
    except Exception as e:
        logger.warning("Ticket Autocomplete Failed", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild.id})"),
            ("User", f"{interaction.user.name} ({interaction.user.id})"),
            ("Error", str(e)[:100]),
        ])
        return []

    return [
        app_commands.Choice(name=format_ticket_choice(record), value=record["id"])
        for record in records
    ]


__all__ = ["format_ticket_choice", "ticket_autocomplete"]
