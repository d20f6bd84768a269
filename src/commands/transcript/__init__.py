"""
Scribe - Transcript Package
===========================

The /transcript slash command.

Structure:
    - autocomplete.py: Closed ticket autocomplete for the `ticket` option
    - views.py: Reply embed and link button
    - cog.py: Main TranscriptCog class with the command
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import TranscriptCog

if TYPE_CHECKING:
    from src.bot import ScribeBot

__all__ = [
    "TranscriptCog",
]


async def setup(bot: "ScribeBot") -> None:
    """Load the TranscriptCog."""
    await bot.add_cog(TranscriptCog(bot))
    logger.tree("Transcript Cog Loaded", [
        ("Commands", "/transcript"),
        ("Autocomplete", "ticket"),
    ], emoji="📜")
