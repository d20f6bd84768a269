"""
Scribe - Main Bot Class
=======================

Discord client serving ticket transcripts.

Features:
- /transcript slash command with closed ticket autocomplete
- Optional FastAPI server for transcript links
- Live guild names for rendered transcripts
"""

from datetime import datetime
from typing import Optional

import discord
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config, UTC_TZ
from src.core.database import get_db
from src.services.transcripts import get_transcript_service


# =============================================================================
# ScribeBot Class
# =============================================================================

class ScribeBot(commands.Bot):
    """
    Main Discord bot class for Scribe.

    SERVICE INITIALIZATION ORDER:
    1. __init__:
       - Database (archive schema)
       - Transcript service (template parsed once)

    2. setup_hook (before on_ready):
       - Command cog loading
       - Command tree syncing
       - Transcript API (when API_ENABLED)
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self) -> None:
        """Initialize the bot with the intents the transcript command needs."""
        self.config = get_config()

        intents = discord.Intents.default()

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None,
        )

        self.db = get_db()
        self.transcript_service = get_transcript_service()
        self.transcript_service.guild_name_resolver = self.resolve_guild_name
        self.start_time: datetime = datetime.now(UTC_TZ)
        self.api_service = None

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load cogs, sync commands and start the API before on_ready."""
        from src.commands import COMMAND_COGS
        for cog in COMMAND_COGS:
            try:
                await self.load_extension(cog)
                logger.info(f"Cog Loaded: {cog.split('.')[-1]}")
            except Exception as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        try:
            synced = await self.tree.sync()
            logger.tree("Commands Synced", [("Count", str(len(synced)))], emoji="✅")
        except Exception as e:
            logger.error("Command Sync Failed", [("Error", str(e))])

        if self.config.api_enabled:
            from src.api import APIService
            self.api_service = APIService(self, self.transcript_service)
            await self.api_service.start()

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        """Log connection details and arm the error webhook."""
        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
        ], emoji="🚀")

        if self.config.error_webhook_url:
            logger.set_webhook(self.config.error_webhook_url)

    # =========================================================================
    # Helpers
    # =========================================================================

    def resolve_guild_name(self, guild_id: str) -> Optional[str]:
        """Current name of a guild from the cache, if the bot is in it."""
        try:
            guild = self.get_guild(int(guild_id))
        except (TypeError, ValueError):
            return None
        return guild.name if guild else None

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def shutdown(self) -> None:
        """Graceful shutdown with proper cleanup."""
        logger.info("Initiating Graceful Shutdown")

        if self.api_service:
            await self.api_service.stop()

        self.db.close()
        await super().close()

        logger.tree("SHUTDOWN COMPLETE", [
            ("Uptime", str(datetime.now(UTC_TZ) - self.start_time)),
        ], emoji="🛑")

    async def close(self) -> None:
        """Override close to ensure proper shutdown."""
        await self.shutdown()


# =============================================================================
# Module Export
# =============================================================================

__all__ = ["ScribeBot"]
