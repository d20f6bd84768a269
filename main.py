#!/usr/bin/env python3
"""
Scribe - Entry Point
====================

Ticket transcript bot.

Startup:
1. Loads .env into the environment
2. Validates configuration (fails fast on missing variables)
3. Starts the bot, which loads the /transcript command and,
   when enabled, the transcript API
"""

import asyncio
import sys

from dotenv import load_dotenv

from src.core.logger import logger
from src.core.config import ConfigValidationError, get_config, validate_and_log_config
from src.utils.error_handler import ErrorHandler


async def main() -> None:
    """
    Main entry point for the Scribe bot.

    Raises:
        SystemExit: If configuration is invalid or the bot fails to start
    """
    load_dotenv()

    logger.tree("SCRIBE STARTING", [
        ("Commands", "/transcript"),
    ], "📜")

    try:
        validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Configuration Invalid", [("Error", str(e))])
        sys.exit(1)

    from src.bot import ScribeBot

    bot = ScribeBot()
    try:
        async with bot:
            await bot.start(get_config().discord_token)
    except Exception as e:
        ErrorHandler.handle(
            e,
            location="main.main",
            critical=True,
        )
        sys.exit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
