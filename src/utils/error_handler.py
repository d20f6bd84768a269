"""
Scribe - Error Handler
======================

Error categorization, user-facing messages and structured error logging.

Features:
- Error categorization (transcript, Discord, database, network)
- Generic user-facing messages that never leak crypto or stack detail
- Recovery suggestions for the operator log
"""

import sqlite3
import traceback
from typing import Any, Dict, Tuple, Type

import discord

from src.core.logger import logger
from src.services.transcripts.errors import (
    DecryptionError,
    MalformedContentError,
    NotFoundError,
    TranscriptError,
)


class ErrorHandler:
    """Error handling with categorization and recovery hints."""

    # Checked in order; the first match wins
    ERROR_CATEGORIES: Tuple[Tuple[str, Tuple[Type[BaseException], ...]], ...] = (
        ("not_found", (NotFoundError,)),
        ("decryption", (DecryptionError,)),
        ("content", (MalformedContentError,)),
        ("transcript", (TranscriptError,)),
        ("discord", (discord.DiscordException,)),
        ("database", (sqlite3.Error,)),
        ("template", (FileNotFoundError,)),
        ("network", (ConnectionError, TimeoutError)),
    )

    USER_MESSAGES: Dict[str, str] = {
        "not_found": "That ticket does not exist.",
        "decryption": "This transcript could not be generated.",
        "content": "This transcript could not be generated.",
        "transcript": "This transcript could not be generated.",
        "discord": "Discord rejected the request. Please try again.",
        "database": "The ticket archive is unavailable. Please try again later.",
        "template": "This transcript could not be generated.",
        "network": "A network error occurred. Please try again.",
        "general": "An unexpected error occurred.",
    }

    RECOVERY_SUGGESTIONS: Dict[str, str] = {
        "not_found": "Check the ticket id",
        "decryption": "Check ENCRYPTION_KEY matches the key the archive was written with",
        "content": "Archived message content is corrupt - inspect the message row",
        "transcript": "Check the transcript pipeline logs",
        "discord": "Check bot permissions and Discord status",
        "database": "Check the archive database file and permissions",
        "template": "Check TEMPLATES_DIR and TRANSCRIPT_TEMPLATE",
        "network": "Network connection issue - check connectivity",
    }

    @classmethod
    def categorize_error(cls, e: BaseException) -> str:
        """
        Categorize the error type.

        Args:
            e: The exception

        Returns:
            Error category string
        """
        for category, error_types in cls.ERROR_CATEGORIES:
            if isinstance(e, error_types):
                return category
        return "general"

    @classmethod
    def user_message(cls, e: BaseException) -> str:
        """Generic message safe to show to the user who triggered the error."""
        return cls.USER_MESSAGES[cls.categorize_error(e)]

    @classmethod
    def get_recovery_suggestion(cls, category: str) -> str:
        return cls.RECOVERY_SUGGESTIONS.get(category, "Unexpected error - check logs for details")

    @classmethod
    def handle(cls, e: BaseException, location: str, critical: bool = False, **context: Any) -> str:
        """
        Log an error with its category and context.

        Args:
            e: The exception
            location: Where the error occurred
            critical: Also log the full traceback
            **context: Additional (key, value) context for the log

        Returns:
            The error category
        """
        category = cls.categorize_error(e)

        details = [
            ("Location", location),
            ("Category", category),
            ("Type", type(e).__name__),
            ("Error", str(e)[:200]),
            ("Recovery", cls.get_recovery_suggestion(category)),
        ]
        details.extend((key.replace("_", " ").title(), str(value)) for key, value in context.items())

        if category == "not_found":
            logger.warning("Transcript Request Rejected", details)
        else:
            logger.error("Transcript Request Failed", details)

        if critical:
            logger.debug("Traceback", [
                ("Trace", "".join(traceback.format_exception(type(e), e, e.__traceback__))),
            ])

        return category


__all__ = ["ErrorHandler"]
