"""
Scribe - Commands Package
=========================

Slash command implementations, as discord.py Cogs.

DESIGN:
    Each command package contains a Cog class and an async setup(bot).
    Cogs are loaded dynamically by the bot using load_extension().

Available Commands:
    /transcript: Get the transcript of a closed ticket
"""

# =============================================================================
# Command Cog Registry
# =============================================================================

COMMAND_COGS = [
    "src.commands.transcript",
]
"""
List of command cog module paths for dynamic loading.

DESIGN:
    Bot iterates this list and calls load_extension() for each.
"""


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "COMMAND_COGS",
]
