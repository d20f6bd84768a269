"""
Scribe - Source Package
=======================

Ticket transcript bot: turns archived, encrypted ticket records into
readable transcript documents.

Package Structure:
- bot.py: Discord bot class and cog loading
- commands/: Slash command implementations (/transcript)
- core/: Configuration, logging, constants and the sqlite archive
- services/transcripts/: Transcript generation pipeline
- api/: FastAPI app serving transcript links
- utils/: Error handling helpers

Version: v1.0.0
"""
