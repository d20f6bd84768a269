"""
Database Schema Module
======================

Table definitions for the ticket archive.

Snowflake ids are stored as TEXT, timestamps as REAL epoch seconds (UTC).
Encrypted columns hold the hex layout read by the field decryptor.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Initialize all database tables.

        DESIGN: Tables are created if not exist, allowing safe restarts
        against an archive the ticket bot already populated.
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Guilds Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS guilds (
                id TEXT PRIMARY KEY,
                name TEXT,
                locale TEXT,
                primary_colour TEXT
            )
        """)

        # -----------------------------------------------------------------
        # Categories Table
        # DESIGN: channel_name is the naming pattern, e.g. "ticket-{num}"
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id TEXT NOT NULL REFERENCES guilds(id) ON DELETE CASCADE,
                name TEXT NOT NULL,
                channel_name TEXT NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Tickets Table
        # DESIGN: topic and closed_reason are encrypted;
        # pinned_message_ids is a JSON array of message ids
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tickets (
                id TEXT PRIMARY KEY,
                guild_id TEXT NOT NULL REFERENCES guilds(id) ON DELETE CASCADE,
                category_id INTEGER NOT NULL REFERENCES categories(id),
                number INTEGER NOT NULL,
                open INTEGER NOT NULL DEFAULT 1,
                topic TEXT,
                created_at REAL NOT NULL,
                closed_at REAL,
                closed_reason TEXT,
                created_by_id TEXT,
                claimed_by_id TEXT,
                closed_by_id TEXT,
                pinned_message_ids TEXT NOT NULL DEFAULT '[]'
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_tickets_guild ON tickets(guild_id, open)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_tickets_creator ON tickets(created_by_id, guild_id)"
        )

        # -----------------------------------------------------------------
        # Archived Users Table
        # DESIGN: username and display_name are encrypted
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS archived_users (
                ticket_id TEXT NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
                user_id TEXT NOT NULL,
                username TEXT NOT NULL,
                display_name TEXT,
                avatar TEXT,
                bot INTEGER NOT NULL DEFAULT 0,
                role_id TEXT,
                PRIMARY KEY (ticket_id, user_id)
            )
        """)

        # -----------------------------------------------------------------
        # Archived Channels Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS archived_channels (
                ticket_id TEXT NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
                channel_id TEXT NOT NULL,
                name TEXT NOT NULL,
                PRIMARY KEY (ticket_id, channel_id)
            )
        """)

        # -----------------------------------------------------------------
        # Archived Roles Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS archived_roles (
                ticket_id TEXT NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
                role_id TEXT NOT NULL,
                name TEXT NOT NULL,
                colour TEXT NOT NULL DEFAULT '5865F2',
                PRIMARY KEY (ticket_id, role_id)
            )
        """)

        # -----------------------------------------------------------------
        # Archived Messages Table
        # DESIGN: content is an encrypted JSON blob; external marks
        # system-injected messages that never appear in transcripts
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS archived_messages (
                id TEXT PRIMARY KEY,
                ticket_id TEXT NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
                author_id TEXT NOT NULL,
                content TEXT NOT NULL,
                created_at REAL NOT NULL,
                edited INTEGER NOT NULL DEFAULT 0,
                external INTEGER NOT NULL DEFAULT 0
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_archived_messages_ticket ON archived_messages(ticket_id, created_at)"
        )

        # -----------------------------------------------------------------
        # Feedback Table
        # DESIGN: comment is encrypted
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS feedback (
                ticket_id TEXT PRIMARY KEY REFERENCES tickets(id) ON DELETE CASCADE,
                rating INTEGER NOT NULL,
                comment TEXT,
                user_id TEXT,
                created_at REAL
            )
        """)

        # -----------------------------------------------------------------
        # Question Answers Table
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS question_answers (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                ticket_id TEXT NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
                question TEXT NOT NULL,
                value TEXT
            )
        """)
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_question_answers_ticket ON question_answers(ticket_id)"
        )

        conn.commit()
