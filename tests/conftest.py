"""
Scribe - Test Fixtures
======================

Shared fixtures for all tests.
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set up test environment before importing modules
os.environ.setdefault("DISCORD_TOKEN", "test-token")
os.environ.setdefault("ENCRYPTION_KEY", "test-secret")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="scribe-logs-"))

from src.core import config as config_module  # noqa: E402
from src.core.config import DEFAULT_TEMPLATES_DIR  # noqa: E402
from src.services.transcripts.crypto import FieldDecryptor  # noqa: E402
from src.services.transcripts.renderer import TemplateRenderer  # noqa: E402
from src.services.transcripts.service import TranscriptService  # noqa: E402


TEST_SECRET = "test-secret"
TEST_ITERATIONS = 1000
"""Low PBKDF2 cost keeps the suite fast; the layout is unchanged."""

BASE_TIME = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_config():
    """Load config fresh from the environment for every test."""
    config_module._config = None
    yield
    config_module._config = None


# =============================================================================
# Crypto / Rendering
# =============================================================================

@pytest.fixture
def decryptor():
    """Field decryptor keyed with the test secret."""
    return FieldDecryptor(TEST_SECRET, iterations=TEST_ITERATIONS)


@pytest.fixture
def renderer():
    """Renderer for the bundled Markdown template."""
    return TemplateRenderer.from_file(DEFAULT_TEMPLATES_DIR, "transcript.md")


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_scribe.db"


@pytest.fixture
def test_db(temp_db_path, monkeypatch):
    """Create a fresh test database instance."""
    from src.core.database import manager as manager_module

    manager_module.DatabaseManager._instance = None

    monkeypatch.setattr(manager_module, "DB_PATH", temp_db_path)
    monkeypatch.setattr(manager_module, "DATA_DIR", temp_db_path.parent)

    db = manager_module.DatabaseManager()

    yield db

    db.close()
    manager_module.DatabaseManager._instance = None


DEFAULT_USERS = [
    {"user_id": "100", "username": "alice", "display_name": "Alice A."},
    {"user_id": "200", "username": "bob", "display_name": None},
]

DEFAULT_MESSAGES = [
    {"id": "m1", "author_id": "100", "content": {"content": "Hello, I need help"}},
    {"id": "m2", "author_id": "200", "content": {"content": "Sure, what's up?"}},
    {"id": "m3", "author_id": "100", "content": {"content": "Thanks!"}},
]


@pytest.fixture
def seed_ticket(test_db, decryptor):
    """
    Return a helper that writes one ticket aggregate to the archive.

    Encrypted columns are encrypted with the test decryptor. Message
    offsets are seconds after BASE_TIME; without one, messages are a
    minute apart in list order.
    """
    def _seed(
        ticket_id="ticket-1",
        number=42,
        guild_id="900",
        guild_name="Archived Guild",
        guild_locale="en-GB",
        primary_colour="#009999",
        category_name="Support",
        channel_name="ticket-{username}-{number}",
        topic="Billing issue\nsecond line",
        closed_reason="Resolved",
        open_=False,
        closed_offset=3600,
        created_by_id="100",
        claimed_by_id="200",
        closed_by_id="200",
        users=None,
        messages=None,
        pinned=None,
        feedback=(5, "Great help"),
        question_answers=(),
    ):
        test_db.execute(
            "INSERT OR IGNORE INTO guilds (id, name, locale, primary_colour) VALUES (?, ?, ?, ?)",
            (guild_id, guild_name, guild_locale, primary_colour),
        )
        category_id = test_db.execute(
            "INSERT INTO categories (guild_id, name, channel_name) VALUES (?, ?, ?)",
            (guild_id, category_name, channel_name),
        ).lastrowid

        created_at = BASE_TIME.timestamp()
        test_db.execute(
            """INSERT INTO tickets (
                id, guild_id, category_id, number, open, topic, created_at, closed_at,
                closed_reason, created_by_id, claimed_by_id, closed_by_id, pinned_message_ids
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                ticket_id, guild_id, category_id, number, 1 if open_ else 0,
                decryptor.encrypt(topic) if topic else None,
                created_at,
                None if open_ else created_at + closed_offset,
                decryptor.encrypt(closed_reason) if closed_reason else None,
                created_by_id, claimed_by_id, closed_by_id,
                json.dumps(pinned or []),
            ),
        )

        for user in (DEFAULT_USERS if users is None else users):
            display_name = user.get("display_name")
            test_db.execute(
                """INSERT INTO archived_users
                   (ticket_id, user_id, username, display_name, avatar, bot, role_id)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    ticket_id, user["user_id"],
                    decryptor.encrypt(user["username"]),
                    decryptor.encrypt(display_name) if display_name else None,
                    user.get("avatar"), int(user.get("bot", False)), user.get("role_id"),
                ),
            )

        for index, message in enumerate(DEFAULT_MESSAGES if messages is None else messages):
            offset = message.get("offset", (index + 1) * 60)
            test_db.execute(
                """INSERT INTO archived_messages
                   (id, ticket_id, author_id, content, created_at, edited, external)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    message["id"], ticket_id, message["author_id"],
                    decryptor.encrypt(json.dumps(message["content"])),
                    created_at + offset,
                    int(message.get("edited", False)),
                    int(message.get("external", False)),
                ),
            )

        if feedback is not None:
            rating, comment = feedback
            test_db.execute(
                "INSERT INTO feedback (ticket_id, rating, comment, user_id, created_at) VALUES (?, ?, ?, ?, ?)",
                (ticket_id, rating, decryptor.encrypt(comment) if comment else None, created_by_id, created_at),
            )

        for question, value in question_answers:
            test_db.execute(
                "INSERT INTO question_answers (ticket_id, question, value) VALUES (?, ?, ?)",
                (ticket_id, question, value),
            )

        return ticket_id

    return _seed


@pytest.fixture
def transcript_service(test_db, decryptor, renderer):
    """Transcript service over the test archive."""
    return TranscriptService(
        loader=test_db,
        decryptor=decryptor,
        renderer=renderer,
        template_id="transcript.md",
        tickets_url="https://tickets.example.com/",
    )


# =============================================================================
# Discord Mocks
# =============================================================================

@pytest.fixture
def mock_discord_interaction():
    """Create a mock Discord interaction."""
    interaction = MagicMock()
    interaction.user = MagicMock()
    interaction.user.id = 100
    interaction.user.name = "alice"
    interaction.guild = MagicMock()
    interaction.guild.id = 900
    interaction.guild.name = "Test Server"
    interaction.namespace = SimpleNamespace()
    interaction.response = MagicMock()
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    return interaction
