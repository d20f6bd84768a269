"""
Scribe - Message Reconstructor Tests
====================================

Tests for message labels, display text and thread reconstruction.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from src.services.transcripts.errors import MalformedContentError
from src.services.transcripts.messages import (
    build_display_text,
    find_message,
    indent_newlines,
    message_label,
    parse_message_content,
    reconstruct_messages,
)
from src.services.transcripts.models import ArchivedMessage, ArchivedUser, MessageContent


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _message(message_id, offset, author_id="100", external=False, content=None):
    return ArchivedMessage(
        id=message_id,
        author_id=author_id,
        created_at=NOW + timedelta(minutes=offset),
        content=json.dumps(content if content is not None else {"content": message_id}),
        external=external,
    )


class TestMessageLabel:
    """Tests for zero-padded message labels."""

    def test_single_digit_total(self):
        """Test 9 messages are labeled M1..M9."""
        assert [message_label(i, 9) for i in range(9)] == [f"M{i}" for i in range(1, 10)]

    def test_twelve_messages_are_padded(self):
        """Test 12 messages are labeled M01..M12."""
        labels = [message_label(i, 12) for i in range(12)]
        assert labels[0] == "M01"
        assert labels[8] == "M09"
        assert labels[-1] == "M12"

    def test_hundred_messages(self):
        """Test width grows with the digit count of the total."""
        assert message_label(0, 100) == "M001"
        assert message_label(99, 100) == "M100"


class TestDisplayText:
    """Tests for the text shown for a message."""

    def test_attachments_and_embeds(self):
        """Test two attachments and one embed add three indented lines."""
        content = MessageContent(
            content="look",
            attachments=[{"url": "https://cdn/a.png"}, {"url": "https://cdn/b.png"}],
            embeds=[{"title": "x"}],
        )
        assert build_display_text(content) == (
            "look\n\thttps://cdn/a.png\n\thttps://cdn/b.png\n\t[embedded content]"
        )

    def test_newlines_are_indented(self):
        """Test multi-line content is tab-indented."""
        assert build_display_text(MessageContent(content="a\nb")) == "a\n\tb"

    def test_empty_content_with_attachment(self):
        """Test an attachment-only message starts with an empty line."""
        content = MessageContent(attachments=[{"url": "u"}])
        assert build_display_text(content) == "\n\tu"

    def test_indent_newlines(self):
        assert indent_newlines("x\ny\nz") == "x\n\ty\n\tz"


class TestParseMessageContent:
    """Tests for parsing decrypted message blobs."""

    def test_missing_keys_default(self):
        """Test null or absent fields become empty."""
        parsed = parse_message_content("m1", json.dumps({"content": None}))
        assert parsed == MessageContent(content="", attachments=[], embeds=[])

    def test_invalid_json_raises(self):
        with pytest.raises(MalformedContentError):
            parse_message_content("m1", "{not json")

    def test_non_object_raises(self):
        with pytest.raises(MalformedContentError):
            parse_message_content("m1", json.dumps(["content"]))

    def test_wrong_types_raise(self):
        with pytest.raises(MalformedContentError):
            parse_message_content("m1", json.dumps({"content": 5}))
        with pytest.raises(MalformedContentError):
            parse_message_content("m1", json.dumps({"attachments": "url"}))


class TestReconstructMessages:
    """Tests for building the labeled thread."""

    def test_sorted_and_labeled(self):
        """Test messages are ordered by creation time before labeling."""
        thread = reconstruct_messages(
            [_message("late", 5), _message("early", 1), _message("middle", 3)],
            [],
        )
        assert [m.id for m in thread] == ["early", "middle", "late"]
        assert [m.number for m in thread] == ["M1", "M2", "M3"]

    def test_external_messages_excluded(self):
        """Test external messages are dropped and do not consume labels."""
        thread = reconstruct_messages(
            [_message("a", 1), _message("sys", 2, external=True), _message("b", 3)],
            [],
        )
        assert [(m.id, m.number) for m in thread] == [("a", "M1"), ("b", "M2")]

    def test_author_resolution(self):
        """Test authors resolve by id and unknown authors are None."""
        alice = ArchivedUser(user_id="100", username="alice")
        thread = reconstruct_messages(
            [_message("a", 1, author_id="100"), _message("b", 2, author_id="999")],
            [alice],
        )
        assert thread[0].author == alice
        assert thread[1].author is None

    def test_malformed_content_aborts(self):
        """Test one malformed message fails the whole thread."""
        bad = ArchivedMessage(id="bad", author_id="100", created_at=NOW, content="nope")
        with pytest.raises(MalformedContentError):
            reconstruct_messages([_message("a", 1), bad], [])

    def test_empty_thread(self):
        assert reconstruct_messages([], []) == []

    def test_find_message(self):
        thread = reconstruct_messages([_message("a", 1), _message("b", 2)], [])
        assert find_message(thread, "b").number == "M2"
        assert find_message(thread, "zzz") is None
