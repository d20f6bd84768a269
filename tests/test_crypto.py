"""
Scribe - Field Decryptor Tests
==============================

Tests for field decryption and whole-ticket decryption.
"""

import json
from datetime import datetime, timezone

import pytest

from src.core.constants import CIPHER_IV_LENGTH, CIPHER_SALT_LENGTH, CIPHER_TAG_LENGTH
from src.services.transcripts.crypto import FieldDecryptor, decrypt_ticket
from src.services.transcripts.errors import DecryptionError
from src.services.transcripts.models import (
    ArchivedMessage,
    ArchivedUser,
    Category,
    Feedback,
    Guild,
    Ticket,
)


NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

# Written by the archive side (Node crypto, cryptr layout) with salt bytes
# 00..3f, iv bytes a0..af and 100 000 PBKDF2 iterations.
KNOWN_SECRET = "scribe-known-vector"
KNOWN_PLAINTEXT = "Billing issue\nsecond line \u2713"
KNOWN_CIPHERTEXT = (
    "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
    "202122232425262728292a2b2c2d2e2f303132333435363738393a3b3c3d3e3f"
    "a0a1a2a3a4a5a6a7a8a9aaabacadaeaf"
    "67b71f76cb2b77a5e41df5b3b063c67c"
    "a03a81ccebcf21daab0a40de2aa963c574ce6cbb987309b1df9002feb5"
)


class TestFieldDecryptor:
    """Tests for single field encryption and decryption."""

    def test_round_trip(self, decryptor):
        """Test decrypting an encrypted value returns the original."""
        for value in ["hello", "", "multi\nline\ttext", "emoji 📜 and ünïcödé"]:
            assert decryptor.decrypt(decryptor.encrypt(value)) == value

    def test_layout_is_hex_salt_iv_tag_body(self, decryptor):
        """Test the stored layout length is header plus plaintext bytes."""
        stored = decryptor.encrypt("abc")
        raw = bytes.fromhex(stored)
        assert len(raw) == CIPHER_SALT_LENGTH + CIPHER_IV_LENGTH + CIPHER_TAG_LENGTH + 3

    def test_encrypt_uses_fresh_salt(self, decryptor):
        """Test the same plaintext encrypts differently each time."""
        assert decryptor.encrypt("same") != decryptor.encrypt("same")

    def test_wrong_key_raises(self, decryptor):
        """Test a value encrypted with another key fails to decrypt."""
        other = FieldDecryptor("another-secret", iterations=1000)
        with pytest.raises(DecryptionError):
            decryptor.decrypt(other.encrypt("secret"))

    def test_tampered_value_raises(self, decryptor):
        """Test flipping a ciphertext byte fails authentication."""
        stored = bytearray(bytes.fromhex(decryptor.encrypt("secret")))
        stored[-1] ^= 0x01
        with pytest.raises(DecryptionError):
            decryptor.decrypt(bytes(stored).hex())

    def test_invalid_hex_raises(self, decryptor):
        """Test non-hex input raises."""
        with pytest.raises(DecryptionError):
            decryptor.decrypt("not hex at all")

    def test_whitespace_in_hex_raises(self, decryptor):
        """Test whitespace inside a stored value is rejected, not skipped."""
        stored = decryptor.encrypt("hi")
        with pytest.raises(DecryptionError):
            decryptor.decrypt(stored[:10] + " " + stored[10:])
        with pytest.raises(DecryptionError):
            decryptor.decrypt(stored + "\n")

    def test_odd_length_hex_raises(self, decryptor):
        with pytest.raises(DecryptionError):
            decryptor.decrypt(decryptor.encrypt("hi") + "0")

    def test_short_input_raises(self, decryptor):
        """Test input shorter than the header raises."""
        with pytest.raises(DecryptionError):
            decryptor.decrypt("00" * 10)

    def test_non_string_raises(self, decryptor):
        """Test non-string input raises."""
        with pytest.raises(DecryptionError):
            decryptor.decrypt(None)

    def test_decrypt_optional_passes_empty_values(self, decryptor):
        """Test missing values stay missing."""
        assert decryptor.decrypt_optional(None) is None
        assert decryptor.decrypt_optional("") == ""

    def test_known_archive_value(self):
        """Test a value written by the archive side decrypts with the default cost."""
        assert FieldDecryptor(KNOWN_SECRET).decrypt(KNOWN_CIPHERTEXT) == KNOWN_PLAINTEXT

    def test_known_archive_value_uppercase_hex(self):
        assert FieldDecryptor(KNOWN_SECRET).decrypt(KNOWN_CIPHERTEXT.upper()) == KNOWN_PLAINTEXT

    def test_empty_secret_rejected(self):
        """Test an empty secret is a configuration error."""
        with pytest.raises(ValueError):
            FieldDecryptor("")


class TestDecryptTicket:
    """Tests for decrypting every encrypted field of a ticket."""

    def _ticket(self, decryptor, **overrides):
        fields = dict(
            id="t1",
            number=7,
            guild=Guild(id="900", name="Guild", locale="en-GB"),
            category=Category(id=1, name="Support", channel_name="ticket-{num}"),
            created_at=NOW,
            topic=decryptor.encrypt("line one\nline two"),
            closed_reason=decryptor.encrypt("Solved"),
            created_by_id="100",
            feedback=Feedback(rating=4, comment=decryptor.encrypt("Nice")),
            archived_users=[
                ArchivedUser(
                    user_id="100",
                    username=decryptor.encrypt("alice"),
                    display_name=decryptor.encrypt("Alice"),
                ),
                ArchivedUser(user_id="200", username=decryptor.encrypt("bob")),
            ],
            archived_messages=[
                ArchivedMessage(
                    id="m1",
                    author_id="100",
                    created_at=NOW,
                    content=decryptor.encrypt(json.dumps({"content": "hi"})),
                ),
            ],
        )
        fields.update(overrides)
        return Ticket(**fields)

    def test_decrypts_all_fields(self, decryptor):
        """Test topic, reason, feedback, users and messages are decrypted."""
        ticket = decrypt_ticket(self._ticket(decryptor), decryptor)

        assert ticket.topic == "line one\n\tline two"
        assert ticket.closed_reason == "Solved"
        assert ticket.feedback.comment == "Nice"
        assert ticket.archived_users[0].username == "alice"
        assert ticket.archived_users[0].display_name == "Alice"
        assert ticket.archived_users[1].username == "bob"
        assert ticket.archived_users[1].display_name is None
        assert json.loads(ticket.archived_messages[0].content) == {"content": "hi"}

    def test_original_left_untouched(self, decryptor):
        """Test decryption returns a copy."""
        original = self._ticket(decryptor)
        decrypt_ticket(original, decryptor)
        assert original.closed_reason != "Solved"

    def test_absent_fields_stay_absent(self, decryptor):
        """Test missing topic, reason and feedback comment are not decrypted."""
        ticket = decrypt_ticket(
            self._ticket(
                decryptor,
                topic=None,
                closed_reason=None,
                feedback=Feedback(rating=3, comment=None),
            ),
            decryptor,
        )
        assert ticket.topic is None
        assert ticket.closed_reason is None
        assert ticket.feedback.comment is None

    def test_weak_references_follow_decrypted_users(self, decryptor):
        """Test created_by resolves to the decrypted participant."""
        ticket = decrypt_ticket(self._ticket(decryptor), decryptor)
        assert ticket.created_by.username == "alice"
        assert ticket.closed_by is None

    def test_any_bad_field_aborts(self, decryptor):
        """Test one undecryptable field fails the whole ticket."""
        with pytest.raises(DecryptionError):
            decrypt_ticket(self._ticket(decryptor, closed_reason="zz"), decryptor)
