"""
Scribe - Field Decryptor
========================

Symmetric decryption of the fields the archive stores encrypted.

DESIGN:
    The archive is written by the ticket bot with the `cryptr` scheme, so
    this module reads exactly that layout:

        hex( salt[64] | iv[16] | tag[16] | ciphertext )

    AES-256-GCM, key derived per value with PBKDF2-HMAC-SHA512 over the
    deployment secret and the value's salt. Any failure (bad hex, short
    input, wrong key, tampering) is a DecryptionError and aborts the whole
    transcript; there is no partial or silent fallback.
"""

import os
import re
from dataclasses import replace
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from src.core.constants import (
    CIPHER_SALT_LENGTH,
    CIPHER_IV_LENGTH,
    CIPHER_TAG_LENGTH,
    CIPHER_KEY_LENGTH,
    CIPHER_PBKDF2_ITERATIONS,
)
from .errors import DecryptionError
from .messages import indent_newlines
from .models import Ticket


_HEADER_LENGTH = CIPHER_SALT_LENGTH + CIPHER_IV_LENGTH + CIPHER_TAG_LENGTH
_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


class FieldDecryptor:
    """
    Decrypts (and, for tooling and tests, encrypts) single stored fields.

    Args:
        secret: Deployment-wide encryption key.
        iterations: PBKDF2 iteration count; must match the writer.
    """

    def __init__(self, secret: str, iterations: int = CIPHER_PBKDF2_ITERATIONS) -> None:
        if not secret:
            raise ValueError("Encryption secret must not be empty")
        self._secret = secret.encode("utf-8")
        self._iterations = iterations

    def _derive_key(self, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA512(),
            length=CIPHER_KEY_LENGTH,
            salt=salt,
            iterations=self._iterations,
        )
        return kdf.derive(self._secret)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a value into the stored hex layout."""
        salt = os.urandom(CIPHER_SALT_LENGTH)
        iv = os.urandom(CIPHER_IV_LENGTH)
        sealed = AESGCM(self._derive_key(salt)).encrypt(iv, plaintext.encode("utf-8"), None)
        # cryptography appends the tag; the stored layout puts it before the body
        body, tag = sealed[:-CIPHER_TAG_LENGTH], sealed[-CIPHER_TAG_LENGTH:]
        return (salt + iv + tag + body).hex()

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a stored value.

        Raises:
            DecryptionError: If the value is malformed or the key is wrong.
        """
        if not isinstance(ciphertext, str):
            raise DecryptionError("Encrypted value must be a string")
        # bytes.fromhex skips whitespace, stored values never contain any
        if not _HEX_PATTERN.fullmatch(ciphertext):
            raise DecryptionError("Encrypted value is not valid hex")
        raw = bytes.fromhex(ciphertext)
        if len(raw) < _HEADER_LENGTH:
            raise DecryptionError("Encrypted value is too short")

        salt = raw[:CIPHER_SALT_LENGTH]
        iv = raw[CIPHER_SALT_LENGTH:CIPHER_SALT_LENGTH + CIPHER_IV_LENGTH]
        tag = raw[CIPHER_SALT_LENGTH + CIPHER_IV_LENGTH:_HEADER_LENGTH]
        body = raw[_HEADER_LENGTH:]

        try:
            plain = AESGCM(self._derive_key(salt)).decrypt(iv, body + tag, None)
            return plain.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError):
            raise DecryptionError("Encrypted value could not be decrypted") from None

    def decrypt_optional(self, ciphertext: Optional[str]) -> Optional[str]:
        """Decrypt a nullable field; empty or missing values stay as they are."""
        if not ciphertext:
            return ciphertext
        return self.decrypt(ciphertext)


def decrypt_ticket(ticket: Ticket, decryptor: FieldDecryptor) -> Ticket:
    """
    Return a copy of the ticket with every encrypted field decrypted.

    Message contents are decrypted to their JSON text here and parsed by the
    message reconstructor. The loaded aggregate itself is left untouched.
    """
    topic = decryptor.decrypt_optional(ticket.topic)
    if topic:
        topic = indent_newlines(topic)

    feedback = ticket.feedback
    if feedback is not None and feedback.comment:
        feedback = replace(feedback, comment=decryptor.decrypt(feedback.comment))

    users = [
        replace(
            user,
            username=decryptor.decrypt(user.username),
            display_name=decryptor.decrypt_optional(user.display_name),
        )
        for user in ticket.archived_users
    ]

    messages = [
        replace(message, content=decryptor.decrypt(message.content))
        for message in ticket.archived_messages
    ]

    return replace(
        ticket,
        topic=topic,
        closed_reason=decryptor.decrypt_optional(ticket.closed_reason),
        feedback=feedback,
        archived_users=users,
        archived_messages=messages,
    )


__all__ = [
    "FieldDecryptor",
    "decrypt_ticket",
]
