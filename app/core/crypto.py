"""Deterministic field-level encryption for patient PII.

Email, phone and address are stored as AES-SIV tokens. SIV derives the IV
from the key and the plaintext, so the same plaintext always produces the
same token under one key. The users table enforces email uniqueness on the
token, and logins look users up by it; a randomized cipher would break both.

Empty plaintext maps to an empty token and back.
"""

import base64
import binascii
import hashlib
from dataclasses import dataclass
from enum import Enum

import structlog
from Crypto.Cipher import AES

logger = structlog.get_logger(__name__)

TAG_SIZE = 16


class DecryptStatus(str, Enum):
    """Outcome of decrypting a stored field."""

    EMPTY = "empty"
    DECRYPTED = "decrypted"
    FAILED = "failed"


@dataclass(frozen=True)
class DecryptedField:
    """Tagged decryption result."""

    status: DecryptStatus
    value: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not DecryptStatus.FAILED


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address."""
    if not email:
        return ""
    return email.strip().lower()


class FieldCipher:
    """AES-SIV cipher for string fields, keyed by one secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Field encryption key is required")
        # AES-256-SIV takes a 64-byte key (two AES-256 keys)
        self._key = hashlib.sha512(secret.encode("utf-8")).digest()

    def encrypt(self, plaintext: str | None) -> str:
        """
        Encrypt a string field.

        Args:
            plaintext: Value to encrypt

        Returns:
            URL-safe base64 token, or "" for empty input
        """
        if not plaintext:
            return ""

        cipher = AES.new(self._key, AES.MODE_SIV)
        ciphertext, tag = cipher.encrypt_and_digest(plaintext.encode("utf-8"))
        return base64.urlsafe_b64encode(tag + ciphertext).decode("ascii")

    def decrypt_field(self, token: str | None) -> DecryptedField:
        """
        Decrypt a stored token without collapsing failures.

        Args:
            token: Stored token

        Returns:
            Tagged result distinguishing empty, decrypted and failed
        """
        if not token:
            return DecryptedField(DecryptStatus.EMPTY)

        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
            if len(raw) < TAG_SIZE:
                raise ValueError("Token too short")
            tag, ciphertext = raw[:TAG_SIZE], raw[TAG_SIZE:]
            cipher = AES.new(self._key, AES.MODE_SIV)
            plaintext = cipher.decrypt_and_verify(ciphertext, tag)
            return DecryptedField(DecryptStatus.DECRYPTED, plaintext.decode("utf-8"))
        except (ValueError, KeyError, binascii.Error, UnicodeError) as e:
            logger.warning("field_decryption_failed", error=str(e))
            return DecryptedField(DecryptStatus.FAILED)

    def decrypt(self, token: str | None) -> str:
        """
        Decrypt a stored token.

        Undecryptable tokens are logged and returned as "", the same value
        as an unset field.
        """
        return self.decrypt_field(token).value
