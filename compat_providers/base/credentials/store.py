"""Credential store: API key encryption at rest.

Purpose
-------
Make API keys safe to persist in plain JSON configuration files. Stored keys
are Fernet tokens, hex encoded, followed by a marker suffix (``@|-|@`` by
default) so encrypted values are recognized without attempting decryption.

Semantics
---------
- ``encrypt`` is idempotent: values that already end with the marker are
  returned unchanged.
- ``decrypt`` accepts either form. Values without the marker are treated as
  plaintext. ``%NAME%`` environment references in the result are expanded.
- ``migrate_if_plaintext`` is the explicit lazy-migration step: it returns
  the encrypted stored form for a plaintext value. Connections call it when a
  key is read so the in-memory stored copy becomes encrypted; nothing is
  written to disk here.

External dependencies
---------------------
- ``cryptography`` (Fernet) for authenticated symmetric encryption.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from ...config.env import expand_env_vars
from ..errors import DecryptionError
from .settings import EncryptionSettings


class CredentialStore:
    """Encrypt and decrypt API keys according to :class:`EncryptionSettings`."""

    def __init__(self, settings: Optional[EncryptionSettings] = None) -> None:
        self.settings = settings or EncryptionSettings()
        self._fernet: Fernet | None = None

    def _get_fernet(self) -> Fernet:
        """Return (and cache) the Fernet helper derived from the secret."""
        if self._fernet is None:
            digest = hashlib.sha256(self.settings.secret).digest()
            self._fernet = Fernet(base64.urlsafe_b64encode(digest))
        return self._fernet

    def is_encrypted(self, value: Optional[str]) -> bool:
        """Return True when ``value`` carries the encryption marker."""
        return bool(value) and value.endswith(self.settings.marker)

    def encrypt(self, value: Optional[str]) -> str:
        """Return the stored form of ``value``.

        No-op when encryption is disabled, the value is empty, or it is
        already encrypted.
        """
        if not self.settings.enabled or not value or self.is_encrypted(value):
            return value or ""
        token = self._get_fernet().encrypt(value.encode("utf-8"))
        return token.hex() + self.settings.marker

    def decrypt(self, value: Optional[str]) -> str:
        """Return the plaintext key for a stored value.

        Raises:
            DecryptionError: the value carries the marker but the payload is
                not valid hex or was not produced with this secret.
        """
        if not value or not self.settings.enabled:
            return value or ""
        key = value
        if self.is_encrypted(value):
            payload = value[: -len(self.settings.marker)]
            try:
                token = bytes.fromhex(payload)
                key = self._get_fernet().decrypt(token).decode("utf-8")
            except (ValueError, binascii.Error, InvalidToken, UnicodeDecodeError) as exc:
                raise DecryptionError(
                    message="Unable to decrypt stored API key: invalid payload or encryption key mismatch.",
                    raw=exc,
                ) from exc
        if "%" in key:
            key = expand_env_vars(key)
        return key

    def migrate_if_plaintext(self, value: Optional[str]) -> str:
        """Return ``value`` in stored (encrypted) form if it is plaintext.

        Already encrypted or empty values, and any value while encryption is
        disabled, are returned unchanged.
        """
        return self.encrypt(value)


def redact_key(value: Optional[str], keep: int) -> str:
    """Return the first ``keep`` characters of a key followed by ``...``."""
    return f"{(value or '')[:keep]}..."


__all__ = ["CredentialStore", "redact_key"]
