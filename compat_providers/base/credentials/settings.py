"""Encryption settings for the credential store.

``EncryptionSettings`` is an explicit value passed to the
:class:`~compat_providers.base.credentials.store.CredentialStore` and to each
:class:`~compat_providers.connections.connection.Connection`. Tests and
applications can use distinct secrets side by side.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...config import get_settings
from ...config.defaults import DEFAULT_ENCRYPTION_SECRET, ENCRYPTION_MARKER


@dataclass(frozen=True)
class EncryptionSettings:
    """Configuration of API key encryption.

    Attributes:
        enabled: When False both encrypt and decrypt are identity functions.
        secret: Application secret the symmetric key is derived from.
        marker: Suffix that identifies a stored value as encrypted.
    """

    enabled: bool = True
    secret: bytes = DEFAULT_ENCRYPTION_SECRET
    marker: str = ENCRYPTION_MARKER

    @classmethod
    def disabled(cls) -> "EncryptionSettings":
        return cls(enabled=False)

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "EncryptionSettings":
        """Build settings from ``COMPAT_USE_KEY_ENCRYPTION``/``COMPAT_ENCRYPTION_KEY``."""
        cfg = get_settings(overrides)
        secret = cfg.get("encryption_key")
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        return cls(
            enabled=bool(cfg.get("use_key_encryption", True)),
            secret=secret or DEFAULT_ENCRYPTION_SECRET,
        )


__all__ = ["EncryptionSettings"]
