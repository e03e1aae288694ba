"""Credential store public surface."""

from .settings import EncryptionSettings
from .store import CredentialStore, redact_key

__all__ = ["CredentialStore", "EncryptionSettings", "redact_key"]
