"""
Normalized request error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the credential store, the
connection model and the request pipeline. Values are lowercase snake_case and
are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    PROVIDER = "provider"
    MALFORMED_RESPONSE = "malformed_response"
    DECRYPTION = "decryption"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
