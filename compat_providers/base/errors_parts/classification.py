"""
Error classification helpers for provider HTTP responses.

Implements status-to-code mapping and the best-effort extraction of the
provider supplied error text. Providers disagree on the error body shape:
most send ``{"error": {"message": ...}}`` while some send
``{"error": "..."}``. Both are accepted; anything else yields ``None``.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from .error_code import ErrorCode


def classify_status(status_code: int) -> ErrorCode:
    """Map a non-success HTTP status to its :class:`ErrorCode`.

    Only 401 and 404 have dedicated categories; every other failure status is
    a generic provider error.
    """
    if status_code == 401:
        return ErrorCode.AUTH
    if status_code == 404:
        return ErrorCode.NOT_FOUND
    return ErrorCode.PROVIDER


def error_message_from_payload(payload: Any) -> Optional[str]:
    """Return the provider error message from a decoded JSON body.

    Checks ``error.message`` first, then ``error`` as a plain string.
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str):
            return message
        return None
    if isinstance(error, str):
        return error
    return None


def parse_error_body(body: str) -> Optional[str]:
    """Decode a raw response body and extract the provider error message.

    Returns ``None`` for empty or non-JSON bodies.
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    return error_message_from_payload(payload)


__all__ = [
    "classify_status",
    "error_message_from_payload",
    "parse_error_body",
]
