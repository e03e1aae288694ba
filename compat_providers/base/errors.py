"""Unified request error taxonomy public surface.

This module re-exports the implementations under
``compat_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    AuthenticationError,
    ConfigurationError,
    DecryptionError,
    EndpointNotFoundError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from .errors_parts.classification import (
    classify_status,
    error_message_from_payload,
    parse_error_body,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "EndpointNotFoundError",
    "MalformedResponseError",
    "DecryptionError",
    "classify_status",
    "error_message_from_payload",
    "parse_error_body",
]
