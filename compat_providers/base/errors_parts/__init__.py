"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `compat_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    AuthenticationError,
    ConfigurationError,
    DecryptionError,
    EndpointNotFoundError,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from .classification import classify_status, error_message_from_payload, parse_error_body

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
