"""
Structured request error exception types.

``ProviderError`` carries a normalized `ErrorCode` plus the context needed to
diagnose a failed call (provider, model, status, resolved URL). Each failure
category from the pipeline's classification has its own subclass so callers
can ``except`` on the category they care about.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured request failure with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for display.
        code: Normalized :class:`ErrorCode` classification for the failure.
        provider: Provider mode value of the connection (e.g. ``"OpenAi"``).
        model: Optional model name associated with the failure.
        status_code: HTTP status when the failure came from a response.
        url: Resolved endpoint URL when known.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.PROVIDER
    provider: Optional[str] = None
    model: Optional[str] = None
    status_code: Optional[int] = None
    url: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(ProviderError):
    """No connection, empty endpoint or otherwise unusable configuration."""

    code: ErrorCode = ErrorCode.CONFIGURATION


@dataclass
class TransportError(ProviderError):
    """DNS, connect, timeout or other failure below the HTTP layer."""

    code: ErrorCode = ErrorCode.TRANSPORT


@dataclass
class AuthenticationError(ProviderError):
    """HTTP 401 from the provider."""

    code: ErrorCode = ErrorCode.AUTH


@dataclass
class EndpointNotFoundError(ProviderError):
    """HTTP 404 from the provider, usually a template misconfiguration."""

    code: ErrorCode = ErrorCode.NOT_FOUND


@dataclass
class MalformedResponseError(ProviderError):
    """The call succeeded but the payload lacks the expected shape."""

    code: ErrorCode = ErrorCode.MALFORMED_RESPONSE


@dataclass
class DecryptionError(ProviderError):
    """A stored API key carries the encryption marker but cannot be decrypted."""

    code: ErrorCode = ErrorCode.DECRYPTION


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "EndpointNotFoundError",
    "MalformedResponseError",
    "DecryptionError",
]
