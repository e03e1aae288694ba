"""compat_providers package

Unified client core for OpenAI-compatible AI services: OpenAI, Azure OpenAI,
Ollama, Nvidia NIM, X.AI, DeepSeek and any server speaking the OpenAI wire
protocol.

Public API (re-exported):
    - Version: ``__version__``
    - Connections: :class:`Connection`, :class:`ConnectionRegistry`,
      :class:`ProviderMode`, :class:`OperationMode`, :func:`create_connection`
    - Credentials: :class:`EncryptionSettings`, :class:`CredentialStore`
    - Pipeline: :class:`RequestPipeline`, :class:`ChatMessage`
    - Clients: :class:`ChatClient`, :class:`ImageGenerationClient`,
      :class:`TextToSpeechClient`
    - Errors: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`

Example::

    from compat_providers import ChatClient, create_connection

    conn = create_connection("OpenAi", api_key="%OPENAI_API_KEY%")
    reply = await ChatClient(conn).complete("Hello")
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.credentials import CredentialStore, EncryptionSettings
from .base.dto import ChatMessage, ImageUrlContent, TextContent
from .base.errors import (
    AuthenticationError,
    ConfigurationError,
    DecryptionError,
    EndpointNotFoundError,
    ErrorCode,
    MalformedResponseError,
    ProviderError,
    TransportError,
)
from .base.logging import configure_logger, get_logger
from .base.pipeline import RequestPipeline
from .chat import ChatClient
from .connections import (
    Connection,
    ConnectionRegistry,
    OperationMode,
    ProviderMode,
    create_connection,
)
from .images import ImageGenerationClient, ImageOutputFormat, ImagePrompt, ImageResult
from .speech import TextToSpeechClient, TextToSpeechVoices

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Connections
    "Connection",
    "ConnectionRegistry",
    "OperationMode",
    "ProviderMode",
    "create_connection",
    # Credentials
    "CredentialStore",
    "EncryptionSettings",
    # Pipeline / messages
    "RequestPipeline",
    "ChatMessage",
    "TextContent",
    "ImageUrlContent",
    # Clients
    "ChatClient",
    "ImageGenerationClient",
    "ImageOutputFormat",
    "ImagePrompt",
    "ImageResult",
    "TextToSpeechClient",
    "TextToSpeechVoices",
    # Errors
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "EndpointNotFoundError",
    "MalformedResponseError",
    "DecryptionError",
    # Cancellation / logging
    "CancellationToken",
    "CancelledError",
    "configure_logger",
    "get_logger",
]
