"""compat_providers.config.defaults
===============================

Central place for small, stable default values used across the
compat_providers package. These defaults can be overridden via environment
variables or explicit construction arguments, but provide sensible fallbacks
for local development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep the connection, credential and pipeline layers free of magic literals.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Endpoint templates ----
# Positional slots: {0} endpoint, {1} operation segment, {2} model/deployment id,
# {3} api version.
OPENAI_ENDPOINT_TEMPLATE = "{0}/{1}"
AZURE_ENDPOINT_TEMPLATE = "{0}/openai/deployments/{2}/{1}?api-version={3}"
# Azure's unified surface accepts the OpenAI-style path under /openai/v1.
AZURE_V1_ENDPOINT_TEMPLATE = "{0}/openai/v1/{1}"
AZURE_V1_PATH_SEGMENT = "/openai/v1"
AZURE_DEFAULT_API_VERSION = "2024-04-01"


# ---- Provider-specific sane defaults ----
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"
OPENAI_DEFAULT_IMAGE_MODEL = "dall-e-3"
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1/"

OLLAMA_DEFAULT_MODEL = "llama3"
OLLAMA_DEFAULT_BASE_URL = "http://127.0.0.1:11434/v1/"

NVIDIA_DEFAULT_MODEL = "meta/llama-3.1-405b-instruct"
NVIDIA_DEFAULT_BASE_URL = "https://integrate.api.nvidia.com/v1/"

XAI_DEFAULT_MODEL = "grok-beta"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1/"

DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com"


# ---- Operation segments ----
CHAT_COMPLETIONS_SEGMENT = "chat/completions"
IMAGE_GENERATIONS_SEGMENT = "images/generations"
IMAGE_VARIATIONS_SEGMENT = "images/variations"
AUDIO_SPEECH_SEGMENT = "audio/speech"
MODELS_SEGMENT = "models"


# ---- Credential store ----
# Suffix marking a stored API key as encrypted.
ENCRYPTION_MARKER = "@|-|@"
# Fallback secret used when no application specific key is configured.
# Applications should override it via COMPAT_ENCRYPTION_KEY.
DEFAULT_ENCRYPTION_SECRET = bytes(
    [55, 233, 33, 44, 55, 100, 99, 21, 222, 55, 99, 122, 10, 43, 37, 53, 73, 99]
)
# Number of leading API key characters kept in captured request diagnostics.
REDACTED_KEY_PREFIX_LENGTH = 5


# ---- Registry persistence ----
DEFAULT_CONNECTIONS_FILE = "_AiConnections.json"


# ---- Operation payload defaults ----
DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_IMAGE_STYLE = "vivid"
DEFAULT_IMAGE_QUALITY = "auto"
DEFAULT_IMAGE_OUTPUT_FORMAT = "png"
DEFAULT_TTS_MODEL = "tts-1"
DEFAULT_TTS_VOICE = "echo"


# ---- HTTP ----
HTTP_DEFAULT_TIMEOUT_SECONDS = 100.0
HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


__all__ = [
    # Templates
    "OPENAI_ENDPOINT_TEMPLATE",
    "AZURE_ENDPOINT_TEMPLATE",
    "AZURE_V1_ENDPOINT_TEMPLATE",
    "AZURE_V1_PATH_SEGMENT",
    "AZURE_DEFAULT_API_VERSION",
    # Provider defaults
    "OPENAI_DEFAULT_MODEL",
    "OPENAI_DEFAULT_IMAGE_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_BASE_URL",
    "NVIDIA_DEFAULT_MODEL",
    "NVIDIA_DEFAULT_BASE_URL",
    "XAI_DEFAULT_MODEL",
    "XAI_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    # Segments
    "CHAT_COMPLETIONS_SEGMENT",
    "IMAGE_GENERATIONS_SEGMENT",
    "IMAGE_VARIATIONS_SEGMENT",
    "AUDIO_SPEECH_SEGMENT",
    "MODELS_SEGMENT",
    # Credentials
    "ENCRYPTION_MARKER",
    "DEFAULT_ENCRYPTION_SECRET",
    "REDACTED_KEY_PREFIX_LENGTH",
    # Persistence
    "DEFAULT_CONNECTIONS_FILE",
    # Payloads
    "DEFAULT_IMAGE_SIZE",
    "DEFAULT_IMAGE_STYLE",
    "DEFAULT_IMAGE_QUALITY",
    "DEFAULT_IMAGE_OUTPUT_FORMAT",
    "DEFAULT_TTS_MODEL",
    "DEFAULT_TTS_VOICE",
    # HTTP
    "HTTP_DEFAULT_TIMEOUT_SECONDS",
    "HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS",
]
