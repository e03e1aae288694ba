"""Provider defaults and connection construction.

``PROVIDER_DEFAULTS`` is the single table of per-provider endpoint, model and
template defaults. ``create_connection`` turns a provider mode (enum or
persisted string) into a ready-to-configure :class:`Connection`.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Union

from ..base.credentials import EncryptionSettings
from ..config.defaults import (
    AZURE_DEFAULT_API_VERSION,
    AZURE_ENDPOINT_TEMPLATE,
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    NVIDIA_DEFAULT_BASE_URL,
    NVIDIA_DEFAULT_MODEL,
    OLLAMA_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_IMAGE_MODEL,
    OPENAI_DEFAULT_MODEL,
    OPENAI_ENDPOINT_TEMPLATE,
    XAI_DEFAULT_BASE_URL,
    XAI_DEFAULT_MODEL,
)
from .connection import Connection
from .modes import OperationMode, ProviderMode

GENERATED_ID_LENGTH = 5


@dataclass(frozen=True)
class ProviderDefaults:
    label: str
    endpoint: str
    model_id: str
    endpoint_template: str = OPENAI_ENDPOINT_TEMPLATE
    api_version: Optional[str] = None
    image_model_id: Optional[str] = None


# Azure has no public default endpoint; callers set their resource URL.
PROVIDER_DEFAULTS: Dict[ProviderMode, ProviderDefaults] = {
    ProviderMode.OPENAI: ProviderDefaults(
        label="OpenAI",
        endpoint=OPENAI_DEFAULT_BASE_URL,
        model_id=OPENAI_DEFAULT_MODEL,
        image_model_id=OPENAI_DEFAULT_IMAGE_MODEL,
    ),
    ProviderMode.AZURE_OPENAI: ProviderDefaults(
        label="Azure OpenAI",
        endpoint="",
        model_id=OPENAI_DEFAULT_MODEL,
        endpoint_template=AZURE_ENDPOINT_TEMPLATE,
        api_version=AZURE_DEFAULT_API_VERSION,
        image_model_id=OPENAI_DEFAULT_IMAGE_MODEL,
    ),
    ProviderMode.OLLAMA: ProviderDefaults(
        label="Ollama",
        endpoint=OLLAMA_DEFAULT_BASE_URL,
        model_id=OLLAMA_DEFAULT_MODEL,
    ),
    ProviderMode.NVIDIA: ProviderDefaults(
        label="Nvidia",
        endpoint=NVIDIA_DEFAULT_BASE_URL,
        model_id=NVIDIA_DEFAULT_MODEL,
    ),
    ProviderMode.XOPENAI: ProviderDefaults(
        label="X.AI",
        endpoint=XAI_DEFAULT_BASE_URL,
        model_id=XAI_DEFAULT_MODEL,
    ),
    ProviderMode.DEEPSEEK: ProviderDefaults(
        label="DeepSeek",
        endpoint=DEEPSEEK_DEFAULT_BASE_URL,
        model_id=DEEPSEEK_DEFAULT_MODEL,
    ),
    ProviderMode.OTHER: ProviderDefaults(
        label="Other",
        endpoint=OPENAI_DEFAULT_BASE_URL,
        model_id=OPENAI_DEFAULT_MODEL,
    ),
}


def generate_connection_name(mode: ProviderMode) -> str:
    """Return a display name like ``"Ollama Connection 3fa9c"``."""
    label = PROVIDER_DEFAULTS[mode].label
    return f"{label} Connection {uuid.uuid4().hex[:GENERATED_ID_LENGTH]}"


def create_connection(
    mode: Union[ProviderMode, str],
    name: Optional[str] = None,
    is_image_generation: bool = False,
    *,
    api_key: Optional[str] = None,
    encryption: Optional[EncryptionSettings] = None,
) -> Connection:
    """Create a connection pre-populated with the defaults for ``mode``.

    Parameters
    ----------
    mode:
        Provider tag, as enum or persisted string. Unrecognized strings yield
        an OpenAI connection.
    name:
        Display name; a unique one is generated when omitted.
    is_image_generation:
        Mark the connection for image operations and use the provider's image
        model when it has one.
    api_key:
        Optional key, stored encrypted when encryption is enabled.
    encryption:
        Credential settings; defaults to :class:`EncryptionSettings`.
    """
    provider = ProviderMode.parse(mode) or ProviderMode.OPENAI
    defaults = PROVIDER_DEFAULTS[provider]
    model_id = defaults.model_id
    if is_image_generation and defaults.image_model_id:
        model_id = defaults.image_model_id

    connection = Connection(
        name=name or generate_connection_name(provider),
        endpoint=defaults.endpoint,
        endpoint_template=defaults.endpoint_template,
        model_id=model_id,
        api_version=defaults.api_version,
        provider_mode=provider,
        operation_mode=OperationMode.IMAGE_GENERATION if is_image_generation else OperationMode.COMPLETIONS,
        encryption=encryption or EncryptionSettings(),
    )
    if api_key:
        connection.api_key = api_key
    return connection


__all__ = [
    "GENERATED_ID_LENGTH",
    "PROVIDER_DEFAULTS",
    "ProviderDefaults",
    "create_connection",
    "generate_connection_name",
]
