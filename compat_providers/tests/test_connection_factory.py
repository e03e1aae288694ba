"""Provider defaults table and connection construction."""

from __future__ import annotations

import re

import pytest

from compat_providers.config.defaults import AZURE_ENDPOINT_TEMPLATE, OPENAI_ENDPOINT_TEMPLATE
from compat_providers.connections import (
    PROVIDER_DEFAULTS,
    OperationMode,
    ProviderMode,
    create_connection,
)


def test_every_mode_has_defaults() -> None:
    assert set(PROVIDER_DEFAULTS) == set(ProviderMode)


@pytest.mark.parametrize(
    "mode, endpoint, model",
    [
        (ProviderMode.OPENAI, "https://api.openai.com/v1/", "gpt-4o-mini"),
        (ProviderMode.OLLAMA, "http://127.0.0.1:11434/v1/", "llama3"),
        (ProviderMode.NVIDIA, "https://integrate.api.nvidia.com/v1/", "meta/llama-3.1-405b-instruct"),
        (ProviderMode.XOPENAI, "https://api.x.ai/v1/", "grok-beta"),
        (ProviderMode.DEEPSEEK, "https://api.deepseek.com", "deepseek-chat"),
    ],
)
def test_defaults_per_mode(mode: ProviderMode, endpoint: str, model: str) -> None:
    conn = create_connection(mode)
    assert conn.provider_mode is mode
    assert conn.endpoint == endpoint
    assert conn.model_id == model
    assert conn.endpoint_template == OPENAI_ENDPOINT_TEMPLATE
    assert conn.operation_mode is OperationMode.COMPLETIONS


def test_azure_defaults_need_endpoint() -> None:
    conn = create_connection(ProviderMode.AZURE_OPENAI)
    assert conn.is_empty
    assert conn.endpoint_template == AZURE_ENDPOINT_TEMPLATE
    assert conn.api_version == "2024-04-01"


def test_generated_names_are_unique() -> None:
    first = create_connection("Ollama")
    second = create_connection("Ollama")
    assert re.fullmatch(r"Ollama Connection [0-9a-f]{5}", first.name)
    assert first.name != second.name


def test_explicit_name_is_kept() -> None:
    assert create_connection("DeepSeek", name="Work").name == "Work"


def test_string_modes_are_case_insensitive() -> None:
    assert create_connection("azureopenai").provider_mode is ProviderMode.AZURE_OPENAI
    assert create_connection("XOpenAi").provider_mode is ProviderMode.XOPENAI


def test_unknown_string_mode_yields_openai_connection() -> None:
    conn = create_connection("SomethingElse")
    assert conn.provider_mode is ProviderMode.OPENAI
    assert conn.endpoint == "https://api.openai.com/v1/"


def test_image_generation_connection_uses_image_model() -> None:
    conn = create_connection(ProviderMode.OPENAI, is_image_generation=True)
    assert conn.operation_mode is OperationMode.IMAGE_GENERATION
    assert conn.model_id == "dall-e-3"


def test_api_key_is_stored_encrypted(encryption) -> None:
    conn = create_connection("OpenAi", api_key="sk-live", encryption=encryption)
    assert conn.stored_api_key != "sk-live"
    assert conn.api_key == "sk-live"
