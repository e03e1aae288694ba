"""Provider and operation mode tags.

``ProviderMode`` drives the endpoint template and auth header style of a
connection; ``OperationMode`` lets a registry partition connections by purpose.
Values match the persisted configuration document.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ProviderMode(str, Enum):
    OPENAI = "OpenAi"
    AZURE_OPENAI = "AzureOpenAi"
    OLLAMA = "Ollama"
    NVIDIA = "Nvidia"
    XOPENAI = "XOpenAi"
    DEEPSEEK = "DeepSeek"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | ProviderMode | None") -> Optional["ProviderMode"]:
        """Return the mode for a persisted value (case-insensitive) or ``None``."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        wanted = str(value).strip().lower()
        for mode in cls:
            if mode.value.lower() == wanted or mode.name.lower() == wanted:
                return mode
        return None

    @property
    def uses_api_key_header(self) -> bool:
        """Azure authenticates with an ``api-key`` header instead of Bearer."""
        return self is ProviderMode.AZURE_OPENAI


class OperationMode(str, Enum):
    COMPLETIONS = "Completions"
    IMAGE_GENERATION = "ImageGeneration"

    @classmethod
    def parse(cls, value: "str | OperationMode | None") -> Optional["OperationMode"]:
        if isinstance(value, cls):
            return value
        if not value:
            return None
        wanted = str(value).strip().lower()
        for mode in cls:
            if mode.value.lower() == wanted or mode.name.lower() == wanted:
                return mode
        return None


__all__ = ["ProviderMode", "OperationMode"]
