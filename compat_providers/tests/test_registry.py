"""Connection registry: active selections, lookups and JSON persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from compat_providers.base.credentials import EncryptionSettings
from compat_providers.config.defaults import AZURE_ENDPOINT_TEMPLATE, ENCRYPTION_MARKER, OPENAI_ENDPOINT_TEMPLATE
from compat_providers.connections import (
    ConnectionRegistry,
    OperationMode,
    ProviderMode,
    create_connection,
    default_connections_path,
)


@pytest.fixture()
def registry(encryption: EncryptionSettings) -> ConnectionRegistry:
    reg = ConnectionRegistry(encryption=encryption)
    reg.add(create_connection("OpenAi", name="OpenAI Chat", api_key="sk-one", encryption=encryption))
    reg.add(create_connection("Ollama", name="Local", encryption=encryption))
    reg.add(
        create_connection(
            "OpenAi", name="Images", is_image_generation=True, api_key="sk-img", encryption=encryption
        )
    )
    return reg


def test_load_missing_file_gives_empty_registry(tmp_path: Path) -> None:
    reg = ConnectionRegistry.load(tmp_path / "missing.json")
    assert len(reg.connections) == 0
    assert reg.active_connection is None
    assert reg.active_image_connection is None
    assert not reg.has_connections
    assert not reg.is_available


def test_load_corrupt_file_gives_empty_registry(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    reg = ConnectionRegistry.load(path)
    assert reg.connections == []


def test_out_of_range_index_resets_to_zero(registry: ConnectionRegistry) -> None:
    registry.active_connection_index = 7
    assert registry.active_connection is registry.connections[0]
    assert registry.active_connection_index == 0


def test_setter_selects_by_identity(registry: ConnectionRegistry) -> None:
    local = registry.get("Local")
    registry.active_connection = local
    assert registry.active_connection_index == 1
    assert registry.active_connection is local


def test_setter_ignores_foreign_connection(registry: ConnectionRegistry) -> None:
    registry.active_connection_index = 1
    registry.active_connection = create_connection("Ollama", name="Local")
    assert registry.active_connection_index == 1


def test_active_indices_are_independent(registry: ConnectionRegistry) -> None:
    registry.active_image_connection = registry.get("Images")
    assert registry.active_image_connection_index == 2
    assert registry.active_connection_index == 0
    assert registry.is_image_connection_available


def test_operation_mode_views(registry: ConnectionRegistry) -> None:
    assert [c.name for c in registry.completion_connections] == ["OpenAI Chat", "Local"]
    assert [c.name for c in registry.image_generation_connections] == ["Images"]
    registry.connections[1].operation_mode = OperationMode.IMAGE_GENERATION
    assert [c.name for c in registry.image_generation_connections] == ["Local", "Images"]


def test_get_by_name_is_case_insensitive_first_match(registry: ConnectionRegistry) -> None:
    registry.add(create_connection("Nvidia", name="local"))
    assert registry.get("LOCAL") is registry.connections[1]
    assert registry.get("nope") is None


def test_get_by_index(registry: ConnectionRegistry) -> None:
    assert registry.get(2).name == "Images"
    assert registry.get(3) is None
    assert registry.get(-1) is None


def test_remove(registry: ConnectionRegistry) -> None:
    local = registry.get("Local")
    assert registry.remove(local) is True
    assert registry.remove(local) is False
    assert len(registry) == 2


def test_is_available_requires_endpoint(encryption: EncryptionSettings) -> None:
    reg = ConnectionRegistry(encryption=encryption)
    reg.add(create_connection(ProviderMode.AZURE_OPENAI, name="No endpoint yet"))
    assert reg.has_connections
    assert not reg.is_available


def test_save_and_load_round_trip(registry: ConnectionRegistry, encryption: EncryptionSettings, tmp_path: Path) -> None:
    registry.active_connection_index = 1
    registry.active_image_connection_index = 2
    path = tmp_path / "nested" / "_AiConnections.json"
    registry.save(path)

    raw = path.read_text(encoding="utf-8")
    assert "sk-one" not in raw
    assert "\n  " in raw  # indented
    doc = json.loads(raw)
    assert doc["ActiveConnectionIndex"] == 1
    assert doc["ActiveImageConnectionIndex"] == 2
    first = doc["Connections"][0]
    assert set(first) == {
        "Name",
        "EncryptedApiKey",
        "Endpoint",
        "EndpointTemplate",
        "ModelId",
        "ApiVersion",
        "ProviderMode",
        "OperationMode",
    }
    assert first["EncryptedApiKey"].endswith(ENCRYPTION_MARKER)
    assert first["ProviderMode"] == "OpenAi"
    assert doc["Connections"][2]["OperationMode"] == "ImageGeneration"

    loaded = ConnectionRegistry.load(path, encryption)
    assert [c.name for c in loaded] == ["OpenAI Chat", "Local", "Images"]
    assert loaded.active_connection.name == "Local"
    assert loaded.active_image_connection.name == "Images"
    assert loaded.get("OpenAI Chat").api_key == "sk-one"
    assert loaded.get("Local").provider_mode is ProviderMode.OLLAMA


def test_plaintext_key_in_file_is_encrypted_on_save(encryption: EncryptionSettings, tmp_path: Path) -> None:
    path = tmp_path / "plain.json"
    path.write_text(
        json.dumps(
            {
                "ActiveConnectionIndex": 0,
                "ActiveImageConnectionIndex": 0,
                "Connections": [
                    {
                        "Name": "Hand edited",
                        "EncryptedApiKey": "sk-handwritten",
                        "Endpoint": "https://api.openai.com/v1/",
                        "ProviderMode": "OpenAi",
                        "OperationMode": "Completions",
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    reg = ConnectionRegistry.load(path, encryption)
    assert reg.active_connection.api_key == "sk-handwritten"
    reg.save(path)
    assert "sk-handwritten" not in path.read_text(encoding="utf-8")


def test_default_path_honours_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COMPAT_CONNECTIONS_FILE", str(tmp_path / "conns.json"))
    assert default_connections_path() == tmp_path / "conns.json"


def test_non_list_connections_give_empty_registry(tmp_path: Path) -> None:
    path = tmp_path / "shape.json"
    path.write_text(json.dumps({"ActiveConnectionIndex": 0, "Connections": 5}), encoding="utf-8")
    reg = ConnectionRegistry.load(path)
    assert reg.connections == []
    assert reg.active_connection is None


def test_non_string_fields_are_coerced(encryption: EncryptionSettings, tmp_path: Path) -> None:
    path = tmp_path / "types.json"
    path.write_text(
        json.dumps({"Connections": [{"Name": 123, "ModelId": 7, "Endpoint": None, "ApiVersion": 2024}]}),
        encoding="utf-8",
    )
    reg = ConnectionRegistry.load(path, encryption)
    conn = reg.get("123")
    assert conn is not None
    assert conn.model_id == "7"
    assert conn.endpoint == ""
    assert conn.api_version == "2024"
    assert reg.get("abc") is None


def test_missing_template_uses_provider_default(encryption: EncryptionSettings) -> None:
    reg = ConnectionRegistry.from_document(
        {
            "Connections": [
                {"Name": "az", "Endpoint": "https://res.openai.azure.com", "ProviderMode": "AzureOpenAi"},
                {"Name": "plain", "Endpoint": "https://api.openai.com/v1", "ProviderMode": "OpenAi"},
            ]
        },
        encryption,
    )
    assert reg.get("az").endpoint_template == AZURE_ENDPOINT_TEMPLATE
    assert reg.get("plain").endpoint_template == OPENAI_ENDPOINT_TEMPLATE
