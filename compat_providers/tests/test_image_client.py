"""Image generation client: generations, variations and result helpers."""

from __future__ import annotations

import base64
from pathlib import Path

import httpx
import pytest
import respx

from compat_providers.base.credentials import EncryptionSettings
from compat_providers.base.errors import ConfigurationError, MalformedResponseError
from compat_providers.connections import ConnectionRegistry, create_connection
from compat_providers.images import ImageGenerationClient, ImageOutputFormat, ImagePrompt, ImageResult
from compat_providers.tests.utils import sent_json

GENERATIONS_URL = "https://api.openai.com/v1/images/generations"
VARIATIONS_URL = "https://api.openai.com/v1/images/variations"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture()
def client(encryption: EncryptionSettings) -> ImageGenerationClient:
    conn = create_connection("OpenAi", name="img", is_image_generation=True, api_key="sk-img", encryption=encryption)
    return ImageGenerationClient(conn)


@pytest.mark.asyncio
@respx.mock
async def test_generate_url_images(client: ImageGenerationClient) -> None:
    route = respx.post(GENERATIONS_URL).mock(
        return_value=httpx.Response(
            200,
            json={
                "created": 1700000000,
                "data": [{"url": "https://cdn.test/1.png", "revised_prompt": "A red fox, watercolor"}],
            },
        )
    )
    prompt = ImagePrompt(prompt="A fox")

    assert await client.generate(prompt) is True

    assert sent_json(route) == {
        "prompt": "A fox",
        "model": "dall-e-3",
        "n": 1,
        "size": "1024x1024",
        "style": "vivid",
        "quality": "auto",
        "response_format": "url",
    }
    assert prompt.first_image_url == "https://cdn.test/1.png"
    assert prompt.revised_prompt == "A red fox, watercolor"
    assert prompt.byte_data is None
    assert not client.is_error


@pytest.mark.asyncio
@respx.mock
async def test_generate_base64_images(client: ImageGenerationClient) -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("ascii")
    route = respx.post(GENERATIONS_URL).mock(
        return_value=httpx.Response(200, json={"data": [{"b64_json": encoded}]})
    )
    prompt = ImagePrompt(prompt="A fox", image_count=1)

    assert await client.generate(prompt, ImageOutputFormat.BASE64) is True

    assert sent_json(route)["response_format"] == "b64_json"
    assert prompt.base64_data == encoded
    assert prompt.byte_data == PNG_BYTES


@pytest.mark.asyncio
@respx.mock
async def test_gpt_image_format_omits_response_format(client: ImageGenerationClient) -> None:
    route = respx.post(GENERATIONS_URL).mock(
        return_value=httpx.Response(200, json={"data": [{"b64_json": "AAAA"}]})
    )
    prompt = ImagePrompt(prompt="A fox", model="gpt-image-1", image_background="transparent")

    assert await client.generate(prompt, ImageOutputFormat.NONE) is True

    body = sent_json(route)
    assert "response_format" not in body
    assert "style" not in body
    assert body["output_format"] == "png"
    assert body["background"] == "transparent"
    assert body["model"] == "gpt-image-1"


@pytest.mark.asyncio
@respx.mock
async def test_generate_failure_sets_error(client: ImageGenerationClient) -> None:
    respx.post(GENERATIONS_URL).mock(
        return_value=httpx.Response(400, json={"error": {"message": "Your request was rejected"}})
    )
    prompt = ImagePrompt(prompt="A fox")
    assert await client.generate(prompt) is False
    assert client.error_message == "AI request failed: Your request was rejected"
    assert prompt.images == []


@pytest.mark.asyncio
@respx.mock
async def test_generate_without_data_is_malformed(client: ImageGenerationClient) -> None:
    respx.post(GENERATIONS_URL).mock(return_value=httpx.Response(200, json={"created": 1}))
    assert await client.generate(ImagePrompt(prompt="A fox")) is False
    assert isinstance(client.last_error, MalformedResponseError)


@pytest.mark.asyncio
async def test_generate_requires_prompt(client: ImageGenerationClient) -> None:
    assert await client.generate(ImagePrompt()) is False
    assert isinstance(client.last_error, ConfigurationError)


@pytest.mark.asyncio
@respx.mock
async def test_variation_uploads_multipart_form(client: ImageGenerationClient, tmp_path: Path) -> None:
    source = tmp_path / "fox.png"
    source.write_bytes(PNG_BYTES)
    route = respx.post(VARIATIONS_URL).mock(
        return_value=httpx.Response(200, json={"data": [{"url": "https://cdn.test/v1.png"}]})
    )
    prompt = ImagePrompt(variation_image_path=str(source), image_size="512x512")

    assert await client.create_variation(prompt) is True

    request = route.calls.last.request
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    body = request.content
    assert b'name="image"; filename="fox.png"' in body
    assert b"Content-Type: image/png" in body
    assert PNG_BYTES in body
    assert b'name="size"' in body and b"512x512" in body
    assert b'name="response_format"' in body
    assert prompt.first_image_url == "https://cdn.test/v1.png"


@pytest.mark.asyncio
async def test_variation_requires_image(client: ImageGenerationClient, tmp_path: Path) -> None:
    prompt = ImagePrompt(variation_image_path=str(tmp_path / "missing.png"))
    assert await client.create_variation(prompt) is False
    assert isinstance(client.last_error, ConfigurationError)


def test_client_uses_active_image_connection(encryption: EncryptionSettings) -> None:
    registry = ConnectionRegistry(encryption=encryption)
    chat = registry.add(create_connection("OpenAi", name="chat"))
    images = registry.add(create_connection("OpenAi", name="images", is_image_generation=True))
    registry.active_connection = chat
    registry.active_image_connection = images
    assert ImageGenerationClient(registry).connection is images


def test_client_requires_a_connection() -> None:
    with pytest.raises(ConfigurationError):
        ImageGenerationClient(ConnectionRegistry())


def test_byte_data_decodes_data_urls() -> None:
    encoded = base64.b64encode(PNG_BYTES).decode("ascii")
    result = ImageResult(base64_data=f"data:image/png;base64,{encoded}")
    assert result.byte_data == PNG_BYTES
    assert ImageResult(base64_data="%%%not base64").byte_data is None


@pytest.mark.asyncio
async def test_unreadable_variation_image_is_reported(
    client: ImageGenerationClient, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = tmp_path / "locked.png"
    source.write_bytes(PNG_BYTES)

    def _deny(self: Path) -> bytes:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", _deny)
    prompt = ImagePrompt(variation_image_path=str(source))
    assert await client.create_variation(prompt) is False
    assert isinstance(client.last_error, ConfigurationError)
    assert "locked.png" in client.error_message
