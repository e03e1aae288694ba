"""Text-to-speech client."""

from __future__ import annotations

import httpx
import pytest
import respx

from compat_providers.connections import Connection
from compat_providers.speech import TextToSpeechClient, TextToSpeechVoices
from compat_providers.tests.utils import BASE_URL, sent_json

SPEECH_URL = f"{BASE_URL}/audio/speech"
AUDIO = b"ID3\x03\x00fake-mp3"


@pytest.fixture()
def client(connection: Connection) -> TextToSpeechClient:
    return TextToSpeechClient(connection)


@pytest.mark.asyncio
@respx.mock
async def test_convert_to_bytes_returns_audio(client: TextToSpeechClient) -> None:
    route = respx.post(SPEECH_URL).mock(
        return_value=httpx.Response(200, content=AUDIO, headers={"Content-Type": "audio/mpeg"})
    )

    audio = await client.convert_to_bytes("Hello world", TextToSpeechVoices.NOVA)

    assert audio == AUDIO
    assert sent_json(route) == {"model": "tts-1", "input": "Hello world", "voice": "nova"}
    assert route.calls.last.request.headers["content-type"] == "application/json"


@pytest.mark.asyncio
@respx.mock
async def test_default_voice_is_echo(client: TextToSpeechClient) -> None:
    route = respx.post(SPEECH_URL).mock(return_value=httpx.Response(200, content=AUDIO))
    response = await client.convert_to_response("Hi")
    assert response.status_code == 200
    assert sent_json(route)["voice"] == "echo"


@pytest.mark.asyncio
@respx.mock
async def test_failure_returns_none_and_sets_error(client: TextToSpeechClient) -> None:
    respx.post(SPEECH_URL).mock(return_value=httpx.Response(401, json={"error": {"message": "Incorrect API key"}}))
    assert await client.convert_to_bytes("Hi") is None
    assert client.is_error
    assert "Incorrect API key" in client.error_message


@pytest.mark.asyncio
async def test_empty_text_is_rejected(client: TextToSpeechClient) -> None:
    assert await client.convert_to_bytes("") is None
    assert client.error_message == "No text provided for speech conversion."


def test_voice_names() -> None:
    assert [v.value for v in TextToSpeechVoices] == ["echo", "alloy", "fable", "onyx", "nova", "shimmer"]
