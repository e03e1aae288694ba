"""Text-to-speech client for the ``audio/speech`` endpoint."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from ..base.cancellation import CancellationToken
from ..base.dto import SpeechRequest
from ..base.errors import ConfigurationError
from ..base.facade import AiClientBase
from ..config.defaults import AUDIO_SPEECH_SEGMENT, DEFAULT_TTS_MODEL


class TextToSpeechVoices(str, Enum):
    ECHO = "echo"
    ALLOY = "alloy"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


def _voice_name(voice: Union[TextToSpeechVoices, str]) -> str:
    return voice.value if isinstance(voice, TextToSpeechVoices) else str(voice)


class TextToSpeechClient(AiClientBase):
    """Convert text to audio; the response body is the raw audio stream."""

    async def convert_to_response(
        self,
        text: str,
        voice: Union[TextToSpeechVoices, str] = TextToSpeechVoices.ECHO,
        *,
        model: str = DEFAULT_TTS_MODEL,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[Any]:
        """Return the successful HTTP response (``.content`` is the audio), or ``None``."""
        self.set_error()
        if not text:
            error = ConfigurationError(message="No text provided for speech conversion.")
            self.set_error(error.message, error)
            return None
        request = SpeechRequest(model=model, input=text, voice=_voice_name(voice))
        response = await self.pipeline.send_json_request_to_response(
            request.to_payload(),
            AUDIO_SPEECH_SEGMENT,
            timeout_seconds=timeout_seconds,
            cancel_token=cancel_token,
        )
        if response is None:
            self._record_pipeline_failure()
        return response

    async def convert_to_bytes(
        self,
        text: str,
        voice: Union[TextToSpeechVoices, str] = TextToSpeechVoices.ECHO,
        *,
        model: str = DEFAULT_TTS_MODEL,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[bytes]:
        """Return the audio bytes, or ``None`` on failure."""
        response = await self.convert_to_response(
            text, voice, model=model, timeout_seconds=timeout_seconds, cancel_token=cancel_token
        )
        if response is None:
            return None
        return response.content


__all__ = ["TextToSpeechClient", "TextToSpeechVoices"]
