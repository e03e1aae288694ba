"""Pydantic model for the ``audio/speech`` request body."""

from __future__ import annotations

from pydantic import BaseModel

from ...config.defaults import DEFAULT_TTS_MODEL, DEFAULT_TTS_VOICE


class SpeechRequest(BaseModel):
    model: str = DEFAULT_TTS_MODEL
    input: str
    voice: str = DEFAULT_TTS_VOICE

    def to_payload(self) -> dict:
        return self.model_dump()


__all__ = ["SpeechRequest"]
