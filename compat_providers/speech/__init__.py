"""Text-to-speech client."""

from .client import TextToSpeechClient, TextToSpeechVoices

__all__ = ["TextToSpeechClient", "TextToSpeechVoices"]
