"""Wire-format DTOs (pydantic) for chat, image and speech operations."""

from .chat import (
    ChatCompletion,
    ChatMessage,
    ChatRequest,
    Choice,
    ContentItem,
    ImageUrl,
    ImageUrlContent,
    ResponseMessage,
    Role,
    TextContent,
    Usage,
)
from .images import ImageData, ImageRequest, ImageResults
from .models import ModelInfo, ModelList
from .speech import SpeechRequest

__all__ = [
    "ChatCompletion",
    "ChatMessage",
    "ChatRequest",
    "Choice",
    "ContentItem",
    "ImageUrl",
    "ImageUrlContent",
    "ResponseMessage",
    "Role",
    "TextContent",
    "Usage",
    "ImageData",
    "ImageRequest",
    "ImageResults",
    "ModelInfo",
    "ModelList",
    "SpeechRequest",
]
