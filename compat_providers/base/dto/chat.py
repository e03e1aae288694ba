"""
Pydantic models for the OpenAI-compatible chat completions wire format.

Purpose
-------
Define the request message shapes sent to providers and the tolerant
response shapes parsed from them. Every response field is optional because
OpenAI-compatible servers differ in what they return.

Wire quirk
----------
Structured message content must be serialized as an array even when there
is a single item; ``ChatMessage`` serializes a lone content item as a
one-element list.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer


Role = Literal["system", "user", "assistant"]


class TextContent(BaseModel):
    """A ``{"type": "text", "text": ...}`` content item."""

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    url: str


class ImageUrlContent(BaseModel):
    """A ``{"type": "image_url", "image_url": {"url": ...}}`` content item.

    ``url`` is either a remote URL or a ``data:<mime>;base64,<data>`` payload.
    """

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl

    @classmethod
    def from_url(cls, url: str) -> "ImageUrlContent":
        return cls(image_url=ImageUrl(url=url))


ContentItem = Union[TextContent, ImageUrlContent]


class ChatMessage(BaseModel):
    """A chat message with plain text or structured content.

    Rules:
        - ``content`` is a string, a single content item, or a list of items.
        - A single item is emitted as a one-element array on the wire.
    """

    role: Role
    content: Union[str, ContentItem, List[ContentItem]] = ""

    @classmethod
    def system(cls, text: str) -> "ChatMessage":
        return cls(role="system", content=text)

    @classmethod
    def user(cls, content: Union[str, TextContent, ImageUrlContent, List[Any]]) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, text: str) -> "ChatMessage":
        return cls(role="assistant", content=text)

    @property
    def items(self) -> List[Union[TextContent, ImageUrlContent]]:
        """Structured content as a list (empty for plain text)."""
        if isinstance(self.content, str):
            return []
        if isinstance(self.content, list):
            return list(self.content)
        return [self.content]

    @property
    def text(self) -> str:
        """Plain text view: the string content or the joined text items."""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(i.text for i in self.items if isinstance(i, TextContent))

    @property
    def binary_key(self) -> Optional[Tuple[str, ...]]:
        """Identity of the image payloads carried by this message, if any."""
        urls = tuple(i.image_url.url for i in self.items if isinstance(i, ImageUrlContent))
        return urls or None

    def is_duplicate_of(self, other: "ChatMessage") -> bool:
        """Dedup rule: same image payloads, else same non-empty text."""
        key = self.binary_key
        if key is not None:
            return other.binary_key == key
        text = self.text
        return bool(text) and other.text == text

    @field_serializer("content")
    def _serialize_content(self, content: Any) -> Any:
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            return [item.model_dump() for item in content]
        return [content.model_dump()]


class ChatRequest(BaseModel):
    """Body of a ``chat/completions`` request."""

    model: Optional[str] = None
    messages: List[ChatMessage] = Field(default_factory=list)
    stream: bool = False
    temperature: Optional[float] = None
    top_p: Optional[float] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[Any] = None

    @property
    def text(self) -> str:
        """Reply text; list content keeps only the items that carry text."""
        content = self.content
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = [
                item["text"]
                for item in content
                if isinstance(item, dict) and isinstance(item.get("text"), str)
            ]
            return "\n".join(parts)
        return str(content)

    def to_chat_message(self) -> ChatMessage:
        """Convert to a plain-text assistant :class:`ChatMessage` for the history."""
        return ChatMessage(role="assistant", content=self.text)


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: Optional[int] = None
    message: Optional[ResponseMessage] = None
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ChatCompletion(BaseModel):
    """Normalized chat completion response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[Any] = None

    @property
    def first_message(self) -> Optional[ResponseMessage]:
        if not self.choices:
            return None
        return self.choices[0].message


__all__ = [
    "Role",
    "TextContent",
    "ImageUrl",
    "ImageUrlContent",
    "ContentItem",
    "ChatMessage",
    "ChatRequest",
    "ResponseMessage",
    "Choice",
    "Usage",
    "ChatCompletion",
]
