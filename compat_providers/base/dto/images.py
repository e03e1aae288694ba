"""
Pydantic models for the image generation endpoints.

``ImageRequest`` mirrors the ``images/generations`` body. Optional fields set
to ``None`` are omitted from the payload; gpt-image models reject
``response_format`` and ``style``, dall-e models reject ``output_format``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config.defaults import (
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_IMAGE_SIZE,
    OPENAI_DEFAULT_IMAGE_MODEL,
)


class ImageRequest(BaseModel):
    prompt: str
    model: Optional[str] = OPENAI_DEFAULT_IMAGE_MODEL
    n: int = 1
    size: str = DEFAULT_IMAGE_SIZE
    style: Optional[str] = None
    quality: Optional[str] = DEFAULT_IMAGE_QUALITY
    background: Optional[str] = None
    response_format: Optional[str] = None
    output_format: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class ImageData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImageResults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    created: Optional[int] = None
    data: List[ImageData] = Field(default_factory=list)


__all__ = ["ImageRequest", "ImageData", "ImageResults"]
