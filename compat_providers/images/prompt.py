"""Image prompt and result containers.

``ImagePrompt`` carries the generation parameters in and the generated
images out. Base64 results may be bare base64 (``b64_json`` responses) or a
``data:<mime>;base64,<data>`` URL; ``byte_data`` decodes both.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..config.defaults import (
    DEFAULT_IMAGE_OUTPUT_FORMAT,
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_IMAGE_STYLE,
)


class ImageOutputFormat(str, Enum):
    """How generated images are returned.

    ``NONE`` is for models (gpt-image) that reject ``response_format`` and
    always return base64; the file format is sent as ``output_format``.
    """

    URL = "url"
    BASE64 = "b64_json"
    NONE = "none"


@dataclass
class ImageResult:
    url: Optional[str] = None
    base64_data: Optional[str] = None
    revised_prompt: Optional[str] = None

    @property
    def byte_data(self) -> Optional[bytes]:
        """Decoded image bytes, ``None`` for URL-only or undecodable results."""
        data = self.base64_data
        if not data:
            return None
        if data.startswith("data:") and ";base64," in data:
            data = data.split(";base64,", 1)[1]
        try:
            return base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            return None


@dataclass
class ImagePrompt:
    """Parameters for one image generation or variation request.

    ``model`` falls back to the connection's model id. For variations set
    ``variation_image`` (bytes) or ``variation_image_path``.
    """

    prompt: str = ""
    model: Optional[str] = None
    image_size: str = DEFAULT_IMAGE_SIZE
    image_style: Optional[str] = DEFAULT_IMAGE_STYLE
    image_quality: Optional[str] = DEFAULT_IMAGE_QUALITY
    image_background: Optional[str] = None
    image_count: int = 1
    output_file_format: str = DEFAULT_IMAGE_OUTPUT_FORMAT
    variation_image: Optional[bytes] = field(default=None, repr=False)
    variation_image_path: Optional[str] = None
    images: List[ImageResult] = field(default_factory=list)

    @property
    def first_image(self) -> Optional[ImageResult]:
        return self.images[0] if self.images else None

    @property
    def first_image_url(self) -> Optional[str]:
        first = self.first_image
        return first.url if first else None

    @property
    def base64_data(self) -> Optional[str]:
        first = self.first_image
        return first.base64_data if first else None

    @property
    def byte_data(self) -> Optional[bytes]:
        first = self.first_image
        return first.byte_data if first else None

    @property
    def revised_prompt(self) -> Optional[str]:
        first = self.first_image
        return first.revised_prompt if first else None


__all__ = ["ImageOutputFormat", "ImagePrompt", "ImageResult"]
