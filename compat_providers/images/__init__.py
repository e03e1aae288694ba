"""Image generation client and prompt/result containers."""

from .client import ImageGenerationClient
from .prompt import ImageOutputFormat, ImagePrompt, ImageResult

__all__ = ["ImageGenerationClient", "ImageOutputFormat", "ImagePrompt", "ImageResult"]
