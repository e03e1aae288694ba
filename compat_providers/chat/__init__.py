"""Chat completion client."""

from .client import ChatClient

__all__ = ["ChatClient"]
