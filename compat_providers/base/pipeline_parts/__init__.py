"""Request pipeline parts: history, diagnostics capture and the pipeline itself."""

from .chat_history import ChatHistory
from .request_capture import RequestCapture
from .request_pipeline import RequestPipeline

__all__ = ["ChatHistory", "RequestCapture", "RequestPipeline"]
