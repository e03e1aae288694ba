"""Request pipeline public surface.

Re-exports the implementation under ``compat_providers.base.pipeline_parts``
to keep a stable import path.
"""

from .pipeline_parts.chat_history import ChatHistory
from .pipeline_parts.request_capture import RequestCapture
from .pipeline_parts.request_pipeline import (
    AUTH_FAILED_MESSAGE,
    INVALID_RESPONSE_MESSAGE,
    RequestPipeline,
)

__all__ = [
    "AUTH_FAILED_MESSAGE",
    "ChatHistory",
    "INVALID_RESPONSE_MESSAGE",
    "RequestCapture",
    "RequestPipeline",
]
