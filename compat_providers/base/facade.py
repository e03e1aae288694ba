"""Shared base for the operation clients (chat, images, speech).

A client wraps exactly one connection and one :class:`RequestPipeline`.
Construction accepts a connection or a registry; a registry contributes its
active chat connection, or its active image connection for clients that set
``uses_image_connection``. Construction without a usable connection raises
:class:`ConfigurationError`; request failures never raise and are reported
through ``error_message``/``last_error``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Union

from .errors import ConfigurationError, ProviderError
from .pipeline import RequestPipeline

if TYPE_CHECKING:  # pragma: no cover
    from ..connections.connection import Connection
    from ..connections.registry import ConnectionRegistry


class AiClientBase:
    uses_image_connection: bool = False

    def __init__(
        self,
        connection: Union["Connection", "ConnectionRegistry", None],
        *,
        capture_request_data: bool = False,
        proxy: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Any = None,
    ) -> None:
        resolved = self._resolve_connection(connection)
        if resolved is None:
            raise ConfigurationError(message="No active connection available.")
        self.connection: "Connection" = resolved
        self.pipeline = RequestPipeline(
            resolved,
            capture_request_data=capture_request_data,
            proxy=proxy,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )
        self.error_message = ""
        self.last_error: Optional[ProviderError] = None

    @classmethod
    def _resolve_connection(cls, source: Any) -> Optional["Connection"]:
        if source is None:
            return None
        # registries expose the active selections; connections do not
        attr = "active_image_connection" if cls.uses_image_connection else "active_connection"
        if hasattr(source, attr):
            return getattr(source, attr)
        return source

    @property
    def is_error(self) -> bool:
        return bool(self.error_message)

    def set_error(self, message: Optional[str] = None, error: Optional[ProviderError] = None) -> None:
        """Append ``message`` to ``error_message``; ``None`` clears the error state."""
        if message is None:
            self.error_message = ""
            self.last_error = None
            return
        self.error_message = f"{self.error_message}\n{message}" if self.error_message else message
        self.last_error = error

    def _record_pipeline_failure(self) -> None:
        self.set_error(self.pipeline.error_message, self.pipeline.last_error)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.connection})"


__all__ = ["AiClientBase"]
