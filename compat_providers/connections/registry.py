"""Connection registry: an ordered list of connections plus active selections.

The registry keeps two independent "active" indices, one for chat completions
and one for image generation. Reads clamp an out-of-range index back to 0 so a
stale persisted index never breaks a caller; an empty registry yields ``None``.

Persistence uses a single JSON document::

    {"ActiveConnectionIndex": 0, "ActiveImageConnectionIndex": 0,
     "Connections": [{"Name": ..., "EncryptedApiKey": ..., ...}]}

A missing or unreadable file loads as an empty registry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ..base.credentials import EncryptionSettings
from ..base.logging import get_logger, log_event
from ..config import get_settings
from ..persistence import load_json_document, save_json_document
from .connection import Connection
from .modes import OperationMode

_logger = get_logger("compat.registry")


def default_connections_path() -> Path:
    """Registry file from ``COMPAT_CONNECTIONS_FILE`` or ``_AiConnections.json``."""
    return Path(get_settings()["connections_file"]).expanduser()


def _as_index(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class ConnectionRegistry:
    """Ordered collection of connections with active chat/image selections."""

    connections: List[Connection] = field(default_factory=list)
    active_connection_index: int = 0
    active_image_connection_index: int = 0
    encryption: EncryptionSettings = field(default_factory=EncryptionSettings, repr=False)

    # ----- active selections -----

    def _clamped(self, attr: str) -> Optional[Connection]:
        if not self.connections:
            return None
        index = getattr(self, attr)
        if index < 0 or index >= len(self.connections):
            index = 0
            setattr(self, attr, 0)
        return self.connections[index]

    def _select(self, attr: str, connection: Optional[Connection]) -> None:
        for i, existing in enumerate(self.connections):
            if existing is connection:
                setattr(self, attr, i)
                return

    @property
    def active_connection(self) -> Optional[Connection]:
        return self._clamped("active_connection_index")

    @active_connection.setter
    def active_connection(self, connection: Optional[Connection]) -> None:
        self._select("active_connection_index", connection)

    @property
    def active_image_connection(self) -> Optional[Connection]:
        return self._clamped("active_image_connection_index")

    @active_image_connection.setter
    def active_image_connection(self, connection: Optional[Connection]) -> None:
        self._select("active_image_connection_index", connection)

    # ----- views -----

    @property
    def completion_connections(self) -> List[Connection]:
        return [c for c in self.connections if c.operation_mode is OperationMode.COMPLETIONS]

    @property
    def image_generation_connections(self) -> List[Connection]:
        return [c for c in self.connections if c.operation_mode is OperationMode.IMAGE_GENERATION]

    @property
    def has_connections(self) -> bool:
        return bool(self.connections)

    @property
    def is_available(self) -> bool:
        """True when an active chat connection exists and has an endpoint."""
        active = self.active_connection
        return active is not None and not active.is_empty

    @property
    def is_image_connection_available(self) -> bool:
        active = self.active_image_connection
        return active is not None and not active.is_empty

    # ----- lookup / mutation -----

    def get(self, key: Union[str, int]) -> Optional[Connection]:
        """Look up a connection by name (case-insensitive, first match) or index."""
        if isinstance(key, int) and not isinstance(key, bool):
            if 0 <= key < len(self.connections):
                return self.connections[key]
            return None
        wanted = str(key).lower()
        for connection in self.connections:
            if (connection.name or "").lower() == wanted:
                return connection
        return None

    def add(self, connection: Connection) -> Connection:
        self.connections.append(connection)
        return connection

    def remove(self, connection: Connection) -> bool:
        """Remove ``connection`` (by identity); active indices stay index based."""
        for i, existing in enumerate(self.connections):
            if existing is connection:
                del self.connections[i]
                return True
        return False

    def __iter__(self) -> Iterator[Connection]:
        return iter(self.connections)

    def __len__(self) -> int:
        return len(self.connections)

    # ----- persistence -----

    def to_document(self) -> Dict[str, Any]:
        return {
            "ActiveConnectionIndex": self.active_connection_index,
            "ActiveImageConnectionIndex": self.active_image_connection_index,
            "Connections": [c.to_document() for c in self.connections],
        }

    @classmethod
    def from_document(
        cls, doc: Dict[str, Any], encryption: Optional[EncryptionSettings] = None
    ) -> "ConnectionRegistry":
        settings = encryption or EncryptionSettings()
        raw_connections = doc.get("Connections")
        if not isinstance(raw_connections, list):
            raw_connections = []
        connections = [
            Connection.from_document(item, settings) for item in raw_connections if isinstance(item, dict)
        ]
        return cls(
            connections=connections,
            active_connection_index=_as_index(doc.get("ActiveConnectionIndex")),
            active_image_connection_index=_as_index(doc.get("ActiveImageConnectionIndex")),
            encryption=settings,
        )

    @classmethod
    def load(
        cls,
        path: Union[str, Path, None] = None,
        encryption: Optional[EncryptionSettings] = None,
    ) -> "ConnectionRegistry":
        """Load a registry from ``path``; missing or unreadable files give an empty one."""
        target = Path(path) if path is not None else default_connections_path()
        doc = load_json_document(target)
        if doc is None:
            log_event(_logger, "registry.load", path=str(target), connections=0, found=False)
            return cls(encryption=encryption or EncryptionSettings())
        registry = cls.from_document(doc, encryption)
        log_event(_logger, "registry.load", path=str(target), connections=len(registry.connections), found=True)
        return registry

    def save(self, path: Union[str, Path, None] = None) -> Path:
        """Write the registry as pretty-printed JSON; API keys in encrypted form.

        Raises:
            OSError: the file cannot be written.
        """
        target = Path(path) if path is not None else default_connections_path()
        try:
            written = save_json_document(target, self.to_document())
        except OSError as exc:
            log_event(_logger, "registry.save", level=logging.ERROR, path=str(target), error=str(exc))
            raise
        log_event(_logger, "registry.save", path=str(written), connections=len(self.connections))
        return written


__all__ = ["ConnectionRegistry", "default_connections_path"]
