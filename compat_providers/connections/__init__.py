"""Connection model, provider defaults and the connection registry."""

from .connection import Connection
from .factory import PROVIDER_DEFAULTS, ProviderDefaults, create_connection, generate_connection_name
from .modes import OperationMode, ProviderMode
from .registry import ConnectionRegistry, default_connections_path

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "OperationMode",
    "PROVIDER_DEFAULTS",
    "ProviderDefaults",
    "ProviderMode",
    "create_connection",
    "default_connections_path",
    "generate_connection_name",
]
