"""Logging support primitives (formatter and context)."""

from .json_formatter import JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "LogContext"]
