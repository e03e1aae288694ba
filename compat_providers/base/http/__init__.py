"""HTTP helpers for the request pipeline."""

from .client import build_timeout, create_async_client

__all__ = ["build_timeout", "create_async_client"]
