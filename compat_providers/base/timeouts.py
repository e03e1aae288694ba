"""Unified timeout configuration for HTTP calls.

Key Components
--------------
TimeoutConfig
    Frozen dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration built from
    :func:`compat_providers.config.get_settings`. The cache is refreshed when
    the backing environment variables change so tests can adjust values with
    ``monkeypatch.setenv``.

Design Constraints
------------------
1. No ad-hoc numeric timeouts outside this module and ``config.defaults``.
2. Avoid per-call settings merges (cache keyed on the env values).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import get_settings
from ..config.env import ENV_MAP


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Overall read/write/pool timeout for one request.
        connect_timeout_seconds: Timeout for establishing the TCP/TLS session.
    """

    http_timeout_seconds: float
    connect_timeout_seconds: float

    def with_override(self, seconds: Optional[float]) -> "TimeoutConfig":
        """Return a copy whose request timeout is ``seconds`` when positive."""
        if seconds is None or seconds <= 0:
            return self
        return TimeoutConfig(
            http_timeout_seconds=float(seconds),
            connect_timeout_seconds=min(self.connect_timeout_seconds, float(seconds)),
        )


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: Tuple[Optional[str], Optional[str]] | None = None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = (
        os.getenv(ENV_MAP["http_timeout_seconds"]),
        os.getenv(ENV_MAP["connect_timeout_seconds"]),
    )
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    settings = get_settings()
    _CACHED = TimeoutConfig(
        http_timeout_seconds=float(settings["http_timeout_seconds"]),
        connect_timeout_seconds=float(settings["connect_timeout_seconds"]),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
