"""Unified configuration layer for compat_providers.

Goals
-----
* Centralize defaults (registry file name, encryption, timeouts, log level).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional ``.env`` file (path from ``DOTENV_FILE``, default ``.env``)
    3. Environment variables (``COMPAT_*``)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_settings(overrides=None)``.

Environment Variable Conventions
--------------------------------
COMPAT_CONNECTIONS_FILE, COMPAT_USE_KEY_ENCRYPTION, COMPAT_ENCRYPTION_KEY,
COMPAT_HTTP_TIMEOUT_SECONDS, COMPAT_CONNECT_TIMEOUT_SECONDS, COMPAT_LOG_LEVEL.

Public API
----------
* get_settings(overrides: dict | None = None) -> dict
* reset_settings_cache() -> None
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .env import ENV_MAP, is_placeholder, parse_bool
from .defaults import (
    DEFAULT_CONNECTIONS_FILE,
    HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS,
    HTTP_DEFAULT_TIMEOUT_SECONDS,
)


# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Any] = {
    "connections_file": DEFAULT_CONNECTIONS_FILE,
    "use_key_encryption": True,
    "encryption_key": None,
    "http_timeout_seconds": HTTP_DEFAULT_TIMEOUT_SECONDS,
    "connect_timeout_seconds": HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS,
    "log_level": "INFO",
}

_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _coerce_float(raw: str, default: float) -> float:
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, env_name in ENV_MAP.items():
        raw = os.getenv(env_name)
        if raw is None:
            continue
        if field == "use_key_encryption":
            out[field] = parse_bool(raw, DEFAULTS[field])
        elif field.endswith("_seconds"):
            out[field] = _coerce_float(raw, DEFAULTS[field])
        else:
            out[field] = raw
    return out


def get_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged package settings.

    Merge order (later wins): defaults -> .env -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def reset_settings_cache() -> None:
    """Allow the ``.env`` file to be re-read on the next ``get_settings`` call."""
    global _DOTENV_LOADED
    _DOTENV_LOADED = False


__all__ = [
    "get_settings",
    "reset_settings_cache",
    "DEFAULTS",
]
