"""compat_providers.config.env
==========================

Centralized environment variable names and helpers.

Purpose
-------
- Provide a single source of truth for the environment variables the package
  reads (log level, timeouts, encryption, registry file).
- Expand ``%NAME%`` references embedded in API keys and endpoints so secrets
  can live outside of persisted configuration files.

Failure Modes
-------------
- Helpers never raise on unset variables. Unknown ``%NAME%`` references are
  left untouched, mirroring how shells treat undefined variables in this
  syntax.
"""

from __future__ import annotations

import os
import re
from typing import Dict, Mapping, Optional

# Setting name → environment variable
ENV_MAP: Dict[str, str] = {
    "connections_file": "COMPAT_CONNECTIONS_FILE",
    "use_key_encryption": "COMPAT_USE_KEY_ENCRYPTION",
    "encryption_key": "COMPAT_ENCRYPTION_KEY",
    "http_timeout_seconds": "COMPAT_HTTP_TIMEOUT_SECONDS",
    "connect_timeout_seconds": "COMPAT_CONNECT_TIMEOUT_SECONDS",
    "log_level": "COMPAT_LOG_LEVEL",
}

_ENV_REFERENCE = re.compile(r"%([^%\s]+)%")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme' or 'example'. The check is
    case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v


def expand_env_vars(value: Optional[str], environ: Optional[Mapping[str, str]] = None) -> str:
    """Expand ``%NAME%`` tokens from the process environment.

    Parameters
    ----------
    value: Optional[str]
        Text that may contain ``%NAME%`` references.
    environ: Optional[Mapping[str, str]]
        Mapping to resolve names from; defaults to ``os.environ``.

    Returns
    -------
    str
        The text with every known reference replaced. References to unset
        variables are kept verbatim. ``None`` yields an empty string.
    """
    if not value:
        return value or ""
    if "%" not in value:
        return value
    env = os.environ if environ is None else environ

    def _sub(match: re.Match) -> str:
        resolved = env.get(match.group(1))
        return resolved if resolved is not None else match.group(0)

    return _ENV_REFERENCE.sub(_sub, value)


def parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse a boolean-ish environment string, falling back to ``default``."""
    if value is None:
        return default
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return default


def get_env_var_name(setting: str) -> Optional[str]:
    """Return the environment variable name backing a setting, if any."""
    return ENV_MAP.get(setting.lower()) if setting else None


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "expand_env_vars",
    "parse_bool",
    "get_env_var_name",
]
