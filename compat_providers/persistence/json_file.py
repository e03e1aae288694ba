"""JSON document persistence for the connection registry.

Reads tolerate absence and corruption (callers get ``None`` and decide on a
fallback); writes go through a temporary file and ``os.replace`` so a crash
never leaves a half-written registry behind.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..base.logging import get_logger, log_event

_logger = get_logger("compat.persistence")

PathLike = Union[str, "os.PathLike[str]"]


def load_json_document(path: PathLike) -> Optional[Dict[str, Any]]:
    """Return the JSON object stored at ``path``.

    ``None`` when the file does not exist, cannot be read, is not valid JSON,
    or does not hold a JSON object.
    """
    p = Path(path)
    if not p.is_file():
        return None
    try:
        with p.open("r", encoding="utf-8") as fh:
            doc = json.load(fh)
    except (OSError, ValueError) as exc:
        log_event(_logger, "persistence.read_failed", level=logging.WARNING, path=str(p), error=str(exc))
        return None
    if not isinstance(doc, dict):
        log_event(_logger, "persistence.read_failed", level=logging.WARNING, path=str(p), error="not a JSON object")
        return None
    return doc


def save_json_document(path: PathLike, doc: Dict[str, Any]) -> Path:
    """Write ``doc`` as indented JSON to ``path`` and return the resolved path."""
    p = Path(path).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(doc, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        os.replace(tmp_name, p)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return p


__all__ = ["load_json_document", "save_json_document"]
