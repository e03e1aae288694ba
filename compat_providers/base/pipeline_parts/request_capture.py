"""Last-request / last-response diagnostics capture.

When enabled, the request text records the JSON body, the resolved URL, the
model id and a redacted key prefix::

    {json}

    ---

    {url}
    {model} sk-ab...
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...config.defaults import REDACTED_KEY_PREFIX_LENGTH
from ..credentials import redact_key


@dataclass
class RequestCapture:
    enabled: bool = False
    last_request_json: Optional[str] = field(default=None)
    last_response_json: Optional[str] = field(default=None)

    def record_request(self, body: Optional[str], url: str, model_id: Optional[str], api_key: Optional[str]) -> None:
        if not self.enabled:
            return
        redacted = redact_key(api_key, REDACTED_KEY_PREFIX_LENGTH)
        self.last_request_json = f"{body or ''}\n\n---\n\n{url}\n{model_id or ''} {redacted}"

    def record_response(self, text: Optional[str]) -> None:
        if self.enabled:
            self.last_response_json = text

    def clear(self) -> None:
        self.last_request_json = None
        self.last_response_json = None


__all__ = ["RequestCapture"]
