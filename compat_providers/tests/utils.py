"""Helpers shared by the test modules."""

from __future__ import annotations

import json
from typing import Any, Dict

BASE_URL = "https://llm.test/v1"
CHAT_URL = f"{BASE_URL}/chat/completions"


def completion_body(content: Any = "Hello!", **extra: Any) -> Dict[str, Any]:
    """Minimal OpenAI-style chat completion payload."""

    body: Dict[str, Any] = {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-test",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    }
    body.update(extra)
    return body


def sent_json(route) -> Dict[str, Any]:
    """Decode the JSON body of the last request a respx route received."""

    return json.loads(route.calls.last.request.content)
