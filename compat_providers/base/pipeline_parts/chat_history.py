"""Chat history owned by one request pipeline."""
from __future__ import annotations

from typing import Iterable, Iterator, List

from ..dto.chat import ChatMessage


class ChatHistory:
    """Ordered, append-only list of chat messages.

    Not safe for concurrent mutation; one pipeline, one conversation.
    """

    def __init__(self, messages: Iterable[ChatMessage] = ()) -> None:
        self._messages: List[ChatMessage] = list(messages)

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> List[ChatMessage]:
        """Snapshot copy of the history."""
        return list(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __getitem__(self, index: int) -> ChatMessage:
        return self._messages[index]


__all__ = ["ChatHistory"]
