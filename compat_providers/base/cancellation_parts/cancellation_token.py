"""Cooperative cancellation token for async requests.

A token is created by the caller, handed to a facade call and cancelled from
another task (or a timer). The pipeline races the network exchange against
:meth:`CancellationToken.wait` and abandons the request when the token fires.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    The token itself is loop-agnostic; the asyncio event used by ``wait`` is
    created lazily inside the running loop.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._waiters: List[asyncio.Event] = []
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> str | None:
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, wake waiters and cascade to children."""
        if self._cancelled:
            return
        self._cancelled = True
        self._reason = reason
        for event in self._waiters:
            event.set()
        for child in list(self._children):
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        self._children.append(token)
        if self._cancelled:
            token.cancel(self._reason)
        return token

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        if self._cancelled:
            return
        event = asyncio.Event()
        self._waiters.append(event)
        try:
            await event.wait()
        finally:
            self._waiters.remove(event)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._cancelled}, "
            f"reason={self._reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
