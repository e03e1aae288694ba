"""Cancellation error type.

Defines the public ``CancelledError`` raised when a request observes a
cancellation request on its :class:`CancellationToken`.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from ``asyncio.CancelledError`` so the pipeline can record it as
    an ordinary failed call instead of tearing down the calling task.
    """


__all__ = ["CancelledError"]
