"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
of endpoint operations. It is a ``RuntimeError`` and deliberately not an
``asyncio.CancelledError``: task cancellation tears the coroutine down, while
this error is raised only after the stream decoder has finalized.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cooperative cancellation request.

    Distinguishes "stopped by the caller" from transport failures so callers
    can skip retries and report a cancelled outcome.
    """

__all__ = ["CancelledError"]
