"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` threaded through stream reads. The decoder
polls it before every read, and line readers can race a pending read against
``wait()`` so an idle vendor connection does not delay cancellation.
"""

from __future__ import annotations

import asyncio
from threading import Lock
from typing import Callable, List, Optional

from .cancelled_error import CancelledError
from .state import State


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    ``cancel`` may be called from any thread. Callbacks registered with
    ``add_callback`` run once, on the thread that cancels; ``wait`` bridges
    them onto the waiting event loop.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        for callback in callbacks:
            callback(reason)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def add_callback(self, callback: Callable[[Optional[str]], None]) -> Callable[[], None]:
        """Run ``callback(reason)`` on cancellation; returns an unregister function.

        When the token is already cancelled the callback runs immediately.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)

                def _remove() -> None:
                    with self._lock:
                        if callback in self._state.callbacks:
                            self._state.callbacks.remove(callback)

                return _remove
            reason = self._state.reason
        callback(reason)
        return lambda: None

    async def wait(self) -> Optional[str]:
        """Suspend until cancellation is requested; returns the reason."""
        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()

        def _resolve(reason: Optional[str]) -> None:
            def _set() -> None:
                if not fut.done():
                    fut.set_result(reason)

            loop.call_soon_threadsafe(_set)

        remove = self.add_callback(_resolve)
        try:
            return await fut
        finally:
            remove()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
