"""Unit tests for cooperative cancellation primitives.

Covers idempotent cancel, cascade to children, late link of child after
parent cancel, callbacks, async waiting and raise_if_cancelled behavior.
"""
from __future__ import annotations

import asyncio

import pytest

from endpoint_providers.base.cancellation import (
    CancellationToken,
    CancelledError,
)


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child1 = parent.child()
    child2 = parent.child()

    parent.cancel(reason="stop")
    # idempotent second call
    parent.cancel(reason="ignored")

    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child1.cancelled is True and child1.reason == "stop"  # nosec B101 - pytest assert in tests
    assert child2.cancelled is True and child2.reason == "stop"  # nosec B101 - pytest assert in tests


def test_link_child_after_parent_cancel_immediately_cancels_child():
    parent = CancellationToken()
    parent.cancel("done")
    late_child = CancellationToken(parent=parent)
    assert late_child.cancelled is True and late_child.reason == "done"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled_raises_custom_error():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_callbacks_run_once_and_can_be_removed():
    token = CancellationToken()
    calls = []
    token.add_callback(calls.append)
    remove = token.add_callback(lambda r: calls.append(("removed", r)))
    remove()
    token.cancel("bye")
    token.cancel("again")
    assert calls == ["bye"]  # nosec B101
    # late registration runs immediately
    token.add_callback(calls.append)
    assert calls == ["bye", "bye"]  # nosec B101


@pytest.mark.asyncio
async def test_wait_resolves_when_cancelled_from_loop():
    token = CancellationToken()
    waiter = asyncio.ensure_future(token.wait())
    await asyncio.sleep(0)
    assert not waiter.done()  # nosec B101
    token.cancel("user")
    assert await asyncio.wait_for(waiter, timeout=1.0) == "user"  # nosec B101


@pytest.mark.asyncio
async def test_wait_returns_immediately_when_already_cancelled():
    token = CancellationToken()
    token.cancel()
    assert await asyncio.wait_for(token.wait(), timeout=1.0) is None  # nosec B101
