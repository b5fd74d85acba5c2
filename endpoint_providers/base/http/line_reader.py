"""Line reader over a streamed ``httpx`` response body.

Wraps ``httpx.Response.aiter_lines()`` in the ``read_line`` protocol the
stream decoder consumes. Transport faults surface from ``read_line`` as the
original ``httpx`` exceptions; the decoder converts them into
``TransportError`` after finalizing the stream.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

import httpx


class HttpxLineReader:
    """Read decoded text lines from an open streaming ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._lines: Optional[AsyncIterator[str]] = None
        self._done = False

    @property
    def response(self) -> httpx.Response:
        return self._response

    async def read_line(self) -> Optional[str]:
        if self._done:
            return None
        if self._lines is None:
            self._lines = self._response.aiter_lines()
        try:
            return await self._lines.__anext__()
        except StopAsyncIteration:
            self._done = True
            return None

    async def aclose(self) -> None:
        self._done = True
        await self._response.aclose()


__all__ = ["HttpxLineReader"]
