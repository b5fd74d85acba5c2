"""Line readers feeding the stream decoder.

The decoder consumes any object with ``async read_line() -> str | None``;
``None`` means the transport has no further line. Adapters here wrap async
iterables (``httpx.Response.aiter_lines()``), plain iterables (recorded
fixtures, replay files), and race a pending read against a cancellation token.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional, Protocol, Union, runtime_checkable

from ..cancellation import CancellationToken, CancelledError

Line = Union[str, bytes]


@runtime_checkable
class LineReader(Protocol):  # pragma: no cover - structural protocol
    async def read_line(self) -> Optional[str]: ...


def _decode(line: Line) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


class AsyncIterLineReader:
    """Read lines from an async iterable; exhaustion yields ``None``."""

    def __init__(self, source: AsyncIterable[Line]) -> None:
        self._it: AsyncIterator[Line] = source.__aiter__()
        self._done = False

    async def read_line(self) -> Optional[str]:
        if self._done:
            return None
        try:
            line = await self._it.__anext__()
        except StopAsyncIteration:
            self._done = True
            return None
        return _decode(line)


class IterLineReader:
    """Read lines from a synchronous iterable (fixtures, files)."""

    def __init__(self, source: Iterable[Line]) -> None:
        self._it: Iterator[Line] = iter(source)
        self._done = False

    async def read_line(self) -> Optional[str]:
        if self._done:
            return None
        try:
            line = next(self._it)
        except StopIteration:
            self._done = True
            return None
        return _decode(line).rstrip("\r\n")


def as_line_reader(source: Union[LineReader, AsyncIterable[Line], Iterable[Line]]) -> LineReader:
    """Coerce ``source`` into a :class:`LineReader`."""
    if isinstance(source, LineReader):
        return source
    if hasattr(source, "__aiter__"):
        return AsyncIterLineReader(source)  # type: ignore[arg-type]
    if isinstance(source, (str, bytes)):
        return IterLineReader(_decode(source).splitlines())
    return IterLineReader(source)  # type: ignore[arg-type]


async def read_line_cancellable(reader: LineReader, token: Optional[CancellationToken]) -> Optional[str]:
    """Await the next line, abandoning it as soon as ``token`` is cancelled.

    Raises
    ------
    CancelledError
        If the token is (or becomes) cancelled before a line arrives.
    """
    if token is None:
        return await reader.read_line()
    token.raise_if_cancelled()
    read_task = asyncio.ensure_future(reader.read_line())
    cancel_task = asyncio.ensure_future(token.wait())
    try:
        done, _ = await asyncio.wait({read_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    except BaseException:
        read_task.cancel()
        raise
    finally:
        cancel_task.cancel()
    if read_task in done:
        return read_task.result()
    read_task.cancel()
    # Let the abandoned read unwind before reporting cancellation.
    await asyncio.gather(read_task, return_exceptions=True)
    raise CancelledError(token.reason or "operation cancelled")


__all__ = [
    "LineReader",
    "AsyncIterLineReader",
    "IterLineReader",
    "as_line_reader",
    "read_line_cancellable",
]
