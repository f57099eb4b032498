"""Replayable asynchronous sources."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable, Iterator
from typing import Generic, TypeVar, cast

ElementT = TypeVar("ElementT")

_END = object()


class ReplayedSequence(Generic[ElementT]):
    """Async iterator replaying a finite iterable, then ending or raising.

    The sequence is single-use, like most asynchronous sources. With
    ``yield_control`` enabled it suspends on the event loop before every pull so
    that validation interleaves with other tasks the way a live source would.
    """

    def __init__(
        self,
        elements: Iterable[ElementT],
        *,
        terminal_error: Exception | None = None,
        yield_control: bool = True,
    ) -> None:
        self._elements: Iterator[ElementT] = iter(elements)
        self._terminal_error = terminal_error
        self._yield_control = yield_control
        self._finished = False
        self.elements_emitted = 0

    def __aiter__(self) -> AsyncIterator[ElementT]:
        return self

    async def __anext__(self) -> ElementT:
        if self._yield_control:
            await asyncio.sleep(0)
        if self._finished:
            raise StopAsyncIteration
        element = next(self._elements, _END)
        if element is not _END:
            self.elements_emitted += 1
            return cast(ElementT, element)
        self._finished = True
        if self._terminal_error is not None:
            raise self._terminal_error
        raise StopAsyncIteration
