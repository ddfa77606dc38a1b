"""Closable rendezvous channel between the scroll task and its consumers."""

import asyncio
from typing import Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosedError(Exception):
    """Raised when sending on a closed channel, or receiving from a closed and drained one."""


class Channel(Generic[T]):
    """
    Ordered single-producer channel.

    ``send`` suspends until a consumer has taken the item, so a slow consumer throttles
    the producer. ``close`` never blocks; consumers drain what is left and then stop.
    Any number of consumers may iterate the channel, every one of them sees the end.
    """

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, item: T) -> None:
        """Hand one item to a consumer and wait until it has been taken.

        Raises:
            ChannelClosedError: If the channel is closed.
        """
        if self._closed:
            raise ChannelClosedError(f"Cannot send on closed {self.name} channel.")
        self._queue.put_nowait(item)
        await self._queue.join()

    def close(self) -> None:
        """Mark the end of the stream. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    async def receive(self) -> T:
        """Take the next item.

        Raises:
            ChannelClosedError: If the channel is closed and all items were taken.
        """
        item = await self._queue.get()
        self._queue.task_done()
        if item is _CLOSED:
            # leave the marker for the next consumer
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosedError(f"The {self.name} channel is closed.")
        return item

    def __aiter__(self) -> "Channel[T]":
        return self

    async def __anext__(self) -> T:
        try:
            return await self.receive()
        except ChannelClosedError:
            raise StopAsyncIteration
