"""Tests for the closable rendezvous channel."""

import asyncio

import pytest

from services.scroll.Channel import Channel, ChannelClosedError


@pytest.mark.asyncio
class TestChannel:

    async def test_delivers_in_order_then_stops(self):
        channel: Channel[int] = Channel("numbers")

        async def produce():
            for i in range(5):
                await channel.send(i)
            channel.close()

        producer = asyncio.create_task(produce())
        received = [i async for i in channel]
        await producer

        assert received == [0, 1, 2, 3, 4]

    async def test_send_waits_for_consumer(self):
        channel: Channel[str] = Channel()
        send = asyncio.create_task(channel.send("a"))
        await asyncio.sleep(0.01)
        assert not send.done()

        assert await channel.receive() == "a"
        await asyncio.wait_for(send, timeout=1)

    async def test_close_does_not_block_without_consumer(self):
        channel: Channel[int] = Channel()
        channel.close()
        channel.close()
        assert channel.closed

    async def test_receive_after_close_raises(self):
        channel: Channel[int] = Channel()
        channel.close()
        with pytest.raises(ChannelClosedError):
            await channel.receive()
        with pytest.raises(ChannelClosedError):
            await channel.receive()

    async def test_send_after_close_raises(self):
        channel: Channel[int] = Channel()
        channel.close()
        with pytest.raises(ChannelClosedError):
            await channel.send(1)

    async def test_every_consumer_sees_the_end(self):
        channel: Channel[int] = Channel()

        async def consume() -> list[int]:
            return [i async for i in channel]

        consumers = [asyncio.create_task(consume()) for _ in range(3)]

        for i in range(6):
            await channel.send(i)
        channel.close()
        results = await asyncio.wait_for(asyncio.gather(*consumers), timeout=1)

        assert sorted(i for result in results for i in result) == list(range(6))

    async def test_cancelled_send_leaves_item_for_consumer(self):
        channel: Channel[int] = Channel()
        send = asyncio.create_task(channel.send(1))
        await asyncio.sleep(0)
        send.cancel()
        with pytest.raises(asyncio.CancelledError):
            await send
        channel.close()

        assert [i async for i in channel] == [1]
