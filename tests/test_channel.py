"""Unit tests for procrunner.channel."""

import asyncio

import pytest

from procrunner.channel import ChannelClosedError, LineChannel


async def _drain(channel: LineChannel) -> list[str]:
    return [line async for line in channel]


class TestLineChannel:
    @pytest.mark.asyncio
    async def test_lines_come_out_in_order_then_iteration_ends(self):
        channel = LineChannel()
        for line in ("a", "b", "c"):
            await channel.publish(line)
        channel.complete()
        assert await _drain(channel) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_complete_is_idempotent(self):
        channel = LineChannel()
        assert channel.is_completed is False
        assert channel.complete() is True
        assert channel.complete() is False
        assert channel.is_completed is True
        assert await _drain(channel) == []

    @pytest.mark.asyncio
    async def test_publish_after_complete_raises(self):
        channel = LineChannel()
        channel.complete()
        with pytest.raises(ChannelClosedError):
            await channel.publish("late")

    @pytest.mark.asyncio
    async def test_receive_after_drain_raises(self):
        channel = LineChannel()
        await channel.publish("only")
        channel.complete()
        assert await channel.receive() == "only"
        with pytest.raises(ChannelClosedError):
            await channel.receive()
        with pytest.raises(ChannelClosedError):
            await channel.receive()

    @pytest.mark.asyncio
    async def test_waiting_consumer_wakes_on_complete(self):
        channel = LineChannel()
        consumer = asyncio.create_task(_drain(channel))
        await asyncio.sleep(0)
        await channel.publish("x")
        channel.complete()
        assert await asyncio.wait_for(consumer, 1) == ["x"]

    @pytest.mark.asyncio
    async def test_every_consumer_observes_completion(self):
        channel = LineChannel()
        consumers = [asyncio.create_task(_drain(channel)) for _ in range(3)]
        for i in range(30):
            await channel.publish(str(i))
        channel.complete()
        results = await asyncio.wait_for(asyncio.gather(*consumers), 1)
        received = sorted(int(line) for result in results for line in result)
        assert received == list(range(30))

    @pytest.mark.asyncio
    async def test_bounded_channel_waits_for_capacity(self):
        channel = LineChannel(maxsize=1)
        await channel.publish("first")
        blocked = asyncio.create_task(channel.publish("second"))
        await asyncio.sleep(0.01)
        assert not blocked.done()
        assert await channel.receive() == "first"
        await asyncio.wait_for(blocked, 1)
        assert await channel.receive() == "second"

    @pytest.mark.asyncio
    async def test_complete_on_full_bounded_channel(self):
        channel = LineChannel(maxsize=1)
        await channel.publish("last")
        channel.complete()
        assert await asyncio.wait_for(_drain(channel), 1) == ["last"]
