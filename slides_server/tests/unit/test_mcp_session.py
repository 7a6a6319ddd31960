"""Tests for MCP stream sessions and their channels."""

import asyncio

import pytest

from slides_server.app.mcp.session import ChannelClosedError, SessionChannel, SessionRegistry


class TestSessionChannel:
    @pytest.mark.asyncio
    async def test_messages_are_delivered_in_order(self):
        channel = SessionChannel()
        await channel.send({'id': 1})
        await channel.send({'id': 2})
        assert await channel.receive(timeout=1) == {'id': 1}
        assert await channel.receive(timeout=1) == {'id': 2}

    @pytest.mark.asyncio
    async def test_receive_timeout_returns_none(self):
        channel = SessionChannel()
        assert await channel.receive(timeout=0.01) is None

    @pytest.mark.asyncio
    async def test_send_after_close_raises(self):
        channel = SessionChannel()
        channel.close()
        assert channel.closed
        with pytest.raises(ChannelClosedError):
            await channel.send({'id': 1})

    @pytest.mark.asyncio
    async def test_close_wakes_a_waiting_consumer(self):
        channel = SessionChannel()
        waiter = asyncio.create_task(channel.receive())
        await asyncio.sleep(0)
        channel.close()
        with pytest.raises(ChannelClosedError):
            await asyncio.wait_for(waiter, timeout=1)

    @pytest.mark.asyncio
    async def test_backlog_is_drained_before_close_is_seen(self):
        channel = SessionChannel()
        await channel.send({'id': 1})
        channel.close()
        assert await channel.receive(timeout=1) == {'id': 1}
        with pytest.raises(ChannelClosedError):
            await channel.receive(timeout=1)

    @pytest.mark.asyncio
    async def test_send_waits_while_full(self):
        channel = SessionChannel(maxsize=1)
        await channel.send({'id': 1})
        blocked = asyncio.create_task(channel.send({'id': 2}))
        await asyncio.sleep(0.01)
        assert not blocked.done()
        assert await channel.receive(timeout=1) == {'id': 1}
        await asyncio.wait_for(blocked, timeout=1)
        assert await channel.receive(timeout=1) == {'id': 2}

    @pytest.mark.asyncio
    async def test_close_releases_a_blocked_sender(self):
        channel = SessionChannel(maxsize=1)
        await channel.send({'id': 1})
        blocked = asyncio.create_task(channel.send({'id': 2}))
        await asyncio.sleep(0.01)
        assert not blocked.done()
        channel.close()
        with pytest.raises(ChannelClosedError):
            await asyncio.wait_for(blocked, timeout=1)
        # Only the message queued before close is still delivered
        assert await channel.receive(timeout=1) == {'id': 1}
        with pytest.raises(ChannelClosedError):
            await channel.receive(timeout=1)

    @pytest.mark.asyncio
    async def test_registry_close_releases_a_blocked_sender(self):
        registry = SessionRegistry(maxsize=1)
        token, channel = await registry.open()
        await channel.send({'id': 1})
        blocked = asyncio.create_task(channel.send({'id': 2}))
        await asyncio.sleep(0.01)
        await registry.close(token)
        with pytest.raises(ChannelClosedError):
            await asyncio.wait_for(blocked, timeout=1)

    def test_close_is_idempotent(self):
        channel = SessionChannel()
        channel.close()
        channel.close()
        assert channel.closed


class TestSessionRegistry:
    @pytest.mark.asyncio
    async def test_open_registers_unique_tokens(self):
        registry = SessionRegistry()
        tokens = {(await registry.open())[0] for _ in range(20)}
        assert len(tokens) == 20
        assert registry.count == 20

    @pytest.mark.asyncio
    async def test_get_returns_the_opened_channel(self):
        registry = SessionRegistry()
        token, channel = await registry.open()
        assert await registry.get(token) is channel
        assert await registry.get('unknown') is None

    @pytest.mark.asyncio
    async def test_close_removes_and_closes(self):
        registry = SessionRegistry()
        token, channel = await registry.open()
        await registry.close(token)
        assert await registry.get(token) is None
        assert channel.closed
        # Closing again is a no-op
        await registry.close(token)
        assert registry.count == 0

    @pytest.mark.asyncio
    async def test_close_all(self):
        registry = SessionRegistry()
        channels = [(await registry.open())[1] for _ in range(3)]
        await registry.close_all()
        assert registry.count == 0
        assert all(channel.closed for channel in channels)

    @pytest.mark.asyncio
    async def test_channels_use_the_registry_bound(self):
        registry = SessionRegistry(maxsize=1)
        _, channel = await registry.open()
        await channel.send({'id': 1})
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(channel.send({'id': 2}), timeout=0.01)
