"""Tests for the EventBus and the audit subscriber."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from schemematch.audit import audit_on_event
from schemematch.events import EventBus
from schemematch.schemas.events import EventType, SystemEvent


def _event(event_type: EventType = EventType.PROFILE_CREATED, **kwargs) -> SystemEvent:
    return SystemEvent(event_type=event_type, user_id="user-1", source_module="tests", **kwargs)


class TestSystemEvent:
    def test_defaults(self):
        event = SystemEvent(event_type=EventType.SYSTEM_STARTUP)
        assert event.user_id is None
        assert event.data == {}
        assert event.timestamp.tzinfo is not None

    def test_frozen(self):
        event = _event()
        with pytest.raises(ValueError):
            event.user_id = "someone-else"


class TestDispatch:
    @pytest.mark.asyncio()
    async def test_global_subscriber_receives_everything(self):
        bus = EventBus()
        handler = AsyncMock(__name__="handler")
        bus.subscribe(handler)

        await bus.emit_nowait(_event())
        await bus.emit_nowait(_event(EventType.RECOMMENDATIONS_GENERATED))

        assert handler.await_count == 2

    @pytest.mark.asyncio()
    async def test_typed_subscriber_filters(self):
        bus = EventBus()
        handler = AsyncMock(__name__="handler")
        bus.subscribe(handler, [EventType.RECOMMENDATIONS_FAILED])

        await bus.emit_nowait(_event())
        handler.assert_not_awaited()

        failed = _event(EventType.RECOMMENDATIONS_FAILED)
        await bus.emit_nowait(failed)
        handler.assert_awaited_once_with(failed)

    @pytest.mark.asyncio()
    async def test_failing_handler_isolated(self):
        bus = EventBus()
        broken = AsyncMock(__name__="broken", side_effect=RuntimeError("boom"))
        healthy = AsyncMock(__name__="healthy")
        bus.subscribe(broken)
        bus.subscribe(healthy)

        await bus.emit_nowait(_event())

        healthy.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_unsubscribe(self):
        bus = EventBus()
        handler = AsyncMock(__name__="handler")
        bus.subscribe(handler)
        bus.subscribe(handler, [EventType.PROFILE_CREATED])
        bus.unsubscribe(handler)

        await bus.emit_nowait(_event())
        handler.assert_not_awaited()


class TestQueue:
    @pytest.mark.asyncio()
    async def test_stop_drains_pending_events(self):
        bus = EventBus()
        received: list[SystemEvent] = []

        async def collect(event: SystemEvent) -> None:
            await asyncio.sleep(0)
            received.append(event)

        bus.subscribe(collect)
        await bus.start()
        for _ in range(5):
            await bus.emit(_event())
        await bus.stop()

        assert len(received) == 5

    @pytest.mark.asyncio()
    async def test_emit_without_start(self):
        bus = EventBus()
        handler = AsyncMock(__name__="handler")
        bus.subscribe(handler)

        await bus.emit(_event())
        await bus.stop()

        handler.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_stop_is_idempotent(self):
        bus = EventBus()
        await bus.stop()
        await bus.stop()


class TestAudit:
    @pytest.mark.asyncio()
    async def test_logs_event(self):
        event = _event(EventType.RECOMMENDATIONS_GENERATED, data={"count": 3})
        with patch("schemematch.audit.audit_logger") as mock_logger:
            await audit_on_event(event)

        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args == ("recommendations.generated",)
        assert kwargs["user_id"] == "user-1"
        assert kwargs["data"] == {"count": 3}
