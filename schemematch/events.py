"""Event bus — async pub/sub for SystemEvents.

The profile service and the recommendation engine emit events; the audit
logger and anything else registered at startup consume them.

Usage:
    bus = EventBus()
    bus.subscribe(my_handler)  # async def my_handler(event: SystemEvent) -> None
    await bus.start()

    await bus.emit(SystemEvent(
        event_type=EventType.PROFILE_CREATED,
        user_id=profile.user_id,
        source_module="profiles.service",
    ))

    await bus.stop()  # drains pending events
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from schemematch.schemas.events import EventType, SystemEvent

logger = logging.getLogger(__name__)

# Type alias for event handler functions
EventHandler = Callable[[SystemEvent], Coroutine[Any, Any, None]]


class EventBus:
    """Queue-backed event dispatcher with failure isolation per handler."""

    def __init__(self) -> None:
        self._subscribers: list[EventHandler] = []
        self._type_subscribers: dict[EventType, list[EventHandler]] = {}
        self._queue: asyncio.Queue[SystemEvent] | None = None
        self._worker_task: asyncio.Task[None] | None = None

    # ── Public API ───────────────────────────────────────────────────

    def subscribe(self, handler: EventHandler, event_types: list[EventType] | None = None) -> None:
        """Register an event handler.

        Args:
            handler: Async function that accepts a SystemEvent.
            event_types: If provided, handler only receives these event types.
                         If None, handler receives ALL events.
        """
        if event_types is None:
            self._subscribers.append(handler)
            logger.info("Registered global event subscriber: %s", handler.__name__)
        else:
            for et in event_types:
                self._type_subscribers.setdefault(et, []).append(handler)
            logger.info(
                "Registered event subscriber %s for types: %s",
                handler.__name__,
                [t.value for t in event_types],
            )

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        if handler in self._subscribers:
            self._subscribers.remove(handler)
        for handlers in self._type_subscribers.values():
            if handler in handlers:
                handlers.remove(handler)

    async def emit(self, event: SystemEvent) -> None:
        """Queue an event for the background worker.

        The emitter is never blocked by slow subscribers.
        """
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._ensure_worker()

        await self._queue.put(event)
        logger.debug("Event emitted: %s (user=%s)", event.event_type.value, event.user_id)

    async def emit_nowait(self, event: SystemEvent) -> None:
        """Dispatch directly, bypassing the queue."""
        await self._dispatch(event)

    # ── Background worker ────────────────────────────────────────────

    def _ensure_worker(self) -> None:
        if self._worker_task is None or self._worker_task.done():
            self._worker_task = asyncio.create_task(self._event_worker())
            logger.info("Event worker started")

    async def _event_worker(self) -> None:
        """Drain the queue and dispatch to subscribers."""
        if self._queue is None:
            return
        queue = self._queue

        while True:
            try:
                event = await queue.get()
            except asyncio.CancelledError:
                logger.info("Event worker shutting down")
                break
            try:
                await self._dispatch(event)
            except Exception:
                logger.exception("Error in event worker")
            finally:
                queue.task_done()

    async def _dispatch(self, event: SystemEvent) -> None:
        """Dispatch a single event to all matching subscribers."""
        handlers: list[EventHandler] = list(self._subscribers)
        handlers.extend(self._type_subscribers.get(event.event_type, []))

        if not handlers:
            return

        # Run all handlers concurrently; isolate failures
        results = await asyncio.gather(
            *[self._safe_call(handler, event) for handler in handlers],
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, Exception):
                logger.error("Event handler failed for %s: %s", event.event_type.value, result)

    @staticmethod
    async def _safe_call(handler: EventHandler, event: SystemEvent) -> None:
        try:
            await handler(event)
        except Exception:
            logger.exception("Handler %s failed for event %s", handler.__name__, event.event_type.value)
            raise

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self) -> None:
        """Call during application startup."""
        self._queue = asyncio.Queue()
        self._ensure_worker()
        logger.info(
            "Event system started with %d global + %d typed subscribers",
            len(self._subscribers),
            sum(len(v) for v in self._type_subscribers.values()),
        )

    async def stop(self) -> None:
        """Drain remaining events, then cancel the worker."""
        if self._queue is not None:
            await self._queue.join()

        if self._worker_task is not None and not self._worker_task.done():
            self._worker_task.cancel()
            try:
                await self._worker_task
            except asyncio.CancelledError:
                pass

        self._worker_task = None
        self._queue = None
        logger.info("Event system stopped")
