"""Async pub/sub event bus carrying composer output to the host."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Coroutine
from uuid import uuid4

from huddle.models import UNBOUND, RecipientBinding, SubmittedMessage
from huddle.utils.logging import get_logger

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class EventType(str, Enum):
    DRAFT_SUBMITTED = "draft.submitted"
    RECIPIENT_CHANGED = "recipient.changed"
    FOCUS_REQUESTED = "focus.requested"


@dataclass
class Event:
    type: EventType
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class DraftSubmitted(Event):
    type: EventType = field(default=EventType.DRAFT_SUBMITTED, init=False)
    message: SubmittedMessage | None = field(default=None)


@dataclass
class RecipientChanged(Event):
    type: EventType = field(default=EventType.RECIPIENT_CHANGED, init=False)
    binding: RecipientBinding = field(default=UNBOUND)


@dataclass
class FocusRequested(Event):
    type: EventType = field(default=EventType.FOCUS_REQUESTED, init=False)


# ---------------------------------------------------------------------------
# Bus
# ---------------------------------------------------------------------------

Handler = Callable[[Event], Coroutine[Any, Any, None]]


class EventBus:
    def __init__(self, max_queue_size: int = 256) -> None:
        self._subscribers: dict[EventType, list[tuple[Handler, asyncio.Queue[Event]]]] = {}
        self._max_queue_size = max_queue_size
        self._running = False
        self._tasks: list[asyncio.Task[None]] = []

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        queue: asyncio.Queue[Event] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.setdefault(event_type, []).append((handler, queue))

    def publish_nowait(self, event: Event) -> None:
        """Queue ``event`` for every subscriber without waiting on them."""
        handlers = self._subscribers.get(event.type, [])
        for handler, queue in handlers:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                log.warning(
                    "event_queue_full",
                    event_type=event.type.value,
                    handler=handler.__qualname__,
                )

    async def publish(self, event: Event) -> None:
        self.publish_nowait(event)

    async def start(self) -> None:
        self._running = True
        for event_type, handler_list in self._subscribers.items():
            for handler, queue in handler_list:
                task = asyncio.create_task(
                    self._consumer(handler, queue, event_type.value),
                    name=f"bus-{event_type.value}-{handler.__qualname__}",
                )
                self._tasks.append(task)

    async def _consumer(
        self, handler: Handler, queue: asyncio.Queue[Event], event_type: str
    ) -> None:
        while self._running:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            try:
                await handler(event)
            except Exception:
                log.exception("handler_error", event_type=event_type)
            finally:
                queue.task_done()

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        for handler_list in self._subscribers.values():
            for _handler, queue in handler_list:
                await queue.join()

    async def stop(self) -> None:
        self._running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
