"""
Event Bus
Priority-ordered listeners with interception, one task per posted event
"""

import asyncio
import threading
from enum import Enum, IntEnum
from typing import Any, Awaitable, Callable, List, Optional, Set, Type

from utils.error_handler import ErrorHandler
from utils.logger import get_logger

# Returning True stops propagation to lower priority listeners
EventHandler = Callable[[Any], Awaitable[Optional[bool]]]


class EventPriority(IntEnum):
    HIGHEST = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3
    LOWEST = 4


class ConcurrencyKind(Enum):
    """How one listener copes with several events at once."""

    # Every event runs the handler immediately
    CONCURRENT = "concurrent"
    # Handler calls are serialized per listener
    LOCKED = "locked"


class Listener:
    """A subscription. Call :meth:`complete` to stop receiving events."""

    def __init__(
        self,
        bus: "EventBus",
        event_type: Type,
        handler: EventHandler,
        concurrency: ConcurrencyKind,
        priority: EventPriority,
    ):
        self.bus = bus
        self.event_type = event_type
        self.handler = handler
        self.concurrency = concurrency
        self.priority = priority
        self.active = True
        self._lock = asyncio.Lock() if concurrency is ConcurrencyKind.LOCKED else None

    async def invoke(self, event: Any) -> bool:
        if self._lock is None:
            return bool(await self.handler(event))
        async with self._lock:
            return bool(await self.handler(event))

    def complete(self) -> bool:
        """Unsubscribe. In-flight handler calls are left to finish."""
        return self.bus.unsubscribe(self)

    def __repr__(self) -> str:
        return f"<Listener {self.event_type.__name__} {self.priority.name} {self.concurrency.name}>"


class EventBus:
    """Delivers events to listeners in priority order."""

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self.logger = get_logger("EventBus")
        self.error_handler = error_handler or ErrorHandler()
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task] = set()

    def subscribe(
        self,
        event_type: Type,
        handler: EventHandler,
        concurrency: ConcurrencyKind = ConcurrencyKind.CONCURRENT,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Listener:
        """
        Subscribe to every event that is an instance of ``event_type``.

        Args:
            event_type: Event class
            handler: Coroutine function; return True to intercept the event
            concurrency: Whether calls to this handler may overlap
            priority: Higher priority listeners see the event first

        Returns:
            Listener handle
        """
        listener = Listener(self, event_type, handler, concurrency, priority)
        with self._lock:
            # Stable within a priority: earlier subscribers run first
            index = len(self._listeners)
            for i, existing in enumerate(self._listeners):
                if existing.priority > priority:
                    index = i
                    break
            self._listeners.insert(index, listener)
        self.logger.debug(f"Subscribed {listener}")
        return listener

    def unsubscribe(self, listener: Listener) -> bool:
        with self._lock:
            if listener not in self._listeners:
                return False
            self._listeners.remove(listener)
            listener.active = False
        self.logger.debug(f"Unsubscribed {listener}")
        return True

    def listeners(self) -> List[Listener]:
        with self._lock:
            return list(self._listeners)

    async def broadcast(self, event: Any) -> bool:
        """
        Deliver ``event`` to matching listeners, highest priority first.

        A listener that raises is reported and skipped; it does not stop
        delivery to the others.

        Returns:
            True if a listener intercepted the event
        """
        for listener in self.listeners():
            if not listener.active or not isinstance(event, listener.event_type):
                continue
            try:
                intercepted = await listener.invoke(event)
            except Exception as e:
                self.error_handler.handle_exception(e, f"listener:{listener.event_type.__name__}")
                continue
            if intercepted:
                return True
        return False

    def post(self, event: Any) -> asyncio.Task:
        """Broadcast ``event`` on its own task so events are handled in parallel."""
        task = asyncio.create_task(self.broadcast(event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every posted event to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
