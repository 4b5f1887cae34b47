"""
Event Bus - synchronous pub-sub for playback notifications

Implements observer registration:
- Publishers: publish(event)
- Subscribers: subscribe(event_type, handler, priority, filter_fn)
- Unsubscribe: unsubscribe(event_type, handler) or the returned callable

Handlers run inline, in priority order, on the caller's thread. Coroutine
handlers are scheduled on the running event loop instead of awaited.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from led_converter.models.events import Event, EventType
from led_converter.models.enums import LogCategory
from led_converter.utils.logger import get_category_logger

log = get_category_logger(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Synchronous event bus

    Features:
    - Priority-based handler execution (high priority first)
    - Per-handler filtering
    - Fault tolerance (one handler crash doesn't stop others)

    Example:
        bus = EventBus()
        unsubscribe = bus.subscribe(EventType.FRAME_CHANGE, lambda e: print(e.index))
        bus.publish(FrameChangeEvent(3))
        unsubscribe()
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> Callable[[], None]:
        """
        Subscribe to event type

        Args:
            event_type: Which events to listen for
            handler: Function to call with the event
            priority: Execution priority (higher = called first, default: 0)
            filter_fn: Optional filter (return True = handle, False = skip)

        Returns:
            Callable that removes this subscription
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append(EventHandler(handler, priority, filter_fn))
        handlers.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """
        Remove a handler

        Returns:
            True if the handler was registered
        """
        handlers = self._handlers.get(event_type, [])
        for entry in handlers:
            if entry.handler == handler:
                handlers.remove(entry)
                return True
        return False

    def clear(self) -> None:
        """Drop every subscription"""
        self._handlers.clear()

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))

    def publish(self, event: Event) -> None:
        """
        Publish event to all subscribers of its type

        Handler exceptions are logged and do not reach the publisher.
        """
        # Copy: handlers may unsubscribe while being called
        for entry in list(self._handlers.get(event.type, [])):
            if entry.filter_fn and not entry.filter_fn(event):
                continue

            try:
                if asyncio.iscoroutinefunction(entry.handler):
                    asyncio.get_running_loop().create_task(entry.handler(event))
                else:
                    entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(entry.handler, '__name__', entry.handler)} for {event.type.name}",
                    exception=e
                )
