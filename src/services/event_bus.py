"""
Event Bus - in-process pub-sub between MIDI input, controllers and services

Publishers await publish(event); subscribers register per EventType with a
priority and an optional filter. Middleware sees every event first and may
replace or drop it. A failing handler is logged and skipped; the remaining
handlers still run.
"""

import inspect
from collections import Counter, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional

from models.events import Event, EventType
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EVENT)

Handler = Callable[[Event], None]
Middleware = Callable[[Event], Optional[Event]]


def _name(fn) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


@dataclass
class Subscription:
    """One handler registration"""
    handler: Handler
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]
    is_async: bool

    def accepts(self, event: Event) -> bool:
        return self.filter_fn is None or self.filter_fn(event)


class EventBus:
    """
    Priority-ordered event dispatch

    - Handlers run highest priority first; equal priorities keep
      registration order
    - Coroutine handlers are awaited, plain callables are called
    - Middleware runs in registration order before any handler
    - The last `history_limit` delivered events are kept for inspection

    Example:
        bus = EventBus()
        bus.add_middleware(make_knob_deadzone_middleware())
        bus.subscribe(EventType.MIDI_KNOB, controller.on_knob, priority=10)

        await bus.publish(MidiKnobEvent(control=10, value=66))
    """

    def __init__(self, history_limit: int = 100):
        self._subscriptions: Dict[EventType, List[Subscription]] = {}
        self._middleware: List[Middleware] = []
        self._history: Deque[Event] = deque(maxlen=history_limit)
        self.published: Counter = Counter()
        self.dropped: Counter = Counter()

    # === Registration ===

    def subscribe(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Register handler for event_type

        Args:
            event_type: Events to receive
            handler: Sync or async callable taking the event
            priority: Higher runs earlier (default 0)
            filter_fn: Predicate; the handler is skipped when it returns False
        """
        subscription = Subscription(handler, priority, filter_fn, inspect.iscoroutinefunction(handler))
        subscriptions = self._subscriptions.setdefault(event_type, [])
        subscriptions.append(subscription)
        subscriptions.sort(key=lambda s: -s.priority)

        log.debug("Handler subscribed", event_type=event_type.name, handler=_name(handler), priority=priority)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> bool:
        """
        Returns:
            True if handler was registered for event_type
        """
        subscriptions = self._subscriptions.get(event_type, [])
        kept = [s for s in subscriptions if s.handler != handler]
        self._subscriptions[event_type] = kept
        return len(kept) < len(subscriptions)

    def add_middleware(self, middleware: Middleware) -> None:
        """Middleware returns the (possibly replaced) event, or None to drop it"""
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=_name(middleware))

    def handler_count(self, event_type: EventType) -> int:
        return len(self._subscriptions.get(event_type, []))

    # === Dispatch ===

    async def publish(self, event: Event) -> None:
        original_type = event.type
        for middleware in self._middleware:
            event = middleware(event)
            if event is None:
                self.dropped[original_type] += 1
                return

        self._history.append(event)
        self.published[event.type] += 1

        for subscription in list(self._subscriptions.get(event.type, ())):
            if not subscription.accepts(event):
                continue
            try:
                if subscription.is_async:
                    await subscription.handler(event)
                else:
                    subscription.handler(event)
            except Exception as e:
                log.error(
                    "Event handler failed",
                    event_type=event.type.name,
                    handler=_name(subscription.handler),
                    exception=e
                )

    # === History ===

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Most recent delivered events, oldest first"""
        if limit <= 0:
            return []
        return list(self._history)[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
