"""
Event bus for time slider change notifications.

Listeners subscribe per attribute (``EventType``). Emission can be deferred
with :meth:`EventBus.deferred`: while any deferred block is open, emitted
events are queued and delivered only once the outermost block exits, so
listeners never observe a half-finished recomputation.
"""
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Published attributes of the time slider controller."""

    FULL_EXTENT_CHANGED = auto()
    CURRENT_EXTENT_CHANGED = auto()
    NUMBER_OF_STEPS_CHANGED = auto()
    START_STEP_CHANGED = auto()
    END_STEP_CHANGED = auto()
    STEP_TIMES_CHANGED = auto()


@dataclass
class Event:
    """Event data container."""
    type: EventType | str
    data: dict[str, Any]
    source: str | None = None


class EventBus:
    """
    Pub/sub bus with priority ordering and deferred delivery.

    Handler exceptions are logged and swallowed so a faulty listener cannot
    interrupt delivery to the others.
    """

    def __init__(self, name: str = "default", max_history: int = 100):
        """
        Initialize event bus.

        Parameters
        ----------
        name : str
            Name of this event bus instance (used in log records)
        max_history : int
            Number of delivered events kept for inspection
        """
        self.name = name
        self._subscribers: dict[EventType | str, list[tuple[int, Callable]]] = {}
        self._event_history: list[Event] = []
        self._max_history = max_history
        self._defer_depth = 0
        self._queue: list[Event] = []
        logger.debug(f"Created EventBus: {name}")

    def subscribe(
        self,
        event_type: EventType | str,
        callback: Callable[[Event], None],
        priority: int = 0
    ) -> None:
        """
        Subscribe to an event type.

        Parameters
        ----------
        event_type : EventType | str
            Event type to subscribe to
        callback : Callable[[Event], None]
            Function to call when event is delivered
        priority : int
            Priority for callback execution (higher = earlier)
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        index = next(
            (i for i, (existing, _) in enumerate(callbacks) if priority > existing),
            len(callbacks),
        )
        callbacks.insert(index, (priority, callback))
        logger.debug(f"[{self.name}] Subscribed to {event_type} (priority={priority})")

    def unsubscribe(self, event_type: EventType | str, callback: Callable[[Event], None]) -> bool:
        """Remove a callback; returns True if it was subscribed."""
        callbacks = self._subscribers.get(event_type, [])
        for i, (_, cb) in enumerate(callbacks):
            if cb == callback:
                del callbacks[i]
                return True
        return False

    def has_subscribers(self, event_type: EventType | str) -> bool:
        return bool(self._subscribers.get(event_type))

    @property
    def is_deferring(self) -> bool:
        return self._defer_depth > 0

    @contextmanager
    def deferred(self) -> Iterator[None]:
        """
        Queue emitted events until the outermost deferred block exits.

        Queued events of the same type are coalesced: only the latest one is
        delivered, at the position of its first occurrence. The queue is
        flushed even when the block raises.
        """
        self._defer_depth += 1
        try:
            yield
        finally:
            self._defer_depth -= 1
            if self._defer_depth == 0:
                self._flush()

    def emit(self, event_type: EventType | str, source: str | None = None, **data) -> None:
        """
        Emit an event, or queue it while a deferred block is open.

        Parameters
        ----------
        event_type : EventType | str
            Type of event to emit
        source : str | None
            Component emitting the event
        **data
            Event data as keyword arguments
        """
        event = Event(type=event_type, data=data, source=source)
        if self._defer_depth > 0:
            for i, queued in enumerate(self._queue):
                if queued.type == event_type:
                    self._queue[i] = event
                    break
            else:
                self._queue.append(event)
            return
        self._deliver(event)

    def get_history(
        self,
        event_type: (EventType | str) | None = None,
        limit: int | None = None
    ) -> list[Event]:
        """
        Get delivered events (most recent last).

        Parameters
        ----------
        event_type : (EventType | str) | None
            If provided, filter by event type
        limit : int | None
            Maximum number of events to return
        """
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        if limit is not None:
            history = history[-limit:]
        return history

    def clear_history(self) -> None:
        self._event_history.clear()

    def _flush(self) -> None:
        # Handlers may re-enter and queue more events; drain until empty
        while self._queue and self._defer_depth == 0:
            self._deliver(self._queue.pop(0))

    def _deliver(self, event: Event) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history.pop(0)

        # Copy so handlers may (un)subscribe while being called
        subscribers = list(self._subscribers.get(event.type, []))
        logger.debug(
            f"[{self.name}] Delivering {event.type} from {event.source or 'unknown'} "
            f"to {len(subscribers)} subscribers"
        )
        for _, callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.error(
                    f"[{self.name}] Error in event handler "
                    f"{getattr(callback, '__name__', callback)} for {event.type}: {e}",
                    exc_info=True,
                )


__all__ = [
    "EventBus",
    "Event",
    "EventType",
]
