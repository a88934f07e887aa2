"""
Event bus connecting the window loop and the scene.

Ticks and lifecycle events are emitted immediately. Pointer flaps arrive
from the input layer and are queued until the loop drains them at the
start of the next frame.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import asyncio
import logging
import time
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    FLAP = auto()
    COLLISION = auto()
    STATE_CHANGED = auto()
    SCORE_CHANGED = auto()
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A message on the bus.

    Attributes:
        type: What happened
        data: Payload, e.g. ``time``/``delta``/``frame`` for TICK
        source: Who emitted it
        timestamp: Monotonic creation time in seconds
    """
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """Per-type handler lists with immediate and queued delivery."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._queue: asyncio.Queue[Event] = asyncio.Queue()

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Returns:
            A function that removes the handler again
        """
        handlers = self._handlers[event_type]
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Deliver an event to its handlers now."""
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Hold an event until the next ``process_queue``."""
        self._queue.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver every queued event in arrival order."""
        while not self._queue.empty():
            event = self._queue.get_nowait()
            self._dispatch(event)
            self._queue.task_done()

    def _dispatch(self, event: Event) -> None:
        # Copy: handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error handling {event.type.name}: {e}")


def flap_event(source: str = "keyboard") -> Event:
    return Event(EventType.FLAP, source=source)


def tick_event(time_ms: float, delta_ms: float, frame: int) -> Event:
    """TICK carrying the loop clock, the frame delta (both ms) and the frame index."""
    return Event(EventType.TICK, data={"time": time_ms, "delta": delta_ms, "frame": frame})
