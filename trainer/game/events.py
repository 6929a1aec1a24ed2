"""Trainer events for the display layer."""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    HAND_DEALT = auto()
    SHOE_SHUFFLED = auto()
    DECISION_JUDGED = auto()
    NEW_BEST_STREAK = auto()
    PRACTICE_MODE_CHANGED = auto()

    # A command was refused; the trainer did not change
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """Something the trainer did, with the details a view needs to show it."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous publish/subscribe hub owned by one trainer.

    Handlers registered for a specific ``EventType`` run before handlers
    registered for every event (``event_type=None``). The most recent events
    are kept in ``history``.
    """

    HISTORY_LIMIT = 200

    def __init__(self) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: deque[GameEvent] = deque(maxlen=self.HISTORY_LIMIT)

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._history.append(event)
        logger.debug("%s", event)
        for handler in [*self._handlers.get(event.event_type, []), *self._handlers.get(None, [])]:
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build a ``GameEvent`` from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
