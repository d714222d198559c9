"""Game events for the presentation port."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable, Protocol


class EventType(Enum):
    """Types of game events."""

    # Round flow
    PHASE_CHANGED = auto()
    ROUND_ENDED = auto()

    # Table rendering
    HANDS_UPDATED = auto()
    DEALER_UPDATED = auto()
    ACTIONS_UPDATED = auto()
    COUNT_UPDATED = auto()
    BET_UPDATED = auto()
    BALANCE_UPDATED = auto()
    SHOE_SHUFFLED = auto()

    # Text
    MESSAGE = auto()
    STRATEGY_FEEDBACK = auto()
    STRATEGY_HINT = auto()


class MessageCategory(Enum):
    """Tag carried by MESSAGE and STRATEGY_FEEDBACK events."""

    NONE = ""
    INFO = "info"
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    BLACKJACK = "bj"
    CORRECT = "correct"
    INCORRECT = "wrong"


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are the only way the round driver talks to the presentation
    layer; nothing flows back.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class PresentationPort(Protocol):
    """Sink for game events (a renderer, a recorder, an API buffer)."""

    def __call__(self, event: GameEvent) -> None: ...


class EventEmitter:
    """
    Fans events out to subscribed handlers.

    Handlers registered for one event type hear only that type; handlers
    registered with no type hear everything, after the typed ones. The
    last ``history_limit`` events are kept for late subscribers and tests.
    """

    def __init__(self, history_limit: int = 500) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: deque[GameEvent] = deque(maxlen=history_limit)

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """
        Register a handler.

        Args:
            handler: Called with every matching event
            event_type: Only this type, or every event if None
        """
        self._handlers[event_type].append(handler)

    def unsubscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Drop a handler. Handlers that were never registered are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        self._history.append(event)
        for handler in (*self._handlers.get(event.event_type, ()), *self._handlers.get(None, ())):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, emit it and return it."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Most recent events, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()


class EventRecorder:
    """Presentation port that buffers events until drained."""

    def __init__(self) -> None:
        self._events: list[GameEvent] = []

    def __call__(self, event: GameEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[GameEvent]:
        """Return and forget everything recorded so far."""
        events, self._events = self._events, []
        return events

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Recorded events of one type, oldest first."""
        return [e for e in self._events if e.event_type == event_type]

    @property
    def messages(self) -> list[tuple[str, MessageCategory]]:
        """Text and category of every MESSAGE recorded."""
        return [
            (e.data["text"], e.data["category"])
            for e in self._events
            if e.event_type == EventType.MESSAGE
        ]
