"""Training session events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of training events."""

    # Session flow events
    SESSION_STARTED = auto()
    HAND_DEALT = auto()
    DECK_REPLACED = auto()

    # Decision events
    DECISION_CORRECT = auto()
    DECISION_INCORRECT = auto()
    DEALER_REVEALS = auto()

    # Settings events
    ACE_MODE_CHANGED = auto()

    # Error events
    INVALID_ACTION = auto()


@dataclass(frozen=True)
class TrainingEvent:
    """
    Immutable training event.

    Events are the primary communication mechanism between the session
    and whatever presents it.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[TrainingEvent], None]


class EventEmitter:
    """
    Simple event emitter for training events.

    Allows subscribing to specific event types or all events.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[TrainingEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: TrainingEvent) -> None:
        """Emit an event to type-specific subscribers, then catch-all ones."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)

        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> TrainingEvent:
        """Create and emit a new event."""
        event = TrainingEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[TrainingEvent]:
        """Return the event history."""
        return self._event_history.copy()
