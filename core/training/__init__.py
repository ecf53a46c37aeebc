"""Strategy training session and events."""

from core.training.events import TrainingEvent, EventType
from core.training.state import TrainingState
from core.training.engine import TrainingSession, DecisionResult

__all__ = [
    "TrainingEvent",
    "EventType",
    "TrainingState",
    "TrainingSession",
    "DecisionResult",
]
