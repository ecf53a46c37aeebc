"""Training session state enumeration."""

from enum import Enum, auto


class TrainingState(Enum):
    """
    Training session states.

    Flow: IDLE → AWAITING_DECISION → SHOWING_FEEDBACK → AWAITING_DECISION → ...
    """

    # No hand dealt yet
    IDLE = auto()

    # Hand on the table, dealer hole card hidden
    AWAITING_DECISION = auto()

    # Decision graded, dealer hand revealed
    SHOWING_FEEDBACK = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

