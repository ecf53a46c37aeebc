"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal

from core.cards import Card
from core.hand import Hand

DecisionName = Literal["hit", "stand", "double", "split"]


class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_pair: bool


def card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=str(card.rank), suit=str(card.suit), value=card.numeric_value)


def hand_to_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[card_to_response(c) for c in hand.cards],
        value=hand.value,
        is_soft=hand.is_soft,
        is_pair=hand.is_pair,
    )


# Trainer schemas
class NewSessionRequest(BaseModel):
    """Request to start a training session."""

    ace_mode: bool | None = None


class NewSessionResponse(BaseModel):
    """Newly created training session."""

    session_id: str


class DecisionRequest(BaseModel):
    """The trainee's chosen action."""

    decision: DecisionName


class AceModeRequest(BaseModel):
    """Toggle ace mode."""

    enabled: bool


class TrainerStateResponse(BaseModel):
    """Current table and score state."""

    state: str
    player_hand: HandResponse | None
    dealer_upcard: CardResponse | None
    dealer_hand: HandResponse | None = None  # Only once the hole card is revealed
    dealer_revealed: bool
    ace_mode: bool
    score: int
    correct_decisions: int
    total_decisions: int
    accuracy: float
    cards_remaining: int
    last_decision: DecisionName | None = None
    last_correct_decision: DecisionName | None = None
    can_deal: bool
    can_decide: bool


class DecisionResponse(BaseModel):
    """Graded decision."""

    is_correct: bool
    decision: DecisionName
    correct_decision: DecisionName
    category: Literal["pair", "soft", "hard"]
    player_total: int
    dealer_hand: HandResponse
    score: int
    correct_decisions: int
    total_decisions: int
    accuracy: float
    auto_advance_seconds: float


# Strategy schemas
class AdviceRequest(BaseModel):
    """Stateless strategy lookup."""

    player_cards: list[str] = Field(..., min_length=2, examples=[["A♠", "6♦"]])
    dealer_upcard: str = Field(..., examples=["5♥"])


class AdviceResponse(BaseModel):
    """Strategy lookup result."""

    player_hand: HandResponse
    dealer_upcard: CardResponse
    decision: DecisionName
    category: Literal["pair", "soft", "hard"]
    key: int
