"""Stateless basic strategy lookup."""

from fastapi import APIRouter, HTTPException

from api.schemas import AdviceRequest, AdviceResponse, card_to_response, hand_to_response
from core.cards import Card
from core.hand import Hand
from core.strategy import BasicStrategy

router = APIRouter()

_strategy = BasicStrategy()


def _parse_card(s: str) -> Card:
    try:
        return Card.from_string(s)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("/advice")
async def advice(request: AdviceRequest) -> AdviceResponse:
    """Return the basic strategy action for a hand and dealer upcard."""
    hand = Hand(tuple(_parse_card(s) for s in request.player_cards))
    upcard = _parse_card(request.dealer_upcard)

    decision, category = _strategy.decide(hand.cards, upcard)
    _, key = _strategy.classify(hand.cards)

    return AdviceResponse(
        player_hand=hand_to_response(hand),
        dealer_upcard=card_to_response(upcard),
        decision=str(decision),
        category=str(category),
        key=key,
    )
