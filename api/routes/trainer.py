"""Strategy trainer API endpoints."""

import time
from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Header

from api.schemas import (
    AceModeRequest,
    DecisionRequest,
    DecisionResponse,
    NewSessionRequest,
    NewSessionResponse,
    TrainerStateResponse,
    card_to_response,
    hand_to_response,
)
from api.session import create_session, extract_session_id, get_session, get_session_store
from config import config
from core.cards import Card, Deck, Rank, Suit
from core.hand import Hand
from core.strategy import Decision
from core.training import TrainingSession

router = APIRouter()

# In-memory session cache (for performance, backed by session store)
_sessions: dict[str, TrainingSession] = {}

# Session data keys
SESSION_KEY_TRAINER = "trainer"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _serialize_card(card: Card) -> dict[str, int]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value}


def _deserialize_card(data: dict[str, int]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit(data["suit"]))


def _serialize_decision(decision: Decision | None) -> str | None:
    return None if decision is None else str(decision)


def _deserialize_decision(data: str | None) -> Decision | None:
    return None if data is None else Decision.from_string(data)


def _serialize_trainer(session: TrainingSession) -> dict[str, Any]:
    """Serialize a training session for session storage."""
    return {
        "state": session._machine_state,
        "ace_mode": session.ace_mode,
        "deck": None if session.deck is None else [_serialize_card(c) for c in session.deck],
        "player_hand": [_serialize_card(c) for c in session.player_hand],
        "dealer_hand": [_serialize_card(c) for c in session.dealer_hand],
        "dealer_revealed": session.dealer_revealed,
        "score": session.score,
        "correct_decisions": session.correct_decisions,
        "total_decisions": session.total_decisions,
        "last_decision": _serialize_decision(session.last_decision),
        "last_correct_decision": _serialize_decision(session.last_correct_decision),
    }


def _deserialize_trainer(data: dict[str, Any]) -> TrainingSession:
    """Restore a training session from session data."""
    session = TrainingSession(
        ace_mode=data["ace_mode"],
        low_deck_threshold=config.trainer.low_deck_threshold,
    )

    # Restore state machine state
    session._machine_state = data["state"]

    if data["deck"] is not None:
        session.deck = Deck(tuple(_deserialize_card(c) for c in data["deck"]))
    session.player_hand = Hand(tuple(_deserialize_card(c) for c in data["player_hand"]))
    session.dealer_hand = Hand(tuple(_deserialize_card(c) for c in data["dealer_hand"]))
    session.dealer_revealed = data["dealer_revealed"]

    session.score = data["score"]
    session.correct_decisions = data["correct_decisions"]
    session.total_decisions = data["total_decisions"]
    session.last_decision = _deserialize_decision(data["last_decision"])
    session.last_correct_decision = _deserialize_decision(data["last_correct_decision"])

    return session


async def _save_trainer(session_id: str, session: TrainingSession) -> None:
    """Save a training session to the session store."""
    store = await get_session_store()
    session_data = await store.get(session_id) or {}
    session_data[SESSION_KEY_TRAINER] = _serialize_trainer(session)
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    if SESSION_KEY_CREATED_AT not in session_data:
        session_data[SESSION_KEY_CREATED_AT] = int(time.time())
    await store.set(session_id, session_data)


async def _get_trainer(session_id: str) -> TrainingSession:
    """
    Get the training session, or 404 if it is unknown or expired.

    The session ID must carry a valid signature and still be present in the
    session store; the cache only saves rebuilding the session object.
    """
    session_data = None
    if extract_session_id(session_id) is not None:
        session_data = await get_session(session_id)

    if not session_data or SESSION_KEY_TRAINER not in session_data:
        _sessions.pop(session_id, None)
        raise HTTPException(status_code=404, detail="Unknown or expired session")

    if session_id not in _sessions:
        _sessions[session_id] = _deserialize_trainer(session_data[SESSION_KEY_TRAINER])
    return _sessions[session_id]


async def _evict_expired() -> None:
    """Drop cached sessions whose stored data has expired."""
    store = await get_session_store()
    await store.cleanup_expired()
    for session_id in list(_sessions):
        if not await store.exists(session_id):
            del _sessions[session_id]


def _state_response(session: TrainingSession) -> TrainerStateResponse:
    """Convert session state to response."""
    upcard = session.dealer_upcard
    dealt = bool(session.player_hand.cards)
    return TrainerStateResponse(
        state=session.state.name,
        player_hand=hand_to_response(session.player_hand) if dealt else None,
        dealer_upcard=card_to_response(upcard) if upcard is not None else None,
        dealer_hand=hand_to_response(session.dealer_hand) if session.dealer_revealed else None,
        dealer_revealed=session.dealer_revealed,
        ace_mode=session.ace_mode,
        score=session.score,
        correct_decisions=session.correct_decisions,
        total_decisions=session.total_decisions,
        accuracy=round(session.accuracy, 1),
        cards_remaining=session.cards_remaining,
        last_decision=_serialize_decision(session.last_decision),
        last_correct_decision=_serialize_decision(session.last_correct_decision),
        can_deal=session.can_deal,
        can_decide=session.can_decide,
    )


@router.post("/new")
async def new_session(request: NewSessionRequest | None = None) -> NewSessionResponse:
    """Create a training session and deal its first hand."""
    ace_mode = config.trainer.ace_mode_default
    if request is not None and request.ace_mode is not None:
        ace_mode = request.ace_mode

    await _evict_expired()

    session_id = await create_session()
    session = TrainingSession(
        ace_mode=ace_mode,
        low_deck_threshold=config.trainer.low_deck_threshold,
    )
    session.deal_hand()

    _sessions[session_id] = session
    await _save_trainer(session_id, session)
    return NewSessionResponse(session_id=session_id)


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Get the current table and score."""
    session = await _get_trainer(session_id)
    return _state_response(session)


@router.post("/deal")
async def deal(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Deal the next practice hand."""
    session = await _get_trainer(session_id)

    if not session.deal_hand():
        raise HTTPException(status_code=400, detail="Cannot deal while a decision is pending")

    await _save_trainer(session_id, session)
    return _state_response(session)


@router.post("/decision")
async def submit_decision(
    request: DecisionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> DecisionResponse:
    """Grade the trainee's decision and reveal the dealer's hand."""
    session = await _get_trainer(session_id)

    result = session.submit_decision(Decision.from_string(request.decision))
    if result is None:
        raise HTTPException(status_code=400, detail="No hand is awaiting a decision")

    await _save_trainer(session_id, session)
    return DecisionResponse(
        is_correct=result.is_correct,
        decision=str(result.decision),
        correct_decision=str(result.correct_decision),
        category=str(result.category),
        player_total=result.player_total,
        dealer_hand=hand_to_response(session.dealer_hand),
        score=session.score,
        correct_decisions=session.correct_decisions,
        total_decisions=session.total_decisions,
        accuracy=round(session.accuracy, 1),
        auto_advance_seconds=config.trainer.auto_advance_seconds,
    )


@router.put("/ace-mode")
async def set_ace_mode(
    request: AceModeRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> TrainerStateResponse:
    """Turn ace mode on or off for subsequent deals."""
    session = await _get_trainer(session_id)
    session.set_ace_mode(request.enabled)
    await _save_trainer(session_id, session)
    return _state_response(session)
