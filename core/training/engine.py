"""Strategy training session with state machine."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck
from core.dealing import LOW_DECK_THRESHOLD, deal_initial_hands, ensure_playable_deck
from core.hand import Hand
from core.strategy.basic import BasicStrategy, Decision, HandCategory
from core.training.events import EventEmitter, EventType, TrainingEvent
from core.training.state import TrainingState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of grading one decision."""

    decision: Decision
    correct_decision: Decision
    category: HandCategory
    player_total: int

    @property
    def is_correct(self) -> bool:
        """Check if the trainee matched basic strategy."""
        return self.decision == self.correct_decision


class TrainingSession:
    """
    Basic strategy drill: deal a hand, grade the decision, repeat.

    UI-agnostic. The session owns the deck and both hands between calls;
    presentation layers read its properties and listen to its events.
    """

    STATES = [s.name.lower() for s in TrainingState]

    TRANSITIONS = [
        {"trigger": "deal_cards", "source": ["idle", "showing_feedback"], "dest": "awaiting_decision"},
        {"trigger": "grade_decision", "source": "awaiting_decision", "dest": "showing_feedback"},
    ]

    def __init__(
        self,
        ace_mode: bool = False,
        low_deck_threshold: int = LOW_DECK_THRESHOLD,
        strategy: BasicStrategy | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new training session.

        Args:
            ace_mode: Guarantee an ace in every player hand
            low_deck_threshold: Swap in a fresh deck below this many cards
            strategy: Strategy tables to grade against
            rng: Random number generator for reproducible sessions
        """
        self.ace_mode = ace_mode
        self.low_deck_threshold = low_deck_threshold
        self.strategy = strategy or BasicStrategy()
        self._rng = rng

        self.deck: Deck | None = None
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.dealer_revealed = False

        self.score = 0
        self.correct_decisions = 0
        self.total_decisions = 0
        self.last_decision: Decision | None = None
        self.last_correct_decision: Decision | None = None

        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> TrainingState:
        """Get current session state as enum."""
        return TrainingState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[TrainingEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to session events."""
        self.events.subscribe(handler, event_type)

    def deal_hand(self) -> bool:
        """
        Deal the next practice hand.

        Returns:
            True if a hand was dealt
        """
        if self.state == TrainingState.AWAITING_DECISION:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot deal while a decision is pending",
                state=self.state.name,
            )
            return False

        if self.state == TrainingState.IDLE:
            self.events.emit_new(EventType.SESSION_STARTED, ace_mode=self.ace_mode)

        deck = ensure_playable_deck(self.deck, self.low_deck_threshold, self._rng)
        if deck is not self.deck:
            self.events.emit_new(
                EventType.DECK_REPLACED,
                cards_left=0 if self.deck is None else len(self.deck),
            )

        deal = deal_initial_hands(deck, self.ace_mode, self._rng)
        self.deck = deal.remaining_deck
        self.player_hand = Hand(deal.player_hand)
        self.dealer_hand = Hand(deal.dealer_hand)
        self.dealer_revealed = False
        self.last_decision = None
        self.last_correct_decision = None

        self.deal_cards()
        self.events.emit_new(
            EventType.HAND_DEALT,
            player=[str(c) for c in self.player_hand],
            dealer_upcard=str(self.dealer_upcard),
            cards_remaining=len(self.deck),
        )
        return True

    def submit_decision(self, decision: Decision) -> DecisionResult | None:
        """
        Grade the trainee's decision against basic strategy.

        Args:
            decision: The action the trainee chose

        Returns:
            The graded result, or None if no hand is awaiting a decision
        """
        if self.state != TrainingState.AWAITING_DECISION:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="No hand is awaiting a decision",
                state=self.state.name,
            )
            return None

        correct, category = self.strategy.decide(
            self.player_hand.cards, self.dealer_upcard
        )
        result = DecisionResult(
            decision=decision,
            correct_decision=correct,
            category=category,
            player_total=self.player_hand.value,
        )

        self.total_decisions += 1
        if result.is_correct:
            self.correct_decisions += 1
            self.score += 1
        else:
            self.score -= 1
        self.last_decision = decision
        self.last_correct_decision = correct
        self.dealer_revealed = True

        self.grade_decision()
        self.events.emit_new(
            EventType.DECISION_CORRECT if result.is_correct else EventType.DECISION_INCORRECT,
            decision=str(decision),
            correct_decision=str(correct),
            category=str(category),
            player_total=result.player_total,
        )
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=[str(c) for c in self.dealer_hand],
            value=self.dealer_hand.value,
        )
        logger.debug(
            "Graded %s vs correct %s (%s %d)",
            decision, correct, category, result.player_total,
        )
        return result

    def set_ace_mode(self, enabled: bool) -> None:
        """Turn ace mode on or off; applies from the next deal."""
        if enabled == self.ace_mode:
            return
        self.ace_mode = enabled
        self.events.emit_new(EventType.ACE_MODE_CHANGED, ace_mode=enabled)

    @property
    def dealer_upcard(self) -> Card | None:
        """Return the dealer's face-up card."""
        if not self.dealer_hand.cards:
            return None
        return self.dealer_hand.cards[0]

    @property
    def accuracy(self) -> float:
        """Return the percentage of correct decisions."""
        if self.total_decisions == 0:
            return 0.0
        return self.correct_decisions / self.total_decisions * 100

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards left in the deck."""
        return 0 if self.deck is None else len(self.deck)

    @property
    def can_deal(self) -> bool:
        """Check if a new hand can be dealt."""
        return self.state != TrainingState.AWAITING_DECISION

    @property
    def can_decide(self) -> bool:
        """Check if a decision can be submitted."""
        return self.state == TrainingState.AWAITING_DECISION
