"""Tests for the training session state machine."""

from random import Random

from conftest import make_cards
from core.cards import Deck
from core.hand import Hand
from core.strategy import Decision, HandCategory, get_perfect_strategy_decision
from core.training import EventType, TrainingSession, TrainingState


def stacked_session(*labels: str, **kwargs) -> TrainingSession:
    """A session whose next deal comes from the given cards plus filler."""
    filler = ("2♣", "3♣", "4♣", "5♣", "6♣", "7♣", "8♣", "9♣")
    session = TrainingSession(rng=Random(0), **kwargs)
    session.deck = Deck(make_cards(*labels, *filler))
    return session


class TestDealing:
    """Tests for dealing hands."""

    def test_initial_state(self, session):
        """Test a fresh session."""
        assert session.state == TrainingState.IDLE
        assert session.deck is None
        assert session.dealer_upcard is None
        assert session.accuracy == 0.0
        assert session.can_deal
        assert not session.can_decide

    def test_first_deal_creates_deck(self, session):
        """Test the first hand comes from a fresh deck."""
        assert session.deal_hand()
        assert session.state == TrainingState.AWAITING_DECISION
        assert len(session.player_hand) == 2
        assert len(session.dealer_hand) == 2
        assert session.cards_remaining == 48
        assert not session.dealer_revealed

    def test_cannot_deal_while_decision_pending(self, session):
        """Test dealing twice without a decision."""
        session.deal_hand()
        player = session.player_hand
        assert not session.deal_hand()
        assert session.player_hand == player
        assert session.events.history[-1].event_type == EventType.INVALID_ACTION

    def test_stacked_deal(self):
        """Test the session deals from its own deck in order."""
        session = stacked_session("10♠", "6♦", "K♥", "7♣")
        session.deal_hand()
        assert session.player_hand == Hand(make_cards("10♠", "6♦"))
        assert str(session.dealer_upcard) == "K♥"

    def test_low_deck_is_replaced(self):
        """Test the deck is refreshed below the threshold."""
        session = TrainingSession(rng=Random(1))
        session.deck = Deck(make_cards("10♠", "6♦", "K♥", "7♣", "2♦"))
        session.deal_hand()
        assert session.cards_remaining == 48
        types = [e.event_type for e in session.events.history]
        assert EventType.DECK_REPLACED in types

    def test_custom_low_deck_threshold(self):
        """Test a lower threshold keeps dealing from a short deck."""
        session = TrainingSession(low_deck_threshold=4, rng=Random(1))
        session.deck = Deck(make_cards("10♠", "6♦", "K♥", "7♣", "2♦"))
        session.deal_hand()
        assert session.cards_remaining == 1

    def test_deck_carries_over_between_hands(self):
        """Test consecutive hands come from the same deck."""
        session = stacked_session("10♠", "6♦", "K♥", "7♣", "9♠", "8♦", "4♥", "3♣")
        session.deal_hand()
        session.submit_decision(Decision.HIT)
        session.deal_hand()
        assert session.player_hand == Hand(make_cards("9♠", "8♦"))
        assert session.cards_remaining == 8


class TestDecisions:
    """Tests for grading decisions."""

    def test_correct_decision(self):
        """Test a correct answer raises the score."""
        session = stacked_session("10♠", "6♦", "K♥", "7♣")
        session.deal_hand()
        result = session.submit_decision(Decision.HIT)

        assert result is not None
        assert result.is_correct
        assert result.correct_decision == Decision.HIT
        assert result.category == HandCategory.HARD
        assert result.player_total == 16
        assert session.score == 1
        assert session.correct_decisions == 1
        assert session.total_decisions == 1
        assert session.accuracy == 100.0

    def test_incorrect_decision(self):
        """Test a wrong answer lowers the score."""
        session = stacked_session("A♠", "6♦", "5♥", "7♣")
        session.deal_hand()
        result = session.submit_decision(Decision.STAND)

        assert not result.is_correct
        assert result.correct_decision == Decision.DOUBLE
        assert result.category == HandCategory.SOFT
        assert session.score == -1
        assert session.correct_decisions == 0
        assert session.total_decisions == 1
        assert session.last_decision == Decision.STAND
        assert session.last_correct_decision == Decision.DOUBLE

    def test_decision_reveals_dealer(self, session):
        """Test the hole card is shown after grading."""
        session.deal_hand()
        session.submit_decision(Decision.STAND)
        assert session.dealer_revealed
        assert session.state == TrainingState.SHOWING_FEEDBACK
        types = [e.event_type for e in session.events.history]
        assert EventType.DEALER_REVEALS in types

    def test_decision_without_hand(self, session):
        """Test deciding before any deal."""
        assert session.submit_decision(Decision.HIT) is None
        assert session.total_decisions == 0
        assert session.events.history[-1].event_type == EventType.INVALID_ACTION

    def test_cannot_decide_twice(self, session):
        """Test one decision per hand."""
        session.deal_hand()
        session.submit_decision(Decision.HIT)
        assert session.submit_decision(Decision.HIT) is None
        assert session.total_decisions == 1

    def test_next_deal_clears_feedback(self, session):
        """Test a new hand hides the dealer and forgets the last answer."""
        session.deal_hand()
        session.submit_decision(Decision.HIT)
        session.deal_hand()
        assert not session.dealer_revealed
        assert session.last_decision is None
        assert session.last_correct_decision is None

    def test_accuracy_over_many_hands(self, session):
        """Test counters stay consistent with the advisor."""
        correct = 0
        for _ in range(50):
            session.deal_hand()
            expected = get_perfect_strategy_decision(
                session.player_hand.cards, session.dealer_upcard
            )
            if session.submit_decision(Decision.STAND).is_correct:
                correct += 1
            assert session.last_correct_decision == expected
        assert session.total_decisions == 50
        assert session.correct_decisions == correct
        assert session.score == 2 * correct - 50
        assert session.accuracy == correct / 50 * 100


class TestAceMode:
    """Tests for toggling ace mode."""

    def test_toggle_emits_event(self, session):
        """Test switching ace mode on."""
        session.set_ace_mode(True)
        assert session.ace_mode
        assert session.events.history[-1].event_type == EventType.ACE_MODE_CHANGED

    def test_toggle_to_same_value_is_silent(self, session):
        """Test no event when nothing changes."""
        session.set_ace_mode(False)
        assert session.events.history == []

    def test_ace_mode_deals_player_an_ace(self):
        """Test ace-mode hands hold an ace whenever the deck still has one."""
        session = TrainingSession(ace_mode=True, rng=Random(11))
        for _ in range(100):
            deck = session.deck
            fresh = deck is None or len(deck) < session.low_deck_threshold
            deck_has_ace = fresh or any(c.is_ace for c in deck)
            session.deal_hand()
            if deck_has_ace:
                assert any(c.is_ace for c in session.player_hand)
            session.submit_decision(Decision.HIT)


class TestEvents:
    """Tests for event subscription."""

    def test_subscribe_to_specific_event(self, session):
        """Test type-filtered handlers."""
        dealt = []
        session.subscribe(dealt.append, EventType.HAND_DEALT)
        session.deal_hand()
        assert len(dealt) == 1
        assert dealt[0].data["cards_remaining"] == 48

    def test_subscribe_to_all_events(self, session):
        """Test catch-all handlers."""
        seen = []
        session.subscribe(seen.append)
        session.deal_hand()
        session.submit_decision(Decision.SPLIT)
        types = [e.event_type for e in seen]
        assert types[0] == EventType.SESSION_STARTED
        assert EventType.HAND_DEALT in types
        assert types[-1] == EventType.DEALER_REVEALS

    def test_unsubscribe(self, session):
        """Test removing a handler."""
        seen = []
        session.subscribe(seen.append)
        session.events.unsubscribe(seen.append)
        session.deal_hand()
        assert seen == []
