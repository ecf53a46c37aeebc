"""Tests for hand evaluation."""

import pytest

from hypothesis import given

from conftest import hand_strategy, make_cards
from core.hand import Hand, calculate_hand_value, is_natural, is_pair, is_soft


class TestCalculateHandValue:
    """Tests for calculate_hand_value."""

    @pytest.mark.parametrize(
        "labels, expected",
        [
            (("A♠", "A♦"), 12),
            (("A♠", "K♦"), 21),
            (("A♠", "A♦", "9♣"), 21),
            (("10♠", "9♦", "5♣"), 24),
            (("A♠", "5♥", "8♣"), 14),
            (("A♠", "A♥", "A♣", "9♦"), 12),
            (("7♠", "7♥", "7♣"), 21),
        ],
    )
    def test_values(self, labels, expected):
        """Test totals with and without ace softening."""
        assert calculate_hand_value(make_cards(*labels)) == expected

    def test_empty_hand(self):
        """Test that no cards is worth nothing."""
        assert calculate_hand_value(()) == 0

    @given(hand_strategy())
    def test_value_never_busts_while_an_ace_can_be_softened(self, cards):
        """Test that a bust total means every ace already counts as 1."""
        value = calculate_hand_value(cards)
        hard_total = sum(1 if c.is_ace else c.numeric_value for c in cards)
        if value > 21:
            assert value == hard_total
        else:
            assert hard_total <= value


class TestSoftness:
    """Tests for is_soft."""

    def test_soft_17(self, soft_17_hand):
        """Test an ace counted as 11."""
        assert is_soft(soft_17_hand.cards)
        assert soft_17_hand.value == 17

    def test_hard_16(self, hard_16_hand):
        """Test a hand with no ace."""
        assert not is_soft(hard_16_hand.cards)

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        assert is_soft(make_cards("A♠", "5♥"))
        assert not is_soft(make_cards("A♠", "5♥", "8♣"))

    def test_pair_of_aces_is_soft_12(self):
        """Test that one of two aces still counts as 11."""
        cards = make_cards("A♠", "A♥")
        assert is_soft(cards)
        assert calculate_hand_value(cards) == 12

    def test_multiple_aces_all_reduced(self):
        """Test A-A-A-9 counts every ace as 1."""
        assert not is_soft(make_cards("A♠", "A♥", "A♣", "9♦"))


class TestPairsAndNaturals:
    """Tests for is_pair and is_natural."""

    def test_pair_detection(self, pair_8s_hand):
        """Test pair detection."""
        assert is_pair(pair_8s_hand.cards)

    def test_different_ten_values_are_not_a_pair(self):
        """Test that K-Q shares a value but not a rank."""
        assert not is_pair(make_cards("K♠", "Q♥"))
        assert is_pair(make_cards("K♠", "K♥"))

    def test_not_pair_three_cards(self):
        """Test that 3 cards is not a pair."""
        assert not is_pair(make_cards("8♠", "8♥", "2♣"))

    def test_natural(self):
        """Test ace plus ten-value."""
        assert is_natural(make_cards("A♠", "K♦"))
        assert is_natural(make_cards("10♣", "A♥"))

    def test_not_natural(self):
        """Test hands that are not blackjack."""
        assert not is_natural(make_cards("A♠", "9♦"))
        assert not is_natural(make_cards("10♠", "9♦", "2♣"))
        assert not is_natural(make_cards("A♠", "K♦", "5♣"))
        assert not is_natural(make_cards("K♠", "Q♦"))


class TestHand:
    """Tests for the Hand view."""

    def test_blackjack(self, blackjack_hand):
        """Test blackjack detection."""
        assert blackjack_hand.is_natural
        assert blackjack_hand.value == 21
        assert blackjack_hand.is_soft

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.is_busted
        assert bust_hand.value == 26
        assert bust_hand.is_hard

    def test_sequence_protocol(self, pair_8s_hand):
        """Test length, indexing and iteration."""
        assert len(pair_8s_hand) == 2
        assert pair_8s_hand[0] == list(pair_8s_hand)[0]

    def test_str(self, soft_17_hand, blackjack_hand, bust_hand):
        """Test string representation."""
        assert str(soft_17_hand) == "A♠ 6♥ (soft 17)"
        assert str(blackjack_hand).endswith("(BLACKJACK)")
        assert str(bust_hand).endswith("(BUST)")

    def test_empty_hand(self):
        """Test empty hand properties."""
        hand = Hand()
        assert len(hand) == 0
        assert hand.value == 0
        assert not hand.is_soft
        assert not hand.is_natural
