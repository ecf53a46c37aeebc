"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterator, Sequence

from core.cards import Card


def _value_and_soft_aces(cards: Sequence[Card]) -> tuple[int, int]:
    """Return the best total and how many aces still count as 11."""
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.numeric_value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total, aces


def calculate_hand_value(cards: Sequence[Card]) -> int:
    """
    Calculate the best hand value.

    Returns the highest value that doesn't bust, or the hard total when
    every ace is already counted as 1.
    """
    return _value_and_soft_aces(cards)[0]


def is_soft(cards: Sequence[Card]) -> bool:
    """Check if the hand still counts an ace as 11."""
    return _value_and_soft_aces(cards)[1] > 0


def is_pair(cards: Sequence[Card]) -> bool:
    """Check if the hand is a pair (two cards of same rank)."""
    return len(cards) == 2 and cards[0].rank == cards[1].rank


def is_natural(cards: Sequence[Card]) -> bool:
    """Check if the hand is a two-card blackjack (ace plus ten-value)."""
    return (
        len(cards) == 2
        and any(card.is_ace for card in cards)
        and any(card.is_ten_value for card in cards)
    )


@dataclass(frozen=True)
class Hand:
    """A read-only blackjack hand with value calculation."""

    cards: tuple[Card, ...] = ()

    @property
    def value(self) -> int:
        """Return the best hand value."""
        return calculate_hand_value(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return is_soft(self.cards)

    @property
    def is_hard(self) -> bool:
        """Check if the hand is hard (not soft)."""
        return not self.is_soft

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair."""
        return is_pair(self.cards)

    @property
    def is_natural(self) -> bool:
        """Check if the hand is a natural blackjack."""
        return is_natural(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_natural:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({list(self.cards)!r}, value={self.value})"
