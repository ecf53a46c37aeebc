"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable, Iterable, Iterator


class Suit(Enum):
    """Card suits, in deck-building order."""

    SPADES = auto()
    CLUBS = auto()
    HEARTS = auto()
    DIAMONDS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.CLUBS: "♣",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks with blackjack values, in deck-building order."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        if self.value <= 10:
            return self.value
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANK_LABELS = {str(rank): rank for rank in Rank}
_RANK_LABELS["T"] = Rank.TEN

_SUIT_LABELS = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def numeric_value(self) -> int:
        """Return the blackjack point value, counting an Ace as 11."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_LABELS:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_LABELS:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_LABELS[rank_str], _SUIT_LABELS[suit_str])


@dataclass(frozen=True)
class Deck:
    """
    An ordered, immutable run of cards.

    Drawing never changes a deck; it hands back the drawn cards together
    with a new Deck holding whatever is left.
    """

    cards: tuple[Card, ...] = ()

    @classmethod
    def ordered(cls) -> "Deck":
        """Return the 52 cards suit-major, rank-minor, unshuffled."""
        return cls(tuple(Card(rank, suit) for suit in Suit for rank in Rank))

    def draw(self, count: int = 1) -> tuple[tuple[Card, ...], "Deck"]:
        """Draw cards from the front of the deck."""
        if count > len(self.cards):
            raise IndexError(
                f"Cannot draw {count} cards from a deck of {len(self.cards)}"
            )
        return self.cards[:count], Deck(self.cards[count:])

    def draw_at(self, indices: Iterable[int]) -> tuple[tuple[Card, ...], "Deck"]:
        """
        Draw the cards at the given positions.

        Returns the cards in the order the indices were given. Repeated
        indices are drawn once.
        """
        positions = list(dict.fromkeys(indices))
        for index in positions:
            if not 0 <= index < len(self.cards):
                raise IndexError(f"Card index {index} out of range")
        taken = set(positions)
        drawn = tuple(self.cards[i] for i in positions)
        remaining = tuple(c for i, c in enumerate(self.cards) if i not in taken)
        return drawn, Deck(remaining)

    def index_of(self, predicate: Callable[[Card], bool]) -> int | None:
        """Return the position of the first card matching predicate."""
        for index, card in enumerate(self.cards):
            if predicate(card):
                return index
        return None

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]


def shuffle_deck(deck: Deck, rng: Random | None = None) -> Deck:
    """
    Return a uniformly shuffled copy of the deck.

    Fisher-Yates: walk from the last position down, swapping each card
    with one chosen uniformly from the positions not yet fixed.
    """
    rng = rng or Random()
    cards = list(deck.cards)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return Deck(tuple(cards))


def create_deck(rng: Random | None = None) -> Deck:
    """Build a fresh 52-card deck and shuffle it."""
    return shuffle_deck(Deck.ordered(), rng)
