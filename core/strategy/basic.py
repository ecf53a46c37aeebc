"""Basic strategy tables for the two-card decision."""

from enum import Enum, auto
from typing import Mapping, Sequence

from core.cards import Card
from core.hand import calculate_hand_value, is_pair, is_soft


class Decision(Enum):
    """Possible player actions on the initial two-card hand."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_string(cls, s: str) -> "Decision":
        """Parse a decision from its lower-case name ('hit', 'stand', ...)."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid decision: {s}") from None


class HandCategory(Enum):
    """Which strategy table a hand is looked up in."""

    PAIR = auto()
    SOFT = auto()
    HARD = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Type aliases for clarity
DealerUpcard = int  # 2-11 (11 = Ace)
PlayerTotal = int  # Hard total, soft total, or pair card value
TableKey = tuple[PlayerTotal, DealerUpcard]

DEALER_UPCARDS = range(2, 12)


class BasicStrategy:
    """
    Basic strategy lookup tables.

    Pre-computed dictionaries for O(1) lookup. Pairs are keyed by the
    value of one card of the pair, soft and hard hands by their total.
    A hand missing from a table falls through to the next one.
    """

    def __init__(self) -> None:
        self._pair_table = self._build_pair_table()
        self._soft_table = self._build_soft_table()
        self._hard_table = self._build_hard_table()

    def get_action(
        self,
        player_total: int,
        dealer_upcard: int,
        is_soft: bool = False,
        is_pair: bool = False,
        pair_rank: int | None = None,
    ) -> Decision:
        """
        Get the basic strategy action.

        Args:
            player_total: Player's hand total
            dealer_upcard: Dealer's upcard value (2-11, Ace=11)
            is_soft: Whether the hand is soft
            is_pair: Whether the hand is a pair
            pair_rank: The card value of the pair (for pair decisions)

        Returns:
            The recommended action
        """
        return self._lookup(
            player_total, dealer_upcard, is_soft, is_pair, pair_rank
        )[0]

    def decide(
        self, player_cards: Sequence[Card], dealer_upcard: Card
    ) -> tuple[Decision, HandCategory]:
        """Return the action for a hand and the table that produced it."""
        pair = is_pair(player_cards)
        return self._lookup(
            player_total=calculate_hand_value(player_cards),
            dealer_upcard=dealer_upcard.numeric_value,
            is_soft=is_soft(player_cards),
            is_pair=pair,
            pair_rank=player_cards[0].numeric_value if pair else None,
        )

    def _lookup(
        self,
        player_total: int,
        dealer_upcard: int,
        is_soft: bool,
        is_pair: bool,
        pair_rank: int | None,
    ) -> tuple[Decision, HandCategory]:
        # Check for pairs first
        if is_pair and pair_rank is not None:
            action = self._pair_table.get((pair_rank, dealer_upcard))
            if action:
                return action, HandCategory.PAIR

        # Check soft hands
        if is_soft:
            action = self._soft_table.get((player_total, dealer_upcard))
            if action:
                return action, HandCategory.SOFT

        # Hard hands
        action = self._hard_table.get((player_total, dealer_upcard))
        if action:
            return action, HandCategory.HARD

        # Default actions for edge cases (busted or unusual totals)
        if player_total >= 17:
            return Decision.STAND, HandCategory.HARD
        return Decision.HIT, HandCategory.HARD

    def classify(self, player_cards: Sequence[Card]) -> tuple[HandCategory, int]:
        """
        Return the table key a hand is looked up under.

        Pairs without a table entry (6s, 7s, 9s, tens) are classified by
        the soft or hard total they fall through to.
        """
        total = calculate_hand_value(player_cards)
        if is_pair(player_cards):
            pair_value = player_cards[0].numeric_value
            if (pair_value, DEALER_UPCARDS[0]) in self._pair_table:
                return HandCategory.PAIR, pair_value
        if is_soft(player_cards) and (total, DEALER_UPCARDS[0]) in self._soft_table:
            return HandCategory.SOFT, total
        return HandCategory.HARD, total

    def _build_pair_table(self) -> Mapping[TableKey, Decision]:
        """Build pair splitting strategy table."""
        H = Decision.HIT
        D = Decision.DOUBLE
        P = Decision.SPLIT

        table: dict[TableKey, Decision] = {}

        # Pair of 2s, 3s, 4s
        for pair in (2, 3, 4):
            for dealer in range(2, 8):
                table[(pair, dealer)] = P
            for dealer in range(8, 12):
                table[(pair, dealer)] = H

        # Pair of 5s: Never split, double like hard 10
        for dealer in DEALER_UPCARDS:
            table[(5, dealer)] = D

        # Pair of 8s: Always split
        for dealer in DEALER_UPCARDS:
            table[(8, dealer)] = P

        # Pair of Aces: Always split
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = P

        return table

    def _build_soft_table(self) -> Mapping[TableKey, Decision]:
        """Build soft totals strategy table."""
        H = Decision.HIT
        S = Decision.STAND
        D = Decision.DOUBLE

        table: dict[TableKey, Decision] = {}

        # Soft 13-14 (A,2 / A,3)
        for total in (13, 14):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if dealer in (5, 6) else H

        # Soft 15-16 (A,4 / A,5)
        for total in (15, 16):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = D if 4 <= dealer <= 6 else H

        # Soft 17 (A,6)
        for dealer in DEALER_UPCARDS:
            table[(17, dealer)] = D if 3 <= dealer <= 6 else H

        # Soft 18 (A,7)
        for dealer in DEALER_UPCARDS:
            table[(18, dealer)] = S if dealer <= 8 else H

        # Soft 19-21: Always stand
        for total in range(19, 22):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    def _build_hard_table(self) -> Mapping[TableKey, Decision]:
        """Build hard totals strategy table."""
        H = Decision.HIT
        S = Decision.STAND
        D = Decision.DOUBLE

        table: dict[TableKey, Decision] = {}

        # Hard 4-8: Always hit
        for total in range(4, 9):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = H

        # Hard 9
        for dealer in DEALER_UPCARDS:
            table[(9, dealer)] = D if 3 <= dealer <= 6 else H

        # Hard 10
        for dealer in DEALER_UPCARDS:
            table[(10, dealer)] = D if dealer <= 9 else H

        # Hard 11
        for dealer in DEALER_UPCARDS:
            table[(11, dealer)] = D

        # Hard 12
        for dealer in DEALER_UPCARDS:
            table[(12, dealer)] = S if 4 <= dealer <= 6 else H

        # Hard 13-16
        for total in range(13, 17):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S if dealer <= 6 else H

        # Hard 17+: Always stand
        for total in range(17, 22):
            for dealer in DEALER_UPCARDS:
                table[(total, dealer)] = S

        return table

    @property
    def pair_table(self) -> Mapping[TableKey, Decision]:
        """Return the pair splitting strategy table."""
        return self._pair_table

    @property
    def soft_table(self) -> Mapping[TableKey, Decision]:
        """Return the soft totals strategy table."""
        return self._soft_table

    @property
    def hard_table(self) -> Mapping[TableKey, Decision]:
        """Return the hard totals strategy table."""
        return self._hard_table


_default_strategy = BasicStrategy()


def get_perfect_strategy_decision(
    player_cards: Sequence[Card], dealer_upcard: Card
) -> Decision:
    """Return the basic-strategy action for a hand against the dealer upcard."""
    return _default_strategy.decide(player_cards, dealer_upcard)[0]
