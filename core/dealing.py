"""Constrained initial deals for strategy practice."""

import logging
from dataclasses import dataclass
from random import Random

from core.cards import Card, Deck, create_deck
from core.hand import is_natural

logger = logging.getLogger(__name__)

# Two cards each for player and dealer
CARDS_PER_DEAL = 4

# Below this many cards the caller swaps in a fresh deck
LOW_DECK_THRESHOLD = 10


@dataclass(frozen=True)
class InitialDeal:
    """Both starting hands and the deck left after dealing them."""

    player_hand: tuple[Card, ...]
    dealer_hand: tuple[Card, ...]
    remaining_deck: Deck

    @property
    def dealer_upcard(self) -> Card:
        """Return the dealer's face-up card."""
        return self.dealer_hand[0]


def ensure_playable_deck(
    deck: Deck | None,
    minimum: int = LOW_DECK_THRESHOLD,
    rng: Random | None = None,
) -> Deck:
    """Return the deck unchanged, or a fresh one if it is missing or low."""
    if deck is None or len(deck) < minimum:
        logger.debug(
            "Replacing deck with %s cards left",
            0 if deck is None else len(deck),
        )
        return create_deck(rng)
    return deck


def _draw_player_cards(
    deck: Deck,
    ace_mode: bool,
    rng: Random | None,
) -> tuple[tuple[Card, ...], Deck]:
    """Draw the player's two cards, forcing an ace in ace mode."""
    if not ace_mode:
        return deck.draw(2)

    ace_index = deck.index_of(lambda card: card.is_ace)
    if ace_index is None:
        # No ace left: start over from a fresh deck without forcing one
        logger.debug("No ace among %d cards, dealing from a fresh deck", len(deck))
        return create_deck(rng).draw(2)

    partner_index = (ace_index + 1) % len(deck)
    return deck.draw_at([ace_index, partner_index])


def deal_initial_hands(
    deck: Deck,
    ace_mode: bool = False,
    rng: Random | None = None,
) -> InitialDeal:
    """
    Deal a practice hand in which neither side holds a natural.

    Args:
        deck: Deck to deal from; must hold at least four cards
        ace_mode: Guarantee an ace in the player's hand when the deck has one
        rng: Random number generator for any replacement decks

    Returns:
        The player's and dealer's two cards and the remaining deck
    """
    if len(deck) < CARDS_PER_DEAL:
        raise IndexError(
            f"Cannot deal initial hands from a deck of {len(deck)}"
        )

    current = deck
    while True:
        player_hand, current = _draw_player_cards(current, ace_mode, rng)
        dealer_hand, current = current.draw(2)

        if not (is_natural(player_hand) or is_natural(dealer_hand)):
            return InitialDeal(player_hand, dealer_hand, current)

        logger.debug(
            "Natural dealt (player %s, dealer %s), redealing from a fresh deck",
            " ".join(map(str, player_hand)),
            " ".join(map(str, dealer_hand)),
        )
        current = create_deck(rng)
