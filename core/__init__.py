"""Core strategy trainer engine - 100% UI-agnostic."""

from core.cards import Card, Deck, Rank, Suit, create_deck, shuffle_deck
from core.hand import Hand, calculate_hand_value, is_natural, is_pair, is_soft
from core.dealing import InitialDeal, deal_initial_hands, ensure_playable_deck
from core.strategy import Decision, get_perfect_strategy_decision

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "create_deck",
    "shuffle_deck",
    "Hand",
    "calculate_hand_value",
    "is_natural",
    "is_pair",
    "is_soft",
    "InitialDeal",
    "deal_initial_hands",
    "ensure_playable_deck",
    "Decision",
    "get_perfect_strategy_decision",
]
