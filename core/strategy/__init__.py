"""Basic strategy tables."""

from core.strategy.basic import (
    BasicStrategy,
    Decision,
    HandCategory,
    get_perfect_strategy_decision,
)

__all__ = [
    "BasicStrategy",
    "Decision",
    "HandCategory",
    "get_perfect_strategy_decision",
]
