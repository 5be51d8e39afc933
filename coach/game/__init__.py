"""Game representation and hand analysis module."""

from .cards import Card, Hand as CardHand, Deck, FULL_DECK, parse_cards, remaining_cards
from .evaluator import (
    HandCategory,
    EvaluatedHand,
    NO_HAND,
    Comparison,
    evaluate_five,
    compare_hands,
    best_hand,
)
from .draws import DrawReport, StraightDrawKind, analyze_draws, draw_probability
from .outs import OutsResult, count_outs
from .equity import EquitySimulator, EquityResult, CancelToken, calculate_equity

__all__ = [
    "Card",
    "CardHand",
    "Deck",
    "FULL_DECK",
    "parse_cards",
    "remaining_cards",
    "HandCategory",
    "EvaluatedHand",
    "NO_HAND",
    "Comparison",
    "evaluate_five",
    "compare_hands",
    "best_hand",
    "DrawReport",
    "StraightDrawKind",
    "analyze_draws",
    "draw_probability",
    "OutsResult",
    "count_outs",
    "EquitySimulator",
    "EquityResult",
    "CancelToken",
    "calculate_equity",
]
