"""Pot odds and action suggestions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from coach.game.cards import Card
from coach.game.evaluator import EvaluatedHand, HandCategory
from .preflop import PreflopChart, PreflopTier, classify_preflop


class Action(Enum):
    """Suggested action."""
    CHECK = "Check"
    CALL = "Call"
    FOLD = "Fold"
    RAISE = "Raise"
    NOT_APPLICABLE = "N/A"

    def __str__(self) -> str:
        return self.value


PREFLOP_ACTIONS = {
    PreflopTier.VERY_STRONG: Action.RAISE,
    PreflopTier.STRONG: Action.RAISE,
    PreflopTier.MEDIUM: Action.CALL,
    PreflopTier.WEAK: Action.FOLD,
    PreflopTier.VERY_WEAK: Action.FOLD,
}


@dataclass
class StrategyConfig:
    """Thresholds used by suggest_action."""
    value_raise_equity: float = 70.0      # Made hand (value_raise_category+) raise
    value_raise_category: HandCategory = HandCategory.THREE_OF_A_KIND
    draw_raise_equity: float = 45.0       # Flop raise with a hand below value_raise_category

    # River has no equity estimate. None keeps the pure pot-odds decision.
    river_call_category: Optional[HandCategory] = None
    river_raise_category: Optional[HandCategory] = None

    preflop_chart: PreflopChart = field(default_factory=PreflopChart)


def pot_odds(pot: float, bet: float) -> Optional[float]:
    """
    Share of the final pot the player must put in to call, in percent.

    Returns:
        bet / (pot + bet) * 100, or None when there is no bet to call
    """
    if bet <= 0:
        return None
    return bet / (pot + bet) * 100


def suggest_action(
    hole: Sequence[Card],
    board: Sequence[Card],
    pot: float,
    bet: float,
    current: Optional[EvaluatedHand] = None,
    equity: Optional[float] = None,
    config: Optional[StrategyConfig] = None,
) -> Action:
    """
    Suggest an action for the current spot.

    Pre-flop the hole cards' tier decides. After the flop the equity is
    compared with the pot odds, with raises for strong made hands and for
    strong draws on the flop.

    Args:
        hole: Player's hole cards
        board: Community cards
        pot: Pot before the bet
        bet: Amount the player faces
        current: Best made hand (post-flop)
        equity: Equity in percent; None on the river
        config: Thresholds

    Returns:
        Action, NOT_APPLICABLE without two hole cards or on a partial board
    """
    config = config or StrategyConfig()

    if len(hole) != 2:
        return Action.NOT_APPLICABLE

    if not board:
        if bet <= 0:
            return Action.CHECK
        tier = classify_preflop(hole, config.preflop_chart)
        return PREFLOP_ACTIONS[tier]

    if len(board) < 3:
        return Action.NOT_APPLICABLE

    if bet <= 0:
        return Action.CHECK

    category = current.category if current is not None else None
    made = category if category is not None else HandCategory.HIGH_CARD
    river = len(board) == 5

    if river:
        if config.river_raise_category is not None and made >= config.river_raise_category:
            return Action.RAISE
        if config.river_call_category is not None and made >= config.river_call_category:
            return Action.CALL
        equity = 0.0
    elif equity is None:
        equity = 0.0

    if made >= config.value_raise_category and equity >= config.value_raise_equity:
        return Action.RAISE

    if (
        len(board) == 3
        and equity >= config.draw_raise_equity
        and made < config.value_raise_category
    ):
        return Action.RAISE

    return Action.CALL if equity >= pot_odds(pot, bet) else Action.FOLD
