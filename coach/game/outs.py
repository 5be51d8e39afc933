"""Exhaustive outs counting against the current best hand."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .cards import Card, remaining_cards
from .draws import draw_probability
from .evaluator import Comparison, EvaluatedHand, best_hand, compare_hands, group_by


@dataclass(frozen=True)
class OutsResult:
    """
    Cards that improve the current best hand.

    Probabilities are percentages. `prob_rule_of_thumb` is the rule of 4
    (flop) or rule of 2 (turn); `prob_to_come` is the exact chance of
    hitting at least one out by the river.
    """
    outs: int = 0
    out_cards: tuple[Card, ...] = ()
    by_rank: dict[int, int] = field(default_factory=dict)
    prob_next: float = 0.0
    prob_rule_of_thumb: float = 0.0
    prob_to_come: float = 0.0


def count_outs(
    hole: Sequence[Card],
    board: Sequence[Card],
    deck: Optional[Sequence[Card]] = None,
    current: Optional[EvaluatedHand] = None,
) -> OutsResult:
    """
    Test every unseen card against the current best hand.

    Args:
        hole: Player's two hole cards
        board: Flop or turn (3-4 cards)
        deck: Unseen cards (defaults to everything not in hole or board)
        current: Best made hand, if already computed

    Returns:
        OutsResult; empty when not on the flop or turn
    """
    to_come = 5 - len(board)
    if len(hole) != 2 or len(board) < 3 or to_come <= 0:
        return OutsResult()

    cards = list(hole) + list(board)
    if deck is None:
        deck = remaining_cards(cards)
    if current is None:
        current = best_hand(cards)

    out_cards = [
        card for card in deck
        if compare_hands(best_hand(cards + [card]), current) == Comparison.GREATER_THAN
    ]
    outs = len(out_cards)

    by_rank = {rank: len(members) for rank, members in group_by(out_cards, lambda c: c.rank)}

    prob_next, prob_to_come = draw_probability(outs, len(deck), to_come)
    multiplier = 4 if to_come == 2 else 2
    rule_of_thumb = min(100.0, float(outs * multiplier)) if deck else 0.0

    return OutsResult(
        outs=outs,
        out_cards=tuple(out_cards),
        by_rank=by_rank,
        prob_next=prob_next,
        prob_rule_of_thumb=rule_of_thumb,
        prob_to_come=prob_to_come,
    )
