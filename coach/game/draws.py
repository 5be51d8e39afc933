"""Drawing-hand detection: flush, straight, set and quads draws."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .cards import ACE_LOW, Card, Rank, remaining_cards
from .evaluator import EvaluatedHand, HandCategory, best_hand, group_by

# Lowest card of each possible straight, A-5 through T-A
STRAIGHT_WINDOW_STARTS = range(ACE_LOW, Rank.TEN + 1)


class StraightDrawKind(Enum):
    """Shape of a straight draw."""
    NONE = "None"
    GUTSHOT = "Gutshot"
    OPEN_ENDED = "OESD"
    BOTH = "Both"


@dataclass(frozen=True)
class DrawOdds:
    """Outs for a draw and the chance of hitting them (percentages)."""
    outs: int
    prob_next: float
    prob_total: float


@dataclass(frozen=True)
class StraightDraw(DrawOdds):
    kind: StraightDrawKind = StraightDrawKind.NONE


@dataclass(frozen=True)
class DrawReport:
    """All draws found for a hand. Missing draws are None."""
    flush: Optional[DrawOdds] = None
    straight: Optional[StraightDraw] = None
    set: Optional[DrawOdds] = None
    quads: Optional[DrawOdds] = None

    @property
    def has_draw(self) -> bool:
        return any(d is not None for d in (self.flush, self.straight, self.set, self.quads))


def draw_probability(outs: int, remaining: int, to_come: int) -> tuple[float, float]:
    """
    Chance of hitting one of `outs` cards.

    Args:
        outs: Number of cards that complete the draw
        remaining: Unseen cards left in the deck
        to_come: Community cards still to be dealt (2 on the flop, 1 on the turn)

    Returns:
        (next card %, by the river %)
    """
    if remaining <= 0 or outs <= 0:
        return 0.0, 0.0

    prob_next = outs / remaining * 100

    if to_come == 2:
        if remaining < 2 or remaining - outs < 1:
            # Too few cards for the exact formula
            prob_total = min(100.0, outs * 4.0)
        else:
            miss_first = (remaining - outs) / remaining
            miss_second = (remaining - outs - 1) / (remaining - 1)
            prob_total = (1 - miss_first * miss_second) * 100
    else:
        prob_total = prob_next

    return prob_next, prob_total


def _odds(outs: int, remaining: int, to_come: int) -> Optional[DrawOdds]:
    if outs <= 0:
        return None
    return DrawOdds(outs, *draw_probability(outs, remaining, to_come))


def flush_draw_outs(cards: Sequence[Card], deck: Sequence[Card]) -> int:
    """Outs to a flush when exactly four cards share a suit."""
    for suit, members in group_by(cards, lambda c: c.suit):
        if len(members) == 4:
            return sum(1 for c in deck if c.suit == suit)
    return 0


def straight_draw_outs(
    cards: Sequence[Card],
    deck: Sequence[Card],
) -> tuple[int, StraightDrawKind]:
    """
    Outs to a straight over every five-rank window.

    A window with four of its five ranks present is a draw to the missing
    rank: open-ended if that rank is at either end of the window, a gutshot
    if it is inside. The Ace counts at both ends (value 1 and 14).

    Returns:
        (outs, kind) with outs counted once per missing rank
    """
    present = {c.rank for c in cards}
    if Rank.ACE in present:
        present.add(ACE_LOW)

    missing_ranks: set[int] = set()
    open_ended = gutshot = False

    for start in STRAIGHT_WINDOW_STARTS:
        window = range(start, start + 5)
        missing = [value for value in window if value not in present]
        if len(missing) != 1:
            continue

        value = missing[0]
        if value in (window[0], window[-1]):
            open_ended = True
        else:
            gutshot = True
        missing_ranks.add(Rank.ACE if value == ACE_LOW else value)

    outs = sum(1 for c in deck if c.rank in missing_ranks)

    if open_ended and gutshot:
        kind = StraightDrawKind.BOTH
    elif open_ended:
        kind = StraightDrawKind.OPEN_ENDED
    elif gutshot:
        kind = StraightDrawKind.GUTSHOT
    else:
        kind = StraightDrawKind.NONE
    return outs, kind


def pair_draw_ranks(
    hole: Sequence[Card],
    board: Sequence[Card],
) -> tuple[set[int], set[int]]:
    """
    Ranks that would make a set and ranks that would make quads.

    A pocket pair without a board match draws to a set; with one board
    match it draws to quads. An unpaired hole card matching one board
    card draws to a set, matching two it draws to quads.

    Returns:
        (set ranks, quads ranks)
    """
    set_ranks: set[int] = set()
    quads_ranks: set[int] = set()

    board_counts = {rank: len(members) for rank, members in group_by(board, lambda c: c.rank)}

    if len(hole) == 2 and hole[0].rank == hole[1].rank:
        on_board = board_counts.get(hole[0].rank, 0)
        if on_board == 0:
            set_ranks.add(hole[0].rank)
        elif on_board == 1:
            quads_ranks.add(hole[0].rank)
        return set_ranks, quads_ranks

    for card in hole:
        on_board = board_counts.get(card.rank, 0)
        if on_board == 1:
            set_ranks.add(card.rank)
        elif on_board == 2:
            quads_ranks.add(card.rank)
    return set_ranks, quads_ranks


def analyze_draws(
    hole: Sequence[Card],
    board: Sequence[Card],
    deck: Optional[Sequence[Card]] = None,
    current: Optional[EvaluatedHand] = None,
) -> DrawReport:
    """
    Find every draw for a hand on the flop or turn.

    A draw is only reported while the made hand is below the draw's target
    category, and only when it has at least one out.

    Args:
        hole: Player's hole cards
        board: Community cards
        deck: Unseen cards (defaults to everything not in hole or board)
        current: Best made hand, if already computed

    Returns:
        DrawReport; empty pre-flop and on the river
    """
    to_come = 5 - len(board)
    if len(board) < 3 or to_come <= 0:
        return DrawReport()

    cards = list(hole) + list(board)
    if deck is None:
        deck = remaining_cards(cards)
    if current is None:
        current = best_hand(cards)
    made = current.category or HandCategory.HIGH_CARD
    remaining = len(deck)

    flush = None
    if made < HandCategory.FLUSH:
        flush = _odds(flush_draw_outs(cards, deck), remaining, to_come)

    straight = None
    if made < HandCategory.STRAIGHT:
        outs, kind = straight_draw_outs(cards, deck)
        if outs > 0:
            straight = StraightDraw(
                outs, *draw_probability(outs, remaining, to_come), kind=kind
            )

    set_ranks, quads_ranks = pair_draw_ranks(hole, board)

    set_draw = None
    if made < HandCategory.THREE_OF_A_KIND:
        outs = sum(1 for c in deck if c.rank in set_ranks)
        set_draw = _odds(outs, remaining, to_come)

    quads = None
    if made < HandCategory.FOUR_OF_A_KIND:
        outs = sum(1 for c in deck if c.rank in quads_ranks)
        quads = _odds(outs, remaining, to_come)

    return DrawReport(flush=flush, straight=straight, set=set_draw, quads=quads)
