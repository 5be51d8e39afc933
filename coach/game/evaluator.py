"""
Five-card hand evaluation, hand comparison and best-hand selection.

A hand is classified into a HandCategory with the cards that define the
category (key cards) and the remaining tie-break cards (kickers). Hands are
compared on category first, then key cards, then kickers. The only place
where a card's value depends on context is the wheel (A-2-3-4-5), where the
Ace plays as 1.
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import cmp_to_key
from itertools import combinations
from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from .cards import ACE_LOW, Card, Rank

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


class InvalidInputSize(ValueError):
    """The five-card evaluator was called with a different number of cards."""


class DuplicateCardsError(ValueError):
    """The same card appears more than once in an evaluation."""


class HandCategory(IntEnum):
    """Hand categories, ordered from weakest to strongest."""
    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.ROYAL_FLUSH: "Royal Flush",
}

STRAIGHT_CATEGORIES = (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH)


class Comparison(IntEnum):
    """Result of comparing two evaluated hands."""
    LESS_THAN = -1
    EQUAL = 0
    GREATER_THAN = 1


@dataclass(frozen=True)
class EvaluatedHand:
    """
    A classified five-card hand.

    Key cards are ordered by significance: bigger rank groups first, then
    higher ranks (a full house lists the trips before the pair, a wheel
    lists the Ace last). Kickers are in descending rank order.
    """
    category: Optional[HandCategory]
    key_cards: tuple[Card, ...] = ()
    kickers: tuple[Card, ...] = ()

    @property
    def found(self) -> bool:
        """False for the NO_HAND sentinel."""
        return self.category is not None

    @property
    def cards(self) -> tuple[Card, ...]:
        return self.key_cards + self.kickers

    @property
    def is_wheel(self) -> bool:
        """Check for the A-2-3-4-5 straight (or straight flush)."""
        return (
            self.category in STRAIGHT_CATEGORIES
            and self.key_cards[0].rank == Rank.FIVE
            and self.key_cards[-1].rank == Rank.ACE
        )

    @property
    def description(self) -> str:
        if not self.found:
            return "No hand"
        return f"{self.category.label}: {' '.join(str(c) for c in self.cards)}"

    def key_values(self) -> list[int]:
        """Key card values in comparison order, with a wheel Ace as 1."""
        values = [c.rank for c in self.key_cards]
        if self.is_wheel:
            values[-1] = ACE_LOW
        return values

    def kicker_values(self) -> list[int]:
        return [c.rank for c in self.kickers]

    def __str__(self) -> str:
        return self.description


# Sentinel for "fewer than 5 cards available"
NO_HAND = EvaluatedHand(category=None)


def group_by(
    items: Iterable[T],
    key: Callable[[T], K],
) -> list[tuple[K, list[T]]]:
    """
    Group items by key.

    Returns (key, members) pairs sorted by key, highest first. Members keep
    their input order.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return sorted(groups.items(), key=lambda pair: pair[0], reverse=True)


def _sorted_desc(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True)


def _flush_cards(cards: Sequence[Card]) -> Optional[list[Card]]:
    """Cards of the first suit with at least 5 members, or None."""
    for _, members in group_by(cards, lambda c: c.suit):
        if len(members) >= 5:
            return _sorted_desc(members)
    return None


def _straight_cards(cards: Sequence[Card]) -> Optional[list[Card]]:
    """
    Find the highest straight among the cards.

    Returns the five cards from top to bottom (5-4-3-2-A for the wheel),
    or None.
    """
    by_rank = {rank: members[0] for rank, members in group_by(cards, lambda c: c.rank)}
    if Rank.ACE in by_rank:
        by_rank[ACE_LOW] = by_rank[Rank.ACE]

    for top in range(Rank.ACE, Rank.FIVE - 1, -1):
        window = range(top, top - 5, -1)
        if all(value in by_rank for value in window):
            return [by_rank[value] for value in window]
    return None


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    """
    Classify exactly five cards.

    Categories are tested from strongest to weakest and the first match
    is returned.

    Raises:
        InvalidInputSize: If not given exactly 5 cards
    """
    if len(cards) != 5:
        raise InvalidInputSize(f"Expected 5 cards, got {len(cards)}")

    ordered = _sorted_desc(cards)

    flush = _flush_cards(ordered)
    straight = _straight_cards(ordered)

    # Straight flush must be made inside the flush suit
    if flush is not None:
        suited_straight = _straight_cards(flush)
        if suited_straight is not None:
            if suited_straight[0].rank == Rank.ACE:
                return EvaluatedHand(HandCategory.ROYAL_FLUSH, tuple(suited_straight))
            return EvaluatedHand(HandCategory.STRAIGHT_FLUSH, tuple(suited_straight))

    # Rank groups, largest first then highest rank
    groups = sorted(
        group_by(ordered, lambda c: c.rank),
        key=lambda pair: (len(pair[1]), pair[0]),
        reverse=True,
    )
    sizes = [len(members) for _, members in groups]

    if sizes[0] == 4:
        return _grouped(HandCategory.FOUR_OF_A_KIND, groups[:1], ordered)

    if sizes[0] == 3 and sizes[1] >= 2:
        return _grouped(HandCategory.FULL_HOUSE, groups[:2], ordered)

    if flush is not None:
        return EvaluatedHand(HandCategory.FLUSH, tuple(flush[:5]))

    if straight is not None:
        return EvaluatedHand(HandCategory.STRAIGHT, tuple(straight))

    if sizes[0] == 3:
        return _grouped(HandCategory.THREE_OF_A_KIND, groups[:1], ordered)

    if sizes[0] == 2 and sizes[1] == 2:
        return _grouped(HandCategory.TWO_PAIR, groups[:2], ordered)

    if sizes[0] == 2:
        return _grouped(HandCategory.PAIR, groups[:1], ordered)

    return EvaluatedHand(HandCategory.HIGH_CARD, (ordered[0],), tuple(ordered[1:5]))


def _grouped(
    category: HandCategory,
    groups: list[tuple[int, list[Card]]],
    ordered: list[Card],
) -> EvaluatedHand:
    """Build a hand from rank groups, filling kickers up to 5 cards."""
    key_cards = [card for _, members in groups for card in members]
    used = {rank for rank, _ in groups}
    kickers = [c for c in ordered if c.rank not in used]
    return EvaluatedHand(
        category,
        tuple(key_cards),
        tuple(kickers[:5 - len(key_cards)]),
    )


def _compare_values(values1: list[int], values2: list[int]) -> Comparison:
    for v1, v2 in zip(values1, values2):
        if v1 != v2:
            return Comparison.GREATER_THAN if v1 > v2 else Comparison.LESS_THAN
    return Comparison.EQUAL


def compare_hands(hand1: EvaluatedHand, hand2: EvaluatedHand) -> Comparison:
    """
    Compare two evaluated hands.

    Category decides first, then key cards in order, then kickers. A wheel
    straight counts its Ace as 1, so two wheels tie and any other straight
    beats a wheel. NO_HAND is below every real hand.

    Returns:
        GREATER_THAN if hand1 is better, LESS_THAN if hand2 is better,
        EQUAL on a tie
    """
    if not hand1.found or not hand2.found:
        return _compare_values([hand1.found], [hand2.found])

    if hand1.category != hand2.category:
        if hand1.category > hand2.category:
            return Comparison.GREATER_THAN
        return Comparison.LESS_THAN

    result = _compare_values(hand1.key_values(), hand2.key_values())
    if result != Comparison.EQUAL:
        return result

    return _compare_values(hand1.kicker_values(), hand2.kicker_values())


# For sorted(hands, key=hand_sort_key)
hand_sort_key = cmp_to_key(compare_hands)


def best_hand(cards: Sequence[Card]) -> EvaluatedHand:
    """
    Find the best five-card hand among 5 or more cards.

    Every 5-card subset is evaluated in combination order and the running
    maximum is kept; on ties the first subset found wins.

    Args:
        cards: Hole and board cards (typically 5-7)

    Returns:
        The best EvaluatedHand, or NO_HAND with fewer than 5 cards

    Raises:
        DuplicateCardsError: If a card appears more than once
    """
    if len(set(cards)) != len(cards):
        raise DuplicateCardsError(
            f"Duplicate cards detected: {' '.join(str(c) for c in cards)}"
        )
    if len(cards) < 5:
        return NO_HAND

    best = NO_HAND
    for combo in combinations(cards, 5):
        current = evaluate_five(combo)
        if compare_hands(current, best) == Comparison.GREATER_THAN:
            best = current
    return best
