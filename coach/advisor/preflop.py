"""Pre-flop starting hand tiers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from coach.game.cards import Card, Hand, get_all_hands, parse_range


class PreflopTier(Enum):
    """Starting hand strength tiers."""
    VERY_STRONG = "very_strong"
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"
    VERY_WEAK = "very_weak"


@dataclass
class PreflopChart:
    """
    Starting hand chart as editable data.

    Each tier is a list of hand notations understood by parse_range
    ("KK+", "TT-QQ", "AQs+", "72o"). Tiers are checked from very weak,
    then strongest to weakest; a hand in no list is WEAK.
    """
    very_strong: list[str] = field(default_factory=lambda: ["KK+"])
    strong: list[str] = field(default_factory=lambda: [
        "TT-QQ", "AQs+", "AKo", "KQs",
    ])
    medium: list[str] = field(default_factory=lambda: [
        "77-99",
        # Suited connectors
        "JTs", "T9s", "98s", "87s", "76s", "65s",
        # Suited aces and broadway
        "A8s+", "K9s+", "Q9s+", "J9s+",
        # Offsuit broadway
        "AQo", "ATo+", "KTo+", "QJo",
    ])
    very_weak: list[str] = field(default_factory=lambda: [
        "72o", "82o", "83o", "73o", "T2o", "95o",
        # Face card with a low offsuit card
        "A2o", "A3o", "A4o", "A5o",
        "K2o", "K3o", "K4o",
        "Q2o", "Q3o",
        "J2o",
    ])

    def __post_init__(self):
        self._tiers: dict[str, PreflopTier] = {}
        ordered = [
            (PreflopTier.VERY_WEAK, self.very_weak),
            (PreflopTier.VERY_STRONG, self.very_strong),
            (PreflopTier.STRONG, self.strong),
            (PreflopTier.MEDIUM, self.medium),
        ]
        for tier, ranges in ordered:
            for range_str in ranges:
                for hand in parse_range(range_str):
                    self._tiers.setdefault(hand, tier)

    def tier_for(self, canonical: str) -> PreflopTier:
        """Tier of a canonical hand like 'AKs', 'QQ' or '72o'."""
        return self._tiers.get(canonical, PreflopTier.WEAK)

    def table(self) -> dict[str, PreflopTier]:
        """Tier of every one of the 169 starting hands."""
        return {hand: self.tier_for(hand) for hand in get_all_hands()}


DEFAULT_CHART = PreflopChart()


def classify_preflop(
    hole: Sequence[Card],
    chart: PreflopChart = DEFAULT_CHART,
) -> PreflopTier:
    """
    Classify two hole cards into a pre-flop tier.

    Anything other than two cards is WEAK.
    """
    if len(hole) != 2:
        return PreflopTier.WEAK
    return chart.tier_for(Hand(hole[0], hole[1]).canonical)
