"""Card, deck and starting-hand representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

SUIT_SYMBOL = {0: "♣", 1: "♦", 2: "♥", 3: "♠"}

# Ace plays low in the wheel (A-2-3-4-5)
ACE_LOW = 1


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def symbol(self) -> str:
        """Card with a unicode suit symbol, e.g. 'A♠'."""
        return f"{RANK_STR[self.rank]}{SUIT_SYMBOL[self.suit]}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h', '2c'."""
        s = s.strip()
        if len(s) == 3 and s[:2] == "10":
            s = "T" + s[2]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return FULL_DECK[_deck_index(STR_RANK[rank_char], STR_SUIT[suit_char])]

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


def _deck_index(rank: int, suit: int) -> int:
    return (rank - 2) * 4 + suit


# The 52-card universe, built once. Every parsed card is one of these instances.
FULL_DECK: tuple[Card, ...] = tuple(
    Card(rank, suit)
    for rank in range(2, 15)
    for suit in range(4)
)


def parse_cards(text: str) -> list[Card]:
    """
    Parse a run of cards like 'AsKh', 'As Kh' or '10h Jd'.

    Raises:
        ValueError: On an unreadable card or a repeated card
    """
    tokens = text.replace(",", " ").split()
    cards: list[Card] = []
    for token in tokens:
        i = 0
        while i < len(token):
            width = 3 if token[i:i + 2] == "10" else 2
            cards.append(Card.from_string(token[i:i + width]))
            i += width

    if len(set(cards)) != len(cards):
        raise ValueError(f"Duplicate cards in: {text}")
    return cards


def remaining_cards(seen: Iterable[Card]) -> list[Card]:
    """Cards of the full deck not in `seen`, in deck order."""
    seen_set = set(seen)
    return [c for c in FULL_DECK if c not in seen_set]


@dataclass
class Hand:
    """A two-card starting hand."""
    card1: Card
    card2: Card

    def __post_init__(self):
        # Ensure card1 has higher or equal rank
        if self.card1.rank < self.card2.rank:
            self.card1, self.card2 = self.card2, self.card1

    @property
    def cards(self) -> list[Card]:
        return [self.card1, self.card2]

    @property
    def is_pair(self) -> bool:
        """Check if hand is a pocket pair."""
        return self.card1.rank == self.card2.rank

    @property
    def is_suited(self) -> bool:
        """Check if hand is suited."""
        return self.card1.suit == self.card2.suit

    @property
    def canonical(self) -> str:
        """
        Get canonical hand notation (e.g., 'AKs', 'QQ', '72o').

        This groups equivalent hands regardless of specific suits.
        """
        r1 = RANK_STR[self.card1.rank]
        r2 = RANK_STR[self.card2.rank]

        if self.is_pair:
            return f"{r1}{r2}"
        elif self.is_suited:
            return f"{r1}{r2}s"
        else:
            return f"{r1}{r2}o"

    def __str__(self) -> str:
        return f"{self.card1}{self.card2}"

    def __repr__(self) -> str:
        return f"Hand({self.card1}, {self.card2})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse hand from string like 'AsKh' or 'AKs'."""
        if len(s) == 4:
            # Specific cards: 'AsKh'
            card1 = Card.from_string(s[:2])
            card2 = Card.from_string(s[2:])
            if card1 == card2:
                raise ValueError(f"Duplicate cards in hand: {s}")
            return cls(card1, card2)
        elif len(s) == 2:
            # Pair: 'AA'
            rank = STR_RANK[s[0].upper()]
            return cls(
                Card(rank, Suit.SPADES),
                Card(rank, Suit.HEARTS)
            )
        elif len(s) == 3:
            # Suited or offsuit: 'AKs' or 'AKo'
            r1 = STR_RANK[s[0].upper()]
            r2 = STR_RANK[s[1].upper()]
            suited = s[2].lower() == 's'

            if suited:
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.SPADES))
            else:
                return cls(Card(r1, Suit.SPADES), Card(r2, Suit.HEARTS))
        else:
            raise ValueError(f"Invalid hand string: {s}")


class Deck:
    """A standard 52-card deck."""

    def __init__(self, rng: Optional[Union[np.random.Generator, int]] = None):
        self.rng = np.random.default_rng(rng)
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to full 52 cards."""
        self.cards = list(FULL_DECK)

    def shuffle(self) -> None:
        """Shuffle the deck."""
        order = self.rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the deck."""
        if n > len(self.cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self.cards)} remaining")
        dealt = self.cards[:n]
        self.cards = self.cards[n:]
        return dealt

    def remove(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck."""
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)

    def __len__(self) -> int:
        return len(self.cards)


def get_all_hands() -> list[str]:
    """Generate all 169 unique starting hands in canonical form."""
    hands = []
    ranks = "AKQJT98765432"

    # Pairs
    for r in ranks:
        hands.append(f"{r}{r}")

    # Non-pairs
    for i, r1 in enumerate(ranks):
        for r2 in ranks[i+1:]:
            hands.append(f"{r1}{r2}s")  # Suited
            hands.append(f"{r1}{r2}o")  # Offsuit

    return hands


def parse_range(range_str: str) -> list[str]:
    """
    Parse a hand range string into list of hands.

    Examples:
        "AA" -> ["AA"]
        "AKs" -> ["AKs"]
        "TT+" -> ["TT", "JJ", "QQ", "KK", "AA"]
        "ATs+" -> ["ATs", "AJs", "AQs", "AKs"]
        "22-55" -> ["22", "33", "44", "55"]
    """
    hands = []
    range_str = range_str.strip()

    # Pair plus: "TT+"
    if len(range_str) == 3 and range_str[2] == "+" and range_str[0] == range_str[1]:
        start_rank = STR_RANK[range_str[0]]
        for rank in range(start_rank, 15):
            hands.append(f"{RANK_STR[rank]}{RANK_STR[rank]}")
        return hands

    # Pair range: "22-55"
    if "-" in range_str and len(range_str) == 5:
        low = STR_RANK[range_str[0]]
        high = STR_RANK[range_str[3]]
        for rank in range(low, high + 1):
            hands.append(f"{RANK_STR[rank]}{RANK_STR[rank]}")
        return hands

    # Suited/offsuit plus: "ATs+"
    if len(range_str) == 4 and range_str[3] == "+":
        high_rank = STR_RANK[range_str[0]]
        low_rank = STR_RANK[range_str[1]]
        suited = range_str[2] == "s"

        suffix = "s" if suited else "o"
        for rank in range(low_rank, high_rank):
            hands.append(f"{RANK_STR[high_rank]}{RANK_STR[rank]}{suffix}")
        return hands

    # Single hand
    return [range_str]
