"""Tests for card and hand representation."""

import pytest

from coach.game.cards import (
    Card, Hand, Deck, Rank, Suit, FULL_DECK,
    get_all_hands, parse_cards, parse_range, remaining_cards
)


class TestCard:
    def test_from_string(self):
        card = Card.from_string("As")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        card = Card.from_string("Th")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEARTS

    def test_from_string_ten_as_digits(self):
        assert Card.from_string("10h") == Card.from_string("Th")

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_str(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "As"

    def test_symbol(self):
        assert Card.from_string("Qh").symbol == "Q♥"

    def test_from_string_invalid_rank(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_from_string_invalid_suit(self):
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_equality(self):
        card1 = Card.from_string("As")
        card2 = Card.from_string("As")
        assert card1 == card2
        assert hash(card1) == hash(card2)

    def test_parsed_cards_are_deck_instances(self):
        card = Card.from_string("7c")
        assert any(card is c for c in FULL_DECK)

    def test_to_treys(self):
        card = Card.from_string("As")
        treys_card = card.to_treys()
        assert isinstance(treys_card, int)


class TestParseCards:
    def test_joined(self):
        assert [str(c) for c in parse_cards("AsKh")] == ["As", "Kh"]

    def test_spaced_with_ten(self):
        assert [str(c) for c in parse_cards("10h Jd, 2c")] == ["Th", "Jd", "2c"]

    def test_empty(self):
        assert parse_cards("") == []

    def test_duplicate_raises(self):
        with pytest.raises(ValueError, match="Duplicate"):
            parse_cards("As Ks As")


class TestHand:
    def test_from_string_specific(self):
        hand = Hand.from_string("AsKh")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.KING

    def test_from_string_pair(self):
        hand = Hand.from_string("AA")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.ACE
        assert hand.is_pair

    def test_from_string_suited(self):
        hand = Hand.from_string("AKs")
        assert hand.is_suited
        assert not hand.is_pair

    def test_from_string_offsuit(self):
        hand = Hand.from_string("AKo")
        assert not hand.is_suited
        assert not hand.is_pair

    def test_canonical_pair(self):
        hand = Hand.from_string("AsAh")
        assert hand.canonical == "AA"

    def test_canonical_suited(self):
        hand = Hand.from_string("AsKs")
        assert hand.canonical == "AKs"

    def test_canonical_offsuit(self):
        hand = Hand.from_string("AsKh")
        assert hand.canonical == "AKo"

    def test_card_ordering(self):
        # Lower card first in string should still have higher rank first
        hand = Hand.from_string("KsAs")
        assert hand.card1.rank == Rank.ACE
        assert hand.card2.rank == Rank.KING

    def test_str(self):
        hand = Hand.from_string("AsKh")
        assert str(hand) == "AsKh"


class TestDeck:
    def test_full_deck(self):
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52

    def test_deal(self):
        deck = Deck()
        cards = deck.deal(5)
        assert len(cards) == 5
        assert len(deck) == 47

    def test_deal_too_many(self):
        deck = Deck()
        with pytest.raises(ValueError):
            deck.deal(53)

    def test_remove(self):
        deck = Deck()
        card = Card.from_string("As")
        deck.remove([card])
        assert len(deck) == 51
        assert card not in deck.cards

    def test_shuffle(self):
        deck1 = Deck()
        deck2 = Deck(rng=7)
        deck2.shuffle()

        # Cards should be in different order after shuffle (very likely)
        same_order = all(
            c1 == c2 for c1, c2 in zip(deck1.cards[:10], deck2.cards[:10])
        )
        assert not same_order
        assert sorted(deck2.cards, key=FULL_DECK.index) == list(FULL_DECK)

    def test_seeded_shuffle_is_reproducible(self):
        deck1 = Deck(rng=42)
        deck2 = Deck(rng=42)
        deck1.shuffle()
        deck2.shuffle()
        assert deck1.cards == deck2.cards

    def test_reset(self):
        deck = Deck()
        deck.deal(20)
        assert len(deck) == 32

        deck.reset()
        assert len(deck) == 52


class TestRemainingCards:
    def test_excludes_seen(self, cards):
        seen = cards("As Kd 7h")
        remaining = remaining_cards(seen)
        assert len(remaining) == 49
        assert not set(seen) & set(remaining)

    def test_nothing_seen(self):
        assert remaining_cards([]) == list(FULL_DECK)


class TestHandHelpers:
    def test_get_all_hands(self):
        hands = get_all_hands()
        # 13 pairs + 78 suited + 78 offsuit = 169
        assert len(hands) == 169

        # Check some specific hands exist
        assert "AA" in hands
        assert "AKs" in hands
        assert "AKo" in hands
        assert "72o" in hands

    def test_parse_range_single(self):
        hands = parse_range("AA")
        assert hands == ["AA"]

    def test_parse_range_pair_plus(self):
        hands = parse_range("TT+")
        assert hands == ["TT", "JJ", "QQ", "KK", "AA"]

    def test_parse_range_pair_range(self):
        hands = parse_range("22-55")
        assert hands == ["22", "33", "44", "55"]

    def test_parse_range_suited_plus(self):
        hands = parse_range("ATs+")
        assert hands == ["ATs", "AJs", "AQs", "AKs"]
        # AAs is not a thing, so should not include ace
        assert "AAs" not in hands

    def test_parse_range_offsuit_plus(self):
        assert parse_range("KTo+") == ["KTo", "KJo", "KQo"]
