"""Tests for exhaustive outs counting."""

import pytest

from coach.game.evaluator import HandCategory, best_hand
from coach.game.outs import count_outs


class TestCountOuts:
    def test_every_out_improves(self, cards):
        hole, board = cards("8s 9s"), cards("Th Jd 2c")
        result = count_outs(hole, board)
        current = best_hand(hole + board)

        assert result.outs == len(result.out_cards)
        for card in result.out_cards:
            assert card not in hole + board
            improved = best_hand(hole + board + [card])
            assert improved.category >= current.category

    def test_straight_cards_are_outs(self, cards):
        result = count_outs(cards("8s 9s"), cards("Th Jd 2c"))
        ranks = {c.rank for c in result.out_cards}
        # Sevens and queens make the straight
        assert {7, 12} <= ranks
        assert result.by_rank[7] == 4
        assert result.by_rank[12] == 4

    def test_by_rank_sums_to_outs(self, cards):
        # Two pair with an ace kicker: kings and nines fill up, aces pair the kicker
        result = count_outs(cards("Ks 9d"), cards("Kc 9h As"))
        assert result.by_rank == {14: 3, 13: 2, 9: 2}
        assert sum(result.by_rank.values()) == result.outs
        assert list(result.by_rank) == sorted(result.by_rank, reverse=True)

    def test_flop_probabilities(self, cards):
        result = count_outs(cards("Ks 9d"), cards("Kc 9h As"))
        assert result.outs == 7
        assert result.prob_next == pytest.approx(7 / 47 * 100)
        assert result.prob_to_come == pytest.approx(27.84, abs=0.01)
        assert result.prob_rule_of_thumb == min(100.0, result.outs * 4)
        assert result.prob_next < result.prob_to_come <= 100

    def test_turn_rule_of_two(self, cards):
        result = count_outs(cards("8s 9s"), cards("Th Jd 2c 3d"))
        assert result.prob_rule_of_thumb == min(100.0, result.outs * 2)
        assert result.prob_to_come == result.prob_next

    def test_nut_hand_has_no_outs(self, cards):
        result = count_outs(cards("As Ks"), cards("Qs Js Ts"))
        assert best_hand(cards("As Ks Qs Js Ts")).category == HandCategory.ROYAL_FLUSH
        assert result.outs == 0
        assert result.prob_next == 0.0
        assert result.prob_to_come == 0.0

    def test_empty_off_flop_and_turn(self, cards):
        assert count_outs(cards("8s 9s"), []).outs == 0
        assert count_outs(cards("8s 9s"), cards("Th Jd 2c 3d 4h")).outs == 0
        assert count_outs(cards("8s"), cards("Th Jd 2c")).outs == 0
