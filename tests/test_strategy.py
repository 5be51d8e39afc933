"""Tests for pre-flop tiers, pot odds and action suggestions."""

import pytest

from coach.game.cards import Hand
from coach.game.evaluator import HandCategory, best_hand
from coach.advisor.preflop import PreflopChart, PreflopTier, classify_preflop
from coach.advisor.strategy import Action, StrategyConfig, pot_odds, suggest_action


class TestPotOdds:
    def test_basic(self):
        assert pot_odds(100, 50) == pytest.approx(33.33, abs=0.01)

    def test_no_bet_not_applicable(self):
        assert pot_odds(100, 0) is None

    def test_empty_pot(self):
        assert pot_odds(0, 20) == 100.0


class TestPreflopChart:
    @pytest.mark.parametrize("hand,tier", [
        ("AA", PreflopTier.VERY_STRONG),
        ("KK", PreflopTier.VERY_STRONG),
        ("QQ", PreflopTier.STRONG),
        ("TT", PreflopTier.STRONG),
        ("AKs", PreflopTier.STRONG),
        ("AQs", PreflopTier.STRONG),
        ("AKo", PreflopTier.STRONG),
        ("KQs", PreflopTier.STRONG),
        ("99", PreflopTier.MEDIUM),
        ("77", PreflopTier.MEDIUM),
        ("65s", PreflopTier.MEDIUM),
        ("JTs", PreflopTier.MEDIUM),
        ("A8s", PreflopTier.MEDIUM),
        ("K9s", PreflopTier.MEDIUM),
        ("AQo", PreflopTier.MEDIUM),
        ("KTo", PreflopTier.MEDIUM),
        ("QJo", PreflopTier.MEDIUM),
        ("66", PreflopTier.WEAK),
        ("54s", PreflopTier.WEAK),
        ("QTo", PreflopTier.WEAK),
        ("A6o", PreflopTier.WEAK),
        ("72o", PreflopTier.VERY_WEAK),
        ("T2o", PreflopTier.VERY_WEAK),
        ("95o", PreflopTier.VERY_WEAK),
        ("A5o", PreflopTier.VERY_WEAK),
        ("K4o", PreflopTier.VERY_WEAK),
        ("J2o", PreflopTier.VERY_WEAK),
    ])
    def test_default_tiers(self, hand, tier):
        assert PreflopChart().tier_for(hand) == tier

    def test_suited_version_not_very_weak(self):
        assert PreflopChart().tier_for("72s") == PreflopTier.WEAK

    def test_table_covers_all_hands(self):
        table = PreflopChart().table()
        assert len(table) == 169
        assert sum(1 for t in table.values() if t == PreflopTier.VERY_STRONG) == 2

    def test_custom_chart(self):
        chart = PreflopChart(very_strong=["QQ+"], very_weak=[])
        assert chart.tier_for("QQ") == PreflopTier.VERY_STRONG
        assert chart.tier_for("72o") == PreflopTier.WEAK

    def test_classify_uses_canonical_hand(self, cards):
        assert classify_preflop(cards("Kd As")) == PreflopTier.STRONG
        assert classify_preflop(cards("7h 2c")) == PreflopTier.VERY_WEAK
        assert classify_preflop(Hand.from_string("QJo").cards) == PreflopTier.MEDIUM

    def test_classify_needs_two_cards(self, cards):
        assert classify_preflop(cards("As")) == PreflopTier.WEAK


class TestSuggestPreflop:
    def test_no_bet_checks(self, cards):
        assert suggest_action(cards("7h 2c"), [], pot=10, bet=0) == Action.CHECK

    @pytest.mark.parametrize("hole,action", [
        ("As Ad", Action.RAISE),
        ("Qs Qd", Action.RAISE),
        ("9s 9d", Action.CALL),
        ("6s 6d", Action.FOLD),
        ("7h 2c", Action.FOLD),
    ])
    def test_facing_bet(self, cards, hole, action):
        assert suggest_action(cards(hole), [], pot=15, bet=10) == action

    def test_needs_two_hole_cards(self, cards):
        assert suggest_action(cards("As"), [], pot=15, bet=10) == Action.NOT_APPLICABLE


class TestSuggestPostflop:
    def test_no_bet_checks(self, cards):
        hole, board = cards("7h 2c"), cards("Ks Qd 9c")
        assert suggest_action(hole, board, 100, 0, best_hand(hole + board), 10.0) == Action.CHECK

    def test_partial_board_not_applicable(self, cards):
        assert suggest_action(cards("As Ad"), cards("Ks Qd"), 100, 50) == Action.NOT_APPLICABLE

    def test_value_raise(self, cards):
        hole, board = cards("7h 7c"), cards("7s Qd 2c 9h")
        current = best_hand(hole + board)
        assert current.category == HandCategory.THREE_OF_A_KIND
        assert suggest_action(hole, board, 100, 50, current, 85.0) == Action.RAISE

    def test_strong_flop_draw_raises(self, cards):
        hole, board = cards("8s 9s"), cards("Ts Js 2c")
        current = best_hand(hole + board)
        assert suggest_action(hole, board, 100, 50, current, 50.0) == Action.RAISE

    def test_turn_draw_does_not_raise(self, cards):
        hole, board = cards("8s 9s"), cards("Ts Js 2c 3d")
        current = best_hand(hole + board)
        assert suggest_action(hole, board, 100, 50, current, 50.0) == Action.CALL

    def test_call_when_equity_covers_odds(self, cards):
        hole, board = cards("As 4d"), cards("Ks 7d 2c")
        current = best_hand(hole + board)
        # Pot odds 33.33%
        assert suggest_action(hole, board, 100, 50, current, 40.0) == Action.CALL
        assert suggest_action(hole, board, 100, 50, current, 33.0) == Action.FOLD

    def test_trips_with_low_equity_uses_pot_odds(self, cards):
        hole, board = cards("7h 7c"), cards("7s 8d 9c")
        current = best_hand(hole + board)
        assert suggest_action(hole, board, 100, 50, current, 60.0) == Action.CALL

    def test_river_defaults_to_fold(self, cards):
        hole, board = cards("Ah Kh"), cards("Ad 7c 2s 9h 3d")
        current = best_hand(hole + board)
        assert suggest_action(hole, board, 100, 50, current, None) == Action.FOLD

    def test_river_thresholds(self, cards):
        hole, board = cards("Ah Kh"), cards("Ad 7c 2s 9h 3d")
        current = best_hand(hole + board)
        config = StrategyConfig(river_call_category=HandCategory.PAIR)
        assert suggest_action(hole, board, 100, 50, current, None, config) == Action.CALL

        config = StrategyConfig(river_raise_category=HandCategory.PAIR)
        assert suggest_action(hole, board, 100, 50, current, None, config) == Action.RAISE

    def test_custom_thresholds(self, cards):
        hole, board = cards("7h 7c"), cards("7s Qd 2c")
        current = best_hand(hole + board)
        config = StrategyConfig(value_raise_equity=90.0)
        assert suggest_action(hole, board, 100, 50, current, 85.0, config) == Action.CALL

    def test_action_labels(self):
        assert str(Action.CALL) == "Call"
        assert str(Action.NOT_APPLICABLE) == "N/A"
