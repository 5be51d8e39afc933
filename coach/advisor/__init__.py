"""Decision support: pre-flop tiers, pot odds and action suggestions."""

from .preflop import PreflopTier, PreflopChart, classify_preflop
from .strategy import Action, StrategyConfig, pot_odds, suggest_action
from .session import AdvisorConfig, AdvisorSession, HandAnalysis, TableState, analyze

__all__ = [
    "PreflopTier",
    "PreflopChart",
    "classify_preflop",
    "Action",
    "StrategyConfig",
    "pot_odds",
    "suggest_action",
    "AdvisorConfig",
    "AdvisorSession",
    "HandAnalysis",
    "TableState",
    "analyze",
]
