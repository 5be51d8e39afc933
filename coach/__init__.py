"""
holdem-coach: Texas Hold'em hand evaluation and decision support.

Finds the best five-card hand, counts outs and draws, estimates equity
against a random opponent by Monte Carlo simulation, and suggests an
action from pot odds and a pre-flop hand chart.
"""

__version__ = "0.1.0"
