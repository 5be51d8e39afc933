#!/usr/bin/env python3
"""Analyze a hold'em spot and suggest an action.

Shows the best made hand, outs, draws, equity against a random hand,
pot odds and the suggested play.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from coach.game.cards import RANK_STR, Card, Deck, parse_cards
from coach.game.draws import DrawOdds
from coach.advisor import (
    Action,
    AdvisorConfig,
    HandAnalysis,
    PreflopTier,
    StrategyConfig,
    TableState,
    analyze,
)

ACTION_STYLE = {
    Action.RAISE: "bold green",
    Action.CALL: "bold cyan",
    Action.CHECK: "bold white",
    Action.FOLD: "bold red",
    Action.NOT_APPLICABLE: "dim",
}

STREET_BOARD_SIZE = {"preflop": 0, "flop": 3, "turn": 4, "river": 5}

TIER_STYLE = {
    PreflopTier.VERY_STRONG: "bold green",
    PreflopTier.STRONG: "green",
    PreflopTier.MEDIUM: "yellow",
    PreflopTier.WEAK: "dim",
    PreflopTier.VERY_WEAK: "red",
}


def main():
    parser = argparse.ArgumentParser(
        description="Hand strength, outs, equity and a suggested action"
    )
    parser.add_argument(
        "-H", "--hole",
        default="",
        help="Hole cards (e.g., 'AsKs' or 'As Ks')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards (e.g., 'Th Jd 2c')",
    )
    parser.add_argument(
        "-p", "--pot",
        type=int,
        default=0,
        help="Pot before the bet (default: 0)",
    )
    parser.add_argument(
        "--bet",
        type=int,
        default=0,
        help="Bet to call (default: 0)",
    )
    parser.add_argument(
        "-n", "--simulations",
        type=int,
        default=5000,
        help="Monte Carlo trials for equity (default: 5000)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="Threads for the simulation (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible equity",
    )
    parser.add_argument(
        "--deal",
        choices=list(STREET_BOARD_SIZE),
        help="Deal random cards to fill the hand up to this street",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        help="Show the pre-flop hand chart",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    console = Console()

    config = AdvisorConfig(
        num_simulations=args.simulations,
        workers=args.workers,
        seed=args.seed,
        strategy=StrategyConfig(),
    )

    if args.chart:
        _display_chart(console, config.strategy)
        return 0

    try:
        hole = parse_cards(args.hole)
        board = parse_cards(args.board)
        if args.deal:
            hole, board = _deal(hole, board, STREET_BOARD_SIZE[args.deal], args.seed)
        state = TableState(
            hole=tuple(hole),
            board=tuple(board),
            pot=args.pot,
            bet=args.bet,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    if len(state.board) in (1, 2):
        console.print("[yellow]Board should be a flop (3), turn (4) or river (5)[/]")

    with console.status("Simulating equity..."):
        analysis = analyze(state, config)

    _display_summary(console, analysis)
    _display_outs(console, analysis)
    _display_draws(console, analysis)
    _display_decision(console, analysis)
    return 0


def _deal(
    hole: list[Card], board: list[Card], board_size: int, seed: Optional[int]
) -> tuple[list[Card], list[Card]]:
    """Fill in random hole and board cards from a shuffled deck."""
    if len(hole) > 2 or len(board) > board_size:
        raise ValueError(f"Already more cards than a {board_size}-card board allows")

    deck = Deck(rng=seed)
    deck.remove(hole + board)
    deck.shuffle()
    hole = hole + deck.deal(2 - len(hole))
    board = board + deck.deal(board_size - len(board))
    return hole, board


def _display_summary(console: Console, analysis: HandAnalysis) -> None:
    """Show cards and the best made hand."""
    state = analysis.state
    hole = " ".join(c.symbol for c in state.hole) or "-"
    board = " ".join(c.symbol for c in state.board) or "-"

    content = (
        f"[bold]Hole:[/] {hole}\n"
        f"[bold]Board:[/] {board}  ([cyan]{state.street}[/])\n"
        f"[bold]Pot:[/] {state.pot}   [bold]Bet:[/] {state.bet}\n"
    )
    if analysis.best.found:
        cards = " ".join(c.symbol for c in analysis.best.cards)
        content += f"[bold]Best hand:[/] [green]{analysis.best.category.label}[/] ({cards})"
    else:
        content += "[bold]Best hand:[/] [dim]not enough cards[/]"

    console.print(Panel(content, title="Hand", border_style="blue"))


def _display_outs(console: Console, analysis: HandAnalysis) -> None:
    outs = analysis.outs
    if outs is None or analysis.state.cards_to_come == 0:
        return

    table = Table(title=f"Outs: {outs.outs}", box=box.SIMPLE)
    table.add_column("Rank")
    table.add_column("Cards", justify="right")
    for rank, count in outs.by_rank.items():
        table.add_row(RANK_STR[rank], str(count))
    console.print(table)

    console.print(
        f"Next card: [bold]{outs.prob_next:.2f}%[/]   "
        f"By the river: [bold]{outs.prob_to_come:.2f}%[/]   "
        f"Rule of 4/2: {outs.prob_rule_of_thumb:.2f}%"
    )
    console.print()


def _display_draws(console: Console, analysis: HandAnalysis) -> None:
    draws = analysis.draws
    if draws is None or not draws.has_draw:
        return

    table = Table(title="Draws", box=box.ROUNDED)
    table.add_column("Draw", style="cyan")
    table.add_column("Outs", justify="right")
    table.add_column("Next card", justify="right")
    table.add_column("By river", justify="right")

    rows: list[tuple[str, DrawOdds]] = []
    if draws.flush:
        rows.append(("Flush", draws.flush))
    if draws.straight:
        rows.append((f"Straight ({draws.straight.kind.value})", draws.straight))
    if draws.set:
        rows.append(("Set", draws.set))
    if draws.quads:
        rows.append(("Quads", draws.quads))

    for name, odds in rows:
        table.add_row(
            name,
            str(odds.outs),
            f"{odds.prob_next:.2f}%",
            f"{odds.prob_total:.2f}%",
        )
    console.print(table)


def _display_decision(console: Console, analysis: HandAnalysis) -> None:
    equity = analysis.equity_pct
    equity_str = f"{equity:.2f}%" if equity is not None else "N/A"
    odds_str = f"{analysis.pot_odds:.2f}%" if analysis.pot_odds is not None else "N/A"
    style = ACTION_STYLE[analysis.action]

    content = (
        f"[bold]Equity:[/] {equity_str}\n"
        f"[bold]Pot odds:[/] {odds_str}\n"
        f"[bold]Suggestion:[/] [{style}]{analysis.action}[/]"
    )
    console.print(Panel(content, title="Decision", border_style="magenta"))


def _display_chart(console: Console, strategy: StrategyConfig) -> None:
    """Show the 13x13 pre-flop chart (suited above the diagonal)."""
    ranks = "AKQJT98765432"
    chart = strategy.preflop_chart

    table = Table(title="Pre-flop chart", box=box.MINIMAL, show_header=False)
    for _ in ranks:
        table.add_column(justify="center")

    for i, r1 in enumerate(ranks):
        cells = []
        for j, r2 in enumerate(ranks):
            if i == j:
                hand = f"{r1}{r2}"
            elif i < j:
                hand = f"{r1}{r2}s"
            else:
                hand = f"{r2}{r1}o"
            style = TIER_STYLE[chart.tier_for(hand)]
            cells.append(f"[{style}]{hand}[/]")
        table.add_row(*cells)

    console.print(table)
    legend = "  ".join(
        f"[{style}]{tier.name.replace('_', ' ').title()}[/]"
        for tier, style in TIER_STYLE.items()
    )
    console.print(legend)


if __name__ == "__main__":
    sys.exit(main())
