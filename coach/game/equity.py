"""Monte Carlo equity against one random opponent hand."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .cards import Card, remaining_cards
from .evaluator import Comparison, best_hand, compare_hands

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


class SimulationCancelled(RuntimeError):
    """A simulation was abandoned before finishing."""


class CancelToken:
    """
    Cooperative cancellation flag shared with a running simulation.

    The simulator checks the token between trials.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SimulationCancelled("Simulation cancelled")


@dataclass(frozen=True)
class EquityResult:
    """Outcome counts of a simulation."""
    wins: int = 0
    ties: int = 0
    losses: int = 0
    skipped: int = 0

    @property
    def trials(self) -> int:
        """Number of trials that were played out."""
        return self.wins + self.ties + self.losses

    @property
    def equity(self) -> float:
        """Win probability with half credit for ties, in percent."""
        if self.trials == 0:
            return 0.0
        return (self.wins + self.ties / 2) / self.trials * 100

    @property
    def win_pct(self) -> float:
        return self.wins / self.trials * 100 if self.trials else 0.0

    @property
    def tie_pct(self) -> float:
        return self.ties / self.trials * 100 if self.trials else 0.0

    def __add__(self, other: "EquityResult") -> "EquityResult":
        return EquityResult(
            wins=self.wins + other.wins,
            ties=self.ties + other.ties,
            losses=self.losses + other.losses,
            skipped=self.skipped + other.skipped,
        )


class EquitySimulator:
    """
    Monte Carlo equity of a hand against a random opponent.

    Each trial shuffles the unseen cards, deals the opponent two of them
    and completes the board, then compares both best hands. Trials run in
    batches; every batch draws from its own generator spawned from the
    caller's, so a seeded run gives the same counts for any worker count.
    """

    def __init__(
        self,
        num_simulations: int = 5000,
        workers: int = 1,
        batch_size: int = 250,
    ):
        """
        Initialize simulator.

        Args:
            num_simulations: Trials per estimate
            workers: Threads used to run batches
            batch_size: Trials per batch
        """
        self.num_simulations = num_simulations
        self.workers = max(1, workers)
        self.batch_size = max(1, batch_size)

    def simulate(
        self,
        hole: Sequence[Card],
        board: Sequence[Card],
        deck: Optional[Sequence[Card]] = None,
        rng: RandomSource = None,
        cancel: Optional[CancelToken] = None,
    ) -> EquityResult:
        """
        Run the simulation.

        Args:
            hole: Hero's two hole cards
            board: Community cards (1-4)
            deck: Unseen cards (defaults to everything not in hole or board)
            rng: numpy Generator or seed
            cancel: Token checked between trials

        Returns:
            EquityResult with summed counts

        Raises:
            ValueError: On a wrong number of hole or board cards, or duplicates
            SimulationCancelled: If the token was cancelled
        """
        if len(hole) != 2:
            raise ValueError(f"Need exactly 2 hole cards, got {len(hole)}")
        if not 1 <= len(board) <= 4:
            raise ValueError(f"Board must have 1-4 cards, got {len(board)}")

        known = list(hole) + list(board)
        if len(set(known)) != len(known):
            raise ValueError("Duplicate cards detected")

        if deck is None:
            deck = remaining_cards(known)
        deck = tuple(deck)

        rng = np.random.default_rng(rng)
        sizes = self._batch_sizes()
        children = rng.spawn(len(sizes))

        logger.debug(
            "Simulating %d trials for %s on [%s] in %d batches",
            self.num_simulations,
            " ".join(str(c) for c in hole),
            " ".join(str(c) for c in board),
            len(sizes),
        )

        args = [
            (tuple(hole), tuple(board), deck, size, child, cancel)
            for size, child in zip(sizes, children)
        ]
        if self.workers == 1 or len(args) == 1:
            results = [_run_batch(*a) for a in args]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as ex:
                results = list(ex.map(lambda a: _run_batch(*a), args))

        total = sum(results, EquityResult())
        if total.skipped:
            logger.warning(
                "Skipped %d of %d trials: only %d cards left in deck",
                total.skipped, self.num_simulations, len(deck),
            )
        logger.debug(
            "Equity %.2f%% (%d wins, %d ties, %d losses)",
            total.equity, total.wins, total.ties, total.losses,
        )
        return total

    def _batch_sizes(self) -> list[int]:
        full, rest = divmod(self.num_simulations, self.batch_size)
        sizes = [self.batch_size] * full
        if rest:
            sizes.append(rest)
        return sizes


def _run_batch(
    hole: tuple[Card, ...],
    board: tuple[Card, ...],
    deck: tuple[Card, ...],
    num_trials: int,
    rng: np.random.Generator,
    cancel: Optional[CancelToken],
) -> EquityResult:
    """Play out `num_trials` trials with a private generator."""
    remaining_board = 5 - len(board)
    needed = 2 + remaining_board

    wins = ties = losses = skipped = 0

    for _ in range(num_trials):
        if cancel is not None:
            cancel.raise_if_cancelled()

        if len(deck) < needed:
            skipped += 1
            continue

        order = rng.permutation(len(deck))
        opp_hole = [deck[order[0]], deck[order[1]]]
        full_board = list(board) + [deck[i] for i in order[2:needed]]

        hero_best = best_hand(list(hole) + full_board)
        opp_best = best_hand(opp_hole + full_board)

        result = compare_hands(hero_best, opp_best)
        if result == Comparison.GREATER_THAN:
            wins += 1
        elif result == Comparison.EQUAL:
            ties += 1
        else:
            losses += 1

    return EquityResult(wins=wins, ties=ties, losses=losses, skipped=skipped)


def calculate_equity(
    hole: Sequence[Card],
    board: Sequence[Card],
    num_simulations: int = 5000,
    rng: RandomSource = None,
) -> float:
    """
    Calculate hand equity against a random opponent.

    Args:
        hole: Hero's hole cards
        board: Board cards (1-4)
        num_simulations: Number of simulations
        rng: numpy Generator or seed

    Returns:
        Equity (0-100)
    """
    simulator = EquitySimulator(num_simulations=num_simulations)
    return simulator.simulate(hole, board, rng=rng).equity
