"""
Hand analysis pipeline and a live advisor session.

`analyze` runs every calculation for one table state. `AdvisorSession`
keeps a table state that changes card by card: each change recomputes the
cheap parts at once and runs the equity simulation on a background thread.
A simulation superseded by a newer change is cancelled and its result is
never applied.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np

from coach.game.cards import Card, remaining_cards
from coach.game.draws import DrawReport, analyze_draws
from coach.game.equity import (
    CancelToken,
    EquityResult,
    EquitySimulator,
    RandomSource,
    SimulationCancelled,
)
from coach.game.evaluator import NO_HAND, EvaluatedHand, best_hand
from coach.game.outs import OutsResult, count_outs
from .strategy import Action, StrategyConfig, pot_odds, suggest_action

logger = logging.getLogger(__name__)


@dataclass
class AdvisorConfig:
    """Configuration for the analysis pipeline."""
    num_simulations: int = 5000
    workers: int = 1               # Threads per simulation
    batch_size: int = 250          # Trials per batch
    debounce: float = 0.05         # Seconds to wait before simulating
    seed: Optional[int] = None
    strategy: StrategyConfig = field(default_factory=StrategyConfig)

    def make_simulator(self) -> EquitySimulator:
        return EquitySimulator(
            num_simulations=self.num_simulations,
            workers=self.workers,
            batch_size=self.batch_size,
        )


@dataclass(frozen=True)
class TableState:
    """Cards and chips in front of the player."""
    hole: tuple[Card, ...] = ()
    board: tuple[Card, ...] = ()
    pot: int = 0
    bet: int = 0

    def __post_init__(self):
        if len(self.hole) > 2:
            raise ValueError(f"At most 2 hole cards, got {len(self.hole)}")
        if len(self.board) > 5:
            raise ValueError(f"At most 5 board cards, got {len(self.board)}")
        cards = self.cards
        if len(set(cards)) != len(cards):
            raise ValueError("Duplicate cards detected")
        if self.pot < 0 or self.bet < 0:
            raise ValueError("Pot and bet must be non-negative")

    @property
    def cards(self) -> list[Card]:
        return list(self.hole) + list(self.board)

    @property
    def cards_to_come(self) -> int:
        return 5 - len(self.board)

    @property
    def street(self) -> str:
        return {0: "preflop", 3: "flop", 4: "turn", 5: "river"}.get(len(self.board), "partial")

    @property
    def simulates_equity(self) -> bool:
        """Equity is estimated on the flop and turn with both hole cards."""
        return len(self.hole) == 2 and 3 <= len(self.board) <= 4


@dataclass(frozen=True)
class HandAnalysis:
    """Everything computed for one table state."""
    state: TableState
    best: EvaluatedHand = NO_HAND
    outs: Optional[OutsResult] = None
    draws: Optional[DrawReport] = None
    equity: Optional[EquityResult] = None
    pot_odds: Optional[float] = None
    action: Action = Action.NOT_APPLICABLE
    pending: bool = False          # Equity simulation still running

    @property
    def equity_pct(self) -> Optional[float]:
        """Equity in percent, None when not applicable or pending."""
        return self.equity.equity if self.equity is not None else None


def analyze(
    state: TableState,
    config: Optional[AdvisorConfig] = None,
    rng: RandomSource = None,
    cancel: Optional[CancelToken] = None,
    with_equity: bool = True,
) -> HandAnalysis:
    """
    Analyze one table state.

    Args:
        state: Cards, pot and bet
        config: Pipeline configuration
        rng: numpy Generator or seed for the simulation
        cancel: Token for abandoning the simulation
        with_equity: Run the simulation; if False the analysis is marked
            pending where equity applies

    Returns:
        HandAnalysis

    Raises:
        SimulationCancelled: If the token was cancelled
    """
    config = config or AdvisorConfig()
    cards = state.cards

    best = best_hand(cards)

    outs = draws = None
    if len(state.hole) == 2 and len(state.board) >= 3:
        deck = remaining_cards(cards)
        outs = count_outs(state.hole, state.board, deck, best)
        if state.cards_to_come > 0:
            draws = analyze_draws(state.hole, state.board, deck, best)

    analysis = HandAnalysis(
        state=state,
        best=best,
        outs=outs,
        draws=draws,
        pot_odds=pot_odds(state.pot, state.bet),
    )

    if not state.simulates_equity:
        return _with_action(analysis, config)

    if not with_equity:
        return replace(analysis, pending=True)

    if rng is None:
        rng = config.seed
    equity = config.make_simulator().simulate(
        state.hole, state.board, rng=rng, cancel=cancel
    )
    return _with_action(replace(analysis, equity=equity), config)


def _with_action(analysis: HandAnalysis, config: AdvisorConfig) -> HandAnalysis:
    state = analysis.state
    action = suggest_action(
        state.hole,
        state.board,
        state.pot,
        state.bet,
        current=analysis.best,
        equity=analysis.equity_pct,
        config=config.strategy,
    )
    return replace(analysis, action=action, pending=False)


class AdvisorSession:
    """
    Live analysis of a hand as cards and bets are entered.

    Simulations run one at a time on a single worker thread. Every change
    cancels the simulation in flight; a result is only applied if no newer
    change happened while it ran.
    """

    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or AdvisorConfig()
        self._rng = np.random.default_rng(self.config.seed)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="coach-equity")
        self._lock = threading.Lock()
        self._generation = 0
        self._token: Optional[CancelToken] = None
        self._future: Optional[Future] = None
        self._state = TableState()
        self._analysis = analyze(self._state, self.config, with_equity=False)

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def analysis(self) -> HandAnalysis:
        """Latest analysis; equity may still be pending."""
        with self._lock:
            return self._analysis

    @property
    def busy(self) -> bool:
        """True while an equity simulation is in progress."""
        return self.analysis.pending

    def set_hole(self, cards: list[Card]) -> HandAnalysis:
        return self._update(replace(self._state, hole=tuple(cards)))

    def add_hole_card(self, card: Card) -> HandAnalysis:
        return self._update(replace(self._state, hole=self._state.hole + (card,)))

    def set_board(self, cards: list[Card]) -> HandAnalysis:
        return self._update(replace(self._state, board=tuple(cards)))

    def add_board_card(self, card: Card) -> HandAnalysis:
        return self._update(replace(self._state, board=self._state.board + (card,)))

    def set_pot(self, pot: int) -> HandAnalysis:
        return self._update(replace(self._state, pot=pot))

    def set_bet(self, bet: int) -> HandAnalysis:
        return self._update(replace(self._state, bet=bet))

    def reset(self) -> HandAnalysis:
        return self._update(TableState())

    def wait(self, timeout: Optional[float] = None) -> HandAnalysis:
        """Block until the current simulation (if any) has finished."""
        future = self._future
        if future is not None:
            future.result(timeout)
        return self.analysis

    def close(self) -> None:
        with self._lock:
            if self._token is not None:
                self._token.cancel()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "AdvisorSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _update(self, state: TableState) -> HandAnalysis:
        """Apply a new state. Invalid states raise ValueError and change nothing."""
        analysis = analyze(state, self.config, with_equity=False)

        with self._lock:
            if self._token is not None:
                self._token.cancel()
                self._token = None

            self._generation += 1
            self._state = state
            self._analysis = analysis
            logger.debug("State %d: %s", self._generation, analysis.best.description)

            if analysis.pending:
                token = CancelToken()
                self._token = token
                self._future = self._executor.submit(
                    self._simulate, self._generation, state, token, self._rng.spawn(1)[0]
                )
            else:
                self._future = None
            return analysis

    def _simulate(
        self,
        generation: int,
        state: TableState,
        token: CancelToken,
        rng: np.random.Generator,
    ) -> None:
        if token.wait(self.config.debounce):
            logger.debug("State %d superseded before simulating", generation)
            return

        try:
            equity = self.config.make_simulator().simulate(
                state.hole, state.board, rng=rng, cancel=token
            )
        except SimulationCancelled:
            logger.debug("State %d simulation cancelled", generation)
            return

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale result for state %d", generation)
                return
            self._analysis = _with_action(replace(self._analysis, equity=equity), self.config)
            self._token = None
            logger.info(
                "Equity %.2f%% -> %s", equity.equity, self._analysis.action
            )
