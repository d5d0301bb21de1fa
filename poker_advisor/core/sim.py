"""Monte Carlo equity simulation."""
from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from .cards import DECK_SIZE, Card, Deck
from .context import BOARD_SIZE, SimulationContext
from .errors import InsufficientCardsError, InvalidArgument, SimulationCancelled
from .hand_eval import rank_hand

LOGGER = logging.getLogger(__name__)

# Trials are scored on hand category alone, so a pair of twos "ties" a pair of
# aces. Switching to full tie-break comparison shifts the estimates materially.
COMPARE_CATEGORY_ONLY = True
# A trial where the subject matches the best opponent counts as a full win.
TIES_COUNT_AS_WIN = True

HOLE_CARDS = 2


class Simulator:
    """Estimates the subject's chance of winning against random opponents."""

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        iterations: int = 1000,
        workers: int = 1,
        category_only: bool = COMPARE_CATEGORY_ONLY,
    ) -> None:
        if workers <= 0:
            raise InvalidArgument("workers must be positive")
        self.rng = rng or random.Random()
        self.iterations = iterations
        self.workers = workers
        self.category_only = category_only

    def estimate_equity(
        self,
        context: SimulationContext,
        iterations: Optional[int] = None,
        *,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> float:
        """Return the fraction of simulated deals the subject wins.

        ``cancel`` and ``timeout`` are checked between trials; when either
        fires :class:`SimulationCancelled` is raised and no estimate is
        returned.
        """

        trials = self.iterations if iterations is None else iterations
        if trials <= 0:
            raise InvalidArgument(f"iterations must be positive, got {trials}")
        if context.num_opponents < 0:
            raise InvalidArgument(f"num_opponents must not be negative, got {context.num_opponents}")
        if timeout is not None and timeout <= 0:
            raise InvalidArgument("timeout must be positive")
        context.validate()

        private = tuple(context.private)
        public = tuple(context.public)
        opponents = context.num_opponents
        missing = BOARD_SIZE - len(public)
        needed = opponents * HOLE_CARDS + missing
        available = DECK_SIZE - len(private) - len(public)
        if available < needed:
            raise InsufficientCardsError(f"Trial needs {needed} unknown cards, deck holds {available}")
        LOGGER.debug("Simulating %d trials vs %d opponents, deck of %d", trials, opponents, available)

        deadline = time.monotonic() + timeout if timeout is not None else None
        chunks = _split(trials, min(self.workers, trials))
        seeds = [self.rng.getrandbits(64) for _ in chunks]
        stop = threading.Event()

        def run(count: int, seed: int) -> int:
            return self._run_trials(private, public, opponents, count, random.Random(seed), cancel, stop, deadline)

        try:
            if len(chunks) == 1:
                wins = run(chunks[0], seeds[0])
            else:
                with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="equity") as executor:
                    futures = [executor.submit(run, count, seed) for count, seed in zip(chunks, seeds)]
                    try:
                        wins = sum(future.result() for future in futures)
                    except BaseException:
                        stop.set()
                        raise
        except SimulationCancelled as exc:
            LOGGER.warning("Equity simulation aborted: %s", exc)
            raise
        return wins / trials

    def _run_trials(
        self,
        private: Tuple[Card, ...],
        public: Tuple[Card, ...],
        opponents: int,
        count: int,
        rng: random.Random,
        cancel: threading.Event | None,
        stop: threading.Event,
        deadline: float | None,
    ) -> int:
        deck = Deck(private + public, rng=rng)
        wins = 0
        for _ in range(count):
            if stop.is_set() or (cancel is not None and cancel.is_set()):
                raise SimulationCancelled("cancelled")
            if deadline is not None and time.monotonic() >= deadline:
                raise SimulationCancelled("timed out")
            board, hands = deal_trial(deck, public, opponents)
            if self._subject_wins(list(private) + board, [hand + board for hand in hands]):
                wins += 1
        LOGGER.debug("Chunk of %d trials won %d", count, wins)
        return wins

    def _subject_wins(self, subject: Sequence[Card], others: Sequence[Sequence[Card]]) -> bool:
        if not others:
            return True
        mine = self._score(subject)
        best = max(self._score(cards) for cards in others)
        return mine > best or (TIES_COUNT_AS_WIN and mine == best)

    def _score(self, cards: Sequence[Card]):
        rank = rank_hand(cards)
        return rank.category if self.category_only else rank


def deal_trial(deck: Deck, public: Sequence[Card], opponents: int) -> Tuple[List[Card], List[List[Card]]]:
    """Reshuffle ``deck``, complete the board and deal hole cards to each opponent."""

    deck.reset()
    board = list(public) + deck.deal(BOARD_SIZE - len(public))
    hands = [deck.deal(HOLE_CARDS) for _ in range(opponents)]
    return board, hands


def _split(total: int, parts: int) -> List[int]:
    size, extra = divmod(total, parts)
    return [size + (1 if idx < extra else 0) for idx in range(parts)]


__all__ = ["Simulator", "deal_trial", "COMPARE_CATEGORY_ONLY", "TIES_COUNT_AS_WIN"]
