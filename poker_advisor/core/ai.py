"""Fold/call/raise policy layered on the equity estimate."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .context import SimulationContext
from .sim import Simulator

LOGGER = logging.getLogger(__name__)


class Action(str, Enum):
    FOLD = "FOLD"
    CALL = "CALL"
    RAISE = "RAISE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PolicyConfig:
    """Thresholds of the randomized decision policy."""

    preflop_bonus: float = 0.2
    bankroll_blinds: float = 4
    bankroll_min_equity: float = 0.5
    weak_return: float = 0.8
    marginal_return: float = 1.0
    strong_return: float = 1.3
    weak_bluff_draw: float = 0.95
    marginal_fold_draw: float = 0.8
    marginal_call_draw: float = 0.85
    fair_call_draw: float = 0.6
    strong_call_draw: float = 0.3


@dataclass
class ActionDecision:
    action: Action
    equity: float
    pot_odds: float
    rate_of_return: float
    draw: float
    info: str | None = None


class DecisionEngine:
    """Chooses an action for the subject from a :class:`SimulationContext`."""

    def __init__(
        self,
        simulator: Simulator | None = None,
        *,
        rng: random.Random | None = None,
        policy: PolicyConfig | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.simulator = simulator or Simulator(rng=self.rng)
        self.policy = policy or PolicyConfig()

    def action(self, context: SimulationContext, **simulate) -> Action:
        return self.decide(context, **simulate).action

    def decide(self, context: SimulationContext, **simulate) -> ActionDecision:
        """Simulate equity for ``context`` and apply the policy.

        Extra keyword arguments (``iterations``, ``cancel``, ``timeout``) go
        to :meth:`Simulator.estimate_equity`.
        """

        equity = self.simulator.estimate_equity(context, **simulate)
        return self.choose(context, equity)

    def choose(self, context: SimulationContext, equity: float, draw: Optional[float] = None) -> ActionDecision:
        """Apply the policy to an already estimated ``equity``.

        ``draw`` replaces the random draw from :attr:`rng` when given.
        """

        policy = self.policy
        pot_odds = context.pot_odds
        adjusted = equity + policy.preflop_bonus if not context.public else equity
        rate = adjusted / pot_odds
        value = self.rng.random() if draw is None else draw
        call = context.call

        if (context.cash - call) < policy.bankroll_blinds * context.blind and equity < policy.bankroll_min_equity:
            action = Action.FOLD
            info = "bankroll guard"
        elif rate < policy.weak_return:
            if value >= policy.weak_bluff_draw or call == 0:
                action = Action.RAISE
            else:
                action = Action.FOLD
            info = "weak"
        elif rate < policy.marginal_return:
            if value < policy.marginal_fold_draw and call > 0:
                action = Action.FOLD
            elif value < policy.marginal_call_draw:
                action = Action.CALL
            else:
                action = Action.RAISE
            info = "marginal"
        elif rate < policy.strong_return:
            action = Action.CALL if value < policy.fair_call_draw else Action.RAISE
            info = "fair"
        else:
            action = Action.CALL if value < policy.strong_call_draw else Action.RAISE
            info = "strong"

        LOGGER.debug(
            "equity=%.3f pot_odds=%.3f return=%.3f draw=%.3f -> %s (%s)",
            equity,
            pot_odds,
            rate,
            value,
            action.value,
            info,
        )
        return ActionDecision(action, equity, pot_odds, rate, value, info)


__all__ = ["Action", "ActionDecision", "DecisionEngine", "PolicyConfig"]
