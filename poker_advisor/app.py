"""String boundary between a front end and the advisor core."""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional, Union

from .core.ai import DecisionEngine
from .core.cards import parse_cards
from .core.config import AdvisorConfig, load_advisor_config
from .core.context import SimulationContext
from .core.errors import InvalidArgument, ParseError, ValidationError
from .core.sim import Simulator

LOGGER = logging.getLogger(__name__)


def _parse_number(label: str, text: str) -> float:
    try:
        value = float(str(text).strip())
    except ValueError as exc:
        raise ParseError(f"{label} must be numeric, got {text!r}") from exc
    if value != value or value in (float("inf"), float("-inf")):
        raise ParseError(f"{label} must be a finite number, got {text!r}")
    if value < 0:
        raise ValidationError(f"{label} must not be negative, got {text!r}")
    return value


def _parse_count(label: str, text: str) -> int:
    try:
        return int(str(text).strip())
    except ValueError as exc:
        raise ParseError(f"{label} must be an integer, got {text!r}") from exc


def build_context(
    private: str,
    public: str,
    opponents: str,
    call: str,
    pot: str,
    cash: Optional[str] = None,
    blind: str = "0",
    *,
    default_cash: float = 1000,
) -> SimulationContext:
    """Parse front end fields into a validated :class:`SimulationContext`."""

    num_opponents = _parse_count("opponents", opponents)
    if num_opponents < 0:
        raise ValidationError(f"opponents must not be negative, got {opponents!r}")
    hole = parse_cards(private)
    if not 1 <= len(hole) <= 2:
        raise ValidationError(f"Expected one or two private cards, got {len(hole)}")
    context = SimulationContext(
        private=hole,
        public=parse_cards(public),
        num_opponents=num_opponents,
        cash=default_cash if cash is None or not str(cash).strip() else _parse_number("cash", cash),
    )
    context.set_pot_odds(_parse_number("call", call), _parse_number("blind", blind), _parse_number("pot", pot))
    context.validate()
    return context


def advise(
    iterations: str,
    private: str,
    public: str,
    opponents: str,
    call: str,
    pot: str,
    cash: Optional[str] = None,
    blind: str = "0",
    *,
    config: AdvisorConfig | None = None,
    config_path: Union[str, Path, None] = None,
    seed: Optional[int] = None,
) -> str:
    """Return ``"FOLD"``, ``"CALL"`` or ``"RAISE"`` for the given fields.

    Without an explicit ``config`` the JSON configuration at ``config_path``
    (the bundled one by default) is loaded; a blank ``iterations`` field falls
    back to its trial count.
    """

    config = config or load_advisor_config(config_path)
    if iterations is None or not str(iterations).strip():
        trials = config.iterations
    else:
        trials = _parse_count("iterations", iterations)
    if trials <= 0:
        raise InvalidArgument(f"iterations must be positive, got {iterations!r}")
    context = build_context(private, public, opponents, call, pot, cash, blind, default_cash=config.default_cash)
    rng = random.Random(seed if seed is not None else config.seed)
    simulator = Simulator(rng=rng, iterations=trials, workers=config.workers)
    engine = DecisionEngine(simulator, rng=rng, policy=config.policy)
    decision = engine.decide(context)
    LOGGER.info(
        "Recommended %s (equity %.3f, pot odds %.3f)", decision.action.value, decision.equity, decision.pot_odds
    )
    return decision.action.value


__all__ = ["advise", "build_context"]
