import random
import threading

import pytest

from poker_advisor.core.cards import Deck, parse_cards
from poker_advisor.core.context import SimulationContext
from poker_advisor.core.errors import (
    InsufficientCardsError,
    InvalidArgument,
    SimulationCancelled,
    ValidationError,
)
from poker_advisor.core.sim import Simulator, deal_trial


def make_context(private, public="", opponents=1):
    return SimulationContext(private=parse_cards(private), public=parse_cards(public), num_opponents=opponents)


def test_pocket_aces_heads_up_converges():
    simulator = Simulator(rng=random.Random(2024), iterations=20_000)
    equity = simulator.estimate_equity(make_context("AC AD"))
    assert 0.80 <= equity <= 0.93


def test_more_opponents_lower_equity():
    simulator = Simulator(rng=random.Random(5), iterations=3000)
    heads_up = simulator.estimate_equity(make_context("AC AD", opponents=1))
    crowded = simulator.estimate_equity(make_context("AC AD", opponents=6))
    assert crowded < heads_up


def test_unbeatable_board_always_wins():
    simulator = Simulator(rng=random.Random(1), iterations=500)
    context = make_context("AS KS", "QS JS TS 2D 3C", opponents=4)
    assert simulator.estimate_equity(context) == 1.0


def test_no_opponents_always_wins():
    simulator = Simulator(rng=random.Random(1), iterations=50)
    assert simulator.estimate_equity(make_context("7C 2D", opponents=0)) == 1.0


def test_seeded_runs_are_reproducible():
    context = make_context("KH QH", "2H 7H 9C")
    first = Simulator(rng=random.Random(9), iterations=2000, workers=4).estimate_equity(context)
    second = Simulator(rng=random.Random(9), iterations=2000, workers=4).estimate_equity(context)
    assert first == second
    assert 0.0 <= first <= 1.0


def test_exact_comparison_counts_fewer_wins():
    context = make_context("2C 3D", "AH KD 7C 9S JD")
    loose = Simulator(rng=random.Random(3), iterations=2000).estimate_equity(context)
    exact = Simulator(rng=random.Random(3), iterations=2000, category_only=False).estimate_equity(context)
    assert exact < loose


def test_estimate_does_not_touch_context():
    context = make_context("AC AD", "2C 3D 4H")
    Simulator(rng=random.Random(4), iterations=200).estimate_equity(context)
    assert context.private == parse_cards("AC AD")
    assert context.public == parse_cards("2C 3D 4H")


def test_zero_iterations_rejected():
    simulator = Simulator(rng=random.Random(1))
    with pytest.raises(InvalidArgument):
        simulator.estimate_equity(make_context("AC AD"), 0)


def test_negative_opponents_rejected():
    with pytest.raises(InvalidArgument):
        Simulator(iterations=10).estimate_equity(make_context("AC AD", opponents=-1))


def test_duplicate_known_card_rejected():
    with pytest.raises(ValidationError):
        Simulator(iterations=10).estimate_equity(make_context("AC AD", "AC 2D 3H"))


def test_insufficient_cards_rejected():
    with pytest.raises(InsufficientCardsError):
        Simulator(iterations=10).estimate_equity(make_context("AC AD", opponents=24))


def test_bad_workers_rejected():
    with pytest.raises(InvalidArgument):
        Simulator(workers=0)


def test_cancel_discards_partial_results():
    cancel = threading.Event()
    cancel.set()
    simulator = Simulator(rng=random.Random(1), iterations=10_000, workers=2)
    with pytest.raises(SimulationCancelled):
        simulator.estimate_equity(make_context("AC AD"), cancel=cancel)


def test_timeout_aborts_simulation():
    simulator = Simulator(rng=random.Random(1), iterations=1_000_000)
    with pytest.raises(SimulationCancelled):
        simulator.estimate_equity(make_context("AC AD"), timeout=1e-9)
    with pytest.raises(InvalidArgument):
        simulator.estimate_equity(make_context("AC AD"), timeout=0)


@pytest.mark.parametrize("public", ["", "2C 9D KH", "2C 9D KH 5S", "2C 9D KH 5S JC"])
def test_trial_deals_distinct_cards(public):
    private = parse_cards("AC AD")
    board_cards = parse_cards(public)
    deck = Deck(private + board_cards, rng=random.Random(17))
    for _ in range(200):
        board, hands = deal_trial(deck, board_cards, 8)
        assert len(board) == 5
        assert board[: len(board_cards)] == board_cards
        assert all(len(hand) == 2 for hand in hands)
        dealt = private + board + [card for hand in hands for card in hand]
        assert len(dealt) == 2 + 5 + 16
        assert len(set(dealt)) == len(dealt)
