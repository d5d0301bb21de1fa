import random

import pytest

from poker_advisor.core.cards import RANKS, SUITS, Card, Deck, make_cards, parse_cards
from poker_advisor.core.errors import InsufficientCardsError, InvalidArgument, ParseError


def test_parse_is_injective_over_all_codes():
    codes = [r + s for r in RANKS for s in SUITS]
    cards = {Card.from_code(code) for code in codes}
    assert len(cards) == 52
    assert all(Card.from_code(card.code) == card for card in cards)


def test_parse_maps_symbols_to_values():
    assert Card.from_code("2C") == Card(0, 0)
    assert Card.from_code("TD") == Card(8, 1)
    assert Card.from_code("AS") == Card(12, 3)
    assert parse_cards("  KH ") == [Card(11, 2)]


@pytest.mark.parametrize("code", ["", "A", "1C", "AX", "10C", "ZZ", "A S", "as", "kh", "Ah", " AS", "kh ", "AS\n"])
def test_parse_rejects_bad_codes(code):
    with pytest.raises(ParseError):
        Card.from_code(code)


def test_describe_uses_long_names():
    assert str(Card.from_code("AS")) == "Ace of Spades"
    assert Card.from_code("TC").describe() == "10 of Clubs"
    assert Card.from_code("QH").describe() == "Queen of Hearts"


def test_from_index_numbers_clubs_first():
    assert Card.from_index(0) == Card(0, 0)
    assert Card.from_index(12) == Card(12, 0)
    assert Card.from_index(13) == Card(0, 1)
    assert Card.from_index(51) == Card(12, 3)
    assert {Card.from_index(i).index for i in range(52)} == set(range(52))
    with pytest.raises(InvalidArgument):
        Card.from_index(52)


def test_make_cards_accepts_codes_and_indices():
    assert make_cards("AS", 0) == [Card(12, 3), Card(0, 0)]
    assert parse_cards("AC  KD") == [Card(12, 0), Card(11, 1)]
    assert parse_cards("") == []


def test_deck_excludes_known_cards():
    known = parse_cards("AC AD 7H")
    deck = Deck(known, rng=random.Random(1))
    assert len(deck) == 49
    assert not set(known) & set(deck.remaining())


def test_deck_deals_without_replacement():
    deck = Deck(rng=random.Random(2))
    dealt = deck.deal(52)
    assert len(set(dealt)) == 52
    assert len(deck) == 0
    with pytest.raises(InsufficientCardsError):
        deck.deal(1)
    deck.reset()
    assert len(deck) == 52


def test_deck_sample_does_not_consume():
    deck = Deck(parse_cards("2C"), rng=random.Random(3))
    sample = deck.sample(5)
    assert len(set(sample)) == 5
    assert len(deck) == 51
    with pytest.raises(InsufficientCardsError):
        deck.sample(52)


def test_parse_cards_rejects_lower_case_tokens():
    with pytest.raises(ParseError):
        parse_cards("AC kd")


def test_cards_compare_by_value_only():
    assert Card(12, 0) != Card(12, 3)
    with pytest.raises(TypeError):
        Card(0, 0) < Card(1, 0)
