"""Card and deck utilities."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from .errors import InsufficientCardsError, InvalidArgument, ParseError

RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "T", "J", "Q", "K", "A")
SUITS = ("C", "D", "H", "S")
RANK_NAMES = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "Jack", "Queen", "King", "Ace")
SUIT_NAMES = ("Clubs", "Diamonds", "Hearts", "Spades")
SYMBOL_TO_RANK = {symbol: value for value, symbol in enumerate(RANKS)}
SYMBOL_TO_SUIT = {symbol: value for value, symbol in enumerate(SUITS)}
DECK_SIZE = len(RANKS) * len(SUITS)

CardSeed = Union[int, str]


@dataclass(frozen=True)
class Card:
    """One of the 52 playing cards.

    ``rank`` runs 0..12 for 2..Ace and ``suit`` 0..3 for Clubs, Diamonds,
    Hearts and Spades.
    """

    rank: int
    suit: int

    def __post_init__(self) -> None:
        if not 0 <= self.rank < len(RANKS):
            raise InvalidArgument(f"rank out of range: {self.rank!r}")
        if not 0 <= self.suit < len(SUITS):
            raise InvalidArgument(f"suit out of range: {self.suit!r}")

    def __str__(self) -> str:
        return self.describe()

    @property
    def code(self) -> str:
        return f"{RANKS[self.rank]}{SUITS[self.suit]}"

    @property
    def index(self) -> int:
        return self.suit * len(RANKS) + self.rank

    def describe(self) -> str:
        return f"{RANK_NAMES[self.rank]} of {SUIT_NAMES[self.suit]}"

    @staticmethod
    def from_code(code: str) -> "Card":
        """Parse an exact two-character code such as ``"TS"``."""

        if not isinstance(code, str) or len(code) != 2:
            raise ParseError(f"Bad card code: {code!r}")
        rank = SYMBOL_TO_RANK.get(code[0])
        if rank is None:
            raise ParseError(f"Bad card rank in {code!r}")
        suit = SYMBOL_TO_SUIT.get(code[1])
        if suit is None:
            raise ParseError(f"Bad card suit in {code!r}")
        return Card(rank, suit)

    @staticmethod
    def from_index(index: int) -> "Card":
        """Build the card numbered ``index`` (0..51, clubs first)."""

        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < DECK_SIZE:
            raise InvalidArgument(f"Card index must be in 0..{DECK_SIZE - 1}: {index!r}")
        return Card(index % len(RANKS), index // len(RANKS))


def parse_card(seed: CardSeed) -> Card:
    if isinstance(seed, Card):
        return seed
    if isinstance(seed, str):
        return Card.from_code(seed)
    return Card.from_index(seed)


def make_cards(*seeds: CardSeed) -> List[Card]:
    """Build cards from any mix of integer indices and two-character codes."""

    return [parse_card(seed) for seed in seeds]


def parse_cards(text: Union[str, Iterable[CardSeed], None]) -> List[Card]:
    """Parse whitespace separated codes (``"AC KD"``) or an iterable of seeds."""

    if text is None:
        return []
    if isinstance(text, str):
        return [Card.from_code(token) for token in text.split()]
    return [parse_card(seed) for seed in text]


def full_deck() -> List[Card]:
    return [Card(rank, suit) for suit in range(len(SUITS)) for rank in range(len(RANKS))]


class Deck:
    """The card universe minus the known cards, dealt from a shuffled stack."""

    def __init__(self, exclude: Iterable[Card] = (), *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        dead = set(exclude)
        self._universe: Sequence[Card] = tuple(card for card in full_deck() if card not in dead)
        self._cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        """Restore every non-excluded card and reshuffle."""

        self._cards = list(self._universe)
        self.shuffle()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def deal(self, count: int = 1) -> List[Card]:
        if count < 0:
            raise InvalidArgument("count must not be negative")
        if count > len(self._cards):
            raise InsufficientCardsError(
                f"Cannot deal {count} cards, only {len(self._cards)} remaining"
            )
        dealt, self._cards = self._cards[:count], self._cards[count:]
        return dealt

    def sample(self, count: int) -> List[Card]:
        """Draw ``count`` distinct cards without consuming them."""

        if count < 0:
            raise InvalidArgument("count must not be negative")
        if count > len(self._cards):
            raise InsufficientCardsError(
                f"Cannot sample {count} cards, only {len(self._cards)} remaining"
            )
        return self._rng.sample(self._cards, count)

    def __len__(self) -> int:
        return len(self._cards)

    def remaining(self) -> Sequence[Card]:
        return tuple(self._cards)


__all__ = [
    "Card",
    "Deck",
    "parse_card",
    "parse_cards",
    "make_cards",
    "full_deck",
    "RANKS",
    "SUITS",
    "DECK_SIZE",
]
