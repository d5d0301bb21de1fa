"""Hand evaluation for flop-style community card games."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import RANKS, Card
from .errors import InvalidArgument

WHEEL = frozenset({0, 1, 2, 3, 12})
WHEEL_HIGH = 3


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


HAND_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.PAIR: "Pair",
    HandCategory.HIGH_CARD: "High Card",
}


@dataclass(frozen=True, order=True)
class HandRank:
    """Comparable representation of a poker hand rank.

    Ordering is by category first, then by the category specific tie-break
    ranks (highest significance first).
    """

    category: HandCategory
    tiebreaker: Tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return HAND_NAMES[self.category]

    def describe(self) -> str:
        if not self.tiebreaker:
            return self.name
        symbols = [RANKS[v] for v in self.tiebreaker]
        primary = symbols[0]
        if self.category == HandCategory.STRAIGHT_FLUSH:
            return f"Straight Flush ({_straight_symbols(self.tiebreaker[0])})"
        if self.category == HandCategory.FOUR_OF_A_KIND:
            return f"Four of a Kind ({primary}s)"
        if self.category == HandCategory.FULL_HOUSE:
            return f"Full House ({primary}s over {symbols[1]}s)"
        if self.category == HandCategory.FLUSH:
            return f"Flush ({' '.join(symbols)})"
        if self.category == HandCategory.STRAIGHT:
            return f"Straight ({_straight_symbols(self.tiebreaker[0])})"
        if self.category == HandCategory.THREE_OF_A_KIND:
            return f"Trips {primary}s"
        if self.category == HandCategory.TWO_PAIR:
            kicker = f" with {symbols[2]} kicker" if len(symbols) > 2 else ""
            return f"Two Pair ({primary}{symbols[1]}{kicker})"
        if self.category == HandCategory.PAIR:
            return f"Pair of {primary}s ({' '.join(symbols[1:])} kickers)"
        return f"High Card {' '.join(symbols)}"


def _straight_symbols(high: int) -> str:
    if high == WHEEL_HIGH:
        return "5-4-3-2-A"
    return "-".join(RANKS[v] for v in range(high, high - 5, -1))


def _counts(ranks: Sequence[int]) -> Dict[int, int]:
    return Counter(ranks)


def _rank_with_count(counts: Dict[int, int], count: int) -> Optional[int]:
    """Return the highest rank occurring exactly ``count`` times."""

    matches = [rank for rank, seen in counts.items() if seen == count]
    return max(matches) if matches else None


def pair(ranks: Sequence[int]) -> Optional[int]:
    return _rank_with_count(_counts(ranks), 2)


def two_pair(ranks: Sequence[int]) -> Optional[Tuple[int, int]]:
    """Return the (higher, lower) pair ranks, or None without two distinct pairs."""

    pairs = sorted((rank for rank, seen in _counts(ranks).items() if seen == 2), reverse=True)
    if len(pairs) < 2:
        return None
    return pairs[0], pairs[1]


def three_of_a_kind(ranks: Sequence[int]) -> Optional[int]:
    return _rank_with_count(_counts(ranks), 3)


def four_of_a_kind(ranks: Sequence[int]) -> Optional[int]:
    return _rank_with_count(_counts(ranks), 4)


def full_house(ranks: Sequence[int]) -> Optional[Tuple[int, int]]:
    """Return (trips rank, pair rank) when the ranks hold a full house.

    A second set of trips supplies the pair when no exact pair exists.
    """

    counts = _counts(ranks)
    top = _rank_with_count(counts, 3)
    if top is None:
        return None
    over = [rank for rank, seen in counts.items() if rank != top and seen in (2, 3)]
    if not over:
        return None
    return top, max(over)


def straight(ranks: Iterable[int]) -> Optional[int]:
    """Return the top rank of the highest straight, 3 for the wheel."""

    unique = sorted(set(ranks))
    best = None
    for idx in range(len(unique) - 4):
        window = unique[idx : idx + 5]
        if window[-1] - window[0] == 4:
            best = window[-1]
    if best is None and WHEEL <= set(unique):
        best = WHEEL_HIGH
    return best


def flush(cards: Sequence[Card]) -> Optional[List[Card]]:
    """Return every card of the flush suit, highest first, or None."""

    if len(cards) < 5:
        return None
    by_suit = sorted(cards, key=lambda card: card.suit)
    for idx in range(len(by_suit) - 4):
        window = by_suit[idx : idx + 5]
        if window[0].suit == window[-1].suit:
            suit = window[0].suit
            return sorted((card for card in cards if card.suit == suit), key=lambda c: c.rank, reverse=True)
    return None


def _kickers(ranks_desc: Sequence[int], exclude: Iterable[int], count: int) -> Tuple[int, ...]:
    skip = set(exclude)
    return tuple(rank for rank in ranks_desc if rank not in skip)[:count]


def rank_hand(cards: Sequence[Card]) -> HandRank:
    """Rank the best 5-card hand available in ``cards`` (five or more)."""

    if len(cards) < 5:
        raise InvalidArgument("At least five cards are required")
    ranks = sorted(card.rank for card in cards)
    ranks_desc = ranks[::-1]

    flush_set = flush(cards)
    if flush_set is not None:
        high = straight(card.rank for card in flush_set)
        if high is not None:
            return HandRank(HandCategory.STRAIGHT_FLUSH, (high,))

    quads = four_of_a_kind(ranks)
    if quads is not None:
        return HandRank(HandCategory.FOUR_OF_A_KIND, (quads,) + _kickers(ranks_desc, (quads,), 1))

    boat = full_house(ranks)
    if boat is not None:
        return HandRank(HandCategory.FULL_HOUSE, boat)

    if flush_set is not None:
        return HandRank(HandCategory.FLUSH, tuple(card.rank for card in flush_set[:5]))

    high = straight(ranks)
    if high is not None:
        return HandRank(HandCategory.STRAIGHT, (high,))

    trips = three_of_a_kind(ranks)
    if trips is not None:
        return HandRank(HandCategory.THREE_OF_A_KIND, (trips,) + _kickers(ranks_desc, (trips,), 2))

    pairs = two_pair(ranks)
    if pairs is not None:
        return HandRank(HandCategory.TWO_PAIR, pairs + _kickers(ranks_desc, pairs, 1))

    paired = pair(ranks)
    if paired is not None:
        return HandRank(HandCategory.PAIR, (paired,) + _kickers(ranks_desc, (paired,), 3))

    return HandRank(HandCategory.HIGH_CARD, tuple(ranks_desc[:5]))


def compare_hands(hand_a: Sequence[Card], hand_b: Sequence[Card], *, category_only: bool = False) -> int:
    """Compare two card sets; positive when ``hand_a`` is stronger."""

    rank_a = rank_hand(hand_a)
    rank_b = rank_hand(hand_b)
    if category_only:
        return (rank_a.category > rank_b.category) - (rank_a.category < rank_b.category)
    return (rank_a > rank_b) - (rank_a < rank_b)


__all__ = [
    "HandCategory",
    "HandRank",
    "HAND_NAMES",
    "rank_hand",
    "compare_hands",
    "pair",
    "two_pair",
    "three_of_a_kind",
    "four_of_a_kind",
    "full_house",
    "straight",
    "flush",
]
