"""Evaluation and comparison of high poker hands."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import IntEnum
from functools import lru_cache
from itertools import combinations
from typing import Iterable, Iterator, Sequence

from .cards import NUM_SUITS, Card, Rank, rank_char

__all__ = [
    "HandType",
    "HandRank",
    "EvalStats",
    "eval_5cards",
    "eval_7cards",
    "eval_best",
    "compare",
    "hand_type_name",
    "cards_to_bitmask",
    "count_bits",
    "highest_bit",
    "is_straight",
    "is_flush",
    "is_wheel",
    "is_broadway",
    "reset_stats",
    "get_stats",
]

SUIT_OFFSET = 13
WHEEL_MASK = 0x100F
BROADWAY_MASK = 0x1F00

# Every five-rank straight as a rank bitmask (bit 0 = deuce), the wheel first.
_STRAIGHTS = (
    0x100F,
    0x001F,
    0x003E,
    0x007C,
    0x00F8,
    0x01F0,
    0x03E0,
    0x07C0,
    0x0F80,
    0x1F00,
)

_TYPE_SHIFT = 28
_PRIMARY_SHIFT = 24
_SECONDARY_SHIFT = 20
_NIBBLE = 0xF
_NUM_KICKERS = 5
_UINT64 = (1 << 64) - 1


class HandType(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


_TYPE_NAMES = (
    "High Card",
    "Pair",
    "Two Pair",
    "Three of a Kind",
    "Straight",
    "Flush",
    "Full House",
    "Four of a Kind",
    "Straight Flush",
    "Royal Flush",
)


def hand_type_name(hand_type: int) -> str:
    """English name of a hand type, or "Unknown"."""
    return _TYPE_NAMES[hand_type] if 0 <= hand_type < len(_TYPE_NAMES) else "Unknown"


@dataclass(frozen=True, order=True)
class HandRank:
    """Strength of a hand; instances order from weakest to strongest."""

    hand_type: HandType = HandType.HIGH_CARD
    primary: int = 0
    secondary: int = 0
    kickers: tuple[int, ...] = (0,) * _NUM_KICKERS

    def __post_init__(self) -> None:
        kickers = tuple(int(k) for k in self.kickers)
        if len(kickers) > _NUM_KICKERS:
            raise ValueError(f"at most {_NUM_KICKERS} kickers, got {len(kickers)}")
        object.__setattr__(self, "hand_type", HandType(self.hand_type))
        object.__setattr__(self, "primary", int(self.primary))
        object.__setattr__(self, "secondary", int(self.secondary))
        object.__setattr__(self, "kickers", kickers + (0,) * (_NUM_KICKERS - len(kickers)))

    def encode(self) -> int:
        """Pack into a 32-bit integer whose order matches hand strength."""
        for value in (self.primary, self.secondary, *self.kickers):
            if not 0 <= value <= _NIBBLE:
                raise ValueError(f"rank value out of range: {value}")
        value = (
            self.hand_type << _TYPE_SHIFT
            | self.primary << _PRIMARY_SHIFT
            | self.secondary << _SECONDARY_SHIFT
        )
        for i, kicker in enumerate(self.kickers):
            if kicker <= 0:
                break
            value |= kicker << (16 - 4 * i)
        return value

    @classmethod
    def decode(cls, value: int) -> HandRank:
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"encoded hand out of range: {value}")
        hand_type = value >> _TYPE_SHIFT
        if hand_type >= len(HandType):
            raise ValueError(f"invalid hand type in encoded value: {hand_type}")
        return cls(
            HandType(hand_type),
            (value >> _PRIMARY_SHIFT) & _NIBBLE,
            (value >> _SECONDARY_SHIFT) & _NIBBLE,
            tuple((value >> (16 - 4 * i)) & _NIBBLE for i in range(_NUM_KICKERS)),
        )

    def describe(self) -> str:
        """Short human-readable description of the hand."""
        p = rank_char(self.primary)
        s = rank_char(self.secondary)
        name = hand_type_name(self.hand_type)
        descriptions = {
            HandType.HIGH_CARD: f"{name}: {p} high",
            HandType.PAIR: f"Pair of {p}s",
            HandType.TWO_PAIR: f"Two Pair: {p}s and {s}s",
            HandType.THREE_OF_A_KIND: f"Three {p}s",
            HandType.STRAIGHT: f"Straight: {p} high",
            HandType.FLUSH: f"Flush: {p} high",
            HandType.FULL_HOUSE: f"Full House: {p}s full of {s}s",
            HandType.FOUR_OF_A_KIND: f"Four {p}s",
            HandType.STRAIGHT_FLUSH: f"Straight Flush: {p} high",
            HandType.ROYAL_FLUSH: "Royal Flush",
        }
        return descriptions.get(self.hand_type, name)

    def __str__(self) -> str:
        return self.describe()


@dataclass
class EvalStats:
    evaluations: int = 0
    nanoseconds: int = 0
    hands_per_second: float = 0.0


_stats = EvalStats()


def reset_stats() -> None:
    """Clear the evaluation counters."""
    _stats.evaluations = 0
    _stats.nanoseconds = 0
    _stats.hands_per_second = 0.0


def get_stats() -> EvalStats:
    """Snapshot of the evaluation counters."""
    if _stats.nanoseconds > 0:
        _stats.hands_per_second = _stats.evaluations * 1e9 / _stats.nanoseconds
    return replace(_stats)


@contextmanager
def _timed() -> Iterator[None]:
    start = time.perf_counter_ns()
    _stats.evaluations += 1
    try:
        yield
    finally:
        _stats.nanoseconds += time.perf_counter_ns() - start


def _rank_bit(rank: int) -> int:
    return 1 << (rank - 2)


def _ranks_desc(mask: int) -> list[int]:
    """Ranks present in a rank bitmask, highest first."""
    return [bit + 2 for bit in range(12, -1, -1) if mask >> bit & 1]


def _straight_high(mask: int) -> int:
    """High card of the first straight found in a rank mask, or 0."""
    for i, pattern in enumerate(_STRAIGHTS):
        if mask & pattern == pattern:
            return Rank.FIVE if i == 0 else i + 5
    return 0


def _mask_of(ranks: Iterable[int]) -> int:
    mask = 0
    for rank in ranks:
        mask |= _rank_bit(rank)
    return mask


@lru_cache(maxsize=None)
def _flush_rank(mask: int) -> HandRank:
    top = _ranks_desc(mask)[:5]
    high = _straight_high(_mask_of(top))
    if high:
        kind = HandType.ROYAL_FLUSH if high == Rank.ACE else HandType.STRAIGHT_FLUSH
        return HandRank(kind, high)
    return HandRank(HandType.FLUSH, top[0], top[1], tuple(top[2:]))


@lru_cache(maxsize=None)
def _unique_rank(mask: int) -> HandRank:
    top = _ranks_desc(mask)[:5]
    high = _straight_high(_mask_of(top))
    if high:
        return HandRank(HandType.STRAIGHT, high)
    return HandRank(HandType.HIGH_CARD, top[0], top[1], tuple(top[2:]))


def _grouped_rank(suit_masks: Sequence[int]) -> HandRank:
    quad_rank = trip_rank = 0
    pairs: list[int] = []
    singles: list[int] = []
    for bit in range(12, -1, -1):
        count = sum(1 for mask in suit_masks if mask >> bit & 1)
        rank = bit + 2
        if count == 4:
            quad_rank = rank
        elif count == 3:
            trip_rank = rank
        elif count == 2:
            pairs.append(rank)
        elif count == 1:
            singles.append(rank)
    kickers = tuple(singles[:_NUM_KICKERS])

    if quad_rank:
        return HandRank(HandType.FOUR_OF_A_KIND, quad_rank, 0, kickers)
    if trip_rank and pairs:
        return HandRank(HandType.FULL_HOUSE, trip_rank, pairs[0])
    if trip_rank:
        return HandRank(HandType.THREE_OF_A_KIND, trip_rank, 0, kickers)
    if len(pairs) >= 2:
        extra = pairs[2] if len(pairs) > 2 else (singles[0] if singles else 0)
        return HandRank(HandType.TWO_PAIR, pairs[0], pairs[1], (extra,))
    if pairs:
        return HandRank(HandType.PAIR, pairs[0], 0, kickers)
    if singles:
        second = singles[1] if len(singles) > 1 else 0
        return HandRank(HandType.HIGH_CARD, singles[0], second, tuple(singles[2:]))
    return HandRank()


def _evaluate(cards: Sequence[Card]) -> HandRank:
    """Rank of at most five cards."""
    suit_masks = [0] * NUM_SUITS
    for card in cards:
        suit_masks[card.suit] |= _rank_bit(card.rank)
    for mask in suit_masks:
        if mask.bit_count() >= 5:
            return _flush_rank(mask)
    all_ranks = 0
    for mask in suit_masks:
        all_ranks |= mask
    if all_ranks.bit_count() >= 5:
        return _unique_rank(_mask_of(_ranks_desc(all_ranks)[:5]))
    return _grouped_rank(suit_masks)


def _best_of_five(cards: Sequence[Card]) -> HandRank:
    return max(_evaluate(combo) for combo in combinations(cards, 5))


def eval_5cards(cards: Iterable[Card]) -> HandRank:
    """Rank exactly five cards."""
    hand = list(cards)
    if len(hand) != 5:
        raise ValueError(f"expected 5 cards, got {len(hand)}")
    with _timed():
        return _evaluate(hand)


def eval_7cards(cards: Iterable[Card]) -> HandRank:
    """Best five-card rank from exactly seven cards."""
    hand = list(cards)
    if len(hand) != 7:
        raise ValueError(f"expected 7 cards, got {len(hand)}")
    with _timed():
        return _best_of_five(hand)


def eval_best(cards: Iterable[Card]) -> HandRank:
    """Best rank from any number of cards; fewer than five are ranked as they are."""
    hand = list(cards)
    if not hand:
        raise ValueError("cannot evaluate an empty hand")
    if len(hand) == 7:
        return eval_7cards(hand)
    with _timed():
        if len(hand) <= 5:
            return _evaluate(hand)
        return _best_of_five(hand)


def compare(a: HandRank, b: HandRank) -> int:
    """Positive if a is stronger, negative if b is, zero on a tie."""
    if a.hand_type != b.hand_type:
        return int(a.hand_type) - int(b.hand_type)
    if a.primary != b.primary:
        return a.primary - b.primary
    if a.secondary != b.secondary:
        return a.secondary - b.secondary
    for ka, kb in zip(a.kickers, b.kickers):
        if ka != kb:
            return ka - kb
    return 0


def cards_to_bitmask(cards: Iterable[Card]) -> int:
    """52-bit mask with one bit per card, thirteen bits per suit."""
    mask = 0
    for card in cards:
        mask |= 1 << (card.suit * SUIT_OFFSET + card.rank - 2)
    return mask


def count_bits(mask: int) -> int:
    return (mask & _UINT64).bit_count()


def highest_bit(mask: int) -> int:
    """Index of the highest set bit, or -1 for an empty mask."""
    return (mask & _UINT64).bit_length() - 1


def _rank_mask(cards: Iterable[Card]) -> int:
    return _mask_of(card.rank for card in cards)


def is_straight(cards: Iterable[Card]) -> bool:
    mask = _rank_mask(cards)
    return mask & WHEEL_MASK == WHEEL_MASK or _straight_high(mask) > 0


def is_flush(cards: Iterable[Card]) -> bool:
    hand = list(cards)
    if not hand:
        raise ValueError("cannot test an empty hand")
    return all(card.suit == hand[0].suit for card in hand)


def is_wheel(cards: Iterable[Card]) -> bool:
    return _rank_mask(cards) & WHEEL_MASK == WHEEL_MASK


def is_broadway(cards: Iterable[Card]) -> bool:
    return _rank_mask(cards) & BROADWAY_MASK == BROADWAY_MASK