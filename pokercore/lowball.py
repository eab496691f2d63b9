"""Lowball and Omaha hand evaluation."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import Iterable, Iterator, Sequence

from .cards import Card, Rank
from .hand_eval import HandRank, HandType, eval_5cards

__all__ = [
    "eval_low_ace5",
    "eval_low_27",
    "compare_low",
    "eval_omaha",
    "eval_omaha_hilo",
]

_HAND_SIZE = 5
_OMAHA_HOLE = 4
_OMAHA_BOARD = 5
_LOW_QUALIFIER = 8


def _low_value(rank: int) -> int:
    """Rank value with the ace counted as one."""
    return 1 if rank == Rank.ACE else int(rank)


def _five(cards: Iterable[Card]) -> list[Card]:
    hand = list(cards)
    if len(hand) != _HAND_SIZE:
        raise ValueError(f"expected {_HAND_SIZE} cards, got {len(hand)}")
    return hand


def eval_low_ace5(cards: Iterable[Card]) -> HandRank:
    """Ace-to-five low rank: aces are low, straights and flushes are ignored."""
    hand = _five(cards)
    counts = Counter(value for value, _suit in {(_low_value(c.rank), c.suit) for c in hand})
    values = sorted(counts)
    quads = [v for v in values if counts[v] == 4]
    trips = [v for v in values if counts[v] == 3]
    pairs = [v for v in values if counts[v] == 2]
    kickers = tuple(v for v in values if counts[v] == 1)[:_HAND_SIZE]

    if quads:
        return HandRank(HandType.FOUR_OF_A_KIND, quads[-1], 0, kickers)
    if trips:
        return HandRank(HandType.THREE_OF_A_KIND, trips[-1], 0, kickers)
    if len(pairs) >= 2:
        return HandRank(HandType.TWO_PAIR, pairs[0], pairs[1], kickers)
    if pairs:
        return HandRank(HandType.PAIR, pairs[-1], 0, kickers)
    return HandRank(HandType.HIGH_CARD, 0, 0, kickers)


def eval_low_27(cards: Iterable[Card]) -> HandRank:
    """Deuce-to-seven low rank: aces are high, straights and flushes count."""
    high = eval_5cards(cards)
    if high.hand_type >= HandType.PAIR:
        return high
    ranks = sorted(r for r in (high.primary, high.secondary, *high.kickers) if r > 0)
    return HandRank(HandType.HIGH_CARD, 0, 0, tuple(ranks[:_HAND_SIZE]))


def compare_low(a: HandRank, b: HandRank) -> int:
    """Positive if a is the better low hand, negative if b is, zero on a tie."""
    if a.hand_type != b.hand_type:
        return int(b.hand_type) - int(a.hand_type)
    if a.primary != b.primary:
        return b.primary - a.primary
    if a.secondary != b.secondary:
        return b.secondary - a.secondary
    for ka, kb in zip(a.kickers, b.kickers):
        if ka != kb:
            return kb - ka
    return 0


def _omaha_hands(hole: Iterable[Card], community: Iterable[Card]) -> Iterator[list[Card]]:
    """Every hand of exactly two hole cards and three board cards."""
    hole_cards: Sequence[Card] = list(hole)
    board: Sequence[Card] = list(community)
    if len(hole_cards) != _OMAHA_HOLE:
        raise ValueError(f"expected {_OMAHA_HOLE} hole cards, got {len(hole_cards)}")
    if len(board) != _OMAHA_BOARD:
        raise ValueError(f"expected {_OMAHA_BOARD} community cards, got {len(board)}")
    for pair in combinations(hole_cards, 2):
        for trio in combinations(board, 3):
            yield [*pair, *trio]


def eval_omaha(hole: Iterable[Card], community: Iterable[Card]) -> HandRank:
    """Best Omaha high hand using exactly two hole cards and three board cards."""
    return max(eval_5cards(hand) for hand in _omaha_hands(hole, community))


def _qualifies_low(hand: Iterable[Card]) -> bool:
    return all(card.rank <= _LOW_QUALIFIER or card.rank == Rank.ACE for card in hand)


def eval_omaha_hilo(
    hole: Iterable[Card], community: Iterable[Card]
) -> tuple[HandRank, HandRank | None]:
    """Best Omaha high hand and best eight-or-better low hand (None if no low)."""
    hole_cards = list(hole)
    board = list(community)
    high = eval_omaha(hole_cards, board)
    lows = [
        eval_low_ace5(hand)
        for hand in _omaha_hands(hole_cards, board)
        if _qualifies_low(hand)
    ]
    low = min(lows, key=HandRank.encode) if lows else None
    return high, low