"""Playing cards: suits, ranks, parsing and text forms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from wcwidth import wcswidth

__all__ = [
    "Suit",
    "Rank",
    "Card",
    "suit_name",
    "suit_symbol",
    "rank_name",
    "rank_char",
    "display_width",
    "sort_by_rank",
    "sort_by_suit_then_rank",
]


class Suit(IntEnum):
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


NUM_SUITS = len(Suit)
NUM_RANKS = len(Rank)
DECK_SIZE = NUM_SUITS * NUM_RANKS

_SUIT_NAMES = ("Hearts", "Diamonds", "Clubs", "Spades")
_SUIT_SYMBOLS = ("♥", "♦", "♣", "♠")
_SUIT_LETTERS = "HDCS"
_RANK_NAMES = (
    "Two", "Three", "Four", "Five", "Six", "Seven", "Eight",
    "Nine", "Ten", "Jack", "Queen", "King", "Ace",
)
_RANK_CHARS = "23456789TJQKA"

_PARSE_RANKS = {ch: Rank(i + 2) for i, ch in enumerate(_RANK_CHARS)}
_PARSE_RANKS["1"] = Rank.TEN
_PARSE_SUITS = {ch: Suit(i) for i, ch in enumerate(_SUIT_LETTERS)}


def suit_name(suit: int) -> str:
    """Full English name of a suit, or "Unknown"."""
    return _SUIT_NAMES[suit] if 0 <= suit < NUM_SUITS else "Unknown"


def suit_symbol(suit: int) -> str:
    """Unicode symbol of a suit, or "?"."""
    return _SUIT_SYMBOLS[suit] if 0 <= suit < NUM_SUITS else "?"


def rank_name(rank: int) -> str:
    """Full English name of a rank, or "Unknown"."""
    return _RANK_NAMES[rank - 2] if Rank.TWO <= rank <= Rank.ACE else "Unknown"


def rank_char(rank: int) -> str:
    """Single-character rank code (T for ten), or "?"."""
    return _RANK_CHARS[rank - 2] if Rank.TWO <= rank <= Rank.ACE else "?"


@dataclass(frozen=True)
class Card:
    """A single playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    def to_index(self) -> int:
        """Index 0..51, grouped by suit."""
        return self.suit * NUM_RANKS + (self.rank - 2)

    @classmethod
    def from_index(cls, index: int) -> Card:
        if not 0 <= index < DECK_SIZE:
            raise ValueError(f"card index out of range: {index}")
        suit, offset = divmod(index, NUM_RANKS)
        return cls(Rank(offset + 2), Suit(suit))

    @classmethod
    def parse(cls, text: str) -> Card:
        """Parse forms such as "AH", "td" or "10s"."""
        if len(text) < 2:
            raise ValueError(f"card text too short: {text!r}")
        rank = _PARSE_RANKS.get(text[0].upper())
        if rank is None:
            raise ValueError(f"invalid rank in card: {text!r}")
        suit_pos = 2 if text.startswith("10") else 1
        suit_ch = text[suit_pos].upper() if suit_pos < len(text) else ""
        suit = _PARSE_SUITS.get(suit_ch)
        if suit is None:
            raise ValueError(f"invalid suit in card: {text!r}")
        return cls(rank, suit)

    def display(self) -> str:
        """Rank character followed by the suit symbol."""
        return rank_char(self.rank) + suit_symbol(self.suit)

    def __str__(self) -> str:
        return rank_char(self.rank) + _SUIT_LETTERS[self.suit]


def display_width(text: str) -> int:
    """Terminal column width of a string; 0 if it is not printable."""
    width = wcswidth(text)
    return width if width > 0 else 0


def sort_by_rank(cards: Iterable[Card]) -> list[Card]:
    """Cards ordered from highest rank to lowest."""
    return sorted(cards, key=lambda card: -card.rank)


def sort_by_suit_then_rank(cards: Iterable[Card]) -> list[Card]:
    """Cards grouped by suit, each suit from highest rank to lowest."""
    return sorted(cards, key=lambda card: (card.suit, -card.rank))