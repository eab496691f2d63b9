"""A deck of playing cards with dealing and shuffling."""

from __future__ import annotations

import random
from typing import Iterable, Iterator

from .cards import DECK_SIZE, Card, Rank, Suit

__all__ = ["EmptyDeckError", "Deck"]


class EmptyDeckError(IndexError):
    """Raised when more cards are dealt than remain in the deck."""


class Deck:
    """Ordered cards with a dealing position; cards before it are dealt."""

    def __init__(self, min_rank: Rank = Rank.TWO, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._cards = [
            Card(rank, suit)
            for rank in Rank
            if rank >= min_rank
            for suit in Suit
        ]
        self._position = 0

    def shuffle(self) -> None:
        """Shuffle the whole deck and restart dealing from the top."""
        self._rng.shuffle(self._cards)
        self._position = 0

    def shuffle_remaining(self) -> None:
        """Shuffle only the cards not yet dealt."""
        if self._position >= len(self._cards) - 1:
            return
        tail = self._cards[self._position:]
        self._rng.shuffle(tail)
        self._cards[self._position:] = tail

    def deal(self) -> Card:
        if self._position >= len(self._cards):
            raise EmptyDeckError("no cards left in the deck")
        card = self._cards[self._position]
        self._position += 1
        return card

    def deal_many(self, count: int) -> list[Card]:
        if count < 0:
            raise ValueError("count must not be negative")
        if count > self.remaining():
            raise EmptyDeckError(f"cannot deal {count} cards, {self.remaining()} left")
        return [self.deal() for _ in range(count)]

    def burn(self) -> Card:
        """Deal a card that goes out of play."""
        return self.deal()

    def remaining(self) -> int:
        return len(self._cards) - self._position

    def is_empty(self) -> bool:
        return self.remaining() == 0

    def reset(self) -> None:
        """Restart dealing from the top without reordering."""
        self._position = 0

    def remove(self, cards: Iterable[Card]) -> None:
        """Take the given cards out of the undealt part of the deck."""
        for card in cards:
            try:
                idx = self._cards.index(card, self._position)
            except ValueError:
                continue
            del self._cards[idx]

    def return_cards(self, cards: Iterable[Card]) -> None:
        """Put cards back at the bottom, up to a full deck, then reshuffle the undealt part."""
        for card in cards:
            if len(self._cards) >= DECK_SIZE:
                break
            self._cards.append(card)
        self.shuffle_remaining()

    def __contains__(self, card: object) -> bool:
        return card in self._cards[self._position:]

    def __len__(self) -> int:
        return self.remaining()

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards[self._position:])