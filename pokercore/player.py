"""A seat at the table: identity, chips, cards and statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import Card

__all__ = ["PlayerState", "PlayerStats", "Player"]

MAX_NAME_LENGTH = 31
MAX_HOLE_CARDS = 7


class PlayerState(Enum):
    EMPTY = "empty"
    ACTIVE = "active"
    FOLDED = "folded"
    ALL_IN = "all_in"
    SITTING_OUT = "sitting_out"


@dataclass
class PlayerStats:
    hands_played: int = 0
    hands_won: int = 0
    total_winnings: int = 0
    vpip: int = 0
    pfr: int = 0


@dataclass
class Player:
    name: str = ""
    id: int = 0
    seat_number: int = -1
    state: PlayerState = PlayerState.EMPTY
    stack: int = 0
    bet: int = 0
    total_bet: int = 0
    hole_cards: list[Card] = field(default_factory=list)
    card_face_up: list[bool] = field(default_factory=list)
    cards_visible: bool = False
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False
    ai_personality: int = 0
    stats: PlayerStats = field(default_factory=PlayerStats)
    variant_data: Any = None

    def __post_init__(self) -> None:
        self.name = self.name[:MAX_NAME_LENGTH]

    def reset_for_hand(self) -> None:
        """Clear per-hand state, keeping identity, stack and statistics."""
        if self.state not in (PlayerState.EMPTY, PlayerState.SITTING_OUT):
            self.state = PlayerState.ACTIVE
        self.clear_cards()
        self.bet = 0
        self.total_bet = 0
        self.is_dealer = False
        self.is_small_blind = False
        self.is_big_blind = False
        self.variant_data = None

    def rename(self, name: str) -> None:
        self.name = name[:MAX_NAME_LENGTH]

    def add_card(self, card: Card, face_up: bool = False) -> bool:
        """Add a hole card; returns False if the hand is already full."""
        if len(self.hole_cards) >= MAX_HOLE_CARDS:
            return False
        self.hole_cards.append(card)
        self.card_face_up.append(face_up)
        return True

    def clear_cards(self) -> None:
        self.hole_cards.clear()
        self.card_face_up.clear()

    def visible_cards(self) -> list[Card]:
        """All cards if shown, otherwise only the face-up ones."""
        if self.cards_visible:
            return list(self.hole_cards)
        return [card for card, up in zip(self.hole_cards, self.card_face_up) if up]

    def can_act(self) -> bool:
        return self.state is PlayerState.ACTIVE and self.stack > 0

    def has_chips(self) -> bool:
        return self.stack > 0

    def call_amount(self, current_bet: int) -> int:
        """Chips needed to call, capped by the stack."""
        return min(max(current_bet - self.bet, 0), self.stack)

    def min_raise_to(self, current_bet: int, min_raise: int) -> int:
        """Smallest total a raise can reach, capped by what the player has."""
        return min(current_bet + min_raise, self.bet + self.stack)

    def is_active(self) -> bool:
        return self.state in (PlayerState.ACTIVE, PlayerState.ALL_IN)

    def is_all_in(self) -> bool:
        return self.state is PlayerState.ALL_IN

    def has_folded(self) -> bool:
        return self.state is PlayerState.FOLDED

    def is_sitting_out(self) -> bool:
        return self.state is PlayerState.SITTING_OUT

    def update_stats(self, won: bool, pot_size: int) -> None:
        self.stats.hands_played += 1
        if won:
            self.stats.hands_won += 1
            self.stats.total_winnings += pot_size

    def vpip(self) -> float:
        """Percentage of hands with money voluntarily put in the pot."""
        if self.stats.hands_played == 0:
            return 0.0
        return self.stats.vpip / self.stats.hands_played * 100.0

    def pfr(self) -> float:
        """Percentage of hands raised before the flop."""
        if self.stats.hands_played == 0:
            return 0.0
        return self.stats.pfr / self.stats.hands_played * 100.0