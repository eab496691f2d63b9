"""Hold'em style betting flow: blinds, actions, streets and pot."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, Optional

from .cards import Card
from .deck import Deck

__all__ = [
    "Action",
    "GameEvent",
    "ActionRecord",
    "SeatState",
    "ValidActions",
    "GameManager",
    "action_description",
]

MAX_HISTORY = 256
LAST_BETTING_ROUND = 4


class Action(IntEnum):
    FOLD = 0
    CHECK = 1
    CALL = 2
    BET = 3
    RAISE = 4
    ALL_IN = 5
    DRAW = 6
    STAND_PAT = 7


class GameEvent(Enum):
    HAND_START = "hand_start"
    PLAYER_ACTION = "player_action"
    POT_UPDATE = "pot_update"
    STREET_COMPLETE = "street_complete"


_DESCRIPTIONS = {
    Action.FOLD: "folds",
    Action.CHECK: "checks",
    Action.CALL: "calls",
    Action.BET: "bets",
    Action.RAISE: "raises",
    Action.ALL_IN: "goes all-in",
    Action.DRAW: "draws",
    Action.STAND_PAT: "stands pat",
}


def action_description(action: int) -> str:
    """Verb phrase for an action, or "unknown"."""
    try:
        return _DESCRIPTIONS[Action(action)]
    except ValueError:
        return "unknown"


@dataclass(frozen=True)
class ActionRecord:
    player: int
    action: Action
    amount: int


@dataclass
class SeatState:
    """One seat's chips and its standing in the current hand."""

    seat_position: int
    chips: int
    is_active: bool = True
    is_all_in: bool = False
    has_folded: bool = False
    current_bet: int = 0
    total_bet_this_hand: int = 0
    hole_cards: list[Card] = field(default_factory=list)

    @property
    def can_act(self) -> bool:
        return self.is_active and not self.has_folded and not self.is_all_in


@dataclass(frozen=True)
class ValidActions:
    actions: frozenset[Action]
    min_amount: int
    max_amount: int

    def __contains__(self, action: object) -> bool:
        return action in self.actions


class GameManager:
    """Runs the betting of a single table, hand after hand."""

    def __init__(self, num_players: int, starting_chips: int, small_blind: int, big_blind: int) -> None:
        if num_players < 2:
            raise ValueError("a game needs at least two players")
        self.seats = [SeatState(seat_position=i, chips=starting_chips) for i in range(num_players)]
        self.small_blind = small_blind
        self.big_blind = big_blind
        self.num_active = num_players
        self.dealer_button = 0
        self.pot = 0
        self.current_bet = 0
        self.action_on = 0
        self.min_bet = 0
        self.min_raise = 0
        self.hand_in_progress = False
        self.betting_round = 0
        self.last_aggressor = -1
        self.num_callers = 0
        self.in_draw_phase = False
        self.history: list[ActionRecord] = []
        self.rng = random.Random()
        self.deck = Deck(rng=self.rng)
        self.on_event: Optional[Callable[[GameEvent], None]] = None

    @property
    def num_players(self) -> int:
        return len(self.seats)

    def _emit(self, *events: GameEvent) -> None:
        if self.on_event is not None:
            for event in events:
                self.on_event(event)

    def _find_seat(self, start: int, accept: Callable[[int], bool], *, skip_start: bool = False) -> Optional[int]:
        n = self.num_players
        offsets = range(1, n + 1) if skip_start else range(n)
        return next(((start + o) % n for o in offsets if accept((start + o) % n)), None)

    def _post_blind(self, index: int, amount: int) -> None:
        seat = self.seats[index]
        if seat.chips < amount:
            amount = seat.chips
            seat.is_all_in = True
        seat.chips -= amount
        seat.current_bet = amount
        seat.total_bet_this_hand = amount
        self.pot += amount

    def start_hand(self) -> None:
        """Move the button, post blinds, shuffle and set the first player to act."""
        funded = sum(1 for seat in self.seats if seat.chips > 0)
        if funded < 2:
            raise ValueError("at least two players need chips to start a hand")

        self.hand_in_progress = True
        self.betting_round = 0
        self.last_aggressor = -1
        self.num_callers = 0
        self.history = []
        self.in_draw_phase = False
        self.pot = 0
        self.num_active = funded

        n = self.num_players
        self.dealer_button = (self.dealer_button + 1) % n

        for seat in self.seats:
            if seat.chips > 0:
                seat.is_active = True
                seat.has_folded = False
                seat.is_all_in = False
                seat.current_bet = 0
                seat.total_bet_this_hand = 0
                seat.hole_cards = []
            else:
                seat.is_active = False

        sb_pos = self._find_seat((self.dealer_button + 1) % n, lambda i: self.seats[i].is_active)
        assert sb_pos is not None
        bb_pos = self._find_seat(
            (self.dealer_button + 2) % n,
            lambda i: self.seats[i].is_active and i != sb_pos,
        )
        assert bb_pos is not None

        self._post_blind(sb_pos, self.small_blind)
        self._post_blind(bb_pos, self.big_blind)

        self.current_bet = self.big_blind
        self.min_bet = self.big_blind
        self.min_raise = self.big_blind

        first = (bb_pos + 1) % n
        found = self._find_seat(
            first, lambda i: self.seats[i].is_active and not self.seats[i].is_all_in
        )
        self.action_on = first if found is None else found

        self.deck = Deck(rng=self.rng)
        self.deck.shuffle()

        self._emit(GameEvent.HAND_START)

    def is_action_valid(self, player: int, action: Action, amount: int = 0) -> bool:
        seat = self.seats[player]
        if self.action_on != player:
            return False
        if not seat.can_act:
            return False
        to_call = self.current_bet - seat.current_bet
        if action == Action.FOLD:
            return True
        if action == Action.CHECK:
            return to_call == 0
        if action == Action.CALL:
            return to_call > 0 and seat.chips >= to_call
        if action == Action.BET:
            return self.current_bet == 0 and self.min_bet <= amount <= seat.chips
        if action == Action.RAISE:
            return to_call > 0 and self.min_raise <= amount <= seat.chips - to_call
        if action == Action.ALL_IN:
            return seat.chips > 0
        return False

    def apply_action(self, player: int, action: Action, amount: int = 0) -> None:
        """Carry out an action and pass the turn; validity is the caller's concern."""
        seat = self.seats[player]
        if len(self.history) < MAX_HISTORY:
            self.history.append(ActionRecord(player, Action(action), amount))

        to_call = self.current_bet - seat.current_bet

        if action == Action.FOLD:
            seat.has_folded = True
            self.num_active -= 1
        elif action == Action.CALL:
            paid = seat.chips if seat.chips <= to_call else to_call
            seat.chips -= paid
            seat.current_bet += paid
            seat.total_bet_this_hand += paid
            self.pot += paid
            if seat.chips == 0:
                seat.is_all_in = True
            self.num_callers += 1
        elif action == Action.BET:
            seat.chips -= amount
            seat.current_bet = amount
            seat.total_bet_this_hand += amount
            self.current_bet = amount
            self.pot += amount
            self._mark_aggressor(player, amount)
            if seat.chips == 0:
                seat.is_all_in = True
        elif action == Action.RAISE:
            total = to_call + amount
            seat.chips -= total
            seat.current_bet = self.current_bet + amount
            seat.total_bet_this_hand += total
            self.current_bet = seat.current_bet
            self.pot += total
            self._mark_aggressor(player, amount)
            if seat.chips == 0:
                seat.is_all_in = True
        elif action == Action.ALL_IN:
            shove = seat.chips
            seat.total_bet_this_hand += shove
            seat.current_bet += shove
            self.pot += shove
            seat.chips = 0
            seat.is_all_in = True
            if seat.current_bet > self.current_bet:
                increase = seat.current_bet - self.current_bet
                self.current_bet = seat.current_bet
                self._mark_aggressor(player, increase)
            else:
                self.num_callers += 1

        self._emit(GameEvent.PLAYER_ACTION, GameEvent.POT_UPDATE)

        nxt = self._find_seat(self.action_on, lambda i: self.seats[i].can_act, skip_start=True)
        if nxt is not None:
            self.action_on = nxt

    def _mark_aggressor(self, player: int, raise_size: int) -> None:
        self.last_aggressor = player
        self.min_raise = raise_size
        self.num_callers = 0

    def is_betting_complete(self) -> bool:
        if self.num_active == 1:
            return True
        actors = [seat for seat in self.seats if seat.can_act]
        if not actors:
            return True
        if any(seat.current_bet < self.current_bet for seat in actors):
            return False
        return self.num_callers >= len(actors) - 1

    def advance_street(self) -> None:
        """Start the next betting round with the first player left of the button."""
        self.betting_round += 1
        self.num_callers = 0
        self.last_aggressor = -1
        self.current_bet = 0
        for seat in self.seats:
            seat.current_bet = 0
        first = (self.dealer_button + 1) % self.num_players
        found = self._find_seat(first, lambda i: self.seats[i].can_act)
        self.action_on = first if found is None else found
        self._emit(GameEvent.STREET_COMPLETE)

    def active_player_count(self) -> int:
        """Players still in the hand (not folded), all-in ones included."""
        return sum(1 for seat in self.seats if seat.is_active and not seat.has_folded)

    def is_hand_complete(self) -> bool:
        return self.active_player_count() <= 1 or (
            self.betting_round >= LAST_BETTING_ROUND and self.is_betting_complete()
        )

    def valid_actions(self, player: int) -> ValidActions:
        """Actions open to a player with the bounds for a bet or raise amount."""
        seat = self.seats[player]
        to_call = self.current_bet - seat.current_bet
        flags = {
            Action.FOLD: self.is_action_valid(player, Action.FOLD, 0),
            Action.CHECK: self.is_action_valid(player, Action.CHECK, 0),
            Action.CALL: self.is_action_valid(player, Action.CALL, 0),
            Action.BET: self.current_bet == 0 and seat.chips >= self.min_bet,
            Action.RAISE: to_call > 0 and seat.chips > to_call + self.min_raise,
            Action.ALL_IN: seat.chips > 0,
        }
        min_amount = self.min_bet if self.current_bet == 0 else self.min_raise
        return ValidActions(
            frozenset(action for action, ok in flags.items() if ok),
            min_amount,
            seat.chips - to_call,
        )

    def current_player(self) -> int:
        return self.action_on

    def pot_total(self) -> int:
        return self.pot