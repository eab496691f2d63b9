# pokercore

Building blocks for poker games: cards, decks, seated players, a hand
evaluator for high, lowball and Omaha games, and a betting-round manager
for a hold'em style table.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it holds |
| --- | --- |
| `pokercore.cards` | `Suit`, `Rank`, `Card`; parsing (`"AS"`, `"Td"`, `"10h"`), names, symbols, display width, sorting |
| `pokercore.deck` | `Deck` (full or short deck), shuffling, dealing, burning, removing and returning cards; `EmptyDeckError` |
| `pokercore.player` | `Player`, `PlayerState`, `PlayerStats`: cards, stack, call and raise amounts, statistics |
| `pokercore.hand_eval` | `HandType`, `HandRank`, `eval_5cards`, `eval_7cards`, `eval_best`, `compare`, bitmask helpers, evaluation statistics |
| `pokercore.lowball` | `eval_low_ace5`, `eval_low_27`, `compare_low`, `eval_omaha`, `eval_omaha_hilo` |
| `pokercore.game_manager` | `GameManager`, `Action`, `GameEvent`, `SeatState`, `ValidActions`, `ActionRecord`, `action_description` |

## Cards and decks

```python
from pokercore.cards import Card, Rank, Suit
from pokercore.deck import Deck

ace = Card.parse("AS")
print(ace.display())          # A♠
print(str(ace))               # AS

deck = Deck()
deck.shuffle()
hole = deck.deal_many(2)
deck.burn()
print(deck.remaining())       # 49
```

`Card.parse` raises `ValueError` on text it cannot read. Dealing from an
exhausted deck raises `EmptyDeckError`. A `Deck` takes an optional
`random.Random` for reproducible shuffles, and a short deck starts from a
higher rank:

```python
short = Deck(min_rank=Rank.SIX)
print(len(short))             # 36
```

## Evaluating hands

```python
from pokercore.cards import Card
from pokercore.hand_eval import eval_7cards, compare

board = [Card.parse(t) for t in ("KH", "KD", "7C", "2S", "9H")]
alice = eval_7cards([Card.parse("KS"), Card.parse("7D")] + board)
bob = eval_7cards([Card.parse("AH"), Card.parse("AD")] + board)

print(alice.describe())       # Full House: Ks full of 7s
print(compare(alice, bob) > 0)  # True
```

`compare` returns a positive number when the first hand is better, a
negative one when the second is, and zero for a tie. `HandRank` values also
order directly (`max`, `<`). `HandRank.encode` packs a rank into a 32-bit
integer and `HandRank.decode` reverses it. `eval_5cards` and `eval_7cards`
require exactly five and seven cards; `eval_best` picks the best five from
any number of cards and ranks fewer than five as they are.

`get_stats()` reports how many evaluations ran and how fast;
`reset_stats()` clears the counters.

Lowball and Omaha:

```python
from pokercore.lowball import eval_low_27, eval_omaha_hilo, compare_low
```

`compare_low` treats the lower hand as the better one. `eval_omaha_hilo`
returns a pair: the best high hand using two hole and three board cards,
and the best eight-or-better ace-to-five low hand, or `None` when no low
qualifies.

## Running a betting round

```python
from pokercore.game_manager import Action, GameEvent, GameManager

game = GameManager(num_players=4, starting_chips=1000, small_blind=5, big_blind=10)
game.on_event = lambda event: print(event.value)
game.start_hand()

seat = game.current_player()
if game.is_action_valid(seat, Action.CALL, 0):
    game.apply_action(seat, Action.CALL, 0)

print(game.pot_total())
print(game.valid_actions(game.current_player()))
```

`start_hand` moves the button, posts the blinds, shuffles a fresh deck and
sets the first player to act. When `game.is_betting_complete()` is true,
`game.advance_street()` opens the next betting round;
`game.is_hand_complete()` reports when the hand is over. Every action taken
is kept in `game.history`.

## What it does not do

This is a library only: there is no command to run, no terminal or
graphical table, and no network play. `GameManager` tracks betting and the
pot but does not deal cards to seats, settle a showdown, split side pots or
pay out winners; those are left to the code that uses it.