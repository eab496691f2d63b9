import random

import pytest

from pokercore.cards import Card, Rank, Suit
from pokercore.deck import Deck, EmptyDeckError


def make_deck(seed=1, **kwargs):
    return Deck(rng=random.Random(seed), **kwargs)


def test_full_deck_has_every_card_once():
    deck = make_deck()
    assert len(deck) == 52
    assert set(deck) == {Card(r, s) for r in Rank for s in Suit}


def test_initial_order_is_rank_then_suit():
    cards = list(make_deck())
    assert cards[:4] == [Card(Rank.TWO, s) for s in Suit]
    assert cards[-1] == Card(Rank.ACE, Suit.SPADES)


def test_short_deck():
    deck = make_deck(min_rank=Rank.SIX)
    assert all(card.rank >= Rank.SIX for card in deck)
    assert len(deck) == 4 * len([r for r in Rank if r >= Rank.SIX])


def test_shuffle_keeps_cards_and_resets_position():
    deck = make_deck()
    before = set(deck)
    deck.deal_many(5)
    deck.shuffle()
    assert len(deck) == 52
    assert set(deck) == before


def test_shuffle_is_deterministic_for_seed():
    a, b = make_deck(seed=7), make_deck(seed=7)
    a.shuffle()
    b.shuffle()
    assert list(a) == list(b)


def test_deal_advances():
    deck = make_deck()
    top = list(deck)[:3]
    assert deck.deal_many(3) == top
    assert deck.remaining() == 49
    assert all(card not in deck for card in top)


def test_burn_deals_a_card():
    deck = make_deck()
    first = list(deck)[0]
    assert deck.burn() == first
    assert first not in deck


def test_deal_from_empty_raises():
    deck = make_deck()
    deck.deal_many(52)
    assert deck.is_empty()
    with pytest.raises(EmptyDeckError):
        deck.deal()


def test_deal_many_too_many_raises_without_dealing():
    deck = make_deck(min_rank=Rank.ACE)
    with pytest.raises(EmptyDeckError):
        deck.deal_many(5)
    assert deck.remaining() == 4


def test_deal_many_negative():
    with pytest.raises(ValueError):
        make_deck().deal_many(-1)


def test_reset_restores_dealt_cards():
    deck = make_deck()
    dealt = deck.deal_many(10)
    deck.reset()
    assert list(deck)[:10] == dealt


def test_remove_cards():
    deck = make_deck()
    gone = [Card(Rank.ACE, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS)]
    deck.remove(gone)
    assert len(deck) == 50
    assert all(card not in deck for card in gone)


def test_remove_ignores_dealt_cards():
    deck = make_deck()
    dealt = deck.deal()
    deck.remove([dealt])
    assert deck.remaining() == 51


def test_shuffle_remaining_keeps_dealt_prefix():
    deck = make_deck(seed=3)
    dealt = deck.deal_many(10)
    undealt = set(deck)
    deck.shuffle_remaining()
    assert set(deck) == undealt
    deck.reset()
    assert deck.deal_many(10) == dealt


def test_return_cards_to_short_deck():
    deck = make_deck(min_rank=Rank.TEN)
    size = len(deck)
    hand = deck.deal_many(5)
    deck.return_cards(hand)
    assert deck.remaining() == size
    assert all(card in deck for card in hand)


def test_return_cards_never_exceeds_full_deck():
    deck = make_deck()
    hand = deck.deal_many(5)
    deck.return_cards(hand)
    assert deck.remaining() == 47