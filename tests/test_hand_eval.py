from itertools import combinations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pokercore.cards import Card, Rank
from pokercore.hand_eval import (
    HandRank,
    HandType,
    cards_to_bitmask,
    compare,
    count_bits,
    eval_5cards,
    eval_7cards,
    eval_best,
    get_stats,
    hand_type_name,
    highest_bit,
    is_broadway,
    is_flush,
    is_straight,
    is_wheel,
    reset_stats,
)


def hand(text):
    return [Card.parse(part) for part in text.split()]


def distinct_cards(n):
    return st.lists(
        st.integers(min_value=0, max_value=51), min_size=n, max_size=n, unique=True
    ).map(lambda xs: [Card.from_index(i) for i in xs])


LADDER = [
    "2H 5D 9C JS KH",
    "2H 2D 9C JS KH",
    "2H 2D 9C 9S KH",
    "2H 2D 2C JS KH",
    "5H 6D 7C 8S 9H",
    "2H 5H 9H JH KH",
    "2H 2D 2C KS KH",
    "2H 2D 2C 2S KH",
    "5H 6H 7H 8H 9H",
    "TS JS QS KS AS",
]


def sign(x):
    return (x > 0) - (x < 0)


def test_hand_categories_in_order():
    ranks = [eval_5cards(hand(text)) for text in LADDER]
    assert [r.hand_type for r in ranks] == list(HandType)
    for weaker, stronger in zip(ranks, ranks[1:]):
        assert compare(stronger, weaker) > 0
        assert weaker < stronger


def test_wheel_is_five_high_straight():
    wheel = eval_5cards(hand("AH 2D 3C 4S 5H"))
    six_high = eval_5cards(hand("2H 3D 4C 5S 6H"))
    assert wheel.hand_type == HandType.STRAIGHT
    assert wheel.primary == Rank.FIVE
    assert compare(wheel, six_high) < 0


def test_steel_wheel_is_not_royal():
    rank = eval_5cards(hand("AH 2H 3H 4H 5H"))
    assert rank.hand_type == HandType.STRAIGHT_FLUSH
    assert rank.primary == Rank.FIVE


def test_full_house_ranks():
    rank = eval_5cards(hand("KH KD KC 4S 4H"))
    assert rank.primary == Rank.KING
    assert rank.secondary == Rank.FOUR
    assert rank.describe().startswith("Full House")


def test_two_pair_kicker():
    rank = eval_5cards(hand("9H 9D 4C 4S AH"))
    assert (rank.primary, rank.secondary) == (Rank.NINE, Rank.FOUR)
    assert rank.kickers[0] == Rank.ACE


def test_kicker_decides_pair():
    better = eval_5cards(hand("AH AD KC 7S 3H"))
    worse = eval_5cards(hand("AS AC QC 7D 3D"))
    assert compare(better, worse) > 0
    assert compare(worse, better) < 0


def test_same_hand_different_suits_ties():
    a = eval_5cards(hand("AH KD 9C 7S 3H"))
    b = eval_5cards(hand("AS KC 9D 7H 3C"))
    assert compare(a, b) == 0
    assert a == b


@given(distinct_cards(5), st.randoms())
def test_order_of_cards_does_not_matter(cards, rnd):
    shuffled = list(cards)
    rnd.shuffle(shuffled)
    assert eval_5cards(cards) == eval_5cards(shuffled)


@given(distinct_cards(7))
def test_seven_cards_pick_best_subset(cards):
    best = eval_7cards(cards)
    subsets = [eval_5cards(combo) for combo in combinations(cards, 5)]
    assert all(best >= r for r in subsets)
    assert best in subsets
    assert eval_best(cards) == best


@given(distinct_cards(6))
def test_best_of_six_dominates_subsets(cards):
    best = eval_best(cards)
    subsets = [eval_5cards(combo) for combo in combinations(cards, 5)]
    assert all(best >= r for r in subsets)
    assert best in subsets


@given(distinct_cards(5))
def test_best_of_five_matches_eval_5cards(cards):
    assert eval_best(cards) == eval_5cards(cards)


def test_best_of_two_cards_pair():
    rank = eval_best(hand("AH AD"))
    assert rank.hand_type == HandType.PAIR
    assert rank.primary == Rank.ACE


def test_wrong_card_counts_raise():
    with pytest.raises(ValueError):
        eval_5cards(hand("AH KH QH JH"))
    with pytest.raises(ValueError):
        eval_7cards(hand("AH KH QH JH TH 9H"))
    with pytest.raises(ValueError):
        eval_best([])


@given(distinct_cards(5))
def test_encode_round_trip(cards):
    rank = eval_5cards(cards)
    assert HandRank.decode(rank.encode()) == rank


@given(distinct_cards(5), distinct_cards(5))
def test_encode_order_matches_compare(a_cards, b_cards):
    a = eval_5cards(a_cards)
    b = eval_5cards(b_cards)
    assert sign(compare(a, b)) == sign(a.encode() - b.encode())


def test_decode_rejects_bad_values():
    with pytest.raises(ValueError):
        HandRank.decode(-1)
    with pytest.raises(ValueError):
        HandRank.decode(0xF0000000)


def test_too_many_kickers_rejected():
    with pytest.raises(ValueError):
        HandRank(HandType.HIGH_CARD, 14, 13, (1, 2, 3, 4, 5, 6))


def test_names_and_descriptions():
    assert hand_type_name(HandType.FLUSH) == "Flush"
    assert hand_type_name(HandType.THREE_OF_A_KIND) == "Three of a Kind"
    assert hand_type_name(99) == "Unknown"
    assert HandRank(HandType.ROYAL_FLUSH, Rank.ACE).describe() == "Royal Flush"
    assert eval_5cards(hand("2H 5H 9H JH KH")).describe().startswith("Flush:")


@given(distinct_cards(7))
def test_bitmask_matches_card_indices(cards):
    mask = cards_to_bitmask(cards)
    assert count_bits(mask) == len(cards)
    assert highest_bit(mask) == max(card.to_index() for card in cards)
    assert all(mask >> card.to_index() & 1 for card in cards)


def test_highest_bit_of_empty_mask():
    assert highest_bit(0) == -1
    assert count_bits(0) == 0


def test_shape_predicates():
    wheel = hand("AH 2D 3C 4S 5H")
    broadway = hand("TH JD QC KS AH")
    flush = hand("2H 5H 9H JH KH")
    assert is_wheel(wheel) and is_straight(wheel)
    assert is_broadway(broadway) and is_straight(broadway)
    assert not is_wheel(broadway)
    assert not is_straight(flush)
    assert is_flush(flush)
    assert not is_flush(wheel)
    with pytest.raises(ValueError):
        is_flush([])


def test_stats_count_evaluations():
    reset_stats()
    assert get_stats().evaluations == 0
    eval_5cards(hand(LADDER[0]))
    eval_5cards(hand(LADDER[1]))
    eval_7cards(hand("2H 5D 9C JS KH 3C 4D"))
    stats = get_stats()
    assert stats.evaluations == 3
    assert stats.nanoseconds >= 0
    assert stats.hands_per_second >= 0
    reset_stats()
    after = get_stats()
    assert after.evaluations == 0
    assert after.hands_per_second == 0