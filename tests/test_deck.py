"""Tests for deck construction and shuffling."""
import random
from collections import Counter

from pccs_tutor.deck import build_deck, shuffle_deck
from pccs_tutor.palette import HUES, TONES


def test_build_deck_has_144_cards():
    assert len(build_deck()) == 144


def test_build_deck_one_card_per_pair():
    pairs = Counter((c.tone_id, c.hue_id) for c in build_deck())
    assert len(pairs) == 144
    assert set(pairs.values()) == {1}


def test_build_deck_canonical_order():
    deck = build_deck()
    assert deck[0].id == f"{TONES[0].id}-{HUES[0].id}"
    assert deck[11].id == f"{TONES[0].id}-{HUES[11].id}"
    assert deck[12].id == f"{TONES[1].id}-{HUES[0].id}"
    assert deck[-1].id == f"{TONES[-1].id}-{HUES[-1].id}"


def test_build_deck_is_repeatable():
    assert build_deck() == build_deck()


def test_shuffle_is_permutation():
    deck = build_deck()
    shuffled = shuffle_deck(deck, random.Random(7))
    assert sorted(c.id for c in shuffled) == sorted(c.id for c in deck)
    assert shuffled != deck


def test_shuffle_does_not_mutate_input():
    deck = build_deck()
    before = list(deck)
    shuffle_deck(deck, random.Random(1))
    assert deck == before


def test_shuffle_same_seed_same_order():
    deck = build_deck()
    assert shuffle_deck(deck, random.Random(42)) == shuffle_deck(deck, random.Random(42))


def test_shuffle_without_rng():
    assert len(shuffle_deck(build_deck())) == 144


# --- Edge case tests ---


def test_shuffle_empty_and_single():
    assert shuffle_deck([], random.Random(0)) == []
    deck = build_deck()[:1]
    assert shuffle_deck(deck, random.Random(0)) == deck


def test_shuffle_positions_spread():
    """Every card lands in the first slot at least once over many shuffles."""
    deck = build_deck()[:4]
    rng = random.Random(3)
    firsts = {shuffle_deck(deck, rng)[0].id for _ in range(200)}
    assert firsts == {c.id for c in deck}
