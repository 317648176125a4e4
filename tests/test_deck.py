"""Tests for the 78-card deck model."""
from collections import Counter

import pytest

from tarot_odds.deck import (
    DECK_SIZE,
    EXCUSE,
    Card,
    CardKind,
    Suit,
    make_deck_78,
    make_face_card,
    make_minor_card,
    make_trump_card,
    superior_kind,
)


def test_deck_78():
    deck = make_deck_78()
    assert len(deck) == DECK_SIZE == 78
    assert len(set(deck)) == 78


def test_deck_composition():
    deck = make_deck_78()
    kinds = Counter(c.kind for c in deck)
    assert kinds[CardKind.EXCUSE] == 1
    assert kinds[CardKind.TRUMP] == 21
    assert kinds[CardKind.MINOR] == 40
    for kind in (CardKind.KING, CardKind.QUEEN, CardKind.KNIGHT, CardKind.JACK):
        assert kinds[kind] == 4
    assert sorted(c.rank for c in deck if c.is_trump()) == list(range(1, 22))
    for suit in Suit:
        suited = [c for c in deck if c.suit == suit]
        assert len(suited) == 14
        assert sorted(c.rank for c in suited if c.kind == CardKind.MINOR) == list(range(1, 11))


def test_deck_order_is_fixed():
    deck = make_deck_78()
    assert deck == make_deck_78()
    assert deck[0] == EXCUSE
    assert deck[1] == make_trump_card(21)
    assert deck[21] == make_trump_card(1)
    assert deck[22] == make_minor_card(Suit.DIAMONDS, 10)


def test_superior_chain():
    assert superior_kind(CardKind.QUEEN) == CardKind.KING
    assert superior_kind(CardKind.KNIGHT) == CardKind.QUEEN
    assert superior_kind(CardKind.JACK) == CardKind.KNIGHT
    assert superior_kind(CardKind.MINOR) == CardKind.JACK
    assert superior_kind(CardKind.KING) is None
    assert superior_kind(CardKind.TRUMP) is None
    assert superior_kind(CardKind.EXCUSE) is None


def test_card_predicates():
    assert make_trump_card(1).is_petit()
    assert not make_trump_card(2).is_petit()
    assert make_trump_card(11).is_major_trump()
    assert make_trump_card(21).is_major_trump()
    assert not make_trump_card(10).is_major_trump()
    assert EXCUSE.is_excuse()
    assert not make_face_card(CardKind.KING, Suit.HEARTS).is_trump()
    assert make_face_card(CardKind.KING, Suit.HEARTS).is_king()
    assert not make_face_card(CardKind.QUEEN, Suit.HEARTS).is_king()
    assert make_trump_card(7).is_trump()
    assert not EXCUSE.is_trump()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": CardKind.TRUMP, "rank": 0},
        {"kind": CardKind.TRUMP, "rank": 22},
        {"kind": CardKind.TRUMP, "rank": 5, "suit": Suit.HEARTS},
        {"kind": CardKind.EXCUSE, "rank": 1},
        {"kind": CardKind.MINOR, "suit": Suit.CLUBS, "rank": 11},
        {"kind": CardKind.MINOR, "rank": 3},
        {"kind": CardKind.KING},
        {"kind": CardKind.QUEEN, "suit": Suit.SPADES, "rank": 13},
    ],
)
def test_invalid_cards(kwargs):
    with pytest.raises(ValueError):
        Card(**kwargs)


def test_str():
    assert str(EXCUSE) == "Excuse"
    assert str(make_trump_card(21)) == "Atout-21"
    assert str(make_face_card(CardKind.KING, Suit.HEARTS)) == "R♥"
    assert str(make_minor_card(Suit.CLUBS, 7)) == "7♣"
