"""
Tarot deck: 78 cards (4 suits × 14, 21 trumps, Excuse).
Suited cards follow the chain Roi > Dame > Cavalier > Valet > cartes mineures.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class Suit(IntEnum):
    """Carreau, Cœur, Pique, Trèfle."""
    DIAMONDS = 0
    HEARTS = 1
    SPADES = 2
    CLUBS = 3


class CardKind(IntEnum):
    """
    Card families. For suited kinds the value encodes the suit chain:
    a smaller value ranks higher (KING=3 is the top, MINOR=7 the bottom).
    """
    TRUMP = 1
    EXCUSE = 2
    KING = 3
    QUEEN = 4
    KNIGHT = 5
    JACK = 6
    MINOR = 7


SUITED_KINDS = (CardKind.KING, CardKind.QUEEN, CardKind.KNIGHT, CardKind.JACK, CardKind.MINOR)
FACE_KINDS = (CardKind.KING, CardKind.QUEEN, CardKind.KNIGHT, CardKind.JACK)

TRUMP_PETIT = 1
TRUMP_21 = 21
NUM_TRUMPS = 21
NUM_MINORS_PER_SUIT = 10
DECK_SIZE = 78


def superior_kind(kind: CardKind) -> Optional[CardKind]:
    """Next card up the suit chain (Queen -> King, ..., Minor -> Jack), or None."""
    if kind in SUITED_KINDS and kind != CardKind.KING:
        return CardKind(kind - 1)
    return None


@dataclass(frozen=True)
class Card:
    """
    A single tarot card. Either:
    - trump: rank 1..21 (1=Petit, 21=strongest)
    - excuse: no suit/rank
    - minor: suit + rank 1..10
    - face (king, queen, knight, jack): suit only
    """

    kind: CardKind
    suit: Optional[Suit] = None
    rank: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind == CardKind.TRUMP:
            if self.suit is not None or self.rank is None or not 1 <= self.rank <= NUM_TRUMPS:
                raise ValueError(f"Invalid trump: suit={self.suit}, rank={self.rank}")
        elif self.kind == CardKind.EXCUSE:
            if self.suit is not None or self.rank is not None:
                raise ValueError("The Excuse has neither suit nor rank")
        elif self.kind == CardKind.MINOR:
            if self.suit is None or self.rank is None or not 1 <= self.rank <= NUM_MINORS_PER_SUIT:
                raise ValueError(f"Invalid minor card: suit={self.suit}, rank={self.rank}")
        elif self.kind in FACE_KINDS:
            if self.suit is None or self.rank is not None:
                raise ValueError(f"Invalid {self.kind.name.lower()}: suit={self.suit}, rank={self.rank}")
        else:
            raise ValueError(f"Unknown card kind: {self.kind}")

    def is_trump(self) -> bool:
        return self.kind == CardKind.TRUMP

    def is_excuse(self) -> bool:
        return self.kind == CardKind.EXCUSE

    def is_king(self) -> bool:
        return self.kind == CardKind.KING

    def is_petit(self) -> bool:
        """True if this is the Petit (trump 1)."""
        return self.kind == CardKind.TRUMP and self.rank == TRUMP_PETIT

    def is_major_trump(self) -> bool:
        """Trumps 11..21."""
        return self.kind == CardKind.TRUMP and self.rank > 10

    def __str__(self) -> str:
        if self.kind == CardKind.EXCUSE:
            return "Excuse"
        if self.kind == CardKind.TRUMP:
            return f"Atout-{self.rank}"
        rank_str = {
            CardKind.KING: "R",
            CardKind.QUEEN: "D",
            CardKind.KNIGHT: "C",
            CardKind.JACK: "V",
        }.get(self.kind) or str(self.rank)
        suit_char = "♦♥♠♣"[self.suit]
        return f"{rank_str}{suit_char}"

    def __repr__(self) -> str:
        return str(self)


EXCUSE = Card(kind=CardKind.EXCUSE)


def make_trump_card(rank: int) -> Card:
    return Card(kind=CardKind.TRUMP, rank=rank)


def make_minor_card(suit: Suit, rank: int) -> Card:
    return Card(kind=CardKind.MINOR, suit=suit, rank=rank)


def make_face_card(kind: CardKind, suit: Suit) -> Card:
    return Card(kind=kind, suit=suit)


def make_deck_78() -> tuple[Card, ...]:
    """
    Build the full 78-card deck in a fixed order: Excuse, trumps 21..1, then
    for each suit the minors 10..1 followed by King, Queen, Knight, Jack.
    """
    deck: list[Card] = [EXCUSE]
    for rank in range(NUM_TRUMPS, 0, -1):
        deck.append(make_trump_card(rank))
    for suit in Suit:
        for rank in range(NUM_MINORS_PER_SUIT, 0, -1):
            deck.append(make_minor_card(suit, rank))
        for kind in FACE_KINDS:
            deck.append(make_face_card(kind, suit))
    if len(deck) != DECK_SIZE or len(set(deck)) != DECK_SIZE:
        raise RuntimeError("Deck construction produced an invalid deck")
    return tuple(deck)
