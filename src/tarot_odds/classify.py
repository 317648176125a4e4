"""
Hand classification: petit sec and main imparable.

A hand is an 18-card selection from the deck. ``classify_hand`` makes one
pass to tally trumps, Kings and the special cards, then walks a short chain
of gates:

    petit sec? -> candidacy (>= 10 major trumps incl. 21)
               -> remainder size (<= 7 cards left to protect)
               -> backing scan (each Queen/Knight/Jack/minor has its
                  immediate superior in the same suit)

The first gate that decides returns. Petit sec is checked first and
suppresses the main imparable evaluation entirely, so the two verdicts are
mutually exclusive.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from .deck import TRUMP_21, Card, CardKind, Suit, superior_kind
from .errors import InvalidSubset

HAND_SIZE = 18
MIN_MAJOR_TRUMPS = 10
# With more cards than this outside trumps, Kings and the Excuse, the hand is
# rejected before the backing scan.
MAX_REMAINING_CARDS = 7


class Verdict(str, Enum):
    PETIT_SEC = "petit_sec"
    MAIN_IMPARABLE = "main_imparable"
    NEITHER = "neither"


@dataclass(frozen=True)
class HandClassification:
    """Tallies and verdict for one hand."""

    trump_count: int
    major_trump_count: int
    king_count: int
    has_petit: bool
    has_21: bool
    has_excuse: bool
    verdict: Verdict

    @property
    def is_petit_sec(self) -> bool:
        return self.verdict == Verdict.PETIT_SEC

    @property
    def is_main_imparable(self) -> bool:
        return self.verdict == Verdict.MAIN_IMPARABLE


def _check_hand(cards: Sequence[Card]) -> None:
    if len(cards) != HAND_SIZE:
        raise InvalidSubset(f"A hand has {HAND_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise InvalidSubset(f"Hand contains duplicate cards: {list(cards)}")


def _is_backed(cards: Iterable[Card], held: set[tuple[CardKind, Suit | None]]) -> bool:
    for card in cards:
        superior = superior_kind(card.kind)
        if superior is None:
            continue
        if (superior, card.suit) not in held:
            return False
    return True


def classify_hand(cards: Sequence[Card]) -> HandClassification:
    """
    Classify an 18-card hand.

    Raises ``InvalidSubset`` if the hand does not hold exactly 18 distinct
    cards.
    """
    _check_hand(cards)

    trump_count = 0
    major_trump_count = 0
    king_count = 0
    has_petit = False
    has_21 = False
    has_excuse = False
    for card in cards:
        if card.is_trump():
            trump_count += 1
            if card.is_petit():
                has_petit = True
            elif card.is_major_trump():
                major_trump_count += 1
                if card.rank == TRUMP_21:
                    has_21 = True
        elif card.is_excuse():
            has_excuse = True
        elif card.is_king():
            king_count += 1

    def result(verdict: Verdict) -> HandClassification:
        return HandClassification(
            trump_count=trump_count,
            major_trump_count=major_trump_count,
            king_count=king_count,
            has_petit=has_petit,
            has_21=has_21,
            has_excuse=has_excuse,
            verdict=verdict,
        )

    if has_petit and trump_count == 1:
        return result(Verdict.PETIT_SEC)

    if major_trump_count < MIN_MAJOR_TRUMPS or not has_21:
        return result(Verdict.NEITHER)

    remaining = HAND_SIZE - trump_count - king_count
    if has_excuse:
        remaining -= 1
    if remaining > MAX_REMAINING_CARDS:
        return result(Verdict.NEITHER)

    held = {(card.kind, card.suit) for card in cards}
    if not _is_backed(cards, held):
        return result(Verdict.NEITHER)
    return result(Verdict.MAIN_IMPARABLE)


def classify_indices(indices: Sequence[int], deck: Sequence[Card]) -> HandClassification:
    """Classify the hand made of ``deck[i]`` for each index."""
    if any(not 0 <= i < len(deck) for i in indices):
        raise InvalidSubset(f"Index out of range for a {len(deck)}-card deck: {list(indices)}")
    if len(set(indices)) != len(indices):
        raise InvalidSubset(f"Hand repeats a deck index: {list(indices)}")
    return classify_hand([deck[i] for i in indices])


__all__ = [
    "HAND_SIZE",
    "MAX_REMAINING_CARDS",
    "MIN_MAJOR_TRUMPS",
    "HandClassification",
    "Verdict",
    "classify_hand",
    "classify_indices",
]
