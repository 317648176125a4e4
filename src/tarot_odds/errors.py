"""
Exception hierarchy for the odds engine.

All errors are deterministic: the computation has no I/O, so the same input
always fails the same way and nothing here is retryable.
"""
from __future__ import annotations


class TarotOddsError(Exception):
    """Base class for every error raised by ``tarot_odds``."""


class InvalidParameters(TarotOddsError, ValueError):
    """Bad sizes or counts: non-positive n/k, k > n, count > total, ..."""


class IntegerOverflow(TarotOddsError, OverflowError):
    """A fixed-width product left its representable range."""


class InvalidSubset(TarotOddsError, ValueError):
    """A hand handed to the classifier has the wrong size or repeats a card."""


__all__ = ["TarotOddsError", "InvalidParameters", "IntegerOverflow", "InvalidSubset"]
