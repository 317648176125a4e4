"""Odds of petit sec and main imparable in 18-card Tarot hands."""

__version__ = "0.1.0"

from .errors import TarotOddsError, InvalidParameters, IntegerOverflow, InvalidSubset
from .combinatorics import checked_multiply, count_combinations, count_combinations_fixed_width
from .deck import Card, CardKind, EXCUSE, Suit, make_deck_78, superior_kind
from .subsets import (
    NumpyIndexSource,
    SubsetSampler,
    enumerate_subsets,
    sample_subset,
    spawn_index_sources,
)
from .classify import HAND_SIZE, HandClassification, Verdict, classify_hand, classify_indices
from .stats import AggregateStats, Aggregator, estimate_rate, extrapolate
from .simulation import RunConfig, RunResult, run_exhaustive, run_sampling, run_sampling_sharded
