"""Tests for the run drivers."""
import logging
import random

import pytest

from tarot_odds.deck import make_deck_78
from tarot_odds.errors import InvalidParameters
from tarot_odds.simulation import (
    RunConfig,
    RunResult,
    classify_stream,
    population_size,
    run_exhaustive,
    run_sampling,
    run_sampling_sharded,
)
from tarot_odds.stats import AggregateStats

C_78_18 = 212566476905162380


def _assert_consistent(stats: AggregateStats, total: int) -> None:
    assert stats.samples_considered == total
    assert 0 <= stats.petit_sec_count <= total
    assert 0 <= stats.main_imparable_count <= total
    assert 0 <= stats.other_count <= total
    assert stats.petit_sec_count + stats.other_count + stats.main_imparable_count == total


def test_run_sampling_end_to_end():
    result = run_sampling(RunConfig(iterations=10_000, seed=7))
    _assert_consistent(result.stats, 10_000)
    assert result.population == C_78_18
    assert result.elapsed_seconds >= 0
    # Petit sec probability is ~0.066%, far below 5%.
    assert result.stats.petit_sec_count < 500


def test_run_sampling_is_reproducible():
    a = run_sampling(RunConfig(iterations=2_000, seed=11))
    b = run_sampling(RunConfig(iterations=2_000, seed=11))
    assert a.stats == b.stats


def test_run_sampling_injected_rng():
    result = run_sampling(RunConfig(iterations=100), rng=random.Random(1))
    _assert_consistent(result.stats, 100)


def test_run_sampling_zero_iterations():
    result = run_sampling(RunConfig(iterations=0, seed=1))
    assert result.stats == AggregateStats()
    assert result.hands_per_second >= 0


def test_fixed_width_population_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="tarot_odds.simulation"):
        result = run_sampling(RunConfig(iterations=10, seed=3, arbitrary_precision=False))
    assert result.population == C_78_18
    assert "arbitrary precision" in caplog.text


def test_population_size():
    assert population_size(78, 18) == C_78_18
    assert population_size(10, 3, arbitrary_precision=False) == 120


@pytest.mark.parametrize(
    "kwargs",
    [
        {"iterations": -1},
        {"hand_size": 15},
        {"workers": 0},
        {"progress_every": 0},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(InvalidParameters):
        run_sampling(RunConfig(**kwargs))


def test_run_exhaustive_prefix():
    result = run_exhaustive(RunConfig(), limit=50)
    _assert_consistent(result.stats, 50)
    assert result.population == C_78_18


def test_run_exhaustive_first_hand_is_imparable():
    # The first 18-bit mask selects the Excuse and trumps 21..5.
    result = run_exhaustive(RunConfig(), limit=1)
    assert result.stats == AggregateStats(1, 0, 1)


def test_run_exhaustive_zero_limit():
    assert run_exhaustive(RunConfig(), limit=0).stats == AggregateStats()
    with pytest.raises(InvalidParameters):
        run_exhaustive(RunConfig(), limit=-1)


def test_run_sampling_sharded():
    cfg = RunConfig(iterations=1_001, seed=5, workers=3)
    result = run_sampling_sharded(cfg)
    _assert_consistent(result.stats, 1_001)
    assert result.population == C_78_18
    assert run_sampling_sharded(cfg).stats == result.stats


def test_run_sampling_uses_workers():
    cfg = RunConfig(iterations=301, seed=9, workers=2)
    result = run_sampling(cfg)
    _assert_consistent(result.stats, 301)
    assert result.stats == run_sampling_sharded(cfg).stats


def test_run_sampling_rejects_shared_rng_for_workers():
    with pytest.raises(InvalidParameters):
        run_sampling(RunConfig(iterations=10, workers=2), rng=random.Random(0))


def test_classify_stream_logs_progress(caplog):
    deck = make_deck_78()
    hands = [tuple(range(18)), tuple(range(1, 19)), tuple(range(60, 78))]
    with caplog.at_level(logging.DEBUG, logger="tarot_odds.simulation"):
        stats = classify_stream(hands, deck, progress_every=2)
    _assert_consistent(stats, 3)
    assert stats.main_imparable_count == 2
    assert "2 hands" in caplog.text


def test_hands_per_second():
    assert RunResult(AggregateStats(100, 0, 0), C_78_18, 2.0).hands_per_second == 50.0
    assert RunResult(AggregateStats(100, 0, 0), C_78_18, 0.0).hands_per_second == 0.0
