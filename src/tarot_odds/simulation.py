"""
Run drivers: deal hands, classify them, aggregate the outcomes.

- ``run_sampling``: Monte Carlo over random 18-card hands (the practical mode).
- ``run_exhaustive``: walks deck subsets in mask order; only a prefix is
  reachable for the full deck, so pass a ``limit``.
- ``run_sampling_sharded``: splits the sample budget across worker threads,
  each with its own RNG stream and aggregator, and merges the final
  snapshots once every shard has finished.
"""
from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .classify import HAND_SIZE, classify_indices
from .combinatorics import count_combinations
from .deck import Card, make_deck_78
from .errors import IntegerOverflow, InvalidParameters
from .stats import AggregateStats, Aggregator
from .subsets import IndexSource, SubsetSampler, enumerate_subsets, spawn_index_sources

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Configuration for one estimation run."""

    iterations: int = 1_000_000
    hand_size: int = HAND_SIZE
    # None draws from OS entropy (random.SystemRandom); an int makes runs reproducible.
    seed: int | None = None
    workers: int = 1
    # False computes the population size with fixed-width integers first.
    arbitrary_precision: bool = True
    progress_every: int = 1_000_000

    def validate(self) -> None:
        if self.iterations < 0:
            raise InvalidParameters(f"iterations must be non-negative, got {self.iterations}")
        if self.hand_size != HAND_SIZE:
            raise InvalidParameters(f"Only {HAND_SIZE}-card hands can be classified, got {self.hand_size}")
        if self.workers < 1:
            raise InvalidParameters(f"workers must be at least 1, got {self.workers}")
        if self.progress_every < 1:
            raise InvalidParameters(f"progress_every must be at least 1, got {self.progress_every}")


@dataclass(frozen=True)
class RunResult:
    """Outcome of a run: counters, population size and timing."""

    stats: AggregateStats
    population: int
    elapsed_seconds: float

    @property
    def hands_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.stats.samples_considered / self.elapsed_seconds


def population_size(deck_size: int, hand_size: int, *, arbitrary_precision: bool = True) -> int:
    """C(deck_size, hand_size), falling back to arbitrary precision on overflow."""
    try:
        return count_combinations(deck_size, hand_size, arbitrary_precision=arbitrary_precision)
    except IntegerOverflow as exc:
        logger.warning("Fixed-width combination count failed (%s); using arbitrary precision", exc)
        return count_combinations(deck_size, hand_size)


def _default_rng(seed: int | None) -> IndexSource:
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


def classify_stream(
    hands: Iterable[Sequence[int]],
    deck: Sequence[Card],
    *,
    progress_every: int = 1_000_000,
) -> AggregateStats:
    """Classify every hand of ``hands`` (deck indices) and return the final counters."""
    aggregator = Aggregator()
    for n, hand in enumerate(hands, start=1):
        aggregator.record(classify_indices(hand, deck))
        if n % progress_every == 0:
            snap = aggregator.snapshot()
            logger.debug(
                "%d hands: petit sec=%d, main imparable=%d",
                n,
                snap.petit_sec_count,
                snap.main_imparable_count,
            )
    return aggregator.snapshot()


def run_sampling(config: RunConfig, rng: Optional[IndexSource] = None) -> RunResult:
    """
    Classify ``config.iterations`` random hands drawn without replacement.

    With ``config.workers > 1`` the run is handed to ``run_sampling_sharded``;
    a single injected ``rng`` cannot be shared between workers, so passing
    one in that case raises ``InvalidParameters``.
    """
    config.validate()
    if config.workers > 1:
        if rng is not None:
            raise InvalidParameters("An injected rng cannot be split across workers")
        return run_sampling_sharded(config)
    deck = make_deck_78()
    if rng is None:
        rng = _default_rng(config.seed)
    sampler = SubsetSampler(len(deck), config.hand_size, rng)

    logger.info("Sampling %d hands of %d cards", config.iterations, config.hand_size)
    start = time.perf_counter()
    stats = classify_stream(
        sampler.samples(config.iterations),
        deck,
        progress_every=config.progress_every,
    )
    elapsed = time.perf_counter() - start
    logger.info("Sampled %d hands in %.2f s", stats.samples_considered, elapsed)

    return RunResult(
        stats=stats,
        population=population_size(
            len(deck), config.hand_size, arbitrary_precision=config.arbitrary_precision
        ),
        elapsed_seconds=elapsed,
    )


def run_exhaustive(config: RunConfig, limit: int | None = None) -> RunResult:
    """
    Classify deck subsets in ascending mask order, stopping after ``limit``
    hands if given. Without a limit this does not finish for a 78-card deck.
    """
    config.validate()
    if limit is not None and limit < 0:
        raise InvalidParameters(f"limit must be non-negative, got {limit}")
    deck = make_deck_78()
    hands = enumerate_subsets(len(deck), config.hand_size)

    logger.info("Enumerating %s hands of %d cards", limit if limit is not None else "all", config.hand_size)
    start = time.perf_counter()
    stats = classify_stream(_take(hands, limit), deck, progress_every=config.progress_every)
    elapsed = time.perf_counter() - start
    logger.info("Enumerated %d hands in %.2f s", stats.samples_considered, elapsed)

    return RunResult(
        stats=stats,
        population=population_size(
            len(deck), config.hand_size, arbitrary_precision=config.arbitrary_precision
        ),
        elapsed_seconds=elapsed,
    )


def _take(hands: Iterable[Sequence[int]], limit: int | None) -> Iterable[Sequence[int]]:
    if limit is None:
        yield from hands
        return
    for n, hand in enumerate(hands):
        if n >= limit:
            return
        yield hand


def _shard_budgets(iterations: int, workers: int) -> list[int]:
    base, extra = divmod(iterations, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def run_sampling_sharded(config: RunConfig) -> RunResult:
    """
    Like ``run_sampling`` but spread over ``config.workers`` threads.

    Each shard gets an independent ``numpy`` stream spawned from
    ``config.seed`` and keeps its own counters; the parent only sees a
    shard's counters once that shard is complete.
    """
    config.validate()
    deck = make_deck_78()
    budgets = _shard_budgets(config.iterations, config.workers)
    sources = spawn_index_sources(config.seed, config.workers)

    def run_shard(budget: int, source: IndexSource) -> AggregateStats:
        sampler = SubsetSampler(len(deck), config.hand_size, source)
        return classify_stream(sampler.samples(budget), deck, progress_every=config.progress_every)

    logger.info(
        "Sampling %d hands of %d cards on %d workers",
        config.iterations,
        config.hand_size,
        config.workers,
    )
    start = time.perf_counter()
    total = Aggregator()
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = [
            executor.submit(run_shard, budget, source)
            for budget, source in zip(budgets, sources)
        ]
        for future in as_completed(futures):
            total.merge(future.result())
    elapsed = time.perf_counter() - start
    stats = total.snapshot()
    logger.info("Sampled %d hands in %.2f s", stats.samples_considered, elapsed)

    return RunResult(
        stats=stats,
        population=population_size(
            len(deck), config.hand_size, arbitrary_precision=config.arbitrary_precision
        ),
        elapsed_seconds=elapsed,
    )


__all__ = [
    "RunConfig",
    "RunResult",
    "classify_stream",
    "population_size",
    "run_exhaustive",
    "run_sampling",
    "run_sampling_sharded",
]
