"""
Two ways of visiting k-subsets of an n-item universe.

- ``enumerate_subsets``: exhaustive. Walks every integer mask ``0 .. 2**n - 1``
  and keeps those with exactly k bits set. Every k-subset is produced once, in
  ascending mask order, but the walk costs O(2**n) mask tests. That is fine
  for small universes and for verification; for the 78-card deck it never
  finishes (2**78 masks), so use the sampler there.
- ``sample_subset`` / ``SubsetSampler``: Monte Carlo. Draws k distinct indices
  uniformly, rejecting repeats, from an injected index source.

Subsets are tuples of universe indices.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, Protocol

import numpy as np

from .errors import InvalidParameters

Subset = tuple[int, ...]


class IndexSource(Protocol):
    """Uniform integer source: ``randrange(n)`` returns an int in ``[0, n)``."""

    def randrange(self, n: int) -> int:
        ...


class NumpyIndexSource:
    """Adapts a ``numpy.random.Generator`` to the ``IndexSource`` protocol."""

    def __init__(self, generator: np.random.Generator) -> None:
        self.generator = generator

    @classmethod
    def from_seed(cls, seed: int | np.random.SeedSequence | None = None) -> "NumpyIndexSource":
        return cls(np.random.default_rng(seed))

    def randrange(self, n: int) -> int:
        return int(self.generator.integers(n))


def spawn_index_sources(seed: int | None, count: int) -> list[NumpyIndexSource]:
    """
    Independent index sources for ``count`` workers.

    Streams come from ``SeedSequence.spawn`` so they never overlap, and the
    whole family is reproducible from one seed.
    """
    if count < 1:
        raise InvalidParameters(f"Need at least one index source, got {count}")
    children = np.random.SeedSequence(seed).spawn(count)
    return [NumpyIndexSource.from_seed(child) for child in children]


def _check_sizes(universe_size: int, k: int) -> None:
    if universe_size < 1 or k < 1 or universe_size < k:
        raise InvalidParameters(f"Cannot pick {k} items out of {universe_size}")


def indices_from_mask(mask: int) -> Subset:
    """Indices of the set bits of ``mask``, ascending (bit 0 = index 0)."""
    indices = []
    i = 0
    while mask:
        if mask & 1:
            indices.append(i)
        mask >>= 1
        i += 1
    return tuple(indices)


def enumerate_subsets(universe_size: int, k: int) -> Iterator[Subset]:
    """
    Yield every k-subset of ``range(universe_size)`` in ascending mask order.

    Each call returns an independent generator, so the enumeration can be
    restarted from scratch at any time. Total yielded:
    ``count_combinations(universe_size, k)``.
    """
    _check_sizes(universe_size, k)
    return _enumerate_masks(universe_size, k)


def _enumerate_masks(universe_size: int, k: int) -> Iterator[Subset]:
    for mask in range(1 << universe_size):
        if mask.bit_count() == k:
            yield indices_from_mask(mask)


def sample_subset(universe_size: int, k: int, rng: IndexSource) -> Subset:
    """
    Draw k distinct indices from ``range(universe_size)`` without replacement.

    Indices are drawn one at a time and any index already drawn for this call
    is discarded and redrawn. Given a uniform ``rng`` every k-subset is
    equally likely. The result is in draw order.
    """
    _check_sizes(universe_size, k)
    drawn: list[int] = []
    drawn_so_far: set[int] = set()
    while len(drawn) < k:
        index = rng.randrange(universe_size)
        if index in drawn_so_far:
            continue
        drawn_so_far.add(index)
        drawn.append(index)
    return tuple(drawn)


@dataclass
class SubsetSampler:
    """
    Repeated independent draws of k-subsets from one index source.

    Usage:
        sampler = SubsetSampler(78, 18, random.Random(42))
        hand = sampler.sample()
        for hand in sampler.samples(1000): ...
    """

    universe_size: int
    k: int
    rng: IndexSource = field(default_factory=random.SystemRandom)

    def __post_init__(self) -> None:
        _check_sizes(self.universe_size, self.k)

    def sample(self) -> Subset:
        return sample_subset(self.universe_size, self.k, self.rng)

    def samples(self, budget: int) -> Iterator[Subset]:
        """Yield ``budget`` independent samples."""
        if budget < 0:
            raise InvalidParameters(f"Sample budget must be non-negative, got {budget}")
        for _ in range(budget):
            yield self.sample()


__all__ = [
    "IndexSource",
    "NumpyIndexSource",
    "Subset",
    "SubsetSampler",
    "enumerate_subsets",
    "indices_from_mask",
    "sample_subset",
    "spawn_index_sources",
]
