"""
Counters across many classified hands, and the exact arithmetic used to turn
them into rates and population estimates.

Rates are ``decimal.Decimal`` values with ``RATE_SCALE`` fractional digits,
rounded ROUND_HALF_DOWN (ties go towards zero). Population estimates are
``rate × population`` rounded to an integer with the same rule. Floats are
never involved, so billions of samples do not drift.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_DOWN, Decimal, localcontext

from .classify import HandClassification
from .errors import InvalidParameters

RATE_SCALE = 50
# Enough significant digits for a 50-digit rate times a ~20-digit population.
_PRECISION = 200


@dataclass(frozen=True)
class AggregateStats:
    """Read-only view of the counters at one point of a run."""

    samples_considered: int = 0
    petit_sec_count: int = 0
    main_imparable_count: int = 0

    @property
    def other_count(self) -> int:
        return self.samples_considered - self.petit_sec_count - self.main_imparable_count

    @property
    def valid_hands(self) -> int:
        """Hands that went through the main imparable evaluation (not petit sec)."""
        return self.samples_considered - self.petit_sec_count


class Aggregator:
    """Accumulates classification outcomes. Counters only ever grow."""

    def __init__(self) -> None:
        self._samples_considered = 0
        self._petit_sec_count = 0
        self._main_imparable_count = 0

    def record(self, result: HandClassification) -> None:
        self._samples_considered += 1
        if result.is_petit_sec:
            self._petit_sec_count += 1
        elif result.is_main_imparable:
            self._main_imparable_count += 1

    def merge(self, stats: AggregateStats) -> None:
        """Fold in the final snapshot of another aggregator (e.g. a worker)."""
        self._samples_considered += stats.samples_considered
        self._petit_sec_count += stats.petit_sec_count
        self._main_imparable_count += stats.main_imparable_count

    def snapshot(self) -> AggregateStats:
        return AggregateStats(
            samples_considered=self._samples_considered,
            petit_sec_count=self._petit_sec_count,
            main_imparable_count=self._main_imparable_count,
        )


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def estimate_rate(count: int, total: int, *, scale: int = RATE_SCALE) -> Decimal:
    """``count / total`` with ``scale`` fractional digits, ROUND_HALF_DOWN."""
    if total <= 0:
        raise InvalidParameters(f"Rate needs a positive total, got {total}")
    if not 0 <= count <= total:
        raise InvalidParameters(f"Rate needs 0 <= count <= total, got {count}/{total}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        ctx.rounding = ROUND_HALF_DOWN
        return (Decimal(count) / Decimal(total)).quantize(_quantum(scale))


def extrapolate(rate: Decimal, population_size: int) -> int:
    """Expected number of matching items in the population, ROUND_HALF_DOWN to an int."""
    if population_size < 0:
        raise InvalidParameters(f"Population size must be non-negative, got {population_size}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return int((rate * Decimal(population_size)).to_integral_value(rounding=ROUND_HALF_DOWN))


def percentage(rate: Decimal, places: int, *, factor: int = 1) -> Decimal:
    """``rate × factor`` as a percentage with ``places`` fractional digits, ROUND_HALF_DOWN."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return (rate * factor * 100).quantize(_quantum(places), rounding=ROUND_HALF_DOWN)


__all__ = [
    "RATE_SCALE",
    "AggregateStats",
    "Aggregator",
    "estimate_rate",
    "extrapolate",
    "percentage",
]
