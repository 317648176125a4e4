"""
Exact binomial coefficients.

C(n, k) is computed as the falling factorial n·(n-1)···(n-k+1) divided by k!,
with both products accumulated in full before a single division. Python ints
are arbitrary precision, so the default path never overflows; the
fixed-width path mimics a machine integer and raises ``IntegerOverflow``
instead of wrapping around.
"""
from __future__ import annotations

from .errors import IntegerOverflow, InvalidParameters

# Signed machine word used by the fixed-width path.
DEFAULT_WORD_BITS = 64


def _check_parameters(n: int, k: int) -> None:
    if n < 1 or k < 1 or n < k:
        raise InvalidParameters(f"Invalid parameters for C(n, k): n={n}, k={k}")


def checked_multiply(a: int, b: int, bits: int = DEFAULT_WORD_BITS) -> int:
    """
    Multiply two integers as a signed ``bits``-wide machine word would.

    Raises ``IntegerOverflow`` if the exact product is not representable.
    """
    result = a * b
    limit = 1 << (bits - 1)
    if not -limit <= result < limit:
        raise IntegerOverflow(f"{a} * {b} does not fit in a signed {bits}-bit integer")
    return result


def _falling_factorial(n: int, k: int) -> int:
    product = 1
    for i in range(n, n - k, -1):
        product *= i
    return product


def _factorial(k: int) -> int:
    product = 1
    for i in range(k, 0, -1):
        product *= i
    return product


def count_combinations_fixed_width(n: int, k: int, bits: int = DEFAULT_WORD_BITS) -> int:
    """C(n, k) using only products that fit a signed ``bits``-wide integer."""
    _check_parameters(n, k)

    numerator = 1
    for i in range(n, n - k, -1):
        numerator = checked_multiply(numerator, i, bits)

    denominator = 1
    for i in range(k, 0, -1):
        denominator = checked_multiply(denominator, i, bits)

    return numerator // denominator


def count_combinations(n: int, k: int, *, arbitrary_precision: bool = True) -> int:
    """
    Number of k-subsets of an n-item universe.

    Requires ``1 <= k <= n``. With ``arbitrary_precision=False`` the
    computation goes through :func:`count_combinations_fixed_width` and may
    raise ``IntegerOverflow``; callers are expected to fall back to the
    default path in that case.
    """
    if not arbitrary_precision:
        return count_combinations_fixed_width(n, k)

    _check_parameters(n, k)
    quotient, remainder = divmod(_falling_factorial(n, k), _factorial(k))
    if remainder:
        raise ArithmeticError(f"C({n}, {k}) is not an exact quotient")
    return quotient


__all__ = [
    "DEFAULT_WORD_BITS",
    "checked_multiply",
    "count_combinations",
    "count_combinations_fixed_width",
]
