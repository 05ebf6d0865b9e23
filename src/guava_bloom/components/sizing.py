"""Bloom filter sizing.

Computes bit-array size and hash-function count from the expected number of
insertions and the target false-positive rate, using Guava's formulas:

    m = -n * ln(p) / (ln(2)^2)
    k = round(m / n * ln(2))

Results must match Guava exactly for serialized filters to line up, so the
operation order and the rounding rules below are significant.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from ..core.errors import InvalidParameterError
from ..core.types import BLOCK_BITS, MAX_BLOCKS, MAX_HASH_FUNCTIONS

# Java's Double.MIN_VALUE
MIN_POSITIVE_RATE = 2.0 ** -1074
LN2 = math.log(2)


def check_parameters(expected_insertions: int, error_rate: float) -> None:
    """Validate public sizing inputs.

    Raises:
        InvalidParameterError: If error_rate is outside (0, 1) or
            expected_insertions is negative.
    """
    # written as "not >" so NaN is rejected too
    if not error_rate > 0.0:
        raise InvalidParameterError(f"Error rate must be > 0.0, got {error_rate}")
    if error_rate >= 1.0:
        raise InvalidParameterError(f"Error rate must be < 1.0, got {error_rate}")
    if expected_insertions < 0:
        raise InvalidParameterError(
            f"Expected insertions must be >= 0, got {expected_insertions}"
        )


def optimal_num_of_bits(expected_insertions: int, error_rate: float) -> int:
    """Return the number of bits needed for the given capacity and error rate.

    The result is truncated toward zero. An error rate of exactly 0.0 is
    replaced by the smallest positive double; callers reach this function
    through check_parameters() so that path is internal only.
    """
    if error_rate == 0.0:
        error_rate = MIN_POSITIVE_RATE
    return int(-expected_insertions * math.log(error_rate) / (LN2 * LN2))


def optimal_num_of_hash_functions(expected_insertions: int, num_bits: int) -> int:
    """Return max(1, round(m / n * ln 2)), rounding halves away from zero."""
    value = num_bits / expected_insertions * LN2
    return max(1, int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def bit_capacity(num_bits: int) -> int:
    """Round a bit count up to a whole number of 64-bit blocks (at least one)."""
    blocks = max(1, -(-num_bits // BLOCK_BITS))
    return blocks * BLOCK_BITS


def compute_sizing(expected_insertions: int, error_rate: float) -> tuple[int, int]:
    """Size a filter, returning (bit_capacity, num_hash_functions).

    Raises:
        InvalidParameterError: If the inputs are out of range or the result
            cannot be represented in the serialized form.
    """
    check_parameters(expected_insertions, error_rate)
    if expected_insertions == 0:
        expected_insertions = 1

    num_bits = optimal_num_of_bits(expected_insertions, error_rate)
    num_hash_functions = optimal_num_of_hash_functions(expected_insertions, num_bits)
    capacity = bit_capacity(num_bits)

    if num_hash_functions > MAX_HASH_FUNCTIONS:
        raise InvalidParameterError(
            f"Error rate {error_rate} needs {num_hash_functions} hash functions, "
            f"more than the {MAX_HASH_FUNCTIONS} the format allows"
        )
    if capacity // BLOCK_BITS > MAX_BLOCKS:
        raise InvalidParameterError(f"Filter of {capacity} bits is too large to serialize")

    return capacity, num_hash_functions
