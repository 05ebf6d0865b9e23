"""Configuration for Bloom filters.

Defines the tunable parameters used to build a filter.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..components.sizing import check_parameters
from ..components.strategy import resolve_strategy


@dataclass(frozen=True)
class BloomConfig:
    """Construction parameters for a BloomFilter.

    Attributes:
        expected_insertions: Number of keys the filter is sized for (0 means 1)
        error_rate: Target false-positive rate, strictly between 0 and 1
        strategy: Hash strategy name ("mitz32", "mitz64") or ordinal (0, 1)
        strict_keys: Raise UnsupportedKeyError instead of returning False
            for keys that cannot be converted to bytes

    Raises:
        InvalidParameterError: On construction, if any field is out of range.
    """

    expected_insertions: int
    error_rate: float = 0.03  # Guava's default fpp
    strategy: str | int = "mitz64"
    strict_keys: bool = False

    def __post_init__(self) -> None:
        check_parameters(self.expected_insertions, self.error_rate)
        resolve_strategy(self.strategy)
