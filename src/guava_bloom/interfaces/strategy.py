"""Protocol definition for hashing strategies."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from .bitvector import BitVector


class HashStrategy(Protocol):
    """Maps key bytes to bit positions.

    Invariants:
        - Deterministic: the same bytes, k and m always give the same indexes
        - Stateless: one instance may be shared by any number of filters
    """

    ordinal: int
    name: str

    def indexes(self, data: bytes, num_hash_functions: int, num_bits: int) -> Iterator[int]:
        """Yield num_hash_functions bit positions in [0, num_bits)."""
        ...

    def put(self, data: bytes, num_hash_functions: int, bits: BitVector) -> bool:
        """Set the key's bits; return True if any bit changed."""
        ...

    def might_contain(self, data: bytes, num_hash_functions: int, bits: BitVector) -> bool:
        """Return False if any of the key's bits is clear."""
        ...
