"""Protocol definition for the bit array backing a filter."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol


class BitVector(Protocol):
    """Fixed-capacity bit array grouped into 64-bit blocks."""

    @property
    def capacity(self) -> int:
        """Number of bits; always a multiple of 64."""
        ...

    def get(self, index: int) -> bool:
        """Return True if the bit at index is set."""
        ...

    def set(self, index: int) -> None:
        """Set the bit at index."""
        ...

    def set_if_clear(self, index: int) -> bool:
        """Set the bit at index and return True if it was previously clear."""
        ...

    def blocks(self) -> Iterator[int]:
        """Yield 64-bit blocks in order; bit j of block b is index b*64 + j."""
        ...

    @classmethod
    def from_blocks(cls, blocks: Iterable[int], block_count: int) -> BitVector:
        """Build a bit array from unsigned 64-bit blocks."""
        ...
