"""Bit array implementation.

Fixed-capacity bit array built on bitarray, grouped into 64-bit blocks.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator

from bitarray import bitarray

from ..core.types import BLOCK_BITS, BLOCK_BYTES


class SimpleBitVector:
    """Fixed-size bit array with 64-bit block access.

    Args:
        capacity: Number of bits, a non-negative multiple of 64

    Invariants:
        - Capacity never changes after construction
        - New bits read as clear
        - Bits are stored little-endian, so the bytes of block b read as a
          little-endian integer put index b*64 + j at bit j
    """

    def __init__(self, capacity: int):
        if capacity < 0 or capacity % BLOCK_BITS:
            raise ValueError(f"Capacity must be a non-negative multiple of 64, got {capacity}")
        self._bits = bitarray(capacity, endian="little")
        self._bits.setall(0)

    @property
    def capacity(self) -> int:
        return len(self._bits)

    def _check_index(self, index: int) -> None:
        # bitarray accepts negative indexes, a filter never should
        if not 0 <= index < len(self._bits):
            raise IndexError(f"Bit index {index} out of range [0, {len(self._bits)})")

    def get(self, index: int) -> bool:
        """Return True if the bit at index is set."""
        self._check_index(index)
        return bool(self._bits[index])

    def set(self, index: int) -> None:
        """Set the bit at index."""
        self._check_index(index)
        self._bits[index] = 1

    def set_if_clear(self, index: int) -> bool:
        """Set the bit at index and return True if it was previously clear."""
        self._check_index(index)
        if self._bits[index]:
            return False
        self._bits[index] = 1
        return True

    def bit_count(self) -> int:
        """Return the number of set bits."""
        return self._bits.count(1)

    def block_count(self) -> int:
        return len(self._bits) // BLOCK_BITS

    def blocks(self) -> Iterator[int]:
        """Yield unsigned 64-bit blocks in index order."""
        raw = self._bits.tobytes()
        for offset in range(0, len(raw), BLOCK_BYTES):
            yield int.from_bytes(raw[offset:offset + BLOCK_BYTES], "little")

    @classmethod
    def from_blocks(cls, blocks: Iterable[int], block_count: int) -> SimpleBitVector:
        """Build a bit array from exactly block_count unsigned 64-bit blocks."""
        blocks = list(blocks)
        if len(blocks) != block_count:
            raise ValueError(f"Expected {block_count} blocks, got {len(blocks)}")
        vector = cls(0)
        vector._bits.frombytes(struct.pack(f"<{block_count}Q", *blocks))
        return vector

    def union_update(self, other: SimpleBitVector) -> None:
        """OR other's bits into this array in place."""
        if other.capacity != self.capacity:
            raise ValueError(
                f"Cannot combine bit arrays of {self.capacity} and {other.capacity} bits"
            )
        self._bits |= other._bits

    def copy(self) -> SimpleBitVector:
        vector = SimpleBitVector(0)
        vector._bits = self._bits.copy()
        return vector

    def __len__(self) -> int:
        return len(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleBitVector):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"SimpleBitVector(capacity={self.capacity}, set={self.bit_count()})"
