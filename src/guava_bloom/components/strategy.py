"""Hashing strategies compatible with Guava's BloomFilterStrategies.

Both strategies derive k bit positions from one 128-bit murmur3 hash using
the Kirsch-Mitzenmacher construction (index_i = h1 + i * h2). They differ in
integer width and in how a negative combined hash is made non-negative, and
those details must match Guava for filters to be interchangeable.
"""

from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType

from ..core.errors import InvalidParameterError
from ..core.types import MASK_32, MASK_63, MASK_64
from ..interfaces.bitvector import BitVector
from . import hashing


def _int32(value: int) -> int:
    """Wrap value to a signed 32-bit integer."""
    value &= MASK_32
    return value - (1 << 32) if value & 0x80000000 else value


class _MurmurStrategy:
    """Shared put/might_contain on top of a strategy's indexes()."""

    ordinal: int
    name: str

    def indexes(self, data: bytes, num_hash_functions: int, num_bits: int) -> Iterator[int]:
        raise NotImplementedError

    def put(self, data: bytes, num_hash_functions: int, bits: BitVector) -> bool:
        """Set every index for data; return True if any bit was clear."""
        bits_changed = False
        for index in self.indexes(data, num_hash_functions, bits.capacity):
            if bits.set_if_clear(index):
                bits_changed = True
        return bits_changed

    def might_contain(self, data: bytes, num_hash_functions: int, bits: BitVector) -> bool:
        """Return False on the first clear index, True if all are set."""
        for index in self.indexes(data, num_hash_functions, bits.capacity):
            if not bits.get(index):
                return False
        return True

    def __repr__(self) -> str:
        return self.name


class Murmur128Mitz32(_MurmurStrategy):
    """Guava's MURMUR128_MITZ_32.

    Uses only the low 64 bits of the hash, split into two signed 32-bit
    halves combined with 32-bit wraparound. Negative results are flipped
    with a bitwise complement.
    """

    ordinal = 0
    name = "MURMUR128_MITZ_32"

    def indexes(self, data: bytes, num_hash_functions: int, num_bits: int) -> Iterator[int]:
        hash64, _ = hashing.murmur3_128(data)
        hash1 = _int32(hash64)
        hash2 = _int32(hash64 >> 32)

        for i in range(num_hash_functions):
            combined = _int32(hash1 + i * hash2)
            if combined < 0:
                combined = ~combined
            yield combined % num_bits


class Murmur128Mitz64(_MurmurStrategy):
    """Guava's MURMUR128_MITZ_64, the default strategy.

    Uses both 64-bit halves with 64-bit wraparound. The sign bit is masked
    off each combined hash before taking the modulus.
    """

    ordinal = 1
    name = "MURMUR128_MITZ_64"

    def indexes(self, data: bytes, num_hash_functions: int, num_bits: int) -> Iterator[int]:
        hash1, hash2 = hashing.murmur3_128(data)

        combined = hash1
        for _ in range(num_hash_functions):
            yield (combined & MASK_63) % num_bits
            combined = (combined + hash2) & MASK_64


MURMUR128_MITZ_32 = Murmur128Mitz32()
MURMUR128_MITZ_64 = Murmur128Mitz64()
DEFAULT_STRATEGY = MURMUR128_MITZ_64

# Keyed by the ordinal written to the serialized form
STRATEGIES = MappingProxyType({
    MURMUR128_MITZ_32.ordinal: MURMUR128_MITZ_32,
    MURMUR128_MITZ_64.ordinal: MURMUR128_MITZ_64,
})

_ALIASES = MappingProxyType({
    "murmur128_mitz_32": MURMUR128_MITZ_32,
    "mitz32": MURMUR128_MITZ_32,
    "murmur128_mitz_64": MURMUR128_MITZ_64,
    "mitz64": MURMUR128_MITZ_64,
})


def strategy_from_ordinal(ordinal: int) -> _MurmurStrategy:
    """Return the strategy stored under ordinal.

    Raises:
        KeyError: If no strategy has that ordinal.
    """
    return STRATEGIES[ordinal]


def resolve_strategy(value: int | str | _MurmurStrategy) -> _MurmurStrategy:
    """Accept a strategy instance, ordinal or name (case-insensitive).

    Raises:
        InvalidParameterError: If value names no known strategy.
    """
    if isinstance(value, _MurmurStrategy):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if value in STRATEGIES:
            return STRATEGIES[value]
    elif isinstance(value, str):
        strategy = _ALIASES.get(value.strip().lower())
        if strategy is not None:
            return strategy
    raise InvalidParameterError(f"Unknown hash strategy: {value!r}")
