"""Bloom filter implementation - main public API.

Orchestrates sizing, key conversion, hash strategies and the codec.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import BinaryIO

from ..components import codec
from ..components.bitvector import SimpleBitVector
from ..components.keys import key_to_bytes
from ..components.sizing import compute_sizing
from ..components.strategy import DEFAULT_STRATEGY, resolve_strategy
from ..interfaces.strategy import HashStrategy
from .config import BloomConfig
from .errors import IncompatibleFilterError, UnsupportedKeyError
from .types import Buffer, Key

logger = logging.getLogger(__name__)


class BloomFilter:
    """Probabilistic set membership, serializable in Guava's format.

    Build one with create() or from_config(), or load one with from_bytes()
    or read_from().

    Public API:
        - put(key): Add a key, returning True if any bit changed
        - might_contain(key) / key in bf: Membership test
        - to_bytes() / write_to(stream): Serialize
        - put_all(other): Union with a compatible filter

    Supported keys are ints, str, bytes-like objects and the Int32/UInt32/
    Int64/UInt64 wrappers. Any other key (including bool, floats and ints
    beyond 64 bits) cannot be hashed: put() and might_contain() log a
    warning and return False, so an unsupported key is never reported
    present. Pass strict_keys=True to raise UnsupportedKeyError instead.
    Empty strings and empty byte strings are ordinary keys: they hash to
    the murmur3 digest of zero bytes, as in Guava, and put("") sets bits.

    Invariants:
        - False negatives are not possible
        - Bit capacity, hash function count and strategy are fixed at creation
        - Not safe for concurrent mutation; callers must lock around put()
    """

    def __init__(
        self,
        num_hash_functions: int,
        bits: SimpleBitVector,
        strategy: HashStrategy = DEFAULT_STRATEGY,
        strict_keys: bool = False,
    ):
        self._num_hash_functions = num_hash_functions
        self._bits = bits
        self._strategy = strategy
        self.strict_keys = strict_keys

    @classmethod
    def create(
        cls,
        expected_insertions: int,
        error_rate: float = 0.03,
        strategy: int | str | HashStrategy = DEFAULT_STRATEGY,
        strict_keys: bool = False,
    ) -> BloomFilter:
        """Create an empty filter sized for the given capacity and error rate.

        Args:
            expected_insertions: Number of keys expected (0 is treated as 1)
            error_rate: Target false-positive rate, 0 < error_rate < 1
            strategy: Strategy instance, name or ordinal; MURMUR128_MITZ_64 by default
            strict_keys: Raise on unsupported keys instead of returning False

        Raises:
            InvalidParameterError: If a parameter is out of range.
        """
        strategy = resolve_strategy(strategy)
        capacity, num_hash_functions = compute_sizing(expected_insertions, error_rate)
        bf = cls(num_hash_functions, SimpleBitVector(capacity), strategy, strict_keys)
        logger.info(
            f"Created {strategy.name} filter for {expected_insertions} insertions "
            f"at fpp={error_rate}: {capacity} bits, {num_hash_functions} hash functions"
        )
        return bf

    @classmethod
    def from_config(cls, config: BloomConfig) -> BloomFilter:
        """Create an empty filter from a BloomConfig."""
        return cls.create(
            config.expected_insertions,
            config.error_rate,
            strategy=config.strategy,
            strict_keys=config.strict_keys,
        )

    @property
    def num_hash_functions(self) -> int:
        return self._num_hash_functions

    @property
    def bit_size(self) -> int:
        """Number of bits in the underlying array (a multiple of 64)."""
        return self._bits.capacity

    @property
    def strategy(self) -> HashStrategy:
        return self._strategy

    def _key_bytes(self, key: Key) -> bytes | None:
        data = key_to_bytes(key)
        if data is not None:
            return data
        if self.strict_keys:
            raise UnsupportedKeyError(f"Cannot convert {type(key).__name__} key {key!r} to bytes")
        logger.warning(f"Failed to convert {key!r} to bytes, ignoring key")
        return None

    def put(self, key: Key) -> bool:
        """Add key to the filter.

        Returns:
            True if at least one bit changed. A False result means either the
            key was unsupported or all of its bits were already set; it does
            not prove the key was inserted before.
        """
        data = self._key_bytes(key)
        if data is None:
            return False
        return self._strategy.put(data, self._num_hash_functions, self._bits)

    def might_contain(self, key: Key) -> bool:
        """Return True if key may be present; False if definitely absent."""
        data = self._key_bytes(key)
        if data is None:
            return False
        return self._strategy.might_contain(data, self._num_hash_functions, self._bits)

    def __contains__(self, key: Key) -> bool:
        return self.might_contain(key)

    def bit_count(self) -> int:
        """Number of bits currently set."""
        return self._bits.bit_count()

    def expected_fpp(self) -> float:
        """Probability that might_contain() wrongly returns True, given the current bits."""
        return (self.bit_count() / self.bit_size) ** self._num_hash_functions

    def approximate_element_count(self) -> int:
        """Estimate how many distinct keys have been put, from the set-bit ratio."""
        bit_size = self.bit_size
        bit_count = self.bit_count()
        if bit_count == bit_size:
            # log(0); every key reports present so the estimate is unbounded
            return bit_size
        estimate = -math.log1p(-bit_count / bit_size) * bit_size / self._num_hash_functions
        return int(Decimal(estimate).quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def is_compatible(self, other: BloomFilter) -> bool:
        """Return True if other can be merged into this filter with put_all()."""
        return (
            self is not other
            and isinstance(other, BloomFilter)
            and self._num_hash_functions == other._num_hash_functions
            and self.bit_size == other.bit_size
            and self._strategy.ordinal == other._strategy.ordinal
        )

    def put_all(self, other: BloomFilter) -> None:
        """Merge other into this filter in place (set union).

        Raises:
            IncompatibleFilterError: If the filters differ in size, hash
                function count or strategy, or other is this filter.
        """
        if not self.is_compatible(other):
            raise IncompatibleFilterError(
                f"Cannot combine {self!r} with {other!r}: filters must be distinct "
                f"and share bit size, hash function count and strategy"
            )
        self._bits.union_update(other._bits)

    def copy(self) -> BloomFilter:
        """Return an independent copy of this filter."""
        return BloomFilter(
            self._num_hash_functions, self._bits.copy(), self._strategy, self.strict_keys
        )

    def to_bytes(self) -> bytes:
        """Serialize to Guava's BloomFilter.writeTo() format."""
        return codec.encode(self._strategy, self._num_hash_functions, self._bits)

    def write_to(self, stream: BinaryIO) -> int:
        """Write the serialized filter to a binary stream; return bytes written."""
        data = self.to_bytes()
        stream.write(data)
        return len(data)

    @classmethod
    def from_bytes(cls, data: Buffer, strict_keys: bool = False) -> BloomFilter:
        """Deserialize a filter written by to_bytes() or by Guava.

        Raises:
            DeserializationError: If data is truncated, malformed or has
                trailing bytes.
        """
        strategy, num_hash_functions, bits = codec.decode(data)
        return cls(num_hash_functions, bits, strategy, strict_keys)

    @classmethod
    def read_from(cls, stream: BinaryIO, strict_keys: bool = False) -> BloomFilter:
        """Read one filter from a binary stream, leaving any following bytes unread.

        Raises:
            DeserializationError: If the stream is truncated or malformed.
        """
        strategy, num_hash_functions, bits = codec.read(stream)
        return cls(num_hash_functions, bits, strategy, strict_keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        return (
            self._num_hash_functions == other._num_hash_functions
            and self._strategy.ordinal == other._strategy.ordinal
            and self._bits == other._bits
        )

    def __repr__(self) -> str:
        return (
            f"BloomFilter(strategy={self._strategy.name}, "
            f"num_hash_functions={self._num_hash_functions}, bit_size={self.bit_size})"
        )
