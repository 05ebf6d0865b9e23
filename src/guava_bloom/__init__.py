"""guava-bloom - Bloom filters that read and write Guava's serialized format."""

from .components.keys import Int32, Int64, UInt32, UInt64, key_to_bytes
from .components.sizing import optimal_num_of_bits, optimal_num_of_hash_functions
from .components.strategy import (
    MURMUR128_MITZ_32,
    MURMUR128_MITZ_64,
    STRATEGIES,
    Murmur128Mitz32,
    Murmur128Mitz64,
)
from .core.config import BloomConfig
from .core.errors import (
    BloomFilterError,
    DeserializationError,
    IncompatibleFilterError,
    InvalidParameterError,
    UnsupportedKeyError,
)
from .core.filter import BloomFilter

__version__ = "0.1.0"

__all__ = [
    "BloomFilter",
    "BloomConfig",
    "BloomFilterError",
    "InvalidParameterError",
    "DeserializationError",
    "UnsupportedKeyError",
    "IncompatibleFilterError",
    "Murmur128Mitz32",
    "Murmur128Mitz64",
    "MURMUR128_MITZ_32",
    "MURMUR128_MITZ_64",
    "STRATEGIES",
    "Int32",
    "UInt32",
    "Int64",
    "UInt64",
    "key_to_bytes",
    "optimal_num_of_bits",
    "optimal_num_of_hash_functions",
]
