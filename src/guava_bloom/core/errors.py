"""Exception hierarchy for guava-bloom.

Defines all custom exceptions raised by the filter and its codec.
"""

from __future__ import annotations


class BloomFilterError(Exception):
    """Base exception for all Bloom filter errors."""
    pass


class InvalidParameterError(BloomFilterError):
    """Raised when sizing parameters are out of range."""
    pass


class DeserializationError(BloomFilterError):
    """Raised when serialized filter bytes are truncated or malformed."""
    pass


class UnsupportedKeyError(BloomFilterError):
    """Raised in strict mode when a key cannot be converted to bytes."""
    pass


class IncompatibleFilterError(BloomFilterError):
    """Raised when combining filters of different shape or strategy."""
    pass
