"""128-bit MurmurHash3 primitive.

Wraps mmh3's x64 128-bit variant so callers get the two 64-bit halves that
Guava's Hashing.murmur3_128() produces for the same bytes (seed 0).
"""

from __future__ import annotations

import mmh3

from ..core.types import Buffer, HashPair


def murmur3_128(data: Buffer, seed: int = 0) -> HashPair:
    """Return (h1, h2), the low and high unsigned 64-bit halves of the hash."""
    h1, h2 = mmh3.hash64(bytes(data), seed, x64arch=True, signed=False)
    return h1, h2
