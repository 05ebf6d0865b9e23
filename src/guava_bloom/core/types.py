"""Common type definitions and wire-format constants.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from typing import Any

# Anything accepted by put()/might_contain(); unsupported kinds are soft failures
Key = Any
HashPair = tuple[int, int]
Buffer = bytes | bytearray | memoryview

BLOCK_BITS = 64
BLOCK_BYTES = 8

# Wire format: [strategy(1B)][num_hash_functions(1B)][block_count(4B)][blocks(8B each)]
HEADER_FORMAT = ">BBI"
HEADER_SIZE = 6
BLOCK_FORMAT = ">Q"

MAX_HASH_FUNCTIONS = 0xFF
MAX_BLOCKS = 0xFFFFFFFF

MASK_32 = 0xFFFFFFFF
MASK_63 = 0x7FFFFFFFFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF
