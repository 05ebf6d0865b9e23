"""Binary codec for serialized filters.

Byte-compatible with Guava's BloomFilter.writeTo()/readFrom().
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO

from ..core.errors import DeserializationError
from ..core.types import (
    BLOCK_BITS,
    BLOCK_BYTES,
    BLOCK_FORMAT,
    HEADER_FORMAT,
    HEADER_SIZE,
    MAX_BLOCKS,
    MAX_HASH_FUNCTIONS,
    Buffer,
)
from ..interfaces.bitvector import BitVector
from ..interfaces.strategy import HashStrategy
from .bitvector import SimpleBitVector
from .strategy import strategy_from_ordinal

logger = logging.getLogger(__name__)

# Serialized format (big-endian, no magic or version):
# [strategy ordinal (1B)] [num_hash_functions (1B)] [block_count (4B)] [block (8B)] * block_count
# Bit j of block b (counting from the least significant bit) is filter bit b*64 + j.

Decoded = tuple[HashStrategy, int, SimpleBitVector]


def encode(strategy: HashStrategy, num_hash_functions: int, bits: BitVector) -> bytes:
    """Serialize filter state to bytes.

    Raises:
        ValueError: If a field does not fit its slot in the format.
    """
    block_count = bits.capacity // BLOCK_BITS
    if not 0 < num_hash_functions <= MAX_HASH_FUNCTIONS:
        raise ValueError(f"Hash function count {num_hash_functions} does not fit in one byte")
    if block_count > MAX_BLOCKS:
        raise ValueError(f"Block count {block_count} does not fit in 32 bits")

    header = struct.pack(HEADER_FORMAT, strategy.ordinal, num_hash_functions, block_count)
    body = struct.pack(f">{block_count}Q", *bits.blocks())
    logger.debug(f"Encoded filter: {block_count} blocks, {len(header) + len(body)} bytes")
    return header + body


def _parse_header(header: bytes) -> tuple[HashStrategy, int, int]:
    """Validate the fixed-size header fields that are present.

    Checks run field by field so a short header reports the first missing
    field.
    """
    if len(header) < 1:
        raise DeserializationError("Failed to read strategy: input is empty")
    ordinal = header[0]
    try:
        strategy = strategy_from_ordinal(ordinal)
    except KeyError:
        raise DeserializationError(f"Unknown strategy ordinal: {ordinal}") from None

    if len(header) < 2:
        raise DeserializationError("Failed to read number of hash functions: input truncated")
    num_hash_functions = header[1]
    if num_hash_functions == 0:
        raise DeserializationError("Number of hash functions must be >= 1")

    if len(header) < HEADER_SIZE:
        raise DeserializationError(
            f"Failed to read block count: need {HEADER_SIZE} header bytes, got {len(header)}"
        )
    _, _, block_count = struct.unpack(HEADER_FORMAT, header[:HEADER_SIZE])
    if block_count == 0:
        raise DeserializationError("Block count must be >= 1")

    return strategy, num_hash_functions, block_count


def decode(data: Buffer) -> Decoded:
    """Deserialize a complete filter from bytes.

    The input must hold exactly one filter; trailing bytes are rejected.

    Raises:
        DeserializationError: If the input is truncated or malformed.
    """
    data = bytes(data)
    strategy, num_hash_functions, block_count = _parse_header(data[:HEADER_SIZE])

    expected = HEADER_SIZE + block_count * BLOCK_BYTES
    if len(data) < expected:
        raise DeserializationError(
            f"Failed to read bit blocks: expected {expected} bytes, got {len(data)}"
        )
    if len(data) > expected:
        raise DeserializationError(
            f"Unexpected {len(data) - expected} trailing bytes after {block_count} blocks"
        )

    blocks = struct.unpack_from(f">{block_count}Q", data, HEADER_SIZE)
    bits = SimpleBitVector.from_blocks(blocks, block_count)
    logger.debug(f"Decoded {strategy.name} filter: k={num_hash_functions}, {block_count} blocks")
    return strategy, num_hash_functions, bits


def read(stream: BinaryIO) -> Decoded:
    """Read exactly one filter from a binary stream.

    Bytes after the filter are left unread.

    Raises:
        DeserializationError: If the stream ends early or holds a bad header.
    """
    header = stream.read(HEADER_SIZE)
    strategy, num_hash_functions, block_count = _parse_header(header)

    blocks = []
    for block_idx in range(block_count):
        block = stream.read(BLOCK_BYTES)
        if len(block) < BLOCK_BYTES:
            raise DeserializationError(
                f"Failed to read block {block_idx} of {block_count}: stream truncated"
            )
        blocks.append(struct.unpack(BLOCK_FORMAT, block)[0])

    bits = SimpleBitVector.from_blocks(blocks, block_count)
    logger.debug(f"Read {strategy.name} filter: k={num_hash_functions}, {block_count} blocks")
    return strategy, num_hash_functions, bits
