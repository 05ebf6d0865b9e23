"""Unit tests for the serialized filter format."""

import io
import struct

import pytest

from guava_bloom.components import codec
from guava_bloom.components.bitvector import SimpleBitVector
from guava_bloom.components.strategy import MURMUR128_MITZ_32, MURMUR128_MITZ_64
from guava_bloom.core.errors import DeserializationError


def _blob(ordinal, k, blocks, block_count=None):
    """Hand-build a serialized filter."""
    if block_count is None:
        block_count = len(blocks)
    return struct.pack(">BBI", ordinal, k, block_count) + b"".join(
        struct.pack(">Q", block) for block in blocks
    )


def test_encode_layout():
    """Header is ordinal, k, block count; blocks follow big-endian."""
    bits = SimpleBitVector(128)
    bits.set(0)
    bits.set(63)
    bits.set(64 + 8)

    data = codec.encode(MURMUR128_MITZ_64, 7, bits)

    assert data[0] == 1
    assert data[1] == 7
    assert data[2:6] == b"\x00\x00\x00\x02"
    # index 63 is the top bit of the first word, index 0 the bottom
    assert data[6:14] == bytes.fromhex("8000000000000001")
    assert data[14:22] == bytes.fromhex("0000000000000100")
    assert len(data) == 6 + 2 * 8


def test_encode_empty_filter():
    """An empty filter serializes to a header and zero blocks."""
    data = codec.encode(MURMUR128_MITZ_32, 3, SimpleBitVector(64))
    assert data == b"\x00\x03\x00\x00\x00\x01" + b"\x00" * 8


def test_encode_rejects_unrepresentable_hash_count():
    """k must fit in one unsigned byte."""
    with pytest.raises(ValueError, match="one byte"):
        codec.encode(MURMUR128_MITZ_64, 256, SimpleBitVector(64))


def test_decode_layout():
    """Word bit (63 - j) of block b is filter bit b*64 + j."""
    data = _blob(0, 5, [0x8000000000000001, 0x0000000000000100])

    strategy, k, bits = codec.decode(data)

    assert strategy is MURMUR128_MITZ_32
    assert k == 5
    assert bits.capacity == 128
    assert bits.get(0)
    assert bits.get(63)
    assert bits.get(72)
    assert bits.bit_count() == 3


def test_decode_encode_identity():
    """Decoding then encoding reproduces the input exactly."""
    data = _blob(1, 11, [0x0123456789ABCDEF, 0xFEDCBA9876543210, 0, 0xFFFFFFFFFFFFFFFF])
    strategy, k, bits = codec.decode(data)
    assert codec.encode(strategy, k, bits) == data


def test_decode_accepts_bytearray_and_memoryview():
    """Any bytes-like buffer can be decoded."""
    data = _blob(1, 2, [1])
    assert codec.decode(bytearray(data))[2].get(0)
    assert codec.decode(memoryview(data))[2].get(0)


@pytest.mark.parametrize(
    "garbage",
    [
        b"this-is-a-line-of-garbage",
        b"",
        bytes([0]),
        bytes([0, 1]),
        bytes([0, 1, 2]),
        bytes([0, 1, 2, 3, 4, 5]),
    ],
)
def test_decode_rejects_garbage(garbage):
    """Short or unrelated input never yields a filter."""
    with pytest.raises(DeserializationError):
        codec.decode(garbage)


def test_decode_unknown_strategy():
    """Ordinals other than 0 and 1 are rejected."""
    with pytest.raises(DeserializationError, match="Unknown strategy ordinal: 2"):
        codec.decode(_blob(2, 3, [0]))


def test_decode_zero_hash_functions():
    """A filter needs at least one hash function."""
    with pytest.raises(DeserializationError, match="hash functions"):
        codec.decode(_blob(1, 0, [0]))


def test_decode_zero_blocks():
    """A filter needs at least one block."""
    with pytest.raises(DeserializationError, match="Block count"):
        codec.decode(_blob(1, 3, []))


def test_decode_truncated_blocks():
    """Fewer block bytes than the header promises is an error."""
    data = _blob(1, 3, [1, 2])
    with pytest.raises(DeserializationError, match="Failed to read bit blocks"):
        codec.decode(data[:-1])
    with pytest.raises(DeserializationError):
        codec.decode(_blob(1, 3, [1], block_count=2))


def test_decode_huge_block_count_fails_fast():
    """A corrupt block count is caught before allocating."""
    with pytest.raises(DeserializationError, match="expected"):
        codec.decode(_blob(1, 3, [1], block_count=0xFFFFFFFF))


def test_decode_rejects_trailing_bytes():
    """from-bytes decoding requires exactly one filter."""
    with pytest.raises(DeserializationError, match="trailing"):
        codec.decode(_blob(1, 3, [1]) + b"\x00")


def test_read_from_stream_leaves_rest():
    """Stream reads consume one filter and leave what follows."""
    stream = io.BytesIO(_blob(1, 3, [5, 6]) + b"tail")
    strategy, k, bits = codec.read(stream)
    assert strategy is MURMUR128_MITZ_64
    assert k == 3
    assert list(bits.blocks()) == [5, 6]
    assert stream.read() == b"tail"


@pytest.mark.parametrize("cut", [0, 1, 2, 5, 6, 13])
def test_read_truncated_stream(cut):
    """A stream ending inside any field is an error."""
    data = _blob(1, 3, [5, 6])
    with pytest.raises(DeserializationError):
        codec.read(io.BytesIO(data[:cut]))
