"""Key to byte conversion.

Integers are encoded little-endian, which is how Guava's
Funnels.integerFunnel() and Funnels.longFunnel() feed the murmur3 hasher,
so a Java filter of Integer keys answers the same Python ints.

Plain ints pick the narrowest width that holds them (4 bytes, then 8). Use
the Int32/UInt32/Int64/UInt64 wrappers to force a width, e.g. Int64(7) to
match a Java filter of Long keys. Unsupported keys encode to None; empty
strings and byte strings are valid keys and encode to b"".
"""

from __future__ import annotations

import struct
from functools import singledispatch

from ..core.types import Key

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1


class _FixedWidthInt(int):
    """int subclass that range-checks on construction."""

    minimum = 0
    maximum = 0

    def __new__(cls, value: int):
        if not cls.minimum <= value <= cls.maximum:
            raise ValueError(
                f"{value} out of range for {cls.__name__} "
                f"[{cls.minimum}, {cls.maximum}]"
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int32(_FixedWidthInt):
    minimum, maximum = INT32_MIN, INT32_MAX


class UInt32(_FixedWidthInt):
    minimum, maximum = 0, UINT32_MAX


class Int64(_FixedWidthInt):
    minimum, maximum = INT64_MIN, INT64_MAX


class UInt64(_FixedWidthInt):
    minimum, maximum = 0, UINT64_MAX


@singledispatch
def key_to_bytes(key: Key) -> bytes | None:
    """Return the byte form of key, or None if the key type is unsupported."""
    return None


@key_to_bytes.register
def _(key: bool) -> None:
    # bool is an int subclass but has no Guava funnel counterpart
    return None


@key_to_bytes.register
def _(key: int) -> bytes | None:
    if INT32_MIN <= key <= INT32_MAX:
        return struct.pack("<i", key)
    if INT64_MIN <= key <= INT64_MAX:
        return struct.pack("<q", key)
    if 0 <= key <= UINT64_MAX:
        return struct.pack("<Q", key)
    return None


@key_to_bytes.register
def _(key: Int32) -> bytes:
    return struct.pack("<i", key)


@key_to_bytes.register
def _(key: UInt32) -> bytes:
    return struct.pack("<I", key)


@key_to_bytes.register
def _(key: Int64) -> bytes:
    return struct.pack("<q", key)


@key_to_bytes.register
def _(key: UInt64) -> bytes:
    return struct.pack("<Q", key)


@key_to_bytes.register
def _(key: str) -> bytes:
    return key.encode("utf-8")


@key_to_bytes.register(bytes)
@key_to_bytes.register(bytearray)
@key_to_bytes.register(memoryview)
def _(key) -> bytes:
    return bytes(key)
