"""Integer coordinate hashing shared by all noise fields."""

from __future__ import annotations

import numpy as np

_U64_MASK = (1 << 64) - 1

_SHIFT_MASK = np.uint64(63)
_S7 = np.uint64(7)
_S13 = np.uint64(13)
_S17 = np.uint64(17)


def to_c_int(values: np.ndarray) -> np.ndarray:
    """Wrap integer values to signed 32-bit two's complement."""

    wide = np.asarray(values, dtype=np.int64)
    return ((wide + (1 << 31)) & 0xFFFFFFFF) - (1 << 31)


def as_uint64(values: np.ndarray) -> np.ndarray:
    """Reinterpret signed integers as unsigned 64-bit (sign extension)."""

    return np.asarray(values, dtype=np.int64).view(np.uint64)


def mix_hash(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Scramble two unsigned 64-bit coordinate arrays into one hash array.

    Each step is `a ^= (b << (k + y)) << k` with the variable shift count
    reduced modulo 64 and all arithmetic wrapping at 2**64.
    """

    x = np.array(x, dtype=np.uint64, copy=True)
    y = np.array(y, dtype=np.uint64, copy=True)

    x ^= (x << ((_S13 + y) & _SHIFT_MASK)) << _S13
    y ^= (x >> ((_S7 + y) & _SHIFT_MASK)) >> _S7
    x ^= (x << ((_S17 + y) & _SHIFT_MASK)) << _S17
    y ^= (x << ((_S13 + y) & _SHIFT_MASK)) << _S13
    x ^= (x >> ((_S7 + y) & _SHIFT_MASK)) >> _S7
    y ^= (x << ((_S17 + y) & _SHIFT_MASK)) << _S17
    return x


def hash64(x: int, y: int) -> int:
    """Scalar reference of `mix_hash` over Python integers."""

    x &= _U64_MASK
    y &= _U64_MASK

    x ^= ((x << ((13 + y) & 63)) << 13) & _U64_MASK
    y ^= (x >> ((7 + y) & 63)) >> 7
    x ^= ((x << ((17 + y) & 63)) << 17) & _U64_MASK
    y ^= ((x << ((13 + y) & 63)) << 13) & _U64_MASK
    x ^= (x >> ((7 + y) & 63)) >> 7
    y ^= ((x << ((17 + y) & 63)) << 17) & _U64_MASK
    return x
