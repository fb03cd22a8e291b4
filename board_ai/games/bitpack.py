"""
Fixed-width packed unsigned integer storage.

Element i occupies bits [i*width, (i+1)*width) counted from the most
significant bit of byte 0. Widths that do not divide 8 (3, 5, 6, 7) let an
element straddle two bytes; its high bits then sit at the bottom of the
first byte and its low bits at the top of the next.
"""

from typing import Iterator

import numpy as np

from board_ai.config import BITPACK_MAX_WIDTH


class BitPack:
    """
    Array of ``length`` unsigned integers of ``width`` bits each.

    Values written with set() are masked to ``width`` bits.
    """

    __slots__ = ("width", "length", "_mask", "_bits")

    def __init__(self, width: int, length: int):
        if not 0 < width <= BITPACK_MAX_WIDTH:
            raise ValueError(f"width must be in [1, {BITPACK_MAX_WIDTH}], got {width}")
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        self.width = width
        self.length = length
        self._mask = (1 << width) - 1
        self._bits = bytearray((width * length + 7) // 8)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.length:
            raise IndexError(f"BitPack index {index} out of range [0, {self.length})")

    def get(self, index: int) -> int:
        self._check_index(index)
        width = self.width
        byte, bit = divmod(index * width, 8)
        if bit + width <= 8:
            return (self._bits[byte] >> (8 - width - bit)) & self._mask
        low_bits = width - (8 - bit)
        high = (self._bits[byte] & (self._mask >> low_bits)) << low_bits
        return high | (self._bits[byte + 1] >> (8 - low_bits))

    def set(self, index: int, value: int) -> None:
        self._check_index(index)
        width = self.width
        mask = self._mask
        value &= mask
        bits = self._bits
        byte, bit = divmod(index * width, 8)
        if bit + width <= 8:
            shift = 8 - width - bit
            bits[byte] = (bits[byte] & ~(mask << shift) & 0xFF) | (value << shift)
            return
        low_bits = width - (8 - bit)
        low_mask = (1 << low_bits) - 1
        shift = 8 - low_bits
        bits[byte] = (bits[byte] & ~(mask >> low_bits) & 0xFF) | (value >> low_bits)
        bits[byte + 1] = (bits[byte + 1] & ~(low_mask << shift) & 0xFF) | ((value & low_mask) << shift)

    def clear(self) -> None:
        """Reset every element to zero."""
        self._bits = bytearray(len(self._bits))

    def copy(self) -> "BitPack":
        new = BitPack.__new__(BitPack)
        new.width = self.width
        new.length = self.length
        new._mask = self._mask
        new._bits = bytearray(self._bits)
        return new

    def to_numpy(self) -> np.ndarray:
        """Unpacked element values as a uint8 array."""
        return np.fromiter((self.get(i) for i in range(self.length)), dtype=np.uint8, count=self.length)

    @property
    def nbytes(self) -> int:
        return len(self._bits)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        return (self.get(i) for i in range(self.length))

    def __eq__(self, other):
        if not isinstance(other, BitPack):
            return NotImplemented
        return self.width == other.width and self.length == other.length and self._bits == other._bits

    def __repr__(self):
        return f"BitPack(width={self.width}, length={self.length})"
