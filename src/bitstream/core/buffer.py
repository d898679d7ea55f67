from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING

from .addressing import bit_mask, bytes_for_bits, position_to_byte_index

if TYPE_CHECKING:
    from ..codecs.bitcursor import BitCursor

log = logging.getLogger(__name__)

INT_WIDTH = 32  # widest field accepted by append_int


class OutOfRangeError(IndexError):
    pass


class BitBuffer:
    """
    Growable MSB-first bit sequence backed by a bytearray.

    ``bit_count`` is the number of appended bits. Storage grows by zero
    bytes only as far as needed, so it always holds ``ceil(bit_count / 8)`` bytes (one
    placeholder byte before the first append) and every pad bit past
    ``bit_count`` is zero.
    """

    __slots__ = ("_storage", "_bit_count")

    def __init__(self):
        self._storage = bytearray(1)
        self._bit_count = 0

    @property
    def bit_count(self) -> int:
        return self._bit_count

    def _reserve(self, n: int) -> None:
        # grow for n more bits before any is written
        need = bytes_for_bits(self._bit_count + n) - len(self._storage)
        if need > 0:
            self._storage.extend(bytes(need))

    # append family: append_bit is the only primitive that sets bits
    def append_bit(self, bit) -> None:
        pos = self._bit_count
        idx = position_to_byte_index(pos)
        while idx >= len(self._storage):
            self._storage.append(0)
        if bit:
            self._storage[idx] |= bit_mask(pos)
        else:
            self._storage[idx] &= ~bit_mask(pos) & 0xFF
        self._bit_count = pos + 1

    def append_bits(self, *bits) -> None:
        self._reserve(len(bits))
        for bit in bits:
            self.append_bit(bit)

    def append_run(self, bit, n: int) -> None:
        if n < 0:
            raise ValueError(f"run length must be >= 0, got {n}")
        self._reserve(n)
        for _ in range(n):
            self.append_bit(bit)

    def append_int(self, value: int, width: int) -> None:
        """Append the low ``width`` bits of ``value``, MSB first."""
        value = operator.index(value)
        width = operator.index(width)
        if not (0 <= width <= INT_WIDTH):
            raise ValueError(f"width must be 0..{INT_WIDTH}, got {width}")
        if value < 0:
            raise ValueError(f"value must be unsigned, got {value}")
        self._reserve(width)
        for i in range(width):
            self.append_bit((value >> (width - i - 1)) & 1)

    def concat(self, other: BitBuffer) -> None:
        """Append every bit of ``other``; nothing is committed if a read or growth fails."""
        pending = [other.read_bit_at(i) for i in range(other.bit_count)]
        log.debug("concat: %d + %d bits", self.bit_count, len(pending))
        self._reserve(len(pending))
        for bit in pending:
            self.append_bit(bit)

    # inspection
    def read_bit_at(self, position: int) -> bool:
        position = operator.index(position)
        if not (0 <= position < self.bit_count):
            raise OutOfRangeError(
                f"bit position {position} out of range (bit_count={self.bit_count})"
            )
        return bool(self._storage[position_to_byte_index(position)] & bit_mask(position))

    def to_bytes(self) -> memoryview:
        """
        Read-only view of the ``ceil(bit_count / 8)`` packed bytes.

        The view aliases internal storage: it reflects later in-place writes
        and, while alive, blocks any append that needs a new byte
        (``BufferError``). Release it before mutating; use ``bytes(buf)``
        for an owned copy.
        """
        return memoryview(self._storage)[: bytes_for_bits(self.bit_count)].toreadonly()

    def bits_as_string(self) -> str:
        return "".join("1" if self.read_bit_at(i) else "0" for i in range(self.bit_count))

    def describe(self) -> str:
        if self.bit_count == 0:
            return "<empty>"
        return f"{self.bits_as_string()} ({self.bit_count})"

    # derivation
    def clone(self) -> BitBuffer:
        other = BitBuffer.__new__(BitBuffer)
        other._storage = bytearray(self._storage)
        other._bit_count = self._bit_count
        return other

    def new_reader(self) -> BitCursor:
        from ..codecs.bitcursor import BitCursor
        return BitCursor(self)

    def __len__(self) -> int: return self.bit_count
    def __str__(self) -> str: return self.describe()
    def __bytes__(self) -> bytes: return bytes(self._storage[: bytes_for_bits(self.bit_count)])
    def __copy__(self) -> BitBuffer: return self.clone()
    def __deepcopy__(self, memo) -> BitBuffer: return self.clone()

    def __repr__(self) -> str:
        return f"BitBuffer(bit_count={self.bit_count}, bytes={bytes(self).hex()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return self.bit_count == other.bit_count and bytes(self) == bytes(other)

    __hash__ = None
