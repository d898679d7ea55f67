from __future__ import annotations

import logging

from ..core.buffer import INT_WIDTH, BitBuffer, OutOfRangeError

log = logging.getLogger(__name__)


class BitCursor:
    """Sequential MSB-first reader over a BitBuffer.

    Only ``read_bit_at`` and ``bit_count`` of the buffer are used, so bits
    appended after the cursor was created become readable.
    """

    __slots__ = ("buf", "pos")

    def __init__(self, buf: BitBuffer):
        self.buf = buf
        self.pos = 0

    def remaining(self) -> int: return self.buf.bit_count - self.pos
    def tell(self) -> int: return self.pos

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= self.buf.bit_count): raise ValueError("seek out of bounds")
        log.debug("seek %d -> %d", self.pos, pos)
        self.pos = pos

    def skip(self, n: int) -> None: self.seek(self.pos + n)

    def peek(self) -> bool:
        return self.buf.read_bit_at(self.pos)

    def bit(self) -> bool:
        val = self.buf.read_bit_at(self.pos)
        self.pos += 1
        return val

    def bits(self, n: int) -> int:
        if not (0 < n <= INT_WIDTH): raise ValueError(f"bits 1..{INT_WIDTH}")
        if n > self.remaining():
            raise OutOfRangeError(f"bit underrun: need {n} at {self.pos}, have {self.remaining()}")
        val = 0
        for i in range(n):
            val = (val << 1) | self.buf.read_bit_at(self.pos + i)
        self.pos += n
        return val

    def take_run(self, bit) -> int:
        """Consume consecutive bits equal to ``bit``; return how many."""
        want = bool(bit)
        n = 0
        while self.pos < self.buf.bit_count and self.buf.read_bit_at(self.pos) == want:
            self.pos += 1
            n += 1
        return n
