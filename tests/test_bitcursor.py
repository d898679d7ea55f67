import pytest

from bitstream.codecs.bitcursor import BitCursor
from bitstream.core.buffer import BitBuffer, OutOfRangeError

def _buf(*ints):
    b = BitBuffer()
    for value, width in ints:
        b.append_int(value, width)
    return b

def test_new_reader_binds_cursor():
    b = _buf((0b101, 3))
    cur = b.new_reader()
    assert isinstance(cur, BitCursor)
    assert cur.buf is b and cur.tell() == 0 and cur.remaining() == 3

def test_bits_msb_first_across_bytes():
    cur = BitCursor(_buf((0x5, 4), (0x3FF, 10), (0x2A, 6)))
    assert cur.bits(4) == 0x5
    assert cur.bits(10) == 0x3FF
    assert cur.bits(6) == 0x2A
    assert cur.remaining() == 0

def test_bit_and_peek():
    cur = BitCursor(_buf((0b10, 2)))
    assert cur.peek() is True
    assert cur.tell() == 0
    assert cur.bit() is True
    assert cur.bit() is False
    with pytest.raises(OutOfRangeError):
        cur.bit()
    with pytest.raises(OutOfRangeError):
        cur.peek()

def test_bits_underrun_keeps_position():
    cur = BitCursor(_buf((0xF, 4)))
    cur.skip(1)
    with pytest.raises(OutOfRangeError):
        cur.bits(4)
    assert cur.tell() == 1
    assert cur.bits(3) == 0b111

def test_bits_width_limits():
    cur = BitCursor(_buf((0, 32), (0, 8)))
    with pytest.raises(ValueError):
        cur.bits(0)
    with pytest.raises(ValueError):
        cur.bits(33)
    assert cur.bits(32) == 0

def test_seek_bounds():
    cur = BitCursor(_buf((0b1100, 4)))
    cur.seek(4)
    assert cur.remaining() == 0
    cur.seek(2)
    assert cur.bits(2) == 0
    with pytest.raises(ValueError):
        cur.seek(5)
    with pytest.raises(ValueError):
        cur.seek(-1)

def test_take_run():
    b = BitBuffer()
    b.append_run(1, 5)
    b.append_bit(0)
    b.append_run(0, 2)
    cur = b.new_reader()
    assert cur.take_run(1) == 5
    assert cur.take_run(1) == 0
    assert cur.take_run(0) == 3
    assert cur.remaining() == 0

def test_cursor_sees_later_appends():
    b = _buf((1, 1))
    cur = b.new_reader()
    assert cur.bit() is True
    assert cur.remaining() == 0
    b.append_int(0b01, 2)
    assert cur.bits(2) == 0b01
