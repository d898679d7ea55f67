import pytest

from bitstream.codecs.field_plan import BitField, FieldPlanError, decode_fields, encode_fields, plan_width
from bitstream.core.buffer import BitBuffer, OutOfRangeError

HEADER_PLAN = (
    BitField("version", 3),
    BitField("flags", 5),
    BitField("length", 12),
    BitField("checksum", 32),
)

def test_plan_width():
    assert plan_width(HEADER_PLAN) == 52
    assert plan_width(()) == 0

def test_encode_then_decode_header():
    values = {"version": 5, "flags": 0b10011, "length": 1500, "checksum": 0xDEADBEEF}
    buf = BitBuffer()
    encode_fields(buf, HEADER_PLAN, values)
    assert buf.bit_count == 52
    assert bytes(buf)[0] == 0b101_10011
    cur = buf.new_reader()
    assert decode_fields(cur, HEADER_PLAN) == values
    assert cur.remaining() == 0

def test_bad_values_leave_buffer_untouched():
    buf = BitBuffer()
    buf.append_bit(1)
    with pytest.raises(FieldPlanError):
        encode_fields(buf, HEADER_PLAN, {"version": 8, "flags": 0, "length": 0, "checksum": 0})
    with pytest.raises(FieldPlanError):
        encode_fields(buf, HEADER_PLAN, {"version": 1, "flags": 0, "length": 0})
    with pytest.raises(ValueError):
        encode_fields(buf, HEADER_PLAN, {"version": 1, "flags": -1, "length": 0, "checksum": 0})
    with pytest.raises(FieldPlanError):
        encode_fields(buf, HEADER_PLAN, {"version": 1, "flags": 2.0, "length": 0, "checksum": 0})
    assert buf.bits_as_string() == "1"

@pytest.mark.parametrize("width", [0, 33])
def test_field_width_validated(width):
    with pytest.raises(FieldPlanError):
        BitField("x", width)

def test_decode_underrun_does_not_advance():
    buf = BitBuffer()
    buf.append_int(0xABC, 12)
    cur = buf.new_reader()
    with pytest.raises(OutOfRangeError):
        decode_fields(cur, HEADER_PLAN)
    assert cur.tell() == 0

def test_encode_onto_live_view_commits_nothing():
    buf = BitBuffer()
    buf.append_bit(1)
    with buf.to_bytes():
        with pytest.raises(BufferError):
            encode_fields(buf, (BitField("a", 4), BitField("b", 4)), {"a": 1, "b": 2})
    assert buf.bits_as_string() == "1"
