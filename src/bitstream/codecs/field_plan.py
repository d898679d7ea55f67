from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from ..core.buffer import INT_WIDTH, BitBuffer, OutOfRangeError
from .bitcursor import BitCursor

log = logging.getLogger(__name__)


class FieldPlanError(ValueError):
    pass


@dataclass(frozen=True)
class BitField:
    name: str
    width: int  # 1..INT_WIDTH, MSB-first on the wire

    def __post_init__(self):
        if not (0 < self.width <= INT_WIDTH):
            raise FieldPlanError(f"{self.name}: width must be 1..{INT_WIDTH}, got {self.width}")


def plan_width(plan: Sequence[BitField]) -> int:
    return sum(f.width for f in plan)


def encode_fields(buf: BitBuffer, plan: Sequence[BitField], values: Mapping[str, int]) -> None:
    """
    Append each field of ``plan`` in order. All values are checked first,
    so a bad value leaves ``buf`` untouched.
    """
    for fld in plan:
        if fld.name not in values:
            raise FieldPlanError(f"missing value for field {fld.name!r}")
        try:
            v = operator.index(values[fld.name])
        except TypeError as e:
            raise FieldPlanError(f"{fld.name}: {values[fld.name]!r} is not an integer") from e
        if not (0 <= v < (1 << fld.width)):
            raise FieldPlanError(f"{fld.name}: {v} does not fit in {fld.width} bits")

    start = buf.bit_count
    staged = BitBuffer()
    for fld in plan:
        staged.append_int(values[fld.name], fld.width)
    buf.concat(staged)
    log.debug("encoded %d fields (%d bits) at bit %d", len(plan), buf.bit_count - start, start)


def decode_fields(cur: BitCursor, plan: Sequence[BitField]) -> Dict[str, int]:
    """Read ``plan`` from the cursor; leaves it positioned after the last field."""
    need = plan_width(plan)
    if need > cur.remaining():
        raise OutOfRangeError(f"plan needs {need} bits at {cur.tell()}, have {cur.remaining()}")
    start = cur.tell()
    out: Dict[str, int] = {}
    for fld in plan:
        out[fld.name] = cur.bits(fld.width)
    log.debug("decoded %d fields from bit %d", len(plan), start)
    return out
