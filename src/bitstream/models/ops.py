from __future__ import annotations
from typing import Iterable, Literal, Union
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.buffer import INT_WIDTH, BitBuffer


class OpError(ValueError):
    pass


class BitOp(BaseModel):
    kind: Literal["bits"] = "bits"
    bits: str = Field(..., pattern=r"^[01]+$")

    def apply(self, buf: BitBuffer) -> None:
        buf.append_bits(*(c == "1" for c in self.bits))


class IntOp(BaseModel):
    kind: Literal["int"] = "int"
    value: int = Field(..., ge=0)
    width: int = Field(..., ge=0, le=INT_WIDTH)

    def apply(self, buf: BitBuffer) -> None:
        buf.append_int(self.value, self.width)


class RunOp(BaseModel):
    kind: Literal["run"] = "run"
    bit: bool
    count: int = Field(..., ge=0)

    @field_validator("bit", mode="before")
    @classmethod
    def _bit_digit(cls, v):
        if isinstance(v, str):
            if v not in ("0", "1"):
                raise ValueError(f"run bit must be 0 or 1, got {v!r}")
            return v == "1"
        return v

    def apply(self, buf: BitBuffer) -> None:
        buf.append_run(self.bit, self.count)


AppendOp = Union[BitOp, IntOp, RunOp]


def _int(text: str) -> int:
    # accepts 11, 0xB, 0b1011, 0o13
    return int(text, 0)


def parse_op(token: str) -> AppendOp:
    """
    Token grammar:
      bits:1011           append each digit
      int:VALUE:WIDTH     append low WIDTH bits of VALUE, MSB first
      run:BIT:COUNT       append BIT COUNT times
    """
    kind, _, rest = token.partition(":")
    parts = rest.split(":") if rest else []
    try:
        if kind == "bits" and len(parts) == 1:
            return BitOp(bits=parts[0])
        if kind == "int" and len(parts) == 2:
            return IntOp(value=_int(parts[0]), width=_int(parts[1]))
        if kind == "run" and len(parts) == 2:
            return RunOp(bit=parts[0], count=_int(parts[1]))
    except (ValidationError, ValueError) as e:
        raise OpError(f"bad token {token!r}: {e}") from e
    raise OpError(f"bad token {token!r}: expected bits:B..., int:VALUE:WIDTH or run:BIT:COUNT")


def build_buffer(tokens: Iterable[str]) -> BitBuffer:
    ops = [parse_op(t) for t in tokens]
    buf = BitBuffer()
    for op in ops:
        op.apply(buf)
    return buf
