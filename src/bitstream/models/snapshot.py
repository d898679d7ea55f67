from __future__ import annotations
from pydantic import BaseModel, Field, model_validator

from ..core.buffer import BitBuffer


class BitSnapshot(BaseModel):
    bit_count: int = Field(..., ge=0)
    bits: str = Field(..., pattern=r"^[01]*$")
    hex: str = Field(..., pattern=r"^([0-9a-f]{2})*$")

    @model_validator(mode="after")
    def _lengths_agree(self) -> "BitSnapshot":
        if len(self.bits) != self.bit_count:
            raise ValueError(f"bits has {len(self.bits)} chars, bit_count is {self.bit_count}")
        if len(self.hex) != 2 * ((self.bit_count + 7) // 8):
            raise ValueError("hex length does not cover bit_count")
        return self

    @classmethod
    def from_buffer(cls, buf: BitBuffer) -> "BitSnapshot":
        with buf.to_bytes() as view:
            packed = view.hex()
        return cls(bit_count=buf.bit_count, bits=buf.bits_as_string(), hex=packed)
