from __future__ import annotations

BITS_PER_BYTE = 8

# Bit numbering: logical position 0 is the MSB of byte 0 (shift 7);
# position 7 is its LSB (shift 0); position 8 starts byte 1.


def _check(position: int) -> None:
    if position < 0:
        raise ValueError(f"negative bit position {position}")


def position_to_byte_index(position: int) -> int:
    """Index of the byte holding logical bit ``position``."""
    _check(position)
    return position // BITS_PER_BYTE


def position_to_bit_offset(position: int) -> int:
    """Shift of logical bit ``position`` inside its byte (7 = MSB)."""
    _check(position)
    return (BITS_PER_BYTE - 1) - (position % BITS_PER_BYTE)


def bit_mask(position: int) -> int:
    return 1 << position_to_bit_offset(position)


def bytes_for_bits(bit_count: int) -> int:
    """Minimum number of whole bytes covering ``bit_count`` bits."""
    if bit_count < 0:
        raise ValueError(f"negative bit count {bit_count}")
    return (bit_count + BITS_PER_BYTE - 1) // BITS_PER_BYTE
