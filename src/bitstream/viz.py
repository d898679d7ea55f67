from __future__ import annotations
from .core.buffer import BitBuffer

PAD = 0.5  # cells past bit_count in the last row


def bit_rows(buf: BitBuffer, row_width: int = 8) -> list[list[float]]:
    if row_width <= 0:
        raise ValueError(f"row_width must be > 0, got {row_width}")
    cells = [float(buf.read_bit_at(i)) for i in range(buf.bit_count)]
    if len(cells) % row_width:
        cells += [PAD] * (row_width - len(cells) % row_width)
    return [cells[i:i + row_width] for i in range(0, len(cells), row_width)]


def plot_bits(buf: BitBuffer, row_width: int = 8, *, show: bool = False):
    """Raster of the bit sequence, one row per ``row_width`` bits."""
    import matplotlib.pyplot as plt
    rows = bit_rows(buf, row_width) or [[PAD] * row_width]
    fig, ax = plt.subplots()
    ax.imshow(rows, cmap="gray_r", vmin=0.0, vmax=1.0, interpolation="nearest", aspect="equal")
    ax.set_xlabel("bit in row")
    ax.set_ylabel(f"row ({row_width} bits)")
    ax.set_title(f"{buf.bit_count} bits")
    if show:
        plt.show()
    return fig
