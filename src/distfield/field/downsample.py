"""
Box downsampling of a normalized grid to a square output size.
"""

import numpy as np

from distfield.errors import OutputSizeError
from distfield.field.grid import Grid
from distfield.tracer import get_tracer, trace


def validate_output_size(width, height, out_size):
    """
    Check that ``out_size`` evenly divides both input dimensions.

    Returns the (x, y) block factors. Raises OutputSizeError otherwise.
    """
    if (
        isinstance(out_size, bool)
        or not isinstance(out_size, (int, np.integer))
        or out_size <= 0
        or width % out_size
        or height % out_size
    ):
        raise OutputSizeError(width, height, out_size)
    return width // out_size, height // out_size


@trace(label="downsample")
def downsample(grid, out_size):
    """
    Average non-overlapping blocks into an ``out_size`` x ``out_size`` grid.

    Each output cell is the mean of the block of input cells it covers. The
    input grid is left untouched.
    """
    tracer = get_tracer()
    scale_x, scale_y = validate_output_size(grid.width, grid.height, out_size)

    blocks = grid.data.reshape(out_size, scale_y, out_size, scale_x)
    data = blocks.mean(axis=(1, 3))

    tracer.event(f"Downsampled {grid.width}x{grid.height} -> {out_size}x{out_size} "
                 f"(block {scale_x}x{scale_y})")
    return Grid(width=out_size, height=out_size, data=data)
