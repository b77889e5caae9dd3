"""
Distance field construction by bounded ring search.

For each pixel the square rings of radius 1 .. spread-1 around it are
scanned for the nearest pixel of the opposite class. Pixels with no
opposite-class pixel in range saturate at ``spread``. Inside pixels get
positive distances, outside pixels negative ones.

Positions off the canvas never match, so the image border is not treated
as a boundary.
"""

from dataclasses import dataclass

import numpy as np

from distfield.field.grid import OFF_CANVAS, Grid
from distfield.tracer import get_tracer, trace

DEFAULT_SPREAD = 20


@dataclass
class DistanceField:
    """Signed distance grid plus the extrema observed while building it."""
    grid: Grid
    min: int
    max: int
    spread: int

    @property
    def is_uniform(self):
        return self.min == self.max


def _check_spread(spread):
    if spread < 1:
        raise ValueError(f"spread must be >= 1, got {spread}")


def ring_offsets(radius):
    """
    (dx, dy) offsets of the square ring at ``radius``, in scan order.

    Top edge, bottom edge, then the left and right edges without their
    corners.
    """
    offsets = []
    for dy in (-radius, radius):
        for dx in range(-radius, radius + 1):
            offsets.append((dx, dy))
    for dx in (-radius, radius):
        for dy in range(-radius + 1, radius):
            offsets.append((dx, dy))
    return offsets


def nearest(binary, x, y, spread=DEFAULT_SPREAD):
    """
    Signed distance from (x, y) to the nearest opposite-class pixel.

    Returns an integer in [-spread, spread]; its sign follows the class of
    (x, y) itself (non-negative inside, non-positive outside).
    """
    _check_spread(spread)

    own = int(binary.at(x, y))
    target = 1 - own
    distance = spread

    for radius in range(1, spread):
        if any(binary.at(x + dx, y + dy) == target for dx, dy in ring_offsets(radius)):
            distance = radius
            break

    return distance if own == 1 else -distance


@trace(label="build_distance_field")
def build_distance_field(binary, spread=DEFAULT_SPREAD):
    """
    Run the ring search for every pixel of ``binary``.

    All pixels are searched together one ring at a time: every ring offset
    becomes a single shifted comparison against a copy of the grid padded
    with OFF_CANVAS, and each pixel keeps the first radius at which it
    matched. The result equals ``nearest`` evaluated at every pixel.

    Returns a DistanceField holding float64 distances and the global
    min/max needed by the normalizer.
    """
    tracer = get_tracer()
    _check_spread(spread)

    width, height = binary.width, binary.height
    classes = binary.data.astype(np.int8)
    target = 1 - classes

    pad = spread
    padded = np.full((height + 2 * pad, width + 2 * pad), OFF_CANVAS, dtype=np.int8)
    padded[pad:pad + height, pad:pad + width] = classes

    unsigned = np.full((height, width), spread, dtype=np.int64)
    found = np.zeros((height, width), dtype=bool)

    for radius in range(1, spread):
        hit = np.zeros((height, width), dtype=bool)
        for dx, dy in ring_offsets(radius):
            window = padded[pad + dy:pad + dy + height, pad + dx:pad + dx + width]
            hit |= window == target

        newly = hit & ~found
        unsigned[newly] = radius
        found |= newly

        if found.all():
            tracer.event(f"All pixels resolved at radius {radius}", level="DEBUG")
            break

    signed = np.where(classes == 1, unsigned, -unsigned)
    field = DistanceField(
        grid=Grid(width=width, height=height, data=signed.astype(np.float64)),
        min=int(signed.min()),
        max=int(signed.max()),
        spread=spread,
    )

    tracer.event(
        f"Distance field {width}x{height}: spread={spread} "
        f"min={field.min} max={field.max} saturated={int((~found).sum())}"
    )
    return field


def saturated_count(field):
    """Number of pixels whose search found no boundary within spread."""
    return int(np.count_nonzero(np.abs(field.grid.data) == field.spread))
