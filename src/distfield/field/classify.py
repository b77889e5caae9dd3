"""
Binary classification of an alpha channel into inside/outside pixels.
"""

import numpy as np

from distfield.field.grid import Grid
from distfield.models import ThresholdPolicy
from distfield.tracer import get_tracer, trace

INSIDE = 1
OUTSIDE = 0


@trace(label="classify")
def classify(alpha, alpha_max=255, policy=ThresholdPolicy.NONZERO):
    """
    Convert an alpha array into a binary Grid of 0 (outside) and 1 (inside).

    NONZERO marks any covered pixel as inside. HALF requires at least half
    of ``alpha_max``, which suits anti-aliased sources.
    """
    tracer = get_tracer()
    policy = ThresholdPolicy(policy)

    # int64 so 2 * alpha cannot overflow 16-bit input
    alpha = np.asarray(alpha).astype(np.int64)
    if alpha.ndim != 2:
        raise ValueError(f"Alpha channel must be 2-D, got shape {alpha.shape}")

    if policy is ThresholdPolicy.HALF:
        inside = 2 * alpha >= alpha_max
    else:
        inside = alpha != 0

    binary = Grid.from_array(inside.astype(np.uint8))

    tracer.event(
        f"Classified {binary.width}x{binary.height}: policy={policy.value} "
        f"inside_ratio={inside.mean():.3f}"
    )
    return binary


def inside_count(binary):
    """Number of inside pixels in a binary Grid."""
    return int(np.count_nonzero(binary.data == INSIDE))
