"""
Rescale a signed distance field into [0, 1].
"""

from distfield.errors import DegenerateFieldError
from distfield.tracer import get_tracer, trace


@trace(label="normalize")
def normalize(field):
    """
    Map every distance v to (v - min) / (max - min) in place.

    Uses the extrema recorded by the build pass, so it must run after the
    whole field has been built. 0.0 is the most outside pixel and 1.0 the
    most inside one. Raises DegenerateFieldError when min == max.

    Returns the mutated grid.
    """
    tracer = get_tracer()

    if field.is_uniform:
        raise DegenerateFieldError(field.min)

    grid = field.grid
    span = float(field.max - field.min)
    grid.data -= field.min
    grid.data /= span

    tracer.event(f"Normalized with min={field.min} max={field.max}")
    return grid
