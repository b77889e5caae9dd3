"""
Exception types raised by the distance field pipeline.

Every failure is terminal: the CLI reports it and exits without writing
an output image.
"""


class DistFieldError(Exception):
    """Base class for all pipeline failures."""


class ImageDecodeError(DistFieldError, ValueError):
    """The input file exists but could not be decoded as an image."""


class OutputSizeError(DistFieldError, ValueError):
    """Requested output size does not evenly divide the input dimensions."""

    def __init__(self, width, height, out_size):
        self.width = width
        self.height = height
        self.out_size = out_size
        super().__init__(
            f"Output size {out_size} must be a positive integer dividing "
            f"both input dimensions ({width}x{height})"
        )


class DegenerateFieldError(DistFieldError, ArithmeticError):
    """
    Every pixel produced the same signed distance.

    Normalizing would divide by zero, so the run is aborted instead of
    emitting NaN pixels.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Distance field is uniform (every pixel = {value}); "
            "no boundary found within the search spread"
        )


class UnsupportedOutputError(DistFieldError, ValueError):
    """Output path has an extension with no registered encoder."""

    def __init__(self, extension):
        self.extension = extension
        super().__init__(f"Unsupported output type: {extension or '<none>'}")
