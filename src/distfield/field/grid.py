"""
Owned 2-D grid passed between pipeline stages.
"""

from dataclasses import dataclass

import numpy as np

OFF_CANVAS = -1


@dataclass
class Grid:
    """
    A width x height array stored row-major as ``data[y, x]``.

    Stages hand grids to each other explicitly; nothing is kept in module
    state.
    """
    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {self.width}x{self.height}")
        if self.data.shape != (self.height, self.width):
            raise ValueError(
                f"Grid data shape {self.data.shape} does not match "
                f"{self.width}x{self.height}"
            )

    @classmethod
    def from_array(cls, data):
        data = np.asarray(data)
        if data.ndim != 2:
            raise ValueError(f"Grid data must be 2-D, got shape {data.shape}")
        return cls(width=data.shape[1], height=data.shape[0], data=data)

    @classmethod
    def zeros(cls, width, height, dtype=np.float64):
        return cls(width=width, height=height, data=np.zeros((height, width), dtype=dtype))

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x, y):
        """Value at (x, y), or OFF_CANVAS outside the grid."""
        if self.contains(x, y):
            return self.data[y, x]
        return OFF_CANVAS

    def index(self, x, y):
        """Flat row-major index of (x, y)."""
        return y * self.width + x

    def flat(self):
        return self.data.reshape(-1)

    def copy(self):
        return Grid(width=self.width, height=self.height, data=self.data.copy())
