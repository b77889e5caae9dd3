"""
Pydantic data models for distfield runs.

Describes the decoded input and the outcome of a run so they can be
logged, returned to callers, and written out as JSON.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ThresholdPolicy(str, Enum):
    """How an alpha value decides whether a pixel is inside."""
    NONZERO = "nonzero"  # any coverage counts as inside
    HALF = "half"  # at least half of the maximum alpha


class ImageMeta(BaseModel):
    """Metadata of a decoded input image."""
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    channels: int = 1
    alpha_max: int = 255
    has_alpha: bool = False
    source_path: str = ""

    model_config = ConfigDict(extra="forbid")


class FieldStats(BaseModel):
    """Summary of a built distance field."""
    spread: int
    min_distance: int
    max_distance: int
    inside_pixels: int = 0
    saturated_pixels: int = 0


class RunReport(BaseModel):
    """Outcome of one input -> output conversion."""
    input: ImageMeta
    threshold: ThresholdPolicy = ThresholdPolicy.NONZERO
    stats: FieldStats
    output_path: str
    output_width: int
    output_height: int
    elapsed_seconds: float = 0.0
    debug_dir: Optional[str] = None

    model_config = ConfigDict(extra="forbid")
