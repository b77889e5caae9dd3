"""
Debug artifact writing for distfield.

Dumps intermediate grids and metrics per stage so a run can be inspected
after the fact.
"""

import json
import os

import cv2
import numpy as np

from distfield.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """Save a dictionary or Pydantic model to JSON."""
    tracer = get_tracer()

    ensure_dir(os.path.dirname(os.path.abspath(path)))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def stretch_to_uint8(values):
    """
    Min-max stretch any numeric array to 0..255 for viewing.

    Constant arrays map to 0, or to 255 when the constant is positive.
    """
    values = np.asarray(values, dtype=np.float64)
    lo, hi = values.min(), values.max()
    if hi == lo:
        fill = 255 if hi > 0 else 0
        return np.full(values.shape, fill, dtype=np.uint8)
    return ((values - lo) / (hi - lo) * 255.0 + 0.5).astype(np.uint8)


class DebugArtifactWriter:
    """
    Writes per-stage debug files under ``out_dir/<stage>/``.

    Every method is a no-op when the writer is disabled.
    """

    def __init__(self, out_dir, enabled=True):
        self.out_dir = out_dir
        self.enabled = enabled

    def get_stage_dir(self, stage_name):
        stage_dir = os.path.join(self.out_dir, stage_name)
        ensure_dir(stage_dir)
        return stage_dir

    def save_image(self, img, stage_name, filename):
        """Save a uint8 image array as-is."""
        if not self.enabled:
            return
        path = os.path.join(self.get_stage_dir(stage_name), filename)
        if not cv2.imwrite(path, img):
            raise OSError(f"Failed to write debug image: {path}")
        get_tracer().event(f"Saved image: {path}")

    def save_grid(self, grid, stage_name, filename):
        """Save a Grid after stretching its values to the full 8-bit range."""
        if not self.enabled:
            return
        self.save_image(stretch_to_uint8(grid.data), stage_name, filename)

    def save_json(self, data, stage_name, filename):
        if not self.enabled:
            return
        save_json(data, os.path.join(self.get_stage_dir(stage_name), filename))

    def save_report(self, report):
        """Write the run report at the top of the debug directory."""
        if not self.enabled:
            return
        ensure_dir(self.out_dir)
        save_json(report, os.path.join(self.out_dir, "report.json"))
