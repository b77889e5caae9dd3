"""Pytest fixtures for distfield tests."""

import os
import tempfile

import cv2
import numpy as np
import pytest


@pytest.fixture(autouse=True)
def reset_tracer():
    """Keep the global tracer disabled between tests."""
    from distfield.tracer import configure_tracer

    configure_tracer(enabled=False)
    yield
    configure_tracer(enabled=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def default_config():
    """Create default pipeline configuration."""
    from distfield.config import PipelineConfig
    return PipelineConfig()


@pytest.fixture
def half_plane_alpha():
    """8x8 alpha mask, opaque for x < 4 and transparent for x >= 4."""
    alpha = np.zeros((8, 8), dtype=np.uint8)
    alpha[:, :4] = 255
    return alpha


@pytest.fixture
def half_plane_binary():
    """4x4 binary grid that is inside for x < 2 and outside for x >= 2."""
    from distfield.field.grid import Grid

    data = np.zeros((4, 4), dtype=np.uint8)
    data[:, :2] = 1
    return Grid.from_array(data)


def make_bgra(alpha):
    """White BGRA image carrying the given alpha plane."""
    h, w = alpha.shape
    max_value = np.iinfo(alpha.dtype).max
    img = np.full((h, w, 4), max_value, dtype=alpha.dtype)
    img[:, :, 3] = alpha
    return img


@pytest.fixture
def write_image(temp_dir):
    """Write an image array into temp_dir and return its path."""
    def _write(img, name="input.png"):
        path = os.path.join(temp_dir, name)
        assert cv2.imwrite(path, img)
        return path
    return _write


@pytest.fixture
def half_plane_input(write_image, half_plane_alpha):
    """PNG input file for the 8x8 half-plane mask."""
    return write_image(make_bgra(half_plane_alpha))
