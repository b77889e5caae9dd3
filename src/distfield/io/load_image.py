"""
Image decoding for distfield.

Reads any format OpenCV can decode and extracts the alpha channel that the
classifier thresholds.
"""

import os

import cv2
import numpy as np

from distfield.errors import ImageDecodeError
from distfield.models import ImageMeta
from distfield.tracer import get_tracer, trace

ALPHA_MAX = {
    np.dtype(np.uint8): 255,
    np.dtype(np.uint16): 65535,
}


@trace(label="load_alpha")
def load_alpha(path):
    """
    Load an image and return its alpha channel.

    Returns a tuple of (alpha, metadata) where:
    - alpha: 2-D integer array (H, W)
    - metadata: ImageMeta with size, channel count and alpha maximum

    Images without an alpha channel are fully opaque.

    Raises FileNotFoundError if path does not exist.
    Raises ImageDecodeError if the file cannot be decoded.
    """
    tracer = get_tracer()

    if not os.path.exists(path):
        raise FileNotFoundError(f"Image not found: {path}")

    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)

    if img is None or img.size == 0:
        raise ImageDecodeError(f"Failed to decode image: {path}")

    if img.dtype not in ALPHA_MAX:
        raise ImageDecodeError(f"Unsupported pixel depth {img.dtype}: {path}")

    alpha_max = ALPHA_MAX[img.dtype]
    channels = 1 if img.ndim == 2 else img.shape[2]
    alpha = extract_alpha(img, alpha_max)

    height, width = alpha.shape
    metadata = ImageMeta(
        width=width,
        height=height,
        channels=channels,
        alpha_max=alpha_max,
        has_alpha=channels in (2, 4),
        source_path=os.path.abspath(path),
    )

    tracer.event(f"Loaded image: {width}x{height}, channels={channels}, "
                 f"alpha={'yes' if metadata.has_alpha else 'no'}")

    return alpha, metadata


def extract_alpha(img, alpha_max=255):
    """
    Alpha plane of a decoded image array.

    Gray+alpha keeps alpha last, as does BGRA. Other layouts have no
    alpha and read as fully opaque.
    """
    if img.ndim == 3 and img.shape[2] in (2, 4):
        return np.ascontiguousarray(img[:, :, -1])

    return np.full(img.shape[:2], alpha_max, dtype=img.dtype)
