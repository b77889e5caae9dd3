"""
Rasterization and encoding of the final distance field.

The output codec is chosen from the output file extension. Images are
encoded in memory first so a failed encode never leaves a partial file.
"""

import io
import os

import cv2
import numpy as np
from PIL import Image

from distfield.errors import UnsupportedOutputError
from distfield.tracer import get_tracer, trace


def rasterize(grid):
    """Convert a [0, 1] grid into an 8-bit grayscale array."""
    values = np.floor(grid.data * 255.0 + 0.5)
    return np.clip(values, 0, 255).astype(np.uint8)


def _encode_png(raster, output_config):
    ok, buf = cv2.imencode(".png", raster)
    if not ok:
        raise OSError("PNG encoding failed")
    return buf.tobytes()


def _encode_jpeg(raster, output_config):
    params = [cv2.IMWRITE_JPEG_QUALITY, int(output_config.jpeg_quality)]
    ok, buf = cv2.imencode(".jpg", raster, params)
    if not ok:
        raise OSError("JPEG encoding failed")
    return buf.tobytes()


def _encode_gif(raster, output_config):
    img = Image.fromarray(raster).convert("RGB")
    paletted = img.quantize(colors=int(output_config.gif_colors), dither=Image.Dither.NONE)
    buf = io.BytesIO()
    paletted.save(buf, format="GIF")
    return buf.getvalue()


ENCODERS = {
    ".png": _encode_png,
    ".gif": _encode_gif,
    ".jpg": _encode_jpeg,
    ".jpeg": _encode_jpeg,
}


def output_extension(path):
    return os.path.splitext(str(path))[1].lower()


def resolve_encoder(path):
    """
    Encoder function for the extension of ``path`` (case-insensitive).

    Raises UnsupportedOutputError for unknown extensions.
    """
    ext = output_extension(path)
    try:
        return ENCODERS[ext]
    except KeyError:
        raise UnsupportedOutputError(ext) from None


@trace(label="save_image")
def save_image(grid, path, output_config):
    """
    Rasterize ``grid`` and write it to ``path`` in the format its extension
    names.

    Returns the number of bytes written.
    """
    tracer = get_tracer()

    encoder = resolve_encoder(path)
    data = encoder(rasterize(grid), output_config)

    out_dir = os.path.dirname(os.path.abspath(path))
    os.makedirs(out_dir, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)

    tracer.event(f"Saved {output_extension(path)} image: {path} ({len(data)} bytes)")
    return len(data)
