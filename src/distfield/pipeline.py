"""
Main pipeline orchestrator for distfield.

Runs decode -> classify -> build -> normalize -> downsample -> encode for a
single input image. Each stage consumes the previous stage's complete
output; the build pass must finish before normalization because the
normalizer needs the global extrema.
"""

import os
import time

from distfield.config import load_config, validate_config
from distfield.field.build import build_distance_field, saturated_count
from distfield.field.classify import classify, inside_count
from distfield.field.downsample import downsample, validate_output_size
from distfield.field.normalize import normalize
from distfield.io.load_image import load_alpha
from distfield.io.save_artifacts import DebugArtifactWriter
from distfield.io.save_image import rasterize, resolve_encoder, save_image
from distfield.models import FieldStats, RunReport
from distfield.tracer import get_tracer, trace


def default_debug_dir(output_path):
    """``<output dir>/<output stem>_debug``"""
    stem = os.path.splitext(os.path.basename(output_path))[0]
    return os.path.join(os.path.dirname(os.path.abspath(output_path)), f"{stem}_debug")


@trace(label="compute_field")
def compute_field(alpha, alpha_max, config, debug_writer=None):
    """
    Turn an alpha array into a normalized (and optionally downsampled) Grid.

    Returns a tuple of (grid, stats). The output size is validated before
    the distance search runs.
    """
    tracer = get_tracer()
    policy = config.threshold_policy
    spread = config.distance.spread
    out_size = config.output.size

    height, width = alpha.shape[:2]
    if out_size is not None:
        validate_output_size(width, height, out_size)

    with tracer.span("classify", module="pipeline"):
        binary = classify(alpha, alpha_max, policy)
        if debug_writer:
            debug_writer.save_image(binary.data * 255, "classify", "01_binary.png")

    with tracer.span("build", module="pipeline"):
        field = build_distance_field(binary, spread)

    stats = FieldStats(
        spread=spread,
        min_distance=field.min,
        max_distance=field.max,
        inside_pixels=inside_count(binary),
        saturated_pixels=saturated_count(field),
    )

    if debug_writer:
        debug_writer.save_grid(field.grid, "field", "01_signed_raw.png")
        debug_writer.save_json(stats, "field", "field_metrics.json")

    with tracer.span("normalize", module="pipeline"):
        grid = normalize(field)
        if debug_writer:
            debug_writer.save_image(rasterize(grid), "normalize", "01_normalized.png")

    if out_size is not None:
        with tracer.span("downsample", module="pipeline"):
            grid = downsample(grid, out_size)
            if debug_writer:
                debug_writer.save_image(rasterize(grid), "downsample", "01_downsampled.png")

    return grid, stats


@trace(label="run_pipeline")
def run_pipeline(input_path, output_path, config=None, config_path=None):
    """
    Convert one input image into a distance field image.

    Args:
        input_path: image to read
        output_path: image to write; its extension picks the format
        config: PipelineConfig object (optional)
        config_path: path to YAML config file (optional)

    Returns:
        RunReport describing the run
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)
    validate_config(config)

    # Unknown extensions fail before any decoding or computation
    resolve_encoder(output_path)

    start = time.perf_counter()

    alpha, meta = load_alpha(input_path)

    debug_writer = None
    if config.debug.enabled:
        debug_dir = config.debug.out_dir or default_debug_dir(output_path)
        debug_writer = DebugArtifactWriter(debug_dir, enabled=True)

    grid, stats = compute_field(alpha, meta.alpha_max, config, debug_writer)

    save_image(grid, output_path, config.output)

    elapsed = time.perf_counter() - start

    report = RunReport(
        input=meta,
        threshold=config.threshold_policy,
        stats=stats,
        output_path=os.path.abspath(output_path),
        output_width=grid.width,
        output_height=grid.height,
        elapsed_seconds=elapsed,
        debug_dir=debug_writer.out_dir if debug_writer else None,
    )

    if debug_writer:
        debug_writer.save_report(report)

    tracer.event(f"Pipeline complete: {grid.width}x{grid.height} in {elapsed:.3f}s")

    return report
