"""
Command-line interface for distfield.

    distfield INPUT OUTPUT [--spread N] [--threshold nonzero|half] [--size N]
"""

import argparse
import sys

from distfield.config import load_config, save_default_config
from distfield.models import ThresholdPolicy
from distfield.tracer import configure_tracer, get_tracer


def build_parser():
    parser = argparse.ArgumentParser(
        prog="distfield",
        description="Convert an alpha-masked image into a normalized signed distance field",
    )
    parser.add_argument("input", nargs="?", help="Input image file")
    parser.add_argument("output", nargs="?", help="Output image (.png, .gif, .jpg, .jpeg)")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--spread",
        type=int,
        default=None,
        help="Maximum search radius in pixels (default 20)",
    )
    parser.add_argument(
        "--threshold",
        default=None,
        choices=[p.value for p in ThresholdPolicy],
        help="Alpha classification policy (default nonzero)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Square output size; must evenly divide the input width and height",
    )
    parser.add_argument(
        "--jpeg-quality",
        type=int,
        default=None,
        help="JPEG quality 0-100 (default 100)",
    )
    parser.add_argument(
        "--debug-dir",
        default=None,
        help="Write intermediate debug artifacts to this directory",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )
    parser.add_argument(
        "--write-config",
        metavar="PATH",
        default=None,
        help="Write the default configuration to PATH and exit",
    )
    return parser


def apply_overrides(config, args):
    """Command-line flags take precedence over the config file."""
    if args.spread is not None:
        config.distance.spread = args.spread
    if args.threshold is not None:
        config.distance.threshold = args.threshold
    if args.size is not None:
        config.output.size = args.size
    if args.jpeg_quality is not None:
        config.output.jpeg_quality = args.jpeg_quality
    if args.debug_dir is not None:
        config.debug.enabled = True
        config.debug.out_dir = args.debug_dir
    if args.trace:
        config.tracing.enabled = True
        config.tracing.level = args.trace_level
        config.tracing.file_path = args.trace_file
        config.tracing.json_output = args.trace_json
    return config


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.write_config:
        save_default_config(args.write_config)
        print(f"Default configuration saved to: {args.write_config}")
        return 0

    if not args.input:
        parser.error("Need input file name to process")
    if not args.output:
        parser.error("Need output file name to write to")

    return handle_run(args)


def handle_run(args):
    """Run the pipeline for one input/output pair."""
    tracer = get_tracer()

    try:
        from distfield.pipeline import run_pipeline

        config = apply_overrides(load_config(args.config), args)
        configure_tracer(
            enabled=config.tracing.enabled,
            level=config.tracing.level,
            file_path=config.tracing.file_path,
            json_output=config.tracing.json_output,
        )

        with tracer.span("cli_run", module="cli"):
            report = run_pipeline(args.input, args.output, config=config)

        stats = report.stats
        print(f"Wrote {report.output_width}x{report.output_height} distance field to {args.output}")
        print(f"  Distance range: {stats.min_distance}..{stats.max_distance} (spread {stats.spread})")
        if report.debug_dir:
            print(f"  Debug artifacts: {report.debug_dir}")
        print(f"Processing time: {report.elapsed_seconds:.3f}s")
        return 0

    except Exception as e:
        tracer.event(f"Conversion failed: {str(e)}", level="ERROR")
        print(f"Error: {str(e)}", file=sys.stderr)
        return 1

    finally:
        tracer.config.close()


if __name__ == "__main__":
    sys.exit(main())
