"""
Configuration management for distfield.

Loads YAML configuration over defaults for every pipeline stage.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Optional

import yaml

from distfield.models import ThresholdPolicy


@dataclass
class DistanceConfig:
    """Configuration for classification and the distance search."""
    spread: int = 20
    threshold: str = "nonzero"  # "nonzero" or "half"


@dataclass
class OutputConfig:
    """Configuration for the output raster."""
    size: Optional[int] = None  # square output edge; None keeps input size
    jpeg_quality: int = 100
    gif_colors: int = 256


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: Optional[str] = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False
    out_dir: Optional[str] = None


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    distance: DistanceConfig = field(default_factory=DistanceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)

    @property
    def threshold_policy(self):
        return ThresholdPolicy(self.distance.threshold)


SECTIONS = ("distance", "output", "tracing", "debug")


def load_config(config_path=None):
    """
    Load configuration from a YAML file.

    Falls back to defaults for any missing file, section or key.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into the config dataclasses, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section) or {}
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)
    return config


def validate_config(config):
    """Raise ValueError if any setting is out of range."""
    if not isinstance(config.distance.spread, int) or config.distance.spread < 1:
        raise ValueError(f"spread must be an integer >= 1, got {config.distance.spread!r}")

    try:
        ThresholdPolicy(config.distance.threshold)
    except ValueError:
        choices = ", ".join(p.value for p in ThresholdPolicy)
        raise ValueError(
            f"Unknown threshold policy {config.distance.threshold!r} (expected one of: {choices})"
        ) from None

    size = config.output.size
    if size is not None and (not isinstance(size, int) or size <= 0):
        raise ValueError(f"output size must be a positive integer, got {size!r}")

    if not 0 <= config.output.jpeg_quality <= 100:
        raise ValueError(f"jpeg_quality must be within 0-100, got {config.output.jpeg_quality}")

    if not 2 <= config.output.gif_colors <= 256:
        raise ValueError(f"gif_colors must be within 2-256, got {config.output.gif_colors}")

    return config


def save_default_config(path):
    """Save the default configuration to a YAML file for reference."""
    yaml_data = asdict(PipelineConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
