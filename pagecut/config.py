"""
Segmentation parameters and their validation.
"""

import json
import os
from dataclasses import dataclass, fields
from typing import Optional

from pagecut.errors import ConfigurationError

MM_PER_INCH = 25.4


@dataclass
class SegmentationConfig:
    """
    Thresholds for one segmentation run.

    Attributes:
        white_space_max_ratio: A histogram position counts as blank when its
            value relative to the peak of the range is below this ratio
        min_white_space_run: Shortest blank run that may separate two blocks
        min_size_mm: Smallest block extent in millimetres
        dpi: Resolution of the density map
        scale_down: Pages are rendered at scale_down * dpi and downsampled
        min_size: Explicit smallest block extent in pixels (overrides mm)
        debug_dir: Directory for diagnostic images, None to disable
    """

    white_space_max_ratio: float = 0.04
    min_white_space_run: int = 5
    min_size_mm: float = 8.0
    dpi: float = 36.0
    scale_down: int = 2
    min_size: Optional[float] = None
    debug_dir: Optional[str] = None

    def __post_init__(self):
        if not 0 < self.white_space_max_ratio <= 1:
            raise ConfigurationError(
                f"white_space_max_ratio must be in (0, 1], got {self.white_space_max_ratio}")
        if not isinstance(self.min_white_space_run, int) or self.min_white_space_run < 1:
            raise ConfigurationError(
                f"min_white_space_run must be a positive integer, got {self.min_white_space_run}")
        if self.min_size_mm <= 0:
            raise ConfigurationError(f"min_size_mm must be positive, got {self.min_size_mm}")
        if self.dpi <= 0:
            raise ConfigurationError(f"dpi must be positive, got {self.dpi}")
        if not isinstance(self.scale_down, int) or self.scale_down < 1:
            raise ConfigurationError(
                f"scale_down must be a positive integer, got {self.scale_down}")
        if self.min_size is not None and self.min_size < 0:
            raise ConfigurationError(f"min_size must not be negative, got {self.min_size}")

    @property
    def min_size_px(self) -> float:
        """Smallest block extent in density map pixels."""
        if self.min_size is not None:
            return self.min_size
        return self.min_size_mm / MM_PER_INCH * self.dpi

    @property
    def render_dpi(self) -> float:
        """Resolution pages are rendered at before downsampling."""
        return self.scale_down * self.dpi


def load_config(path: str) -> SegmentationConfig:
    """
    Load a SegmentationConfig from a JSON file.

    Args:
        path: Path to a JSON object with SegmentationConfig field names

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, malformed or has unknown keys
    """
    if not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config in {path} must be a JSON object")

    known = {f.name for f in fields(SegmentationConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    return SegmentationConfig(**raw)
