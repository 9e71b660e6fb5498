"""
XY-cut segmentation of a density map into blank-separated blocks.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from pagecut.config import SegmentationConfig
from pagecut.errors import InputError
from pagecut.gaps import compute_projection_profiles, find_gap
from pagecut.region import BoundingRectangle

logger = logging.getLogger(__name__)


Halves = Tuple[BoundingRectangle, BoundingRectangle]


def cut_once(density: np.ndarray,
             rect: BoundingRectangle,
             config: SegmentationConfig) -> Tuple[BoundingRectangle, Optional[Halves]]:
    """
    Trim a rectangle and try to split it once.

    Horizontal cuts (splitting the y range) take precedence; the x range
    is only split when no row gap qualifies.

    Returns:
        Tuple of (trimmed rectangle, (first half, second half) or None)
    """
    min_size = config.min_size_px
    x_profile, y_profile = compute_projection_profiles(density, rect)

    trimmed_y, y_split = find_gap(y_profile, rect.y_range, config.white_space_max_ratio,
                                  config.min_white_space_run, min_size)
    trimmed_x, x_split = find_gap(x_profile, rect.x_range, config.white_space_max_ratio,
                                  config.min_white_space_run, min_size)

    trimmed = BoundingRectangle(trimmed_x, trimmed_y)

    if y_split is not None:
        return trimmed, trimmed.split_y(y_split)
    if x_split is not None:
        return trimmed, trimmed.split_x(x_split)
    return trimmed, None


def xycut(density: np.ndarray,
          rect: BoundingRectangle,
          config: SegmentationConfig) -> Tuple[List[BoundingRectangle], int]:
    """
    XY-cut driven by an explicit stack instead of recursion.

    The second half of a split is pushed first, so leaves come out in the
    same order as a depth-first descent (top before bottom, left before
    right) and deep splits cannot exhaust the interpreter stack.

    Args:
        density: Density map (full page)
        rect: Rectangle to segment
        config: Segmentation thresholds

    Returns:
        Tuple of (leaf rectangles in discovery order, deepest level reached)
    """
    leaves = []
    deepest = 0
    stack = [(rect, 0)]

    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)

        trimmed, halves = cut_once(density, current, config)
        if halves is None:
            logger.debug("Leaf %r at depth %d", trimmed, depth)
            leaves.append(trimmed)
            continue

        first, second = halves
        stack.append((second, depth + 1))
        stack.append((first, depth + 1))

    return leaves, deepest


def segmentize(density: np.ndarray,
               rect: Optional[BoundingRectangle] = None,
               config: Optional[SegmentationConfig] = None) -> List[BoundingRectangle]:
    """
    Segment a density map using XY-cut.

    Args:
        density: Density map of the page
        rect: Rectangle to segment (default: the whole page)
        config: Segmentation thresholds (default: SegmentationConfig())

    Returns:
        Disjoint leaf rectangles in the order the descent discovers them
    """
    leaves, _ = segmentize_with_depth(density, rect, config)
    return leaves


def segmentize_with_depth(density: np.ndarray,
                          rect: Optional[BoundingRectangle] = None,
                          config: Optional[SegmentationConfig] = None
                          ) -> Tuple[List[BoundingRectangle], int]:
    """Like segmentize, but also return the deepest split level reached."""
    if config is None:
        config = SegmentationConfig()

    if density.size == 0:
        logger.debug("Empty density map, nothing to segment")
        return [], 0

    h, w = density.shape
    if rect is None:
        rect = BoundingRectangle.full_page(w, h)
    elif rect.x < 0 or rect.y < 0 or rect.x2 > w or rect.y2 > h:
        raise InputError(f"{rect!r} lies outside the {w} x {h} density map")

    leaves, deepest = xycut(density, rect, config)

    logger.debug("XY-cut of %d x %d found %d segments (depth %d, min size %.1fpx)",
                 rect.w, rect.h, len(leaves), deepest, config.min_size_px)

    return leaves, deepest
