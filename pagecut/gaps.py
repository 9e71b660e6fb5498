"""
Projection profiles and blank-gap detection for the XY-cut segmenter.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from pagecut.region import BoundingRectangle, Span

logger = logging.getLogger(__name__)


def compute_projection_profiles(density: np.ndarray,
                                rect: BoundingRectangle) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute column and row sums of the density map inside a rectangle.

    Both profiles are indexed in page coordinates; positions outside the
    rectangle are zero.

    Args:
        density: Density map (high values = ink), indexed [y, x]
        rect: Rectangle to project

    Returns:
        Tuple of (x_profile, y_profile)
        - x_profile: length = page width, column sums over rect.y_range
        - y_profile: length = page height, row sums over rect.x_range
    """
    height, width = density.shape
    roi = density[rect.y:rect.y2, rect.x:rect.x2].astype(np.int64)

    x_profile = np.zeros(width, dtype=np.int64)
    y_profile = np.zeros(height, dtype=np.int64)
    x_profile[rect.x:rect.x2] = roi.sum(axis=0)
    y_profile[rect.y:rect.y2] = roi.sum(axis=1)

    return x_profile, y_profile


def find_gap(histogram: np.ndarray,
             span: Span,
             white_space_max_ratio: float,
             min_white_space_run: int,
             min_size: float) -> Tuple[Span, Optional[int]]:
    """
    Trim blank margins from a range and look for a blank run to split at.

    A position is blank when its value relative to the peak of the range is
    below white_space_max_ratio. Of all blank runs inside the trimmed range
    the longest one is considered; on ties the first one wins.

    Args:
        histogram: Projection profile indexed in page coordinates
        span: Range of the histogram to examine
        white_space_max_ratio: Blank threshold relative to the peak
        min_white_space_run: Shortest blank run accepted as a gap
        min_size: Both halves must extend more than this past the split

    Returns:
        Tuple of (trimmed_span, split_point)
        - trimmed_span: span with leading/trailing blank positions removed
          (the original span if it holds no content)
        - split_point: index just after the chosen blank run, or None
    """
    values = histogram[span.start:span.end]
    peak = float(values.max()) if values.size else 0.0

    if peak < 1:
        return span, None

    blank = (values / peak) < white_space_max_ratio

    left = span.start
    right = span.end
    while left < right - 1 and blank[left - span.start]:
        left += 1
    while right - 1 > left and blank[right - 1 - span.start]:
        right -= 1
    trimmed = Span(left, right)

    if right - left <= min_size:
        return trimmed, None

    run = 0
    run_length = 0
    run_end = left
    for x in range(left, right):
        if blank[x - span.start]:
            run += 1
            if run > run_length:
                run_length = run
                run_end = x + 1
        else:
            run = 0

    if (run_end > left + min_size and run_end < right - min_size
            and run_length >= min_white_space_run):
        logger.debug("Split %r at %d (trimmed %r, run=%d)", span, run_end, trimmed, run_length)
        return trimmed, run_end

    logger.debug("%r trimmed to %r, no split (run=%d)", span, trimmed, run_length)
    return trimmed, None
