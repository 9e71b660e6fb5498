"""
Diagnostic images for inspecting a segmentation run.
"""

import logging
import os
import random
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from pagecut.region import TextSegment

logger = logging.getLogger(__name__)


def hsv_color(hue: float, saturation: float = 0.6, value: float = 0.5) -> Tuple[int, int, int]:
    """Convert an HSV colour (all components in [0, 1]) to a BGR tuple."""
    hsv = np.uint8([[[int(hue * 179), int(saturation * 255), int(value * 255)]]])
    b, g, r = cv2.cvtColor(hsv, cv2.COLOR_HSV2BGR)[0, 0]
    return int(b), int(g), int(r)


def draw_segments(gray: np.ndarray, segments: Sequence[TextSegment],
                  alpha: float = 0.2, seed: Optional[int] = None) -> np.ndarray:
    """
    Fill every segment with a translucent colour.

    The hue advances by a random step between segments so neighbours
    are easy to tell apart.

    Args:
        gray: Grayscale page at segmentation DPI
        segments: Segments to draw
        alpha: Opacity of the fill
        seed: Seed for the hue steps

    Returns:
        BGR visualization
    """
    vis = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)
    rng = random.Random(seed)

    hue = 0.0
    for segment in segments:
        overlay = vis.copy()
        cv2.rectangle(overlay, (segment.x, segment.y),
                      (segment.x + segment.w - 1, segment.y + segment.h - 1),
                      hsv_color(hue), -1)
        vis = cv2.addWeighted(overlay, alpha, vis, 1 - alpha, 0)
        hue += 0.2 + rng.random() / 5
        hue -= int(hue)

    return vis


def save_debug_images(debug_dir: str, page_index: int, gray: np.ndarray,
                      density: np.ndarray, segments: Sequence[TextSegment]):
    """Write gray, normalized and segment images of one page."""
    os.makedirs(debug_dir, exist_ok=True)

    paths = {
        os.path.join(debug_dir, f"gray-{page_index}.png"): gray,
        os.path.join(debug_dir, f"normalize-{page_index}.png"): density,
        os.path.join(debug_dir, f"segments-{page_index}.png"): draw_segments(gray, segments,
                                                                              seed=page_index),
    }
    for path, image in paths.items():
        cv2.imwrite(path, image)

    logger.debug("Saved debug images for page %d to %s", page_index, debug_dir)
