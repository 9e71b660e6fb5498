"""
Generate synthetic page rasters with text-like blocks for experiments.
"""

import random
from typing import List, Tuple

import cv2
import numpy as np


def generate_synthetic_page(width: int = 612, height: int = 792, seed: int = None,
                            margin: int = 40, block_gap: int = 30, columns: int = None
                            ) -> Tuple[np.ndarray, List[Tuple[int, int, int, int]]]:
    """
    Draw stacked paragraphs of line strokes, optionally in two columns.

    Args:
        width: Raster width in pixels
        height: Raster height in pixels
        seed: Random seed
        margin: Blank page margin
        block_gap: Blank space between paragraphs and columns
        columns: Number of columns (default: 1 or 2 at random)

    Returns:
        Tuple of (raster, blocks) with blocks as (x, y, w, h)
    """
    rng = random.Random(seed)
    img = np.full((height, width), 255, dtype=np.uint8)
    blocks = []

    if columns is None:
        columns = rng.choice([1, 2])
    col_w = (width - 2 * margin - (columns - 1) * block_gap) // columns

    for c in range(columns):
        x = margin + c * (col_w + block_gap)
        y = margin
        while True:
            h = rng.randint(40, 160)
            if y + h > height - margin:
                break
            line_step = rng.randint(6, 9)
            for i in range(y, y + h - 2, line_step):
                cv2.line(img, (x, i), (x + col_w - 1, i), 0, 2)
            blocks.append((x, y, col_w, h))
            y += h + block_gap

    return img, blocks
