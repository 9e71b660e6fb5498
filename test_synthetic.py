"""Segmentation of generated pages with known paragraph layout."""

import pytest

from experiments.generate_synthetic import generate_synthetic_page
from pagecut.config import SegmentationConfig
from pagecut.preprocessing import preprocess_raster
from pagecut.xycut import segmentize


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_one_segment_per_paragraph(seed):
    raster, blocks = generate_synthetic_page(seed=seed, columns=1)
    config = SegmentationConfig()
    _, density = preprocess_raster(raster, config.scale_down)

    leaves = segmentize(density, config=config)

    assert len(leaves) == len(blocks)
    for leaf, (x, y, w, h) in zip(leaves, blocks):
        # leaf lies inside its paragraph, expanded by one pixel of resampling blur
        assert x // 2 - 1 <= leaf.x and leaf.x2 <= (x + w) // 2 + 1
        assert y // 2 - 1 <= leaf.y and leaf.y2 <= (y + h) // 2 + 1
