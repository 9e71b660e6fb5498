"""Tests for the XY-cut segmenter."""

import numpy as np
import pytest

from pagecut.config import SegmentationConfig
from pagecut.errors import InputError
from pagecut.region import BoundingRectangle, Span
from pagecut.xycut import segmentize, segmentize_with_depth

CONFIG = SegmentationConfig(white_space_max_ratio=0.04, min_white_space_run=5, min_size=10)


def page(width=400, height=300, blocks=(), ink=200):
    """Density map with uniformly inked (x, y, w, h) blocks."""
    density = np.zeros((height, width), dtype=np.uint8)
    for x, y, w, h in blocks:
        density[y:y + h, x:x + w] = ink
    return density


def test_two_stacked_blocks():
    density = page(blocks=[(0, 0, 400, 100), (0, 150, 400, 150)])
    leaves = segmentize(density, config=CONFIG)
    assert leaves == [
        BoundingRectangle(Span(0, 400), Span(0, 100)),
        BoundingRectangle(Span(0, 400), Span(150, 300)),
    ]


def test_blank_page_is_one_leaf():
    density = page()
    assert segmentize(density, config=CONFIG) == [BoundingRectangle.full_page(400, 300)]


def test_sub_rectangle_of_blank_page():
    rect = BoundingRectangle(Span(10, 50), Span(20, 40))
    assert segmentize(page(), rect, CONFIG) == [rect]


def test_side_by_side_columns():
    density = page(blocks=[(20, 30, 150, 240), (230, 30, 150, 240)])
    leaves = segmentize(density, config=CONFIG)
    assert leaves == [
        BoundingRectangle(Span(20, 170), Span(30, 270)),
        BoundingRectangle(Span(230, 380), Span(30, 270)),
    ]


def test_rows_are_cut_before_columns():
    density = page(blocks=[
        (0, 0, 150, 100), (250, 0, 150, 100),
        (0, 150, 150, 150), (250, 150, 150, 150),
    ])
    leaves = segmentize(density, config=CONFIG)
    assert leaves == [
        BoundingRectangle(Span(0, 150), Span(0, 100)),
        BoundingRectangle(Span(250, 400), Span(0, 100)),
        BoundingRectangle(Span(0, 150), Span(150, 300)),
        BoundingRectangle(Span(250, 400), Span(150, 300)),
    ]


def test_narrow_gap_does_not_split():
    # blank band of 4 rows, one short of the minimum run
    density = page(blocks=[(0, 0, 400, 100), (0, 104, 400, 196)])
    assert segmentize(density, config=CONFIG) == [BoundingRectangle.full_page(400, 300)]


def test_margins_are_trimmed():
    density = page(blocks=[(40, 25, 300, 200)])
    assert segmentize(density, config=CONFIG) == [BoundingRectangle(Span(40, 340), Span(25, 225))]


def test_default_config_is_used():
    density = page(blocks=[(0, 0, 400, 100), (0, 150, 400, 150)])
    assert len(segmentize(density)) == 2


def test_empty_density_map_has_no_leaves():
    assert segmentize(np.zeros((0, 0), dtype=np.uint8)) == []


@pytest.mark.parametrize("seed", range(8))
def test_random_pages_are_partitioned(seed):
    rng = np.random.default_rng(seed)
    height, width = 240, 320
    density = np.zeros((height, width), dtype=np.uint8)
    for _ in range(rng.integers(3, 15)):
        x, y = int(rng.integers(0, width - 10)), int(rng.integers(0, height - 10))
        w, h = int(rng.integers(5, 120)), int(rng.integers(2, 80))
        density[y:y + h, x:x + w] = rng.integers(1, 256)
    density[rng.random((height, width)) < 0.01] = 255

    root = BoundingRectangle.full_page(width, height)
    leaves, depth = segmentize_with_depth(density, root, CONFIG)

    coverage = np.zeros((height, width), dtype=np.int32)
    for leaf in leaves:
        assert 0 <= leaf.x < leaf.x2 <= width
        assert 0 <= leaf.y < leaf.y2 <= height
        coverage[leaf.y:leaf.y2, leaf.x:leaf.x2] += 1
    assert coverage.max() == 1

    # every level shrinks one axis by more than min_size
    assert depth <= (width + height) / CONFIG.min_size_px


def test_segmentation_is_deterministic():
    rng = np.random.default_rng(42)
    density = (rng.random((120, 160)) < 0.2).astype(np.uint8) * 255
    assert segmentize(density, config=CONFIG) == segmentize(density, config=CONFIG)


def test_thousand_stacked_stripes():
    # 2 ink rows, 1 blank row: every level peels off one stripe
    density = np.zeros((3000, 50), dtype=np.uint8)
    for y in range(0, 3000, 3):
        density[y:y + 2, :] = 255
    config = SegmentationConfig(min_size=1, min_white_space_run=1)

    leaves, depth = segmentize_with_depth(density, config=config)

    assert len(leaves) == 1000
    assert depth == 999
    assert leaves[0] == BoundingRectangle(Span(0, 50), Span(0, 2))
    assert leaves[-1] == BoundingRectangle(Span(0, 50), Span(2997, 2999))
    assert [leaf.y for leaf in leaves] == list(range(0, 3000, 3))


@pytest.mark.parametrize("rect", [
    BoundingRectangle(Span(0, 401), Span(0, 300)),
    BoundingRectangle(Span(0, 400), Span(250, 310)),
    BoundingRectangle(Span(-5, 100), Span(0, 100)),
])
def test_rectangle_outside_map_is_rejected(rect):
    with pytest.raises(InputError, match="outside"):
        segmentize(page(), rect, CONFIG)
