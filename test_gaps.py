"""Tests for projection profiles and gap detection."""

import numpy as np
import pytest

from pagecut.gaps import compute_projection_profiles, find_gap
from pagecut.region import BoundingRectangle, Span

RATIO = 0.04
MIN_RUN = 5
MIN_SIZE = 10


def histogram_with_blanks(length, *blank_ranges, value=100):
    hist = np.full(length, value, dtype=np.int64)
    for start, end in blank_ranges:
        hist[start:end] = 0
    return hist


def test_projection_profiles_cover_only_rectangle():
    density = np.zeros((6, 8), dtype=np.uint8)
    density[1:3, 2:5] = 10
    density[5, 7] = 99  # outside the rectangle

    rect = BoundingRectangle(Span(0, 6), Span(0, 4))
    x_profile, y_profile = compute_projection_profiles(density, rect)

    assert x_profile.tolist() == [0, 0, 20, 20, 20, 0, 0, 0]
    assert y_profile.tolist() == [0, 30, 30, 0, 0, 0]


def test_no_content_returns_range_unchanged():
    hist = np.zeros(50, dtype=np.int64)
    assert find_gap(hist, Span(5, 45), RATIO, MIN_RUN, MIN_SIZE) == (Span(5, 45), None)


def test_blank_margins_are_trimmed():
    hist = histogram_with_blanks(100, (0, 12), (90, 100))
    trimmed, split = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert trimmed == Span(12, 90)
    assert split is None


def test_near_blank_positions_count_as_blank():
    hist = histogram_with_blanks(100)
    hist[:10] = 3  # below 4% of the peak
    hist[10] = 4   # exactly 4% is content
    trimmed, _ = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert trimmed.start == 10


def test_run_of_minimum_length_splits():
    hist = histogram_with_blanks(100, (48, 48 + MIN_RUN))
    trimmed, split = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert trimmed == Span(0, 100)
    assert split == 48 + MIN_RUN


def test_run_one_short_of_minimum_does_not_split():
    hist = histogram_with_blanks(100, (48, 48 + MIN_RUN - 1))
    assert find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE) == (Span(0, 100), None)


def test_first_of_equally_long_runs_wins():
    hist = histogram_with_blanks(100, (30, 36), (60, 66))
    _, split = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert split == 36


def test_longest_run_wins():
    hist = histogram_with_blanks(100, (30, 35), (60, 68))
    _, split = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert split == 68


@pytest.mark.parametrize("blank", [(2, 10), (85, 95)])
def test_split_too_close_to_edge_is_rejected(blank):
    hist = histogram_with_blanks(100, blank)
    assert find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE) == (Span(0, 100), None)


def test_small_range_is_not_split():
    hist = histogram_with_blanks(100, (0, 40), (43, 48), (50, 100))
    trimmed, split = find_gap(hist, Span(0, 100), RATIO, MIN_RUN, MIN_SIZE)
    assert trimmed == Span(40, 50)
    assert split is None


def test_works_on_sub_range_in_page_coordinates():
    hist = histogram_with_blanks(300, (0, 100), (150, 170), (250, 300))
    trimmed, split = find_gap(hist, Span(100, 300), RATIO, MIN_RUN, MIN_SIZE)
    assert trimmed == Span(100, 250)
    assert split == 170
