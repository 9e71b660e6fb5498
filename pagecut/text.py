"""
Assign extracted glyphs to segments and build the per-segment text.
"""

import logging
from typing import Iterable, List, Sequence

from pagecut.region import BoundingRectangle, GlyphSample, TextSegment

logger = logging.getLogger(__name__)


def glyph_position(glyph: GlyphSample, scale_down: int):
    """Map a glyph from native raster coordinates to density map coordinates."""
    return int(glyph.x) // scale_down, int(glyph.y) // scale_down


def _append_separator(buffer: List[str]):
    if buffer and buffer[-1] != " ":
        buffer.append(" ")


def assign_text(segments: Sequence[BoundingRectangle],
                glyphs: Iterable[GlyphSample],
                scale_down: int = 2) -> List[TextSegment]:
    """
    Collect the characters falling inside each segment.

    Glyphs keep the order the extractor delivered them in. Whenever the
    run index changes, a single space is added to every segment that
    already holds text. Glyphs outside every segment are dropped.

    Args:
        segments: Leaf rectangles from the segmenter
        glyphs: Glyph stream of the same page
        scale_down: Factor between raster and density map coordinates

    Returns:
        One TextSegment per segment with non-blank text, in segment order
    """
    buffers: List[List[str]] = [[] for _ in segments]
    current_run = None
    dropped = 0

    for glyph in glyphs:
        if current_run is not None and glyph.run != current_run:
            for buffer in buffers:
                _append_separator(buffer)
        current_run = glyph.run

        px, py = glyph_position(glyph, scale_down)
        placed = False
        for segment, buffer in zip(segments, buffers):
            if segment.contains_point(px, py):
                buffer.append(glyph.char)
                placed = True
        if not placed:
            dropped += 1

    if dropped:
        logger.debug("%d glyphs fell outside every segment", dropped)

    text_segments = []
    for segment, buffer in zip(segments, buffers):
        text = "".join(buffer).strip()
        if text:
            text_segments.append(TextSegment(segment, text))

    return text_segments
