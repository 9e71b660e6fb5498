"""
Main pipeline for page segmentation.
Integrates all steps: preprocessing, XY-cut and text assignment.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from pagecut.config import SegmentationConfig
from pagecut.debug import save_debug_images
from pagecut.errors import InputError
from pagecut.pdf_source import PdfPageSource
from pagecut.preprocessing import preprocess_raster
from pagecut.region import GlyphSample, TextSegment
from pagecut.text import assign_text
from pagecut.xycut import segmentize

logger = logging.getLogger(__name__)

PageResult = Dict[int, List[TextSegment]]


@dataclass
class DocumentResult:
    """Segments of every page that could be processed, and errors of the others."""

    pages: PageResult = field(default_factory=dict)
    errors: Dict[int, InputError] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'pages': {i: [s.to_dict() for s in segs] for i, segs in self.pages.items()},
            'errors': {i: str(e) for i, e in self.errors.items()},
        }


def segment_page(raster: np.ndarray,
                 glyphs: Iterable[GlyphSample],
                 config: Optional[SegmentationConfig] = None,
                 page_index: int = 0) -> List[TextSegment]:
    """
    Segment one rendered page and attach its text.

    Args:
        raster: Page rendered at config.render_dpi
        glyphs: Glyphs of the page in raster coordinates
        config: Segmentation parameters
        page_index: Page number, used for logging and debug file names

    Returns:
        Text-bearing segments in discovery order
    """
    if config is None:
        config = SegmentationConfig()

    gray, density = preprocess_raster(raster, config.scale_down)
    segments = segmentize(density, config=config)
    text_segments = assign_text(segments, glyphs, config.scale_down)

    for segment in text_segments:
        logger.debug("Page %d segment %r: %r", page_index, segment.rect, segment.text[:60])

    if config.debug_dir:
        save_debug_images(config.debug_dir, page_index, gray, density, text_segments)

    return text_segments


def process_page(source, page_index: int,
                 config: Optional[SegmentationConfig] = None) -> List[TextSegment]:
    """
    Render, extract and segment one page of a source.

    Args:
        source: Object with render_page(index, dpi) and extract_glyphs(index, dpi)
        page_index: Zero-based page number
        config: Segmentation parameters

    Returns:
        Text-bearing segments of the page
    """
    if config is None:
        config = SegmentationConfig()

    raster = source.render_page(page_index, config.render_dpi)
    glyphs = source.extract_glyphs(page_index, config.render_dpi)

    return segment_page(raster, glyphs, config, page_index)


def process_document(source,
                     config: Optional[SegmentationConfig] = None,
                     pages: Optional[Sequence[int]] = None) -> DocumentResult:
    """
    Segment every page of a source.

    A page whose raster or glyphs cannot be obtained is recorded in
    DocumentResult.errors and the remaining pages are still processed.

    Args:
        source: Object with page_count, render_page and extract_glyphs
        config: Segmentation parameters
        pages: Page indices to process (default: all, in order)

    Returns:
        DocumentResult
    """
    if config is None:
        config = SegmentationConfig()
    if pages is None:
        pages = range(source.page_count)

    result = DocumentResult()
    for page_index in pages:
        try:
            result.pages[page_index] = process_page(source, page_index, config)
        except InputError as exc:
            if exc.page_index is None:
                exc.page_index = page_index
            logger.warning("Skipping page %d: %s", page_index, exc)
            result.errors[page_index] = exc
            continue

        logger.info("Page %d: %d text segments", page_index, len(result.pages[page_index]))

    logger.info("Processed %d pages, %d failed", len(result.pages), len(result.errors))
    return result


def segment_pdf(path: str, config: Optional[SegmentationConfig] = None,
                pages: Optional[Sequence[int]] = None) -> DocumentResult:
    """Segment the pages of a PDF file."""
    with PdfPageSource.open(path) as source:
        return process_document(source, config, pages)
