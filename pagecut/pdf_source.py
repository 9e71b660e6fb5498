"""
PDF page rendering and glyph extraction backed by PyMuPDF.
"""

import logging
import os
from typing import List

import fitz
import numpy as np

from pagecut.errors import InputError, RenderError
from pagecut.region import GlyphSample

logger = logging.getLogger(__name__)

PDF_POINTS_PER_INCH = 72.0


class PdfPageSource:
    """
    Supplies page rasters and glyph streams of one PDF document.

    Glyph positions are reported in the pixel space of a raster rendered
    at the same DPI, so both collaborators agree on coordinates.
    """

    def __init__(self, doc: fitz.Document, name: str = "<memory>"):
        self.doc = doc
        self.name = name

    @classmethod
    def open(cls, path: str) -> 'PdfPageSource':
        if not os.path.isfile(path):
            raise InputError(f"{path} is not a file")
        try:
            doc = fitz.open(path)
        except (RuntimeError, ValueError) as exc:
            raise InputError(f"Failed to open PDF {path}: {exc}") from exc
        return cls(doc, name=path)

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> 'PdfPageSource':
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            raise InputError(f"Failed to parse PDF {name}: {exc}") from exc
        return cls(doc, name=name)

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def close(self):
        self.doc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _load_page(self, page_index: int) -> fitz.Page:
        if not 0 <= page_index < self.page_count:
            raise RenderError(
                f"Page {page_index} out of range for {self.name} ({self.page_count} pages)",
                page_index=page_index)
        try:
            return self.doc.load_page(page_index)
        except (RuntimeError, ValueError) as exc:
            raise RenderError(f"Failed to load page {page_index} of {self.name}: {exc}",
                              page_index=page_index) from exc

    def render_page(self, page_index: int, dpi: float) -> np.ndarray:
        """
        Render a page to grayscale.

        Args:
            page_index: Zero-based page number
            dpi: Render resolution

        Returns:
            uint8 array of shape (height, width), 0 = black
        """
        page = self._load_page(page_index)
        zoom = dpi / PDF_POINTS_PER_INCH
        try:
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), colorspace=fitz.csGRAY,
                                  alpha=False)
        except (RuntimeError, ValueError) as exc:
            raise RenderError(f"Failed to render page {page_index} of {self.name}: {exc}",
                              page_index=page_index) from exc

        h, w, n = pix.height, pix.width, pix.n
        buf = np.frombuffer(pix.samples, dtype=np.uint8).reshape(h, pix.stride)
        raster = buf[:, :w * n].reshape(h, w, n)[:, :, 0].copy()

        logger.debug("Rendered page %d at %.0f dpi: %d x %d", page_index, dpi, w, h)
        return raster

    def extract_glyphs(self, page_index: int, dpi: float) -> List[GlyphSample]:
        """
        Extract the characters drawn on a page.

        Each text line becomes one run. Positions are the centres of the glyph
        boxes in the pixel space of render_page(page_index, dpi); a baseline
        origin can sit just below the trimmed ink of a line.

        Args:
            page_index: Zero-based page number
            dpi: Resolution of the matching raster

        Returns:
            Glyphs in extraction order; empty for pages without a text layer
        """
        page = self._load_page(page_index)
        zoom = dpi / PDF_POINTS_PER_INCH
        try:
            raw = page.get_text("rawdict")
        except (RuntimeError, ValueError) as exc:
            raise InputError(f"Failed to extract text of page {page_index} of {self.name}: {exc}",
                             page_index=page_index) from exc

        glyphs = []
        run = 0
        for block in raw.get("blocks", []):
            if block.get("type") != 0:  # image block
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    for ch in span.get("chars", []):
                        x0, y0, x1, y1 = ch["bbox"]
                        center = fitz.Point((x0 + x1) / 2, (y0 + y1) / 2) * page.rotation_matrix
                        glyphs.append(GlyphSample(center.x * zoom, center.y * zoom, ch["c"], run))
                run += 1

        logger.debug("Extracted %d glyphs in %d runs from page %d", len(glyphs), run, page_index)
        return glyphs
