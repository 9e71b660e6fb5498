"""
Error types raised while segmenting document pages.
"""

from typing import Optional


class PagecutError(Exception):
    """Base class for all segmentation errors."""


class InputError(PagecutError):
    """A page raster or glyph stream could not be obtained or is malformed."""

    def __init__(self, message: str, page_index: Optional[int] = None):
        super().__init__(message)
        self.page_index = page_index


class RenderError(InputError):
    """The page could not be rendered (bad index, broken page)."""


class DegenerateGeometryError(PagecutError):
    """A rectangle was requested with an empty x or y range."""


class ConfigurationError(PagecutError):
    """Segmentation thresholds are outside their valid ranges."""
