"""
Blank-gap page segmentation: split rendered document pages into text blocks.
"""

from pagecut.config import SegmentationConfig, load_config
from pagecut.main import DocumentResult, process_document, segment_page, segment_pdf
from pagecut.region import BoundingRectangle, GlyphSample, Span, TextSegment
from pagecut.xycut import segmentize

__version__ = "0.1.0"
