"""
Value types for page segmentation.
Rectangles are expressed as half-open pixel intervals in density map space.
"""

from dataclasses import dataclass
from typing import Tuple

from pagecut.errors import DegenerateGeometryError


@dataclass(frozen=True)
class Span:
    """Half-open integer interval [start, end)."""

    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end

    def split_at(self, point: int) -> Tuple['Span', 'Span']:
        """Split into [start, point) and [point, end)."""
        return Span(self.start, point), Span(point, self.end)

    def __repr__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class BoundingRectangle:
    """A rectangular block of the density map."""

    x_range: Span
    y_range: Span

    def __post_init__(self):
        """Reject empty ranges."""
        if self.x_range.is_empty or self.y_range.is_empty:
            raise DegenerateGeometryError(
                f"Empty rectangle: x={self.x_range!r}, y={self.y_range!r}")

    @classmethod
    def full_page(cls, width: int, height: int) -> 'BoundingRectangle':
        return cls(Span(0, width), Span(0, height))

    @property
    def x(self) -> int:
        return self.x_range.start

    @property
    def y(self) -> int:
        return self.y_range.start

    @property
    def x2(self) -> int:
        """Right edge (exclusive)."""
        return self.x_range.end

    @property
    def y2(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y_range.end

    @property
    def w(self) -> int:
        return len(self.x_range)

    @property
    def h(self) -> int:
        return len(self.y_range)

    @property
    def area(self) -> int:
        return self.w * self.h

    def contains_point(self, px: int, py: int) -> bool:
        """Check if a point is inside the rectangle."""
        return self.x_range.contains(px) and self.y_range.contains(py)

    def split_x(self, point: int) -> Tuple['BoundingRectangle', 'BoundingRectangle']:
        """Split into a left and a right rectangle at column `point`."""
        left, right = self.x_range.split_at(point)
        return BoundingRectangle(left, self.y_range), BoundingRectangle(right, self.y_range)

    def split_y(self, point: int) -> Tuple['BoundingRectangle', 'BoundingRectangle']:
        """Split into a top and a bottom rectangle at row `point`."""
        top, bottom = self.y_range.split_at(point)
        return BoundingRectangle(self.x_range, top), BoundingRectangle(self.x_range, bottom)

    def to_dict(self) -> dict:
        return {
            'x': self.x,
            'y': self.y,
            'w': self.w,
            'h': self.h,
            'x2': self.x2,
            'y2': self.y2,
        }

    def __repr__(self) -> str:
        return f"BoundingRectangle(x={self.x_range!r}, y={self.y_range!r})"


@dataclass(frozen=True)
class GlyphSample:
    """
    One drawn character.

    Positions are in the rasterizer's native (not downscaled) pixel space.
    `run` is the index of the text run (line) the glyph was drawn in.
    """

    x: float
    y: float
    char: str
    run: int = 0


@dataclass(frozen=True)
class TextSegment:
    """A leaf rectangle together with the text found inside it."""

    rect: BoundingRectangle
    text: str

    @property
    def x_range(self) -> Span:
        return self.rect.x_range

    @property
    def y_range(self) -> Span:
        return self.rect.y_range

    @property
    def x(self) -> int:
        return self.rect.x

    @property
    def y(self) -> int:
        return self.rect.y

    @property
    def w(self) -> int:
        return self.rect.w

    @property
    def h(self) -> int:
        return self.rect.h

    def to_dict(self) -> dict:
        d = self.rect.to_dict()
        d['text'] = self.text
        return d
