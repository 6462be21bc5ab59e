"""Quadrilateral regions in page coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuadPoints:
    """Four corners of an annotation attachment point.

    Corner order follows the PDF ``/QuadPoints`` convention used by
    PDFium: (x1, y1) and (x2, y2) are the upper edge, (x3, y3) and
    (x4, y4) the lower edge.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float
    x4: float
    y4: float

    @classmethod
    def from_rect(cls, left: float, bottom: float, right: float, top: float) -> QuadPoints:
        """Build an axis-aligned quadrilateral from rectangle edges."""
        return cls(left, top, right, top, left, bottom, right, bottom)

    def bounds(self) -> tuple[float, float, float, float]:
        """Return the (left, bottom, right, top) bounding box."""
        xs = (self.x1, self.x2, self.x3, self.x4)
        ys = (self.y1, self.y2, self.y3, self.y4)
        return (min(xs), min(ys), max(xs), max(ys))

    def as_tuple(self) -> tuple[float, ...]:
        return (self.x1, self.y1, self.x2, self.y2, self.x3, self.y3, self.x4, self.y4)
