# gerber_preview/geometry/primitives.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass
class Bounds:
    """
    Axis aligned bounding box in mm.

    Field order follows the {min_x, max_x, min_y, max_y} layout used by
    the preview so that Bounds(0, 100, 0, 100) reads the same as the
    default extent.
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def expand_to_include(self, pt: Point2D) -> None:
        self.min_x = min(self.min_x, pt.x)
        self.min_y = min(self.min_y, pt.y)
        self.max_x = max(self.max_x, pt.x)
        self.max_y = max(self.max_y, pt.y)

    def include_bounds(self, other: "Bounds") -> None:
        self.min_x = min(self.min_x, other.min_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_x = max(self.max_x, other.max_x)
        self.max_y = max(self.max_y, other.max_y)

    def copy(self) -> "Bounds":
        return Bounds(self.min_x, self.max_x, self.min_y, self.max_y)

    @classmethod
    def default(cls) -> "Bounds":
        return cls(0.0, 100.0, 0.0, 100.0)

    @classmethod
    def from_size(cls, width: float, height: float) -> "Bounds":
        return cls(0.0, float(width), 0.0, float(height))
