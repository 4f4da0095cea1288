"""Vector and axis-aligned box helpers.

Vectors are ``pygame.math.Vector2``. Once a vector is stored on a ball or a
block it is treated as a value: code builds a new vector instead of mutating
the stored one, so snapshots can share them.
"""
from dataclasses import dataclass
from typing import Optional

from pygame.math import Vector2


def vec(x: float, y: float) -> Vector2:
    return Vector2(float(x), float(y))


def clamp(value, low, high):
    return max(low, min(high, value))


@dataclass(frozen=True)
class Box:
    """Axis-aligned box described by its centre and half extents."""
    center: Vector2
    half_w: float
    half_h: float

    @classmethod
    def from_top_left(cls, top_left: Vector2, w: float, h: float) -> "Box":
        return cls(vec(top_left.x + w / 2, top_left.y + h / 2), w / 2, h / 2)

    @property
    def left(self):
        return self.center.x - self.half_w

    @property
    def right(self):
        return self.center.x + self.half_w

    @property
    def top(self):
        return self.center.y - self.half_h

    @property
    def bottom(self):
        return self.center.y + self.half_h


@dataclass(frozen=True)
class Penetration:
    dx: float  # centre offset of the moving box relative to the static one
    dy: float
    overlap_x: float
    overlap_y: float

    @property
    def horizontal(self) -> bool:
        """True when the smaller overlap is along x."""
        return self.overlap_x < self.overlap_y


def penetration(moving: Box, static: Box) -> Optional[Penetration]:
    """Overlap of two boxes using combined half extents, or None if apart."""
    dx = moving.center.x - static.center.x
    dy = moving.center.y - static.center.y
    combined_w = moving.half_w + static.half_w
    combined_h = moving.half_h + static.half_h
    if abs(dx) >= combined_w or abs(dy) >= combined_h:
        return None
    return Penetration(dx, dy, combined_w - abs(dx), combined_h - abs(dy))
