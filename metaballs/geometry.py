"""
Plane geometry helpers shared by the circle and metaball outlines.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """Immutable point (or vector) in the drawing plane."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x + other.x, self.y + other.y)


def distance(p0: Point2D, p1: Point2D) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((p0.x - p1.x) * (p0.x - p1.x) + (p0.y - p1.y) * (p0.y - p1.y))


def angle(p0: Point2D, p1: Point2D) -> float:
    """Direction of the vector from *p1* to *p0*, in radians (-pi, pi].

    Coincident points give 0.0 (``atan2(0, 0)``).
    """
    return math.atan2(p0.y - p1.y, p0.x - p1.x)


def point_at(center: Point2D, a: float, radius: float) -> Point2D:
    """Point at distance *radius* from *center* in direction *a*."""
    return center + Point2D(radius * math.cos(a), radius * math.sin(a))
