"""
Bezier outlines for circles and the "metaball" bridges between them.

Both generators return immutable draw commands holding a closed chain of
cubic bezier points: a start point followed by groups of three
(handle, handle, anchor).  Nothing here writes output; see
``renderer`` for jgraph serialisation and ``canvas`` for Qt painting.

The blend outline follows the well known "metaball" construction: pick
two anchor points on each circle somewhere between the overlap angle
and the outer tangent, join them with handles whose length shrinks as
the circles separate, and pinch the two halves together on the far
circle's rim.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .geometry import Point2D, angle, distance, point_at
from .palettes import Color

# Bezier circle constant, see spencermortensen.com/articles/bezier-circle/
KAPPA = 0.5519150244935105707435627

# Blend tuning
SPREAD = 0.5          # 0 = overlap angle, 1 = outer tangent
HANDLE_SIZE = 2.4
MAX_REACH = 2.5       # second radius multiplier in the distance cut-off

Points = Tuple[Point2D, ...]


# ---------------------------------------------------------------------------
# Draw commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CircleCommand:
    """Filled circle, as 13 bezier points (start + 4 segments)."""
    center: Point2D
    radius: float
    color: Color
    points: Points


@dataclass(frozen=True)
class BlendCommand:
    """Filled bridge between two circles, as 10 bezier points (start + 3 segments)."""
    point0: Point2D
    radius0: float
    point1: Point2D
    radius1: float
    color: Color
    points: Points


DrawCommand = Union[CircleCommand, BlendCommand]


# ---------------------------------------------------------------------------
# Circle
# ---------------------------------------------------------------------------

def circle_outline(center: Point2D, radius: float, color: Color) -> CircleCommand:
    """Approximate a circle with four cubic bezier segments."""
    x, y, s = center.x, center.y, radius
    k = KAPPA * s
    points = (
        Point2D(x, y - s),
        Point2D(x + k, y - s), Point2D(x + s, y - k), Point2D(x + s, y),
        Point2D(x + s, y + k), Point2D(x + k, y + s), Point2D(x, y + s),
        Point2D(x - k, y + s), Point2D(x - s, y + k), Point2D(x - s, y),
        Point2D(x - s, y - k), Point2D(x - k, y - s), Point2D(x, y - s),
    )
    return CircleCommand(center=center, radius=radius, color=color, points=points)


# ---------------------------------------------------------------------------
# Metaball bridge
# ---------------------------------------------------------------------------

def _acos(value: float) -> float:
    # rounding can push near-tangent ratios just past +-1
    return math.acos(max(-1.0, min(1.0, value)))


def blend_eligible(point0: Point2D, radius0: float, point1: Point2D, radius1: float) -> bool:
    """Whether two circles are close enough, and distinct enough, to bridge.

    The reach cut-off ``radius0 + 2.5 * radius1`` is deliberately not
    symmetric in the two radii.
    """
    if radius0 == 0 or radius1 == 0:
        return False
    d = distance(point0, point1)
    if d == 0:
        return False
    if d > radius0 + radius1 * MAX_REACH:
        return False
    # one circle swallows the other: nothing to bridge
    return d > abs(radius0 - radius1)


def metaball_outline(
    point0: Point2D,
    radius0: float,
    point1: Point2D,
    radius1: float,
    color: Color,
) -> Optional[BlendCommand]:
    """Build the bridge outline between two circles.

    Returns ``None`` when the pair is not :func:`blend_eligible`.

    The ten points are ``[p0, h0, h2, p2, edge, edge, p3, h3, h1, p1]``:
    anchors ``p0``/``p1`` on the first circle, ``p2``/``p3`` on the
    second, their handles ``h0..h3``, and the pinch point ``edge`` on
    the second circle's rim facing away from the first, repeated so both
    halves meet there exactly.
    """
    if not blend_eligible(point0, radius0, point1, radius1):
        return None

    d = distance(point0, point1)
    v = SPREAD

    # Overlap half-angles (law of cosines), only for intersecting circles
    u0 = 0.0
    u1 = 0.0
    if d < radius0 + radius1:
        u0 = _acos((radius0 * radius0 + d * d - radius1 * radius1) / (2 * radius0 * d))
        u1 = _acos((radius1 * radius1 + d * d - radius0 * radius0) / (2 * radius1 * d))

    angle_between = angle(point1, point0)
    max_spread = _acos((radius0 - radius1) / d)

    angle0 = angle_between + u0 + (max_spread - u0) * v
    angle1 = angle_between - u0 - (max_spread - u0) * v
    angle2 = angle_between + math.pi - u1 - (math.pi - u1 - max_spread) * v
    angle3 = angle_between - math.pi + u1 + (math.pi - u1 - max_spread) * v

    p0 = point_at(point0, angle0, radius0)
    p1 = point_at(point0, angle1, radius0)
    p2 = point_at(point1, angle2, radius1)
    p3 = point_at(point1, angle3, radius1)

    # Handle length: capped by anchor spacing and by centre spacing
    d2 = min(v * HANDLE_SIZE, distance(p0, p2) / (radius0 + radius1))
    d2 *= min(1.0, (d * 2) / (radius0 + radius1))

    r0 = radius0 * d2
    r1 = radius1 * d2

    h0 = point_at(p0, angle0 - math.pi / 2, r0)
    h1 = point_at(p1, angle1 + math.pi / 2, r0)
    h2 = point_at(p2, angle2 + math.pi / 2, r1)
    h3 = point_at(p3, angle3 - math.pi / 2, r1)

    edge = point_at(point1, angle(point1, point0), radius1)

    return BlendCommand(
        point0=point0,
        radius0=radius0,
        point1=point1,
        radius1=radius1,
        color=color,
        points=(p0, h0, h2, p2, edge, edge, p3, h3, h1, p1),
    )
