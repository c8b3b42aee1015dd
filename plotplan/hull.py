"""Convex hull of a planar point set (Graham scan)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .geometry import Point


def _cross(p1: "Point", p2: "Point", p3: "Point") -> float:
    return (p2.x - p1.x) * (p3.y - p1.y) - (p3.x - p1.x) * (p2.y - p1.y)


def _is_clockwise(p1: "Point", p2: "Point", p3: "Point") -> bool:
    return _cross(p1, p2, p3) < 0


def _is_collinear(p1: "Point", p2: "Point", p3: "Point") -> bool:
    return (p2.x - p1.x) * (p3.y - p1.y) == (p3.x - p1.x) * (p2.y - p1.y)


def convex_hull(points: Sequence["Point"]) -> List["Point"]:
    """Return the hull vertices of ``points`` in counter-clockwise order.

    Inputs with fewer than three points are returned unchanged.  Duplicate
    points and points lying on a hull edge are dropped, so three collinear
    points reduce to the two extremes.
    """

    if len(points) <= 2:
        return list(points)

    pivot = min(points, key=lambda p: (p.y, p.x))

    def sort_key(p: "Point"):
        angle = math.atan2(p.y - pivot.y, p.x - pivot.x)
        return angle, math.hypot(p.x - pivot.x, p.y - pivot.y)

    stack: List["Point"] = []
    for point in sorted(points, key=sort_key):
        if stack and point == stack[-1]:
            continue
        while len(stack) >= 2 and _is_clockwise(stack[-2], stack[-1], point):
            stack.pop()
        stack.append(point)
        # collapse collinear runs to their end points
        while len(stack) >= 3 and _is_collinear(stack[-3], stack[-2], stack[-1]):
            del stack[-2]
    return stack


__all__ = ["convex_hull"]
