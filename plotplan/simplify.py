"""Ramer-Douglas-Peucker polyline simplification."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .geometry import Point


def perpendicular_distance(point: "Point", start: "Point", end: "Point") -> float:
    """Distance from ``point`` to the infinite line through ``start`` and ``end``."""

    a = end.y - start.y
    b = start.x - end.x
    c = (end.x * start.y) - (start.x * end.y)
    divisor = math.sqrt((a * a) + (b * b))
    if divisor == 0.0:
        # anchors coincide on a closed ring
        return math.hypot(point.x - start.x, point.y - start.y)
    return abs((a * point.x) + (b * point.y) + c) / divisor


def _rdp(pts: Sequence["Point"], eps: float) -> List["Point"]:
    end_idx = len(pts) - 1
    max_dist = 0.0
    max_idx = 0
    for i in range(1, end_idx):
        d = perpendicular_distance(pts[i], pts[0], pts[end_idx])
        if d > max_dist:
            max_dist, max_idx = d, i

    if max_dist > eps:
        left = _rdp(pts[: max_idx + 1], eps)
        right = _rdp(pts[max_idx:], eps)
        return left[:-1] + right
    return [pts[0], pts[end_idx]]


def simplify(points: Sequence["Point"], epsilon: float) -> List["Point"]:
    """Simplify ``points`` so no dropped vertex deviates more than ``epsilon``.

    The first and last point are always kept.  A vertex lying exactly
    ``epsilon`` away from the anchor line is dropped.
    """

    if epsilon < 0:
        raise ValueError(f"Tolerance must be non-negative, got {epsilon}")
    if len(points) <= 2:
        return list(points)
    return _rdp(list(points), epsilon)


__all__ = ["simplify", "perpendicular_distance"]
