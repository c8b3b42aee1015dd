"""Plan construction: turn an ordered list of geometries into pen movements.

A :class:`Plan` is the complete trajectory of the pen for one drawing.  Its
``edges`` are walked in order by the execution side; ``nodes`` repeats the
end points of every edge so callers can inspect the extent of a job without
touching the segments.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import EmptyGeometry
from .geometry import ORIGIN, Bounds, Drawing, Geometry, MultiPoint, Point, Polygon, Polyline


@dataclass(frozen=True)
class Segment:
    """A single straight pen movement.

    ``pen_up`` segments are transit moves with the pen lifted; all other
    segments leave a mark.  ``speed`` is a multiplier handed to the device's
    feed rate.
    """

    start: Point
    end: Point
    pen_up: bool = False
    speed: int = 1

    def length(self) -> float:
        return self.start.distance(self.end)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": [self.start.x, self.start.y],
            "to": [self.end.x, self.end.y],
            "pen_up": self.pen_up,
            "speed": self.speed,
        }


def _draw_segments(points: Sequence[Point], speed: int) -> List[Segment]:
    return [Segment(a, b, pen_up=False, speed=speed) for a, b in zip(points, points[1:])]


def _geometry_segments(
    geom: Geometry,
    last: Optional[Point],
    *,
    speed: int,
    travel_speed: int,
) -> List[Segment]:
    """Segments for one geometry, starting from the pen position ``last``."""

    if isinstance(geom, Polygon):
        chains: Tuple[Tuple[Point, ...], ...] = tuple(ring.points for ring in geom.rings)
    else:
        chains = (geom.coords(),)

    out: List[Segment] = []
    for chain in chains:
        if not chain:
            continue
        if last is not None:
            out.append(Segment(last, chain[0], pen_up=True, speed=travel_speed))
        out.extend(_draw_segments(chain, speed))
        if out:
            last = out[-1].end
    return out


def _flatten(edges: Iterable[Segment]) -> List[Point]:
    nodes: List[Point] = []
    for seg in edges:
        nodes.append(seg.start)
        nodes.append(seg.end)
    return nodes


@dataclass(frozen=True)
class Plan:
    """Ordered pen trajectory for a whole drawing."""

    nodes: Tuple[Point, ...] = ()
    edges: Tuple[Segment, ...] = ()

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    @property
    def last_point(self) -> Optional[Point]:
        return self.edges[-1].end if self.edges else None

    # ---------------------------- construction ------------------------------
    def add(self, geom: Geometry, *, speed: int = 1, travel_speed: int = 1) -> "Plan":
        """Return a new plan with ``geom`` appended after the current last point."""

        edges = _geometry_segments(geom, self.last_point, speed=speed, travel_speed=travel_speed)
        return Plan(self.nodes + tuple(_flatten(edges)), self.edges + tuple(edges))

    @classmethod
    def from_drawing(cls, drawing: Drawing, **kwargs: Any) -> "Plan":
        return build_plan(drawing.geometries, **kwargs)

    # ----------------------------- high level info ---------------------------
    def draw_length(self) -> float:
        return sum(seg.length() for seg in self.edges if not seg.pen_up)

    def travel_length(self) -> float:
        return sum(seg.length() for seg in self.edges if seg.pen_up)

    def pen_lifts(self) -> int:
        return sum(1 for seg in self.edges if seg.pen_up)

    def bounds(self) -> Bounds:
        if not self.nodes:
            raise EmptyGeometry("Cannot calculate bounds of an empty Plan.")
        return MultiPoint(self.nodes).bounds()

    def summary(self) -> Dict[str, Any]:
        return {
            "segments": len(self.edges),
            "pen_lifts": self.pen_lifts(),
            "draw_length": self.draw_length(),
            "travel_length": self.travel_length(),
            "bounds": self.bounds().to_list() if self.nodes else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [[p.x, p.y] for p in self.nodes],
            "edges": [seg.to_dict() for seg in self.edges],
        }


def build_plan(geometries: Iterable[Geometry], *, speed: int = 1, travel_speed: int = 1) -> Plan:
    """Fold ``geometries`` into a :class:`Plan`, preserving their order.

    A pen-up transit segment joins the end of each geometry (or polygon ring)
    to the start of the next.  The first failing geometry aborts the build and
    its error is raised unchanged.
    """

    nodes: List[Point] = []
    edges: List[Segment] = []
    last: Optional[Point] = None
    for geom in geometries:
        new_edges = _geometry_segments(geom, last, speed=speed, travel_speed=travel_speed)
        edges.extend(new_edges)
        nodes.extend(_flatten(new_edges))
        if edges:
            last = edges[-1].end
    return Plan(tuple(nodes), tuple(edges))


# ---------------------------------------------------------------------------
# Optional ordering
# ---------------------------------------------------------------------------


def _endpoints(geom: Geometry) -> Tuple[Optional[Point], Optional[Point]]:
    if isinstance(geom, Polygon):
        rings = [r for r in geom.rings if r.points]
        if not rings:
            return None, None
        return rings[0].points[0], rings[-1].points[-1]
    coords = geom.coords()
    if not coords:
        return None, None
    return coords[0], coords[-1]


def order_nearest(
    geometries: Iterable[Geometry],
    start: Point = ORIGIN,
    *,
    allow_reverse: bool = True,
) -> List[Geometry]:
    """Greedy nearest-neighbour ordering to cut down pen-up travel.

    Starting at ``start``, repeatedly pick the geometry whose first point is
    closest to the current pen position.  With ``allow_reverse`` a polyline
    may be flipped when its last point is closer.  Geometries without points
    keep their relative order at the end.  This never runs implicitly; call
    it before :func:`build_plan` to opt in.
    """

    remaining = list(geometries)
    empty = [g for g in remaining if _endpoints(g)[0] is None]
    remaining = [g for g in remaining if _endpoints(g)[0] is not None]
    ordered: List[Geometry] = []
    cur = start

    while remaining:
        best_i, best_cost, best_rev = 0, float("inf"), False
        for i, geom in enumerate(remaining):
            s, e = _endpoints(geom)
            d_fwd = cur.distance(s)
            cost, rev = d_fwd, False
            if allow_reverse and isinstance(geom, Polyline):
                d_rev = cur.distance(e)
                if d_rev < d_fwd:
                    cost, rev = d_rev, True
            if cost < best_cost:
                best_i, best_cost, best_rev = i, cost, rev
        geom = remaining.pop(best_i)
        if best_rev:
            geom = geom.reversed()
        ordered.append(geom)
        cur = _endpoints(geom)[1]
    return ordered + empty


__all__ = ["Segment", "Plan", "build_plan", "order_nearest"]
