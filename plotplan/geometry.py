"""Geometry primitives for plotter drawings.

Every shape is an immutable value.  Transforms and simplification return new
instances and never touch the receiver, so a geometry handed to a plan or a
drawing can be shared freely.  The set of variants is closed:
:class:`Point`, :class:`Polyline`, :class:`Polygon`, :class:`MultiPoint` and
:class:`MultiPolygon`, all exposing the same operations.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import math

from .errors import EmptyGeometry, InvalidLineString, InvalidPolygon
from .hull import convex_hull
from .simplify import simplify as rdp_simplify

XY = Tuple[float, float]


def _as_point(value: Union["Point", XY, Sequence[float]]) -> "Point":
    if isinstance(value, Point):
        return value
    x, y = value
    return Point(float(x), float(y))


def _as_points(values: Iterable[Union["Point", XY]]) -> Tuple["Point", ...]:
    return tuple(_as_point(v) for v in values)


def _hull_bounds(points: Sequence["Point"]) -> "Bounds":
    hull = convex_hull(points)
    min_x = min(p.x for p in hull)
    max_x = max(p.x for p in hull)
    min_y = min(p.y for p in hull)
    max_y = max(p.y for p in hull)
    return Bounds(Point(min_x, min_y), Point(max_x, max_y))


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    """A 2D coordinate."""

    x: float
    y: float

    def distance(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> XY:
        return (self.x, self.y)

    def translate(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def rotate(self, angle: float, origin: Optional["Point"] = None) -> "Point":
        """Rotate counter-clockwise by ``angle`` degrees around ``origin``."""
        origin = origin if origin is not None else ORIGIN
        theta = math.radians(angle)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        moved = self.translate(-origin.x, -origin.y)
        rx = moved.x * cos_t - moved.y * sin_t
        ry = moved.x * sin_t + moved.y * cos_t
        return Point(rx, ry).translate(origin.x, origin.y)

    def scale(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def coords(self) -> Tuple["Point", ...]:
        return (self,)

    def is_valid(self) -> bool:
        return True

    def decompose(self) -> Tuple["Point", ...]:
        return (self,)

    def simplify(self, tolerance: float) -> "Point":
        return self

    def bounds(self) -> "Bounds":
        return Bounds(self, self)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Bounds:
    """Axis aligned bounding box."""

    min_point: Point
    max_point: Point

    @property
    def width(self) -> float:
        return self.max_point.x - self.min_point.x

    @property
    def height(self) -> float:
        return self.max_point.y - self.min_point.y

    @property
    def center(self) -> Point:
        return Point(
            0.5 * (self.min_point.x + self.max_point.x),
            0.5 * (self.min_point.y + self.max_point.y),
        )

    def union(self, other: "Bounds") -> "Bounds":
        return Bounds(
            Point(min(self.min_point.x, other.min_point.x), min(self.min_point.y, other.min_point.y)),
            Point(max(self.max_point.x, other.max_point.x), max(self.max_point.y, other.max_point.y)),
        )

    def to_list(self) -> List[List[float]]:
        return [list(self.min_point.as_tuple()), list(self.max_point.as_tuple())]


@dataclass(frozen=True)
class Polyline:
    """Ordered sequence of points.

    A polyline needs at least two points to be valid.  Closed curves repeat
    their first point at the end.
    """

    points: Tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_points(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def length(self) -> float:
        return sum(a.distance(b) for a, b in zip(self.points, self.points[1:]))

    def reversed(self) -> "Polyline":
        return Polyline(self.points[::-1])

    def translate(self, dx: float, dy: float) -> "Polyline":
        return Polyline(tuple(p.translate(dx, dy) for p in self.points))

    def rotate(self, angle: float, origin: Point = ORIGIN) -> "Polyline":
        return Polyline(tuple(p.rotate(angle, origin) for p in self.points))

    def scale(self, factor: float) -> "Polyline":
        return Polyline(tuple(p.scale(factor) for p in self.points))

    def coords(self) -> Tuple[Point, ...]:
        return self.points

    def is_valid(self) -> bool:
        return len(self.points) >= 2

    def decompose(self) -> Tuple["Polyline", ...]:
        return (self,)

    def simplify(self, tolerance: float) -> "Polyline":
        return Polyline(tuple(rdp_simplify(self.points, tolerance)))

    def bounds(self) -> Bounds:
        if not self.points:
            raise InvalidLineString("Cannot calculate bounds of an empty Polyline.")
        return _hull_bounds(self.points)


@dataclass(frozen=True)
class Polygon:
    """Exterior ring plus optional interior rings (holes)."""

    exterior: Polyline
    interiors: Tuple[Polyline, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.exterior, Polyline):
            object.__setattr__(self, "exterior", Polyline(self.exterior))
        object.__setattr__(
            self,
            "interiors",
            tuple(r if isinstance(r, Polyline) else Polyline(r) for r in self.interiors),
        )

    @property
    def rings(self) -> Tuple[Polyline, ...]:
        return (self.exterior,) + self.interiors

    def translate(self, dx: float, dy: float) -> "Polygon":
        return Polygon(self.exterior.translate(dx, dy), tuple(r.translate(dx, dy) for r in self.interiors))

    def rotate(self, angle: float, origin: Point = ORIGIN) -> "Polygon":
        return Polygon(
            self.exterior.rotate(angle, origin),
            tuple(r.rotate(angle, origin) for r in self.interiors),
        )

    def scale(self, factor: float) -> "Polygon":
        return Polygon(self.exterior.scale(factor), tuple(r.scale(factor) for r in self.interiors))

    def coords(self) -> Tuple[Point, ...]:
        return self.exterior.points

    def is_valid(self) -> bool:
        if self.exterior.is_valid() and all(r.is_valid() for r in self.interiors):
            return True
        raise InvalidPolygon("Invalid polygon")

    def decompose(self) -> Tuple["Polygon", ...]:
        return (self,)

    def simplify(self, tolerance: float) -> "Polygon":
        return Polygon(
            self.exterior.simplify(tolerance),
            tuple(r.simplify(tolerance) for r in self.interiors),
        )

    def bounds(self) -> Bounds:
        if not self.exterior.points:
            raise InvalidPolygon("Cannot calculate bounds of an empty Polygon.")
        return _hull_bounds(self.exterior.points)


@dataclass(frozen=True)
class MultiPoint:
    """Unordered collection of points."""

    points: Tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_points(self.points))

    def translate(self, dx: float, dy: float) -> "MultiPoint":
        return MultiPoint(tuple(p.translate(dx, dy) for p in self.points))

    def rotate(self, angle: float, origin: Point = ORIGIN) -> "MultiPoint":
        return MultiPoint(tuple(p.rotate(angle, origin) for p in self.points))

    def scale(self, factor: float) -> "MultiPoint":
        return MultiPoint(tuple(p.scale(factor) for p in self.points))

    def coords(self) -> Tuple[Point, ...]:
        return self.points

    def is_valid(self) -> bool:
        return True

    def decompose(self) -> Tuple["MultiPoint", ...]:
        return (self,)

    def simplify(self, tolerance: float) -> "MultiPoint":
        return self

    def bounds(self) -> Bounds:
        if not self.points:
            raise EmptyGeometry("Cannot calculate bounds of an empty MultiPoint.")
        return _hull_bounds(self.points)


@dataclass(frozen=True)
class MultiPolygon:
    """Collection of polygons."""

    polygons: Tuple[Polygon, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))

    def translate(self, dx: float, dy: float) -> "MultiPolygon":
        return MultiPolygon(tuple(p.translate(dx, dy) for p in self.polygons))

    def rotate(self, angle: float, origin: Point = ORIGIN) -> "MultiPolygon":
        return MultiPolygon(tuple(p.rotate(angle, origin) for p in self.polygons))

    def scale(self, factor: float) -> "MultiPolygon":
        return MultiPolygon(tuple(p.scale(factor) for p in self.polygons))

    def coords(self) -> Tuple[Point, ...]:
        pts: List[Point] = []
        for polygon in self.polygons:
            pts.extend(polygon.coords())
        return tuple(pts)

    def is_valid(self) -> bool:
        for polygon in self.polygons:
            polygon.is_valid()
        return True

    def decompose(self) -> Tuple["MultiPolygon", ...]:
        return (self,)

    def simplify(self, tolerance: float) -> "MultiPolygon":
        return MultiPolygon(tuple(p.simplify(tolerance) for p in self.polygons))

    def bounds(self) -> Bounds:
        pts: List[Point] = []
        for polygon in self.polygons:
            for ring in polygon.rings:
                pts.extend(ring.points)
        if not pts:
            raise InvalidPolygon("Cannot calculate bounds of an empty MultiPolygon.")
        return _hull_bounds(pts)


Geometry = Union[Point, Polyline, Polygon, MultiPoint, MultiPolygon]
GEOMETRY_TYPES = (Point, Polyline, Polygon, MultiPoint, MultiPolygon)


# ---------------------------------------------------------------------------
# Drawing container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Drawing:
    """Ordered collection of geometries making up one plot."""

    geometries: Tuple[Geometry, ...] = ()
    width: float = 0.0
    height: float = 0.0

    def __post_init__(self) -> None:
        geometries = tuple(self.geometries)
        for geom in geometries:
            if not isinstance(geom, GEOMETRY_TYPES):
                raise TypeError(f"Unsupported object: {type(geom)!r}")
        object.__setattr__(self, "geometries", geometries)

    def __iter__(self):
        return iter(self.geometries)

    def __len__(self) -> int:
        return len(self.geometries)

    def _with(self, geometries: Iterable[Geometry]) -> "Drawing":
        return Drawing(tuple(geometries), width=self.width, height=self.height)

    def bounds(self) -> Bounds:
        if not self.geometries:
            raise EmptyGeometry("Cannot calculate bounds of an empty Drawing.")
        result = self.geometries[0].bounds()
        for geom in self.geometries[1:]:
            result = result.union(geom.bounds())
        return result

    def translate(self, dx: float, dy: float) -> "Drawing":
        return self._with(g.translate(dx, dy) for g in self.geometries)

    def rotate(self, angle: float, origin: Point = ORIGIN) -> "Drawing":
        return self._with(g.rotate(angle, origin) for g in self.geometries)

    def scale(self, factor: float) -> "Drawing":
        return self._with(g.scale(factor) for g in self.geometries)

    def simplify(self, tolerance: float) -> "Drawing":
        return self._with(g.simplify(tolerance) for g in self.geometries)

    def transform(self, fn: Callable[[Tuple[Geometry, ...]], Iterable[Geometry]]) -> "Drawing":
        return self._with(fn(self.geometries))

    def fit(self, width: float, height: float, *, margin: float = 0.0) -> "Drawing":
        """Move the drawing to the origin and scale it uniformly into ``width`` x ``height``.

        ``margin`` is kept free on every side.  A drawing collapsed to a single
        point is only translated.
        """

        avail_w = width - 2.0 * margin
        avail_h = height - 2.0 * margin
        if avail_w <= 0 or avail_h <= 0:
            raise ValueError("Margin leaves no room inside the target area")
        box = self.bounds()
        moved = self.translate(-box.min_point.x, -box.min_point.y)
        factors = []
        if box.width > 0:
            factors.append(avail_w / box.width)
        if box.height > 0:
            factors.append(avail_h / box.height)
        if factors:
            moved = moved.scale(min(factors))
        fitted = moved.translate(margin, margin)
        return Drawing(fitted.geometries, width=width, height=height)

    # ------------------------------- serialisation ---------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "geometries": [geometry_to_dict(g) for g in self.geometries],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Drawing":
        items = data.get("geometries", [])
        if not isinstance(items, list):
            raise ValueError("Drawing geometries must be a list")
        return Drawing(
            tuple(geometry_from_dict(item) for item in items),
            width=float(data.get("width", 0.0)),
            height=float(data.get("height", 0.0)),
        )


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------


def _pts_to_list(points: Iterable[Point]) -> List[List[float]]:
    return [[float(p.x), float(p.y)] for p in points]


def geometry_to_dict(geom: Geometry) -> Dict[str, Any]:
    if isinstance(geom, Point):
        return {"type": "point", "coordinates": [geom.x, geom.y]}
    if isinstance(geom, Polyline):
        return {"type": "polyline", "points": _pts_to_list(geom.points)}
    if isinstance(geom, Polygon):
        return {
            "type": "polygon",
            "exterior": _pts_to_list(geom.exterior.points),
            "interiors": [_pts_to_list(r.points) for r in geom.interiors],
        }
    if isinstance(geom, MultiPoint):
        return {"type": "multipoint", "points": _pts_to_list(geom.points)}
    if isinstance(geom, MultiPolygon):
        return {"type": "multipolygon", "polygons": [geometry_to_dict(p) for p in geom.polygons]}
    raise TypeError(f"Unsupported object: {type(geom)!r}")


def geometry_from_dict(data: Dict[str, Any]) -> Geometry:
    if not isinstance(data, dict):
        raise ValueError(f"Geometry must be an object, got {type(data).__name__}")
    kind = data.get("type")
    if kind == "point":
        return _as_point(data["coordinates"])
    if kind == "polyline":
        return Polyline(data.get("points", []))
    if kind == "polygon":
        return Polygon(Polyline(data.get("exterior", [])), tuple(Polyline(r) for r in data.get("interiors", [])))
    if kind == "multipoint":
        return MultiPoint(data.get("points", []))
    if kind == "multipolygon":
        polygons = []
        for item in data.get("polygons", []):
            polygon = geometry_from_dict(item)
            if not isinstance(polygon, Polygon):
                raise ValueError(f"MultiPolygon members must be polygons, got {item.get('type')}")
            polygons.append(polygon)
        return MultiPolygon(tuple(polygons))
    raise ValueError(f"Unsupported geometry type: {kind}")


__all__ = [
    "XY",
    "ORIGIN",
    "Point",
    "Bounds",
    "Polyline",
    "Polygon",
    "MultiPoint",
    "MultiPolygon",
    "Geometry",
    "GEOMETRY_TYPES",
    "Drawing",
    "geometry_to_dict",
    "geometry_from_dict",
]
