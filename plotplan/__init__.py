"""Top-level package for plotplan.

Geometry primitives for plotter drawings, and a planner that turns an
ordered list of shapes into the pen movements a plotter executes.
"""

from .errors import (
    EmptyGeometry,
    GeometryError,
    InvalidLineString,
    InvalidPolygon,
    RotationError,
    ScalingError,
    TranslationError,
)
from .geometry import Bounds, Drawing, MultiPoint, MultiPolygon, Point, Polygon, Polyline
from .hull import convex_hull
from .plan import Plan, Segment, build_plan, order_nearest
from .simplify import simplify

__all__ = [
    "Point",
    "Polyline",
    "Polygon",
    "MultiPoint",
    "MultiPolygon",
    "Bounds",
    "Drawing",
    "Plan",
    "Segment",
    "build_plan",
    "order_nearest",
    "convex_hull",
    "simplify",
    "GeometryError",
    "EmptyGeometry",
    "InvalidLineString",
    "InvalidPolygon",
    "ScalingError",
    "RotationError",
    "TranslationError",
]
