"""Error taxonomy shared by the geometry core and the plan builder."""

from __future__ import annotations


class GeometryError(Exception):
    """Base class for every error raised by a geometry operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class EmptyGeometry(GeometryError):
    """Bounds requested on a geometry without any points."""


class InvalidLineString(GeometryError):
    """A polyline with fewer than two points where validity is required."""


class InvalidPolygon(GeometryError):
    """A polygon whose exterior or interior rings fail the polyline invariant."""


# Reserved for fallible transforms; nothing raises these yet.
class ScalingError(GeometryError):
    pass


class RotationError(GeometryError):
    pass


class TranslationError(GeometryError):
    pass


__all__ = [
    "GeometryError",
    "EmptyGeometry",
    "InvalidLineString",
    "InvalidPolygon",
    "ScalingError",
    "RotationError",
    "TranslationError",
]
