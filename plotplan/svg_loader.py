"""Utilities for turning SVG files into plotter drawings."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from svgpathtools import Path as SVGPathObject, svg2paths2

from .geometry import Drawing, Polyline

logger = logging.getLogger(__name__)


def _parse_length(value: Optional[str], default: float = 0.0) -> float:
    if not value:
        return default
    raw = value.strip().lower()
    for unit in ("px", "mm", "pt"):
        if raw.endswith(unit):
            raw = raw[: -len(unit)]
            break
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class SVGShape:
    """Single drawable item extracted from the SVG."""

    path: SVGPathObject
    color: str
    stroke_width: float = 1.0


@dataclass
class SVGDocument:
    """An SVG document as a list of shapes."""

    shapes: List[SVGShape] = field(default_factory=list)
    svg_attributes: Dict[str, str] = field(default_factory=dict)
    source_path: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Path) -> "SVGDocument":
        paths, attributes, svg_attributes = svg2paths2(str(path))
        shapes = []
        for path_obj, attr in zip(paths, attributes):
            if len(path_obj) == 0:
                continue
            color = attr.get("stroke") or attr.get("fill") or "#000000"
            width = _parse_length(attr.get("stroke-width"), 1.0)
            shapes.append(SVGShape(path=path_obj, color=color, stroke_width=width))
        logger.info("Loaded %d shapes from %s", len(shapes), path)
        return cls(shapes=shapes, svg_attributes=svg_attributes, source_path=Path(path))

    @classmethod
    def from_bytes(cls, data: bytes, *, name: str = "uploaded.svg") -> "SVGDocument":
        fd, tmp = tempfile.mkstemp(suffix=".svg")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            doc = cls.from_file(Path(tmp))
        finally:
            os.unlink(tmp)
        doc.source_path = Path(name)
        return doc

    def colors(self) -> List[str]:
        seen: List[str] = []
        for shape in self.shapes:
            if shape.color not in seen:
                seen.append(shape.color)
        return seen

    def size(self) -> Tuple[float, float]:
        width = _parse_length(self.svg_attributes.get("width"))
        height = _parse_length(self.svg_attributes.get("height"))
        return width, height

    def to_drawing(self, tolerance: float = 0.5, *, colors: Optional[Iterable[str]] = None) -> Drawing:
        """Sample every shape into a :class:`Polyline`, in document order.

        ``colors`` restricts the drawing to shapes with one of the given
        stroke colors.
        """

        wanted = set(colors) if colors is not None else None
        polylines: List[Polyline] = []
        for shape in self.shapes:
            if wanted is not None and shape.color not in wanted:
                continue
            pts = sample_path(shape.path, tolerance)
            if len(pts) < 2:
                continue
            polylines.append(Polyline(pts))
        width, height = self.size()
        return Drawing(tuple(polylines), width=width, height=height)


def sample_path(path: SVGPathObject, tolerance: float = 0.5) -> List[Tuple[float, float]]:
    """Convert an svgpathtools Path into a list of coordinate tuples."""

    length = max(path.length(), tolerance)
    steps = max(int(length / max(tolerance, 1e-3)), 1)
    points: List[Tuple[float, float]] = []
    for i in range(steps + 1):
        t = i / steps
        point = path.point(t)
        points.append((float(point.real), float(point.imag)))
    return points


def load_svg(path: Path, tolerance: float = 0.5) -> Drawing:
    return SVGDocument.from_file(path).to_drawing(tolerance)


__all__ = ["SVGShape", "SVGDocument", "sample_path", "load_svg"]
