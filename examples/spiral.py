"""Example script that builds a spiral drawing and asks the server for a plan."""
from __future__ import annotations

import math
import requests

from plotplan.geometry import Drawing, Polygon, Polyline


def build_spiral(turns: int = 10, radius: float = 100.0, steps: int = 800) -> Drawing:
    pts = []
    for i in range(steps):
        t = i / (steps - 1)
        angle = turns * 2 * math.pi * t
        r = radius * t
        pts.append((r * math.cos(angle) + radius, r * math.sin(angle) + radius))
    frame = Polygon([(0, 0), (2 * radius, 0), (2 * radius, 2 * radius), (0, 2 * radius), (0, 0)])
    return Drawing((frame, Polyline(pts)), width=2 * radius, height=2 * radius)


def main() -> None:
    drawing = build_spiral()
    res = requests.post(
        "http://localhost:8000/api/plan",
        params={"simplify": 0.05},
        json=drawing.to_dict(),
        timeout=5,
    )
    res.raise_for_status()
    print(res.json()["summary"])


if __name__ == "__main__":
    main()
