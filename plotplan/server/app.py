"""FastAPI application exposing the plan builder over HTTP."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..errors import GeometryError
from ..geometry import Drawing
from ..plan import build_plan, order_nearest

logger = logging.getLogger(__name__)

app = FastAPI(title="plotplan")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _load_drawing(payload: Dict[str, Any]) -> Drawing:
    try:
        return Drawing.from_dict(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid drawing: {exc}") from exc


@app.get("/api/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/plan")
def post_plan(
    payload: Dict[str, Any],
    simplify: Optional[float] = None,
    optimize: bool = False,
) -> Dict[str, Any]:
    drawing = _load_drawing(payload)
    try:
        if simplify is not None:
            drawing = drawing.simplify(simplify)
        geometries = order_nearest(drawing.geometries) if optimize else drawing.geometries
        plan = build_plan(geometries)
    except (GeometryError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info("Built plan with %d segments", len(plan.edges))
    return {"summary": plan.summary(), "plan": plan.to_dict()}


@app.post("/api/bounds")
def post_bounds(payload: Dict[str, Any]) -> Dict[str, Any]:
    drawing = _load_drawing(payload)
    try:
        bounds = drawing.bounds()
    except GeometryError as exc:
        raise HTTPException(status_code=400, detail=f"{exc.kind}: {exc.message}") from exc
    return {"bounds": bounds.to_list()}


__all__ = ["app"]
