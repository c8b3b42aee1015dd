"""Command line front end: SVG in, plan out, optionally plotted."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from .config import PlotterSettings, Workspace, workspace_for_model
from .device import GRBL, DeviceError, MockPlotter
from .errors import GeometryError
from .executor import PlanExecutor, RenderOptions
from .logging_config import setup_logging
from .plan import Plan, build_plan, order_nearest
from .svg_loader import load_svg

logger = logging.getLogger(__name__)


def _parse_area(value: str) -> Tuple[float, float]:
    raw = value.strip().lower().replace("mm", "")
    try:
        width_str, height_str = raw.split("x", 1)
        width = float(width_str)
        height = float(height_str)
    except (ValueError, TypeError) as exc:
        raise argparse.ArgumentTypeError("Area size must be in WIDTHxHEIGHT format, e.g. 300x245") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("Area dimensions must be positive numbers.")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plotplan", description="Plan and plot SVG drawings on a pen plotter.")
    parser.add_argument("svg", type=Path, help="SVG file to plot.")
    parser.add_argument("--tolerance", type=float, default=0.5, help="Sampling step along SVG paths in mm.")
    parser.add_argument("--simplify", type=float, default=None, metavar="TOL",
                        help="Simplify polylines with the given tolerance in mm.")
    parser.add_argument("--optimize", action="store_true",
                        help="Reorder shapes nearest-first to reduce pen-up travel.")
    parser.add_argument("--fit", action="store_true", help="Scale the drawing to fill the plot area.")
    parser.add_argument("--margin", type=float, default=0.0, help="Margin in mm kept free when fitting.")
    area = parser.add_mutually_exclusive_group()
    area.add_argument("--model", help="Plotter model preset (V3, V3A3, SEA3, MINI).")
    area.add_argument("--area", type=_parse_area, metavar="WIDTHxHEIGHT", help="Plot area in mm, e.g. 300x245.")
    parser.add_argument("--port", "-p", help="Serial device of the plotter (e.g. /dev/ttyUSB0).")
    parser.add_argument("--dry-run", action="store_true", help="Run the plan against an in-memory plotter.")
    parser.add_argument("--no-home", action="store_true", help="Do not return to the origin when done.")
    parser.add_argument("--json", action="store_true", help="Print the plan summary as JSON.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", help="Also write log output to this file.")
    return parser


def _workspace(args: argparse.Namespace) -> Workspace:
    if args.model:
        return workspace_for_model(args.model)
    if args.area:
        return Workspace(*args.area)
    return Workspace()


def make_plan(args: argparse.Namespace, workspace: Workspace) -> Plan:
    drawing = load_svg(args.svg, tolerance=args.tolerance)
    if args.simplify is not None:
        drawing = drawing.simplify(args.simplify)
    if args.fit:
        drawing = drawing.fit(workspace.width_mm, workspace.height_mm, margin=args.margin)
    geometries = drawing.geometries
    if args.optimize:
        geometries = order_nearest(geometries)
    return build_plan(geometries)


def _execute(plan: Plan, device, *, return_home: bool) -> None:
    executor = PlanExecutor(device, options=RenderOptions(return_home=return_home))
    with tqdm(total=len(plan.edges), unit="seg", desc="Plotting") as bar:
        executor.run(plan, progress_cb=lambda done, extra: bar.update(done - bar.n))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        workspace = _workspace(args)
        plan = make_plan(args, workspace)
    except (GeometryError, ValueError, OSError) as exc:
        logger.error("Could not build plan: %s", exc)
        return 1

    summary = plan.summary()
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        logger.info(
            "Plan: %d segments, %d pen lifts, draw %.2f mm, travel %.2f mm",
            summary["segments"], summary["pen_lifts"], summary["draw_length"], summary["travel_length"],
        )

    if not args.dry_run and not args.port:
        return 0

    settings = PlotterSettings(port=args.port, workspace=workspace)
    device = MockPlotter(settings=settings) if args.dry_run else GRBL(settings)
    try:
        device.connect()
        _execute(plan, device, return_home=not args.no_home)
    except KeyboardInterrupt:
        logger.warning("Plot cancelled.")
        return 130
    except (DeviceError, TimeoutError) as exc:
        logger.error("Device error: %s", exc)
        return 2
    finally:
        device.close()
    return 0


def run(argv: Optional[List[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
