"""Execute a :class:`plotplan.plan.Plan` on a GRBL-like device.

The executor walks the plan's edges in order.  The pen is only raised or
lowered when a segment's ``pen_up`` flag differs from the current pen state,
so a run of drawn segments becomes one continuous stroke on the device.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Event
from typing import Any, Callable, Dict, Optional

from .plan import Plan, Segment

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Dict[str, Any]], None]
StatusCallback = Callable[[str], None]


class ExecutionCancelled(RuntimeError):
    """Raised when a stop was requested while a plan was running."""


@dataclass
class RenderOptions:
    settle_down_s: float = 0.05
    settle_up_s: float = 0.03
    flush_every: int = 200
    feed_draw: Optional[int] = None  # falls back to the device settings
    feed_travel: Optional[int] = None
    return_home: bool = True


class PlanExecutor:
    """Drive a device through every segment of a plan."""

    def __init__(self, device, *, options: Optional[RenderOptions] = None) -> None:
        self.device = device
        self.options = options or RenderOptions()
        self._pen_is_up: Optional[bool] = None

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def run(
        self,
        plan: Plan,
        *,
        stop_event: Optional[Event] = None,
        progress_cb: Optional[ProgressCallback] = None,
        status_cb: Optional[StatusCallback] = None,
    ) -> None:
        """Execute the plan and optionally report progress."""

        def status(msg: str) -> None:
            logger.info(msg)
            if status_cb:
                status_cb(msg)

        opts = self.options
        total = len(plan.edges)
        if total == 0:
            status("Plan is empty, nothing to do.")
            return

        status(
            f"Plan: {total} segments, {plan.pen_lifts()} pen lifts, "
            f"draw {plan.draw_length():.2f} mm, travel {plan.travel_length():.2f} mm."
        )

        self._set_pen(up=True)
        first = plan.edges[0].start
        self.device.move_xy(first.x, first.y, feed=self._feed(True, 1))

        try:
            for i, seg in enumerate(plan.edges, start=1):
                if stop_event and stop_event.is_set():
                    raise ExecutionCancelled("Render cancelled")
                self._run_segment(seg)
                if opts.flush_every and i % opts.flush_every == 0:
                    self.device.wait_idle()
                if progress_cb:
                    progress_cb(i, {"total": total})
        finally:
            # never leave the pen on the paper
            self._set_pen(up=True)

        self.device.wait_idle()
        if opts.return_home:
            self.device.move_xy(0.0, 0.0, feed=self._feed(True, 1))
            self.device.wait_idle()
        status("Plan finished.")

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _run_segment(self, seg: Segment) -> None:
        if seg.pen_up != self._pen_is_up:
            self._set_pen(up=seg.pen_up)
        feed = self._feed(seg.pen_up, seg.speed)
        if seg.pen_up:
            self.device.move_xy(seg.end.x, seg.end.y, feed=feed)
        else:
            self.device.draw_xy(seg.end.x, seg.end.y, feed=feed)

    def _feed(self, pen_up: bool, speed: int) -> Optional[int]:
        opts = self.options
        settings = getattr(self.device, "settings", None)
        if pen_up:
            base = opts.feed_travel if opts.feed_travel is not None else getattr(settings, "feed_travel", None)
        else:
            base = opts.feed_draw if opts.feed_draw is not None else getattr(settings, "feed_draw", None)
        if base is None:
            return None
        return int(base * max(1, speed))

    def _set_pen(self, *, up: bool) -> None:
        if self._pen_is_up == up:
            return
        if up:
            self.device.pen_up()
            delay = self.options.settle_up_s
        else:
            self.device.pen_down()
            delay = self.options.settle_down_s
        self._pen_is_up = up
        if delay > 0:
            time.sleep(delay)


__all__ = ["PlanExecutor", "RenderOptions", "ExecutionCancelled"]
