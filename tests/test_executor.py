import threading

import pytest

from plotplan.config import PlotterSettings
from plotplan.device import MockPlotter
from plotplan.executor import ExecutionCancelled, PlanExecutor, RenderOptions
from plotplan.geometry import Point, Polyline
from plotplan.plan import Plan, Segment, build_plan


@pytest.fixture
def device() -> MockPlotter:
    return MockPlotter(settings=PlotterSettings(feed_draw=1000, feed_travel=3000)).connect()


@pytest.fixture
def options() -> RenderOptions:
    return RenderOptions(settle_down_s=0.0, settle_up_s=0.0)


def two_lines() -> Plan:
    return build_plan([Polyline([(0, 0), (1, 0)]), Polyline([(5, 5), (6, 5)])])


class TestPlanExecutor:
    def test_command_stream(self, device, options):
        PlanExecutor(device, options=options).run(two_lines())
        assert device.commands == [
            "pen_up",
            "move 0.000,0.000 F3000",
            "pen_down",
            "draw 1.000,0.000 F1000",
            "pen_up",
            "move 5.000,5.000 F3000",
            "pen_down",
            "draw 6.000,5.000 F1000",
            "pen_up",
            "move 0.000,0.000 F3000",
        ]
        assert device.pen_position == 1.0

    def test_pen_only_changes_on_transition(self, device, options):
        plan = build_plan([Polyline([(0, 0), (1, 0), (2, 0), (3, 0)])])
        PlanExecutor(device, options=options).run(plan)
        assert device.commands.count("pen_down") == 1
        assert device.commands.count("pen_up") == 2

    def test_speed_scales_feed(self, device, options):
        plan = Plan().add(Polyline([(0, 0), (2, 0)]), speed=2)
        options.return_home = False
        PlanExecutor(device, options=options).run(plan)
        assert device.commands[-2] == "draw 2.000,0.000 F2000"

    def test_feed_override(self, device):
        options = RenderOptions(settle_down_s=0.0, settle_up_s=0.0, feed_draw=500, return_home=False)
        PlanExecutor(device, options=options).run(Plan(edges=(Segment(Point(0, 0), Point(1, 1)),)))
        assert "draw 1.000,1.000 F500" in device.commands

    def test_progress_and_status(self, device, options):
        progress = []
        messages = []
        PlanExecutor(device, options=options).run(
            two_lines(),
            progress_cb=lambda done, extra: progress.append((done, extra["total"])),
            status_cb=messages.append,
        )
        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert messages[-1] == "Plan finished."

    def test_stop_request_lifts_pen(self, device, options):
        stop = threading.Event()
        stop.set()
        with pytest.raises(ExecutionCancelled):
            PlanExecutor(device, options=options).run(two_lines(), stop_event=stop)
        assert device.pen_position == 1.0
        assert not any(cmd.startswith("draw") for cmd in device.commands)

    def test_empty_plan(self, device, options):
        PlanExecutor(device, options=options).run(Plan())
        assert device.commands == []
