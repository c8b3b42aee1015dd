"""In-memory mock plotter used for dry runs and unit tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import PlotterSettings

XY = Tuple[float, float]


@dataclass
class MockPlotter:
    """Small simulation that mimics the :class:`GRBL` API.

    Every motion is appended to ``path`` and every call to ``commands`` so
    tests can assert on the exact command stream.
    """

    settings: PlotterSettings = field(default_factory=PlotterSettings)

    def __post_init__(self) -> None:
        self.position: XY = (0.0, 0.0)
        self.pen_pos: float = 1.0
        self.path: List[XY] = []
        self.commands: List[str] = []
        self.connected = False

    # Connection ---------------------------------------------------------
    def connect(self) -> "MockPlotter":
        self.connected = True
        return self

    def close(self) -> None:
        self.connected = False

    # Status -------------------------------------------------------------
    def status(self) -> dict:
        return {"state": "Idle", "wpos": (*self.position, 0.0)}

    def is_idle(self) -> bool:
        return True

    def wait_idle(self, timeout: float = 30.0, poll: float = 0.05) -> None:
        pass

    # Motion -------------------------------------------------------------
    def _goto(self, kind: str, x: float, y: float, feed: Optional[int]) -> List[str]:
        self.position = (float(x), float(y))
        self.path.append(self.position)
        self.commands.append(f"{kind} {x:.3f},{y:.3f} F{feed}")
        return []

    def move_xy(self, x: float, y: float, *, feed: Optional[int] = None, wait: bool = False) -> List[str]:
        feed = self.settings.feed_travel if feed is None else feed
        return self._goto("move", x, y, feed)

    def draw_xy(self, x: float, y: float, *, feed: Optional[int] = None, wait: bool = False) -> List[str]:
        feed = self.settings.feed_draw if feed is None else feed
        return self._goto("draw", x, y, feed)

    # Pen control -------------------------------------------------------
    @property
    def pen_position(self) -> float:
        return self.pen_pos

    def pen_set(self, pos: float) -> None:
        self.pen_pos = float(max(0.0, min(1.0, pos)))

    def pen_up(self) -> None:
        self.pen_set(1.0)
        self.commands.append("pen_up")

    def pen_down(self) -> None:
        self.pen_set(0.0)
        self.commands.append("pen_down")
