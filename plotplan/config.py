"""Configuration models for plotting hardware."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

MM_PER_INCH = 25.4


@dataclass
class Workspace:
    """Physical dimensions of the plotting surface."""

    width_mm: float = 300.0
    height_mm: float = 245.0

    def as_tuple(self) -> tuple[float, float]:
        return self.width_mm, self.height_mm


@dataclass(frozen=True)
class PlotterModel:
    """A plotter model and its plot area in inches."""

    name: str
    width_in: float
    height_in: float

    def workspace(self) -> Workspace:
        return Workspace(self.width_in * MM_PER_INCH, self.height_in * MM_PER_INCH)


PLOTTER_MODELS: Dict[str, PlotterModel] = {
    "V3": PlotterModel("AxiDraw V3", 8.5, 11.0),
    "V3A3": PlotterModel("AxiDraw V3/A3", 11.0, 17.0),
    "SEA3": PlotterModel("AxiDraw SE/A3", 11.0, 17.0),
    "MINI": PlotterModel("MiniKit2", 6.0, 4.0),
}


def workspace_for_model(name: str) -> Workspace:
    try:
        return PLOTTER_MODELS[name.upper()].workspace()
    except KeyError:
        known = ", ".join(sorted(PLOTTER_MODELS))
        raise ValueError(f"Unknown plotter model {name!r}; expected one of {known}") from None


@dataclass
class ServoCalibration:
    """Servo calibration expressed as raw PWM values."""

    up: int = 40
    down: int = 90

    def clamp(self, value: float) -> float:
        return max(0.0, min(1.0, value))

    def to_pwm(self, value: float) -> int:
        """Map a pen position in [0, 1] (0 = down, 1 = up) to a PWM value."""
        value = self.clamp(value)
        return int(round(self.down + value * (self.up - self.down)))


@dataclass
class PlotterSettings:
    """Aggregate settings for the serial device and workspace."""

    port: Optional[str] = None
    baudrate: int = 115200
    read_timeout: float = 1.0
    workspace: Workspace = field(default_factory=Workspace)
    servo: ServoCalibration = field(default_factory=ServoCalibration)
    feed_draw: int = 3000  # mm/min
    feed_travel: int = 3000  # mm/min
    clip_to_bed: bool = True
