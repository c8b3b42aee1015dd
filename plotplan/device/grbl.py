"""GRBL serial device.

Speaks G-code over a serial line: ``G0``/``G1`` for moves and ``M3 S<pwm>``
for the pen servo.  The device is only a transport; it knows nothing about
plans and is driven by :class:`plotplan.executor.PlanExecutor`.
"""
from __future__ import annotations

import logging
import re
import time
from typing import Dict, List, Optional

import serial

from ..config import PlotterSettings

logger = logging.getLogger(__name__)

_STATUS_STATE = re.compile(r"^<\s*([A-Za-z]+)(?=[|,>])")
_STATUS_WPOS = re.compile(r"WPos:([^|>]+)")
_STATUS_MPOS = re.compile(r"MPos:([^|>]+)")


class DeviceError(RuntimeError):
    """Raised when a device operation fails due to connectivity or a rejected command."""


class GRBL:
    """Minimal GRBL wrapper used by the plan executor."""

    def __init__(self, settings: PlotterSettings) -> None:
        self.settings = settings
        self.ser: Optional[serial.Serial] = None
        self._pen_pos: float = 1.0  # last commanded position [0..1], default up

    # -------- Connection / basic I/O --------
    @property
    def connected(self) -> bool:
        return self.ser is not None and self.ser.is_open

    def connect(self) -> "GRBL":
        if self.settings.port is None:
            raise DeviceError("No serial port configured")
        try:
            self.ser = serial.Serial(
                self.settings.port,
                baudrate=self.settings.baudrate,
                timeout=self.settings.read_timeout,
            )
        except serial.SerialException as exc:  # pragma: no cover - hardware dependent
            raise DeviceError(str(exc)) from exc
        logger.info("Connected to %s", self.settings.port)
        time.sleep(2.0)
        self._writeln("\r\n")  # wake
        self.flush_input()
        self.cmd("G90")  # absolute coordinates
        self.cmd("G21")  # millimeters
        return self

    def close(self) -> None:
        if self.ser and self.ser.is_open:
            self.ser.close()
            logger.info("Disconnected from %s", self.settings.port)
        self.ser = None

    def _require_serial(self) -> serial.Serial:
        if self.ser is None or not self.ser.is_open:
            raise DeviceError("Cannot send command, port is not open")
        return self.ser

    def _writeln(self, s: str) -> None:
        if not s.endswith("\n"):
            s += "\n"
        ser = self._require_serial()
        try:
            ser.write(s.encode())
            ser.flush()
        except serial.SerialException as exc:  # pragma: no cover - hardware dependent
            raise DeviceError(f"Write failed: {exc}") from exc

    def _readlines_until_ok(self) -> List[str]:
        ser = self._require_serial()
        lines: List[str] = []
        t0 = time.time()
        while True:
            line = ser.readline().decode(errors="ignore").strip()
            if line:
                lines.append(line)
                low = line.lower()
                if low.startswith("ok"):
                    break
                if low.startswith("error") or low.startswith("alarm"):
                    raise DeviceError(f"Command rejected: {line}")
            elif time.time() - t0 > self.settings.read_timeout:
                break
        return lines

    def cmd(self, gcode: str, wait_ok: bool = True) -> List[str]:
        logger.debug("> %s", gcode)
        self._writeln(gcode)
        return self._readlines_until_ok() if wait_ok else []

    def flush_input(self) -> None:
        if self.ser:
            self.ser.reset_input_buffer()

    # -------- Status / idle waiting --------
    def status(self) -> Dict[str, Optional[object]]:
        ser = self._require_serial()
        ser.write(b"?")
        ser.flush()
        line = ser.readline().decode(errors="ignore").strip()

        state = None
        pos = None
        m = _STATUS_STATE.search(line)
        if m:
            state = m.group(1)
        m_pos = _STATUS_WPOS.search(line) or _STATUS_MPOS.search(line)
        if m_pos:
            pos = tuple(float(v) for v in m_pos.group(1).split(",")[:3])
        return {"raw": line, "state": state, "wpos": pos}

    def is_idle(self) -> bool:
        s = self.status().get("state", None)
        return (s or "").upper() == "IDLE"

    def wait_idle(self, timeout: float = 30.0, poll: float = 0.05) -> None:
        t0 = time.time()
        while time.time() - t0 < timeout:
            if self.is_idle():
                return
            time.sleep(poll)
        raise TimeoutError("GRBL did not become IDLE in time.")

    # -------- Movement --------
    def move_xy(self, x: float, y: float, *, feed: Optional[int] = None, wait: bool = False) -> List[str]:
        """Rapid move, used for pen-up transit."""
        feed = self.settings.feed_travel if feed is None else feed
        out = self.cmd(f"G0 X{self._clip_x(x):.3f} Y{self._clip_y(y):.3f} F{feed}")
        if wait:
            self.wait_idle()
        return out

    def draw_xy(self, x: float, y: float, *, feed: Optional[int] = None, wait: bool = False) -> List[str]:
        """Linear move in drawing mode."""
        feed = self.settings.feed_draw if feed is None else feed
        out = self.cmd(f"G1 X{self._clip_x(x):.3f} Y{self._clip_y(y):.3f} F{feed}")
        if wait:
            self.wait_idle()
        return out

    # -------- Pen control --------
    @property
    def pen_position(self) -> float:
        return self._pen_pos

    def pen_set(self, pos: float) -> None:
        """Set servo to absolute pos in [0..1] (0 = down, 1 = up)."""
        target = self.settings.servo.clamp(pos)
        self.cmd(f"M3 S{self.settings.servo.to_pwm(target)}")
        self._pen_pos = target

    def pen_up(self) -> None:
        self.pen_set(1.0)

    def pen_down(self) -> None:
        self.pen_set(0.0)

    # -------- Clipping --------
    def _clip_x(self, x: float) -> float:
        if not self.settings.clip_to_bed:
            return x
        return max(0.0, min(self.settings.workspace.width_mm, x))

    def _clip_y(self, y: float) -> float:
        if not self.settings.clip_to_bed:
            return y
        return max(0.0, min(self.settings.workspace.height_mm, y))


__all__ = ["DeviceError", "GRBL"]
