"""Device abstractions used by the plan executor."""

from .grbl import GRBL, DeviceError
from .mock import MockPlotter

__all__ = ["GRBL", "DeviceError", "MockPlotter"]
