"""Patched-conic craft simulation."""

from __future__ import annotations

__version__ = "0.1.0"

from .core.bodies import CelestialBody  # noqa: E402,F401
from .core.clock import Clock  # noqa: E402,F401
from .core.craft import Craft, FlightState, TickEvent, TickResult  # noqa: E402,F401
