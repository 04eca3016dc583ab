"""Headless simulation controller driven once per rendered frame."""

from __future__ import annotations

import logging
import time as _time
from collections import deque
from pathlib import Path
from typing import Any, Callable

import numpy as np

from ..core.bodies import CelestialBody
from ..core.clock import Clock, ManualTimeSource
from ..core.craft import Craft, TickEvent, TickResult
from ..core.diagnostics import telemetry
from ..io.scenario import (
    ScenarioDefinition,
    ScenarioRuntime,
    load_scenario,
    scenario_to_runtime,
)

logger = logging.getLogger(__name__)


class SimulationController:
    """Owns the clock, body tree and craft, and advances them in order.

    Per frame: clock -> body positions (top-down) -> thrust -> craft update
    -> trail sample. ``tick`` reads wall-clock time; ``step`` advances a
    manual time source by an explicit real-time delta.
    """

    def __init__(self, time_source: Callable[[], float] | None = None) -> None:
        if time_source is None:
            time_source = ManualTimeSource()
        self.time_source = time_source
        self.scenario_path: Path | None = None
        self.scenario_def: ScenarioDefinition | None = None
        self.runtime: ScenarioRuntime | None = None
        self.clock = Clock(time_source=time_source)
        self.history: deque[tuple[CelestialBody, np.ndarray]] = deque()
        self.last_result = TickResult()
        self.frame = 0
        self._last_time = 0.0
        self._manual_thrust: tuple[float, float] | None = None

    @classmethod
    def realtime(cls) -> SimulationController:
        return cls(time_source=_time.monotonic)

    @property
    def root(self) -> CelestialBody:
        return self._require_runtime().root

    @property
    def craft(self) -> Craft:
        return self._require_runtime().craft

    def load_scenario(self, path: str | Path) -> None:
        scenario_path = Path(path)
        defn = load_scenario(scenario_path)
        self.load_definition(defn)
        self.scenario_path = scenario_path

    def load_definition(self, defn: ScenarioDefinition) -> None:
        self.scenario_def = defn
        self.runtime = scenario_to_runtime(defn)
        self._restart()
        logger.info(
            "scenario ready: %d bodies, craft %s on %s",
            sum(1 for _ in self.runtime.root.walk()),
            self.runtime.craft.name,
            self.runtime.craft.get_parent().name,
        )

    def reset(self) -> bool:
        if self.scenario_def is None:
            return False
        self.runtime = scenario_to_runtime(self.scenario_def)
        self._restart()
        return True

    def _restart(self) -> None:
        runtime = self._require_runtime()
        self.clock = Clock(runtime.warp_factor, time_source=self.time_source)
        self.history = deque(maxlen=runtime.history_length)
        self.last_result = TickResult()
        self.frame = 0
        self._last_time = 0.0
        self._manual_thrust = None

    def _require_runtime(self) -> ScenarioRuntime:
        if self.runtime is None:
            raise ValueError("no scenario loaded")
        return self.runtime

    def set_warp_factor(self, warp_factor: float) -> None:
        self.clock.set_warp_factor(warp_factor)

    def fire_thrusters(self, angle: float, strength: float) -> None:
        """Manual input for the following frames; overrides scripted burns."""
        self._manual_thrust = (angle, min(max(strength, 0.0), 1.0))

    def release_thrusters(self) -> None:
        self._manual_thrust = None

    def tick(self) -> TickResult:
        """Advance one frame using whatever the time source reports."""
        runtime = self._require_runtime()
        self.clock.update_time_stamp()
        now = self.clock.get_time()
        runtime.root.update_positions(now)

        craft = runtime.craft
        if self._manual_thrust is not None:
            craft.fire_thrusters(*self._manual_thrust)
        elif runtime.burns is not None:
            craft.fire_thrusters(*runtime.burns.command_at(now))

        dt = now - self._last_time
        self._last_time = now
        result = craft.update(dt, runtime.steps_per_second)
        if result.event is TickEvent.CRASHED:
            # crash screen: freeze simulation speed
            logger.info("freezing time warp after crash at frame %d", self.frame)
            self.clock.set_warp_factor(0.0)
        self.history.append((craft.get_parent(), craft.get_position()))
        self.last_result = result
        self.frame += 1
        return result

    def step(self, real_dt: float | None = None) -> TickResult:
        """Advance one frame of ``real_dt`` real seconds (headless)."""
        if not isinstance(self.time_source, ManualTimeSource):
            raise ValueError("step() requires a ManualTimeSource; use tick()")
        runtime = self._require_runtime()
        self.time_source.advance(runtime.frame_dt if real_dt is None else real_dt)
        return self.tick()

    def history_positions(self) -> np.ndarray:
        """Trail samples re-projected onto their parents' current positions."""
        if not self.history:
            return np.zeros((0, 2), dtype=np.float64)
        return np.asarray(
            [parent.position + local for parent, local in self.history],
            dtype=np.float64,
        )

    def body_positions(self) -> dict[str, np.ndarray]:
        return {body.name: body.position.copy() for body in self.root.walk()}

    def diagnostics(self) -> dict[str, Any]:
        if self.runtime is None:
            return {"frame": 0, "time": 0.0}
        info: dict[str, Any] = {
            "frame": self.frame,
            "time": self.clock.get_time(),
            "warp_factor": self.clock.get_warp_factor(),
        }
        info.update(telemetry(self.runtime.craft))
        return info
