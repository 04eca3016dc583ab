"""Fixed-frame headless run loop with optional sampling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

import numpy as np

from .craft import TickEvent, TickResult

if TYPE_CHECKING:
    from ..app.sim_controller import SimulationController


@dataclass(slots=True)
class RunResult:
    frames: int
    events: list[tuple[int, TickResult]] = field(default_factory=list)
    time: np.ndarray | None = None
    craft_pos: np.ndarray | None = None
    craft_local_pos: np.ndarray | None = None
    craft_vel: np.ndarray | None = None
    parents: list[str] | None = None


def run(
    controller: SimulationController,
    frame_dt: float,
    frames: int,
    sample_every: int | None = None,
    callback: Callable[[int, SimulationController], None] | None = None,
) -> RunResult:
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")
    if frame_dt < 0.0:
        raise ValueError("frame_dt must be >= 0")

    events: list[tuple[int, TickResult]] = []
    times: list[float] = []
    pos: list[np.ndarray] = []
    local: list[np.ndarray] = []
    vel: list[np.ndarray] = []
    parents: list[str] = []

    def sample() -> None:
        craft = controller.craft
        times.append(controller.clock.get_time())
        pos.append(craft.absolute_position())
        local.append(craft.get_position())
        vel.append(craft.velocity.copy())
        parents.append(craft.get_parent().name)

    if sample_every is not None:
        sample()

    for frame in range(1, frames + 1):
        result = controller.step(frame_dt)
        if result.event is not TickEvent.CONTINUED:
            events.append((frame, result))
        if callback is not None:
            callback(frame, controller)
        if sample_every is not None and frame % sample_every == 0:
            sample()

    if sample_every is None:
        return RunResult(frames=frames, events=events)

    return RunResult(
        frames=frames,
        events=events,
        time=np.asarray(times, dtype=np.float64),
        craft_pos=np.asarray(pos, dtype=np.float64),
        craft_local_pos=np.asarray(local, dtype=np.float64),
        craft_vel=np.asarray(vel, dtype=np.float64),
        parents=parents,
    )
