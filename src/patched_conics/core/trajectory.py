"""Coast trajectory prediction for the craft's current state."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .craft import DEFAULT_STEPS_PER_SECOND, Craft, TickEvent


@dataclass(slots=True)
class TrajectoryPrediction:
    positions: np.ndarray
    parents: list[str]
    terminated_by: str

    @property
    def collides(self) -> bool:
        return self.terminated_by in {"landed", "crashed"}


def predict_trajectory(
    craft: Craft,
    duration: float,
    samples: int = 500,
    steps_per_second: float = DEFAULT_STEPS_PER_SECOND,
    min_samples_before_close: int = 100,
    close_tolerance: float = 500.0,
) -> TrajectoryPrediction:
    """Project where ``craft`` goes if it stops thrusting now.

    Body positions are frozen at their current values. Positions are
    absolute (km). The projection stops early when the craft touches the
    surface or its path returns within ``close_tolerance`` km of the start.
    """
    if samples <= 0:
        raise ValueError("samples must be > 0")
    if duration <= 0.0:
        raise ValueError("duration must be > 0")

    ghost = craft.clone()
    ghost.fire_thrusters(ghost.angle, 0.0)
    was_landed = ghost.is_landed
    start = ghost.absolute_position()
    dt = duration / samples

    positions = [start]
    parents = [ghost.parent_body.name]
    terminated_by = "duration"
    for i in range(1, samples + 1):
        result = ghost.update(dt, steps_per_second)
        pos = ghost.absolute_position()
        positions.append(pos)
        parents.append(ghost.parent_body.name)
        if result.event is TickEvent.CRASHED:
            terminated_by = "crashed"
            break
        if result.event is TickEvent.LANDED or (was_landed and ghost.is_landed):
            terminated_by = "landed"
            break
        if i > min_samples_before_close and np.all(
            np.abs(pos - start) < close_tolerance
        ):
            terminated_by = "closed"
            break

    return TrajectoryPrediction(
        positions=np.asarray(positions, dtype=np.float64),
        parents=parents,
        terminated_by=terminated_by,
    )
