from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from patched_conics.app.sim_controller import SimulationController
from patched_conics.core.craft import TickEvent
from patched_conics.core.run import run

HOP = Path(__file__).resolve().parent.parent / "examples" / "scenarios" / "earth_moon_hop_v1.json"


def _controller() -> SimulationController:
    controller = SimulationController()
    controller.load_scenario(HOP)
    return controller


def test_run_sampling_shapes() -> None:
    controller = _controller()
    result = run(controller, 1.0 / 60.0, 60, sample_every=10)
    assert result.frames == 60
    assert result.time is not None
    assert result.time.shape == (7,)
    assert result.craft_pos.shape == (7, 2)
    assert result.craft_local_pos.shape == (7, 2)
    assert result.craft_vel.shape == (7, 2)
    assert result.parents == ["Earth"] * 7
    assert result.time[0] == 0.0
    assert result.time[-1] == pytest.approx(1.0)
    assert np.all(np.diff(result.time) > 0.0)


def test_run_without_sampling() -> None:
    result = run(_controller(), 1.0 / 60.0, 5)
    assert result.time is None
    assert result.craft_pos is None


def test_run_invokes_callback_every_frame() -> None:
    seen: list[int] = []
    run(_controller(), 1.0 / 60.0, 4, callback=lambda frame, _: seen.append(frame))
    assert seen == [1, 2, 3, 4]


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [({"sample_every": 0}, "sample_every must be > 0"), ({"frame_dt": -1.0}, "frame_dt")],
)
def test_run_rejects_bad_arguments(kwargs: dict, message: str) -> None:
    args = {"frame_dt": 1.0 / 60.0, "frames": 1}
    args.update(kwargs)
    with pytest.raises(ValueError, match=message):
        run(_controller(), **args)


def test_hop_lifts_off_and_settles_back() -> None:
    controller = _controller()
    peak = 0.0

    def track(_frame: int, c: SimulationController) -> None:
        nonlocal peak
        peak = max(peak, c.craft.altitude())

    result = run(controller, 1.0 / 60.0, 6000, callback=track)
    kinds = [event.event for _, event in result.events]
    assert TickEvent.CRASHED not in kinds
    assert kinds.count(TickEvent.LANDED) >= 2
    assert peak > 1.0
    craft = controller.craft
    assert craft.is_landed
    assert abs(craft.altitude()) < 0.05
    assert craft.landed_bodies == ["Earth"]
