"""Run a scenario JSON and optionally save sampled data."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from patched_conics.app.sim_controller import SimulationController
from patched_conics.core.diagnostics import specific_orbital_energy, status_text
from patched_conics.core.run import run


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("scenario", type=Path)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()

    controller = SimulationController()
    controller.load_scenario(args.scenario)
    runtime = controller.runtime
    assert runtime is not None
    sample_every = 1 if args.out is not None else None

    result = run(controller, runtime.frame_dt, runtime.frames, sample_every=sample_every)
    craft = controller.craft

    print("frames:", runtime.frames)
    print("frame dt:", runtime.frame_dt)
    print("sim time:", controller.clock.get_time())
    print("status:", status_text(craft))
    print("altitude (km):", craft.altitude())
    print("specific energy (J/kg):", specific_orbital_energy(craft))
    print("events:", [(frame, r.event.value) for frame, r in result.events])

    if args.out is not None and result.time is not None:
        np.savez_compressed(
            args.out,
            time=result.time,
            craft_pos=result.craft_pos,
            craft_local_pos=result.craft_local_pos,
            craft_vel=result.craft_vel,
        )
        print("saved samples to:", args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
