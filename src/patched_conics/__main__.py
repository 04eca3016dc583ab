"""Headless command-line runner."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from . import __version__
from .app.sim_controller import SimulationController
from .core.run import run
from .io import solar_system


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="patched-conics")
    parser.add_argument("scenario", type=Path, nargs="?", default=None)
    parser.add_argument("--frames", type=int, default=None)
    parser.add_argument("--frame-dt", type=float, default=None)
    parser.add_argument("--warp", type=float, default=None)
    parser.add_argument("--sample-every", type=int, default=None)
    parser.add_argument("--out", type=Path, default=None)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    controller = SimulationController()
    if args.scenario is None:
        controller.load_definition(solar_system())
    else:
        controller.load_scenario(args.scenario)
    runtime = controller.runtime
    assert runtime is not None
    if args.warp is not None:
        controller.set_warp_factor(args.warp)

    frames = runtime.frames if args.frames is None else args.frames
    frame_dt = runtime.frame_dt if args.frame_dt is None else args.frame_dt
    sample_every = args.sample_every
    if sample_every is None and args.out is not None:
        sample_every = 1

    result = run(controller, frame_dt, frames, sample_every=sample_every)

    print(f"patched_conics v{__version__}")
    print("frames:", frames)
    print("frame dt:", frame_dt)
    for key, value in controller.diagnostics().items():
        print(f"{key}:", value)
    for frame, event in result.events:
        print(f"frame {frame}: {event.event.value} {event.body or ''}".rstrip())

    if args.out is not None and result.time is not None:
        np.savez_compressed(
            args.out,
            time=result.time,
            craft_pos=result.craft_pos,
            craft_local_pos=result.craft_local_pos,
            craft_vel=result.craft_vel,
            parents=np.asarray(result.parents),
        )
        print("saved samples to:", args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
