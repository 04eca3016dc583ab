"""Put a craft on a circular orbit around Earth and predict one revolution."""

from __future__ import annotations

import math

import numpy as np

from patched_conics.core.bodies import CelestialBody
from patched_conics.core.constants import G
from patched_conics.core.craft import Craft
from patched_conics.core.trajectory import predict_trajectory


def main() -> int:
    earth = CelestialBody("Earth", 5.972e24, 6371.0, "#6288a8")
    r_km = 6371.0 + 400.0
    v = math.sqrt(G * earth.mass / (r_km * 1000.0))
    period = 2.0 * math.pi * r_km * 1000.0 / v
    craft = Craft("Station", 420000.0, earth, (r_km, 0.0), (0.0, v))

    prediction = predict_trajectory(craft, duration=1.2 * period, samples=600)
    radii = np.linalg.norm(prediction.positions, axis=1)
    print("period (s):", period)
    print("prediction ended by:", prediction.terminated_by)
    print("samples:", len(prediction.positions))
    print("radius range (km):", radii.min(), radii.max())

    dt = 1.0
    for _ in range(int(period)):
        craft.update(dt, steps_per_second=10)
    print("altitude after one period (km):", craft.altitude())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
