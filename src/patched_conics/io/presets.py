"""Built-in scenario definitions."""

from __future__ import annotations

import copy
from typing import Any

from .scenario import ScenarioDefinition

# name, mass (kg), radius (km), color, orbital radius (km), angle (rad)
_PLANETS: list[tuple[str, float, float, str, float, float]] = [
    ("Mercury", 3.285e23, 2439.7, "#6d6b68", 57.91e6, 3.14),
    ("Venus", 4.867e24, 6051.8, "#f3dbc5", 108.2e6, 1.57),
    ("Earth", 5.972e24, 6371.0, "#6288a8", 149.6e6, 0.0),
    ("Mars", 6.417e23, 3389.5, "#c36d5c", 227.9e6, 4.71),
    ("Saturn", 5.683e26, 58232.0, "#dab778", 1433.5e6, 3.67),
    ("Uranus", 8.681e25, 25362.0, "#95bbbe", 2872.5e6, 0.52),
    ("Neptune", 1.024e26, 24622.0, "#7595bf", 4495.1e6, 2.83),
]

_MOONS: dict[str, list[tuple[str, float, float, str, float, float]]] = {
    "Earth": [("Moon", 7.34767309e22, 1737.4, "#b0b0b0", 384400.0, 7.0)],
}


def _body(entry: tuple[str, float, float, str, float, float]) -> dict[str, Any]:
    name, mass, radius, color, orbital_radius, angle = entry
    out: dict[str, Any] = {
        "name": name,
        "mass": mass,
        "radius": radius,
        "color": color,
        "orbital_radius": orbital_radius,
        "angle": angle,
    }
    moons = _MOONS.get(name)
    if moons:
        out["children"] = [_body(moon) for moon in moons]
    return out


_SOLAR_SYSTEM: ScenarioDefinition = {
    "schema_version": 1,
    "metadata": {
        "name": "Solar system",
        "description": "Sun, seven planets and the Moon; craft parked 10 km above Earth.",
    },
    "simulation": {
        "steps_per_second": 100,
        "frame_dt": 1.0 / 60.0,
        "frames": 600,
        "warp_factor": 1.0,
        "history_length": 500,
    },
    "bodies": {
        "name": "Sun",
        "mass": 1.989e30,
        "radius": 696340.0,
        "color": "#ffcc00",
        "children": [_body(p) for p in _PLANETS],
    },
    "craft": {
        "name": "Craft",
        "mass": 1000.0,
        "parent": "Earth",
        "altitude": 10.0,
        "velocity": [0.0, 0.0],
        "max_thrust": 15000.0,
        "maximum_impact_velocity": 500.0,
    },
}


def solar_system() -> ScenarioDefinition:
    return copy.deepcopy(_SOLAR_SYSTEM)
