"""Read-only craft telemetry."""

from __future__ import annotations

from typing import Any

import numpy as np

from .constants import G, KM_TO_M
from .craft import Craft
from .math.vector import dot, norm


def status_text(craft: Craft) -> str:
    parent = craft.get_parent().name
    if craft.is_crashed:
        return "Crashed"
    if craft.is_landed:
        return f"Landed on {parent}"
    return f"In flight over {parent}"


def specific_orbital_energy(craft: Craft) -> float:
    """Two-body specific energy (J/kg) relative to the current parent."""
    r = float(norm(craft.position)) * KM_TO_M
    v2 = dot(craft.velocity, craft.velocity)
    mu = G * craft.get_parent().mass
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(0.5 * v2 - mu / np.float64(r))


def telemetry(craft: Craft) -> dict[str, Any]:
    return {
        "craft": craft.name,
        "status": craft.state.value,
        "status_text": status_text(craft),
        "parent": craft.get_parent().name,
        "altitude_km": craft.altitude(),
        "surface_velocity": craft.surface_velocity(),
        "vertical_velocity": craft.vertical_velocity(),
        "impact_velocity": craft.impact_velocity,
        "landed_bodies": list(craft.landed_bodies),
    }
