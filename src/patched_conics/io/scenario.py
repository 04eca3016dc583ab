"""Scenario I/O and adapters."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from ..core.bodies import CelestialBody
from ..core.burns import BurnCommand, BurnSchedule
from ..core.craft import (
    DEFAULT_MAX_THRUST,
    DEFAULT_MAXIMUM_IMPACT_VELOCITY,
    DEFAULT_STEPS_PER_SECOND,
    Craft,
)
from ..core.math.vector import polar

logger = logging.getLogger(__name__)

ScenarioDefinition = dict[str, Any]

DEFAULT_FRAME_DT = 1.0 / 60.0
DEFAULT_BEARING = -math.pi / 2.0
DEFAULT_HISTORY_LENGTH = 500


@dataclass(slots=True)
class ScenarioRuntime:
    root: CelestialBody
    craft: Craft
    steps_per_second: float
    frame_dt: float
    frames: int
    warp_factor: float
    history_length: int
    burns: BurnSchedule | None = None


def load_scenario(path: str | Path) -> ScenarioDefinition:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    defn = validate_scenario(data)
    logger.info("loaded scenario %s", path)
    return defn


def save_scenario(path: str | Path, defn: ScenarioDefinition) -> None:
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def scenario_to_runtime(defn: ScenarioDefinition) -> ScenarioRuntime:
    sim = defn.get("simulation", {})
    root = _build_body(defn["bodies"], None)
    root.update_positions(0.0)

    c = defn["craft"]
    parent = root.find(c.get("parent", root.name))
    if "position" in c:
        position = np.asarray(c["position"], dtype=np.float64)
    else:
        bearing = float(c.get("bearing", DEFAULT_BEARING))
        position = polar(bearing, parent.radius + float(c["altitude"]))
    craft = Craft(
        name=str(c.get("name", "Craft")),
        mass=float(c["mass"]),
        parent_body=parent,
        position=position,
        velocity=c.get("velocity", (0.0, 0.0)),
        max_thrust=float(c.get("max_thrust", DEFAULT_MAX_THRUST)),
        maximum_impact_velocity=float(
            c.get("maximum_impact_velocity", DEFAULT_MAXIMUM_IMPACT_VELOCITY)
        ),
    )

    burns = None
    if defn.get("burns"):
        burns = BurnSchedule(
            [
                BurnCommand(
                    start=float(b["start"]),
                    duration=float(b["duration"]),
                    angle=float(b["angle"]),
                    strength=float(b["strength"]),
                    label=b.get("label"),
                )
                for b in defn["burns"]
            ]
        )

    return ScenarioRuntime(
        root=root,
        craft=craft,
        steps_per_second=float(sim.get("steps_per_second", DEFAULT_STEPS_PER_SECOND)),
        frame_dt=float(sim.get("frame_dt", DEFAULT_FRAME_DT)),
        frames=int(sim.get("frames", 0)),
        warp_factor=float(sim.get("warp_factor", 1.0)),
        history_length=int(sim.get("history_length", DEFAULT_HISTORY_LENGTH)),
        burns=burns,
    )


def bodies_to_definition(body: CelestialBody) -> dict[str, Any]:
    """Serialize a body subtree to the scenario ``bodies`` format."""
    out: dict[str, Any] = {
        "name": body.name,
        "mass": body.mass,
        "radius": body.radius,
        "color": body.color,
    }
    if body.has_parent():
        out["orbital_radius"] = body.orbital_radius
        out["angle"] = body.initial_angle
    if body.has_children():
        out["children"] = [bodies_to_definition(child) for child in body.children]
    return out


def _build_body(entry: dict[str, Any], parent: CelestialBody | None) -> CelestialBody:
    color = str(entry.get("color", "#000"))
    if parent is None:
        body = CelestialBody(entry["name"], entry["mass"], entry["radius"], color)
    else:
        body = parent.create_child(
            entry["name"],
            entry["mass"],
            entry["radius"],
            color,
            entry["orbital_radius"],
            float(entry.get("angle", 0.0)),
        )
    for child in entry.get("children", []):
        _build_body(child, body)
    return body


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _require_number(obj: dict[str, Any], key: str, ctx: str) -> float:
    value = _require(obj, key, ctx)
    if (
        not isinstance(value, (int, float))
        or isinstance(value, bool)
        or not math.isfinite(value)
    ):
        raise ValueError(f"{ctx}.{key} must be a finite number")
    return float(value)


def _require_positive(obj: dict[str, Any], key: str, ctx: str) -> float:
    value = _require_number(obj, key, ctx)
    if value <= 0:
        raise ValueError(f"{ctx}.{key} must be > 0")
    return value


def _validate_vec2(value: Any, ctx: str) -> None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{ctx} must have length 2")
    for v in value:
        if (
            not isinstance(v, (int, float))
            or isinstance(v, bool)
            or not math.isfinite(v)
        ):
            raise ValueError(f"{ctx} must contain finite numbers")


def validate_scenario(data: Any) -> ScenarioDefinition:
    if not isinstance(data, dict):
        raise ValueError("scenario must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    sim = data.get("simulation", {})
    if not isinstance(sim, dict):
        raise ValueError("simulation must be an object")
    if "steps_per_second" in sim:
        _require_positive(sim, "steps_per_second", "simulation")
    if "frame_dt" in sim:
        _require_positive(sim, "frame_dt", "simulation")
    if "frames" in sim and (
        not isinstance(sim["frames"], int)
        or isinstance(sim["frames"], bool)
        or sim["frames"] < 0
    ):
        raise ValueError("simulation.frames must be an integer >= 0")
    if "warp_factor" in sim and _require_number(sim, "warp_factor", "simulation") < 0:
        raise ValueError("simulation.warp_factor must be >= 0")
    if "history_length" in sim:
        history = sim["history_length"]
        if not isinstance(history, int) or isinstance(history, bool) or history < 0:
            raise ValueError("simulation.history_length must be an integer >= 0")

    bodies = _require(data, "bodies", "scenario")
    names: set[str] = set()
    _validate_body(bodies, "bodies", names, is_root=True)

    craft = _require(data, "craft", "scenario")
    if not isinstance(craft, dict):
        raise ValueError("craft must be an object")
    _require_positive(craft, "mass", "craft")
    parent = craft.get("parent")
    if parent is not None and (not isinstance(parent, str) or parent not in names):
        raise ValueError(f"craft.parent not found in bodies: {parent}")
    if "position" in craft:
        _validate_vec2(craft["position"], "craft.position")
    elif "altitude" in craft:
        if _require_number(craft, "altitude", "craft") < 0:
            raise ValueError("craft.altitude must be >= 0")
    else:
        raise ValueError("craft requires position or altitude")
    if "velocity" in craft:
        _validate_vec2(craft["velocity"], "craft.velocity")
    if "bearing" in craft:
        _require_number(craft, "bearing", "craft")
    if "max_thrust" in craft and _require_number(craft, "max_thrust", "craft") < 0:
        raise ValueError("craft.max_thrust must be >= 0")
    if "maximum_impact_velocity" in craft:
        _require_positive(craft, "maximum_impact_velocity", "craft")

    if "burns" in data:
        _validate_burns(data["burns"])

    return data


def _validate_body(
    entry: Any, ctx: str, names: set[str], is_root: bool = False
) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"{ctx} must be an object")
    name = _require(entry, "name", ctx)
    if not isinstance(name, str) or not name:
        raise ValueError(f"{ctx}.name must be a non-empty string")
    if name in names:
        raise ValueError(f"duplicate body name: {name}")
    names.add(name)
    _require_positive(entry, "mass", ctx)
    _require_positive(entry, "radius", ctx)
    if is_root:
        if entry.get("orbital_radius", 0) != 0:
            raise ValueError(f"{ctx}.orbital_radius must be 0 for the root body")
    else:
        _require_positive(entry, "orbital_radius", ctx)
        if "angle" in entry:
            _require_number(entry, "angle", ctx)
    children = entry.get("children", [])
    if not isinstance(children, list):
        raise ValueError(f"{ctx}.children must be a list")
    for idx, child in enumerate(children):
        _validate_body(child, f"{ctx}.children[{idx}]", names)


def _validate_burns(burns: Any) -> None:
    if not isinstance(burns, list):
        raise ValueError("burns must be a list")
    for idx, burn in enumerate(burns):
        if not isinstance(burn, dict):
            raise ValueError("burns entries must be objects")
        ctx = f"burns[{idx}]"
        start, duration, _, strength = (
            _require_number(burn, key, ctx)
            for key in ("start", "duration", "angle", "strength")
        )
        if start < 0.0:
            raise ValueError(f"{ctx}.start must be >= 0")
        if duration < 0.0:
            raise ValueError(f"{ctx}.duration must be >= 0")
        if strength < 0.0 or strength > 1.0:
            raise ValueError(f"{ctx}.strength must be in [0, 1]")
        label = burn.get("label")
        if label is not None and not isinstance(label, str):
            raise ValueError(f"{ctx}.label must be a string")
