"""Powered craft dynamics in the local frame of its dominant body.

The craft's position (km) and velocity (m/s) are always relative to
``parent_body``. Each ``update`` integrates a fixed number of sub-steps with
semi-implicit Euler, resolves surface contact against the parent, then
reassigns the parent once if a sphere-of-influence boundary was crossed.

Flight state transitions:

    FLYING  -> LANDED   surface contact at or below the impact limit
    LANDED  -> FLYING   outward normal velocity (at contact or once airborne)
    any     -> CRASHED  surface contact above the impact limit (sticky)
    CRASHED -> *        only through ``set_position``

A craft created or placed on or inside the surface starts LANDED.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

import numpy as np

from .bodies import CelestialBody
from .constants import M_TO_KM, STANDARD_GRAVITY
from .math.vector import ArrayF, as_vec2, dot, norm, polar, unit

logger = logging.getLogger(__name__)

DAMPING_FACTOR = 0.4
DEFAULT_MAX_THRUST = 15_000.0  # N at standard gravity
DEFAULT_MAXIMUM_IMPACT_VELOCITY = 500.0  # m/s
DEFAULT_STEPS_PER_SECOND = 100


class FlightState(Enum):
    FLYING = "flying"
    LANDED = "landed"
    CRASHED = "crashed"


class TickEvent(Enum):
    CONTINUED = "continued"
    LANDED = "landed"
    CRASHED = "crashed"


@dataclass(frozen=True, slots=True)
class TickResult:
    event: TickEvent = TickEvent.CONTINUED
    body: str | None = None
    impact_speed: float | None = None


_CONTINUED = TickResult()


class Craft:
    def __init__(
        self,
        name: str,
        mass: float,
        parent_body: CelestialBody,
        position: Sequence[float] | ArrayF,
        velocity: Sequence[float] | ArrayF = (0.0, 0.0),
        max_thrust: float = DEFAULT_MAX_THRUST,
        maximum_impact_velocity: float = DEFAULT_MAXIMUM_IMPACT_VELOCITY,
    ) -> None:
        self.name = name
        self.mass = float(mass)
        self.max_thrust = float(max_thrust)
        self.max_normed_thrust = self.max_thrust
        self.maximum_impact_velocity = float(maximum_impact_velocity)
        self.parent_body = parent_body

        self.position = as_vec2(position)  # km
        self.velocity = as_vec2(velocity)  # m/s
        self.acceleration = np.zeros(2, dtype=np.float64)
        self.net_force = np.zeros(2, dtype=np.float64)
        self.thrust = np.zeros(2, dtype=np.float64)
        self.angle = 0.0

        self.state = FlightState.FLYING
        self.previous_state = FlightState.FLYING
        self.impact_velocity = 0.0
        self.landed_bodies: list[str] = []
        self.collision_callback: Callable[[], None] | None = None
        self._result = _CONTINUED

        self.update_maximum_normed_thrust()
        self._settle()

    def __repr__(self) -> str:
        return (
            f"Craft({self.name!r}, parent={self.parent_body.name!r}, "
            f"state={self.state.value})"
        )

    @property
    def is_landed(self) -> bool:
        return self.state is FlightState.LANDED

    @property
    def was_landed(self) -> bool:
        return self.previous_state is FlightState.LANDED

    @property
    def is_crashed(self) -> bool:
        return self.state is FlightState.CRASHED

    def get_parent(self) -> CelestialBody:
        return self.parent_body

    def set_parent_body(self, parent_body: CelestialBody) -> None:
        """Attach to ``parent_body`` without translating coordinates."""
        self.parent_body = parent_body
        self.update_maximum_normed_thrust()

    def set_position(
        self,
        position: Sequence[float] | ArrayF,
        parent: CelestialBody | None = None,
        velocity: Sequence[float] | ArrayF | None = None,
    ) -> None:
        if parent is not None:
            self.set_parent_body(parent)
        self.position = as_vec2(position)
        if velocity is not None:
            self.velocity = as_vec2(velocity)
        self.impact_velocity = 0.0
        self._settle()

    def _settle(self) -> None:
        # Placed on or inside the surface counts as already landed there.
        if float(norm(self.position)) <= self.parent_body.radius:
            self.state = FlightState.LANDED
            if self.parent_body.name not in self.landed_bodies:
                self.landed_bodies.append(self.parent_body.name)
        else:
            self.state = FlightState.FLYING
        self.previous_state = self.state

    def get_position(self) -> ArrayF:
        return self.position.copy()

    def update_maximum_normed_thrust(self) -> None:
        # Thrust-to-weight is held fixed, so capability follows the parent.
        self.max_normed_thrust = (
            self.max_thrust * self.parent_body.surface_gravity() / STANDARD_GRAVITY
        )

    def fire_thrusters(self, angle: float, strength: float) -> None:
        self.angle = float(angle)
        self.thrust = polar(self.angle, self.max_normed_thrust * strength)

    def update(
        self, dt: float, steps_per_second: float = DEFAULT_STEPS_PER_SECOND
    ) -> TickResult:
        self.previous_state = self.state
        self._result = _CONTINUED

        steps = math.ceil(dt * steps_per_second)
        step = 1.0 / steps_per_second
        for _ in range(steps):
            self.calculate_net_force()
            self.calculate_acceleration()
            self.check_for_collision(step)
            self.calculate_position(step)

        self.update_parent_body()
        return self._result

    def calculate_net_force(self) -> None:
        gravity = self.parent_body.gravitational_force(self.mass, self.position)
        self.net_force = gravity + self.thrust

    def calculate_acceleration(self) -> None:
        self.acceleration = self.net_force / self.mass

    def calculate_velocity(self, dt: float) -> None:
        self.velocity = self.velocity + self.acceleration * dt

    def calculate_position(self, dt: float) -> None:
        self.position = self.position + self.velocity * dt * M_TO_KM

    def check_for_collision(self, dt: float) -> None:
        distance = float(norm(self.position))
        if distance > self.parent_body.radius:
            self.calculate_velocity(dt)
            if self.state is FlightState.LANDED and self.vertical_velocity() > 0.0:
                self.state = FlightState.FLYING
            return

        with np.errstate(divide="ignore", invalid="ignore"):
            normal = self.position / distance
        speed = float(norm(self.velocity))
        if speed > self.maximum_impact_velocity:
            self.handle_crash(speed)
        else:
            self.handle_landing()

        closing = dot(self.velocity, normal)
        if closing > 0.0 and self.state is FlightState.LANDED:
            self.state = FlightState.FLYING

        # reflect, damp, then let outward thrust act immediately
        self.velocity = self.velocity - 2.0 * closing * normal
        self.velocity = self.velocity * DAMPING_FACTOR
        if dot(self.acceleration, normal) > 0.0:
            self.calculate_velocity(dt)

    def handle_crash(self, speed: float) -> None:
        if self.state is FlightState.CRASHED:
            return
        self.state = FlightState.CRASHED
        self.impact_velocity = speed
        logger.warning(
            "%s crashed on %s at %.1f m/s", self.name, self.parent_body.name, speed
        )
        if self.collision_callback is not None:
            self.collision_callback()
        self._result = TickResult(
            TickEvent.CRASHED, body=self.parent_body.name, impact_speed=speed
        )

    def handle_landing(self) -> None:
        if self.state is not FlightState.FLYING:
            return
        self.state = FlightState.LANDED
        name = self.parent_body.name
        if name not in self.landed_bodies:
            self.landed_bodies.append(name)
            logger.info("%s landed on %s", self.name, name)
        if self._result.event is not TickEvent.CRASHED:
            self._result = TickResult(TickEvent.LANDED, body=name)

    def update_parent_body(self) -> None:
        """Escape to the grandparent, then descend into the first child whose
        sphere of influence contains the craft.

        Sibling spheres of influence are assumed not to overlap, so the scan
        stops at the first match.
        """
        parent = self.parent_body
        if (
            parent.parent is not None
            and norm(self.position) > parent.sphere_of_influence
        ):
            self.position = self.position + parent.local_position()
            self._reparent(parent.parent)

        for child in self.parent_body.children:
            offset = child.local_position()
            if norm(self.position - offset) < child.sphere_of_influence:
                self.position = self.position - offset
                self._reparent(child)
                break

    def _reparent(self, body: CelestialBody) -> None:
        logger.info(
            "%s: sphere of influence %s -> %s",
            self.name,
            self.parent_body.name,
            body.name,
        )
        self.set_parent_body(body)

    def absolute_position(self) -> ArrayF:
        return self.parent_body.position + self.position

    def surface_velocity(self) -> float:
        return float(norm(self.velocity))

    def vertical_velocity(self) -> float:
        return dot(self.velocity, unit(self.position))

    def altitude(self) -> float:
        return float(norm(self.position)) - self.parent_body.radius

    def clone(self) -> Craft:
        """Independent kinematic copy sharing the same body tree."""
        other = copy.copy(self)
        other.position = self.position.copy()
        other.velocity = self.velocity.copy()
        other.acceleration = self.acceleration.copy()
        other.net_force = self.net_force.copy()
        other.thrust = self.thrust.copy()
        other.landed_bodies = list(self.landed_bodies)
        other.collision_callback = None
        return other
