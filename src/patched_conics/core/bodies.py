"""Celestial bodies on fixed analytic circular orbits.

Bodies form a tree (Sun -> planets -> moons). A body's position is a pure
function of its parent chain and the simulation time; ``update_position`` must
be called parent-before-child, which ``update_positions`` does by walking the
tree in pre-order.
"""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from .constants import G, KM_TO_M
from .math.vector import ArrayF, polar


class CelestialBody:
    def __init__(
        self,
        name: str,
        mass: float,
        radius: float,
        color: str = "#000",
        orbital_radius: float = 0.0,
        angle: float = 0.0,
        parent: CelestialBody | None = None,
    ) -> None:
        self.name = name
        self.mass = float(mass)  # kg
        self.radius = float(radius)  # km
        self.color = color

        self.orbital_radius = float(orbital_radius)  # km
        self.initial_angle = float(angle)  # rad at t = 0
        self.current_angle = float(angle)
        self.parent = parent
        self.children: list[CelestialBody] = []

        self.position = np.zeros(2, dtype=np.float64)  # km, root frame
        if parent is None:
            self.sphere_of_influence = math.inf
        else:
            with np.errstate(divide="ignore", invalid="ignore"):
                ratio = np.float64(self.mass) / np.float64(parent.mass)
                self.sphere_of_influence = float(self.orbital_radius * ratio**0.4)

    def __repr__(self) -> str:
        return f"CelestialBody({self.name!r})"

    def create_child(
        self,
        name: str,
        mass: float,
        radius: float,
        color: str,
        orbital_radius: float,
        angle: float = 0.0,
    ) -> CelestialBody:
        child = CelestialBody(name, mass, radius, color, orbital_radius, angle, self)
        self.children.append(child)
        return child

    def has_parent(self) -> bool:
        return self.parent is not None

    def has_children(self) -> bool:
        return len(self.children) > 0

    def walk(self) -> Iterator[CelestialBody]:
        """Yield this body and all descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> CelestialBody:
        for body in self.walk():
            if body.name == name:
                return body
        raise KeyError(f"unknown body: {name}")

    def update_position(self, time: float) -> None:
        if self.parent is None:
            self.current_angle = self.initial_angle
            parent_position = np.zeros(2, dtype=np.float64)
        else:
            with np.errstate(divide="ignore", invalid="ignore"):
                self.current_angle = float(
                    self.initial_angle
                    - 2.0 * np.pi * time / np.float64(self.orbital_period())
                )
            parent_position = self.parent.position
        self.position = parent_position + polar(self.current_angle, self.orbital_radius)

    def update_positions(self, time: float) -> None:
        for body in self.walk():
            body.update_position(time)

    def local_position(self) -> ArrayF:
        """Position relative to the immediate parent (km)."""
        if self.parent is None:
            return np.zeros(2, dtype=np.float64)
        return self.position - self.parent.position

    def orbital_velocity(self) -> float:
        if self.parent is None:
            return 0.0
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                np.sqrt(G * np.float64(self.parent.mass) / (self.orbital_radius * KM_TO_M))
            )

    def orbital_period(self) -> float:
        if self.parent is None:
            return math.inf
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(
                2.0 * np.pi * (self.orbital_radius * KM_TO_M)
                / np.float64(self.orbital_velocity())
            )

    def orbital_velocity_vector(self) -> ArrayF:
        """Instantaneous orbital velocity (m/s) for the current angle.

        The angle decreases with time, so the tangent is (sin a, -cos a).
        """
        v = self.orbital_velocity()
        a = self.current_angle
        return np.array([v * math.sin(a), -v * math.cos(a)], dtype=np.float64)

    def gravitational_force(self, other_mass: float, position: ArrayF) -> ArrayF:
        """Force (N) on ``other_mass`` at ``position`` (km, body-local frame).

        The returned vector points from ``position`` toward this body's center.
        A position at the center yields non-finite components.
        """
        delta = np.asarray(position, dtype=np.float64) * KM_TO_M
        distance = np.linalg.norm(delta)
        with np.errstate(divide="ignore", invalid="ignore"):
            force = G * self.mass * other_mass / distance**2
            return -force * delta / distance

    def surface_gravity(self) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(G * self.mass / np.float64(self.radius * KM_TO_M) ** 2)
