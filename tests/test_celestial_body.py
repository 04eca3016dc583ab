from __future__ import annotations

import math

import numpy as np
import pytest

from patched_conics.core.bodies import CelestialBody
from patched_conics.core.constants import G


def _system() -> tuple[CelestialBody, CelestialBody, CelestialBody]:
    sun = CelestialBody("Sun", 1.989e30, 696340.0, "#ffcc00")
    earth = sun.create_child("Earth", 5.972e24, 6371.0, "#6288a8", 149.6e6, 0.0)
    moon = earth.create_child("Moon", 7.34767309e22, 1737.4, "#b0b0b0", 384400.0, 7.0)
    return sun, earth, moon


def test_root_is_fixed_at_origin_with_infinite_soi() -> None:
    sun, _, _ = _system()
    assert math.isinf(sun.sphere_of_influence)
    assert sun.orbital_velocity() == 0.0
    assert math.isinf(sun.orbital_period())
    for t in (0.0, 1.0, 3.7e5, 1.0e9):
        sun.update_positions(t)
        assert np.array_equal(sun.position, np.zeros(2))
        assert sun.current_angle == sun.initial_angle


def test_create_child_links_tree_and_computes_soi() -> None:
    sun, earth, moon = _system()
    assert earth.parent is sun
    assert sun.children == [earth]
    assert earth.children == [moon]
    assert sun.has_children() and not moon.has_children()
    assert moon.has_parent() and not sun.has_parent()
    expected = 149.6e6 * (5.972e24 / 1.989e30) ** 0.4
    assert earth.sphere_of_influence == pytest.approx(expected)
    assert moon.sphere_of_influence < earth.sphere_of_influence


def test_orbital_velocity_and_period() -> None:
    _, earth, moon = _system()
    r_m = 149.6e6 * 1000.0
    v = math.sqrt(G * 1.989e30 / r_m)
    assert earth.orbital_velocity() == pytest.approx(v)
    assert earth.orbital_period() == pytest.approx(2.0 * math.pi * r_m / v)
    assert moon.orbital_period() == pytest.approx(
        2.0 * math.pi * 384400.0 * 1000.0 / moon.orbital_velocity()
    )


def test_full_period_returns_to_initial_angle() -> None:
    sun, earth, moon = _system()
    sun.update_positions(0.0)
    start = moon.local_position()
    period = moon.orbital_period()
    sun.update_positions(period)
    assert math.isclose(
        math.remainder(moon.current_angle - moon.initial_angle, 2.0 * math.pi),
        0.0,
        abs_tol=1e-9,
    )
    assert np.allclose(moon.local_position(), start, atol=1e-3)


def test_update_position_is_idempotent() -> None:
    sun, earth, moon = _system()
    sun.update_positions(12345.6)
    first = moon.position.copy()
    sun.update_positions(12345.6)
    assert np.array_equal(moon.position, first)


def test_child_position_is_parent_plus_offset() -> None:
    sun, earth, moon = _system()
    sun.update_positions(86400.0)
    assert np.allclose(moon.position, earth.position + moon.local_position())
    assert np.linalg.norm(moon.local_position()) == pytest.approx(384400.0)
    assert np.linalg.norm(earth.position) == pytest.approx(149.6e6)


def test_angle_decreases_with_time() -> None:
    sun, earth, _ = _system()
    sun.update_positions(1000.0)
    assert earth.current_angle < earth.initial_angle


def test_orbital_velocity_vector_matches_motion() -> None:
    sun, earth, _ = _system()
    h = 100.0
    t = 5.0e6
    sun.update_positions(t - h)
    before = earth.position.copy()
    sun.update_positions(t + h)
    after = earth.position.copy()
    sun.update_positions(t)
    finite_diff = (after - before) / (2.0 * h) * 1000.0
    assert np.allclose(earth.orbital_velocity_vector(), finite_diff, rtol=1e-6)
    assert np.dot(earth.orbital_velocity_vector(), earth.local_position()) == pytest.approx(
        0.0, abs=1e-3 * earth.orbital_velocity() * 149.6e6
    )


def test_gravitational_force_is_local_and_attractive() -> None:
    sun, earth, _ = _system()
    sun.update_positions(1.0e6)
    mass = 1000.0
    force = earth.gravitational_force(mass, np.array([6371.0, 0.0]))
    expected = G * 5.972e24 * mass / (6371.0e3) ** 2
    assert force[0] == pytest.approx(-expected)
    assert force[1] == pytest.approx(0.0, abs=1e-9)

    diag = earth.gravitational_force(mass, np.array([0.0, -7000.0]))
    assert diag[1] > 0.0
    assert np.linalg.norm(diag) == pytest.approx(G * 5.972e24 * mass / 7.0e6**2)


def test_gravitational_force_at_center_is_non_finite() -> None:
    _, earth, _ = _system()
    force = earth.gravitational_force(1.0, np.zeros(2))
    assert not np.all(np.isfinite(force))


def test_surface_gravity() -> None:
    _, earth, _ = _system()
    assert earth.surface_gravity() == pytest.approx(9.82, abs=0.01)


def test_degenerate_parent_mass_does_not_raise() -> None:
    ghost = CelestialBody("Ghost", 0.0, 1.0)
    child = ghost.create_child("Child", 1.0e20, 10.0, "#fff", 1000.0)
    assert not math.isfinite(child.sphere_of_influence)
    assert child.orbital_velocity() == 0.0


def test_walk_and_find() -> None:
    sun, earth, moon = _system()
    mars = sun.create_child("Mars", 6.417e23, 3389.5, "#c36d5c", 227.9e6, 4.71)
    assert [b.name for b in sun.walk()] == ["Sun", "Earth", "Moon", "Mars"]
    assert sun.find("Moon") is moon
    assert sun.find("Mars") is mars
    with pytest.raises(KeyError):
        sun.find("Pluto")
