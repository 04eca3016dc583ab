from __future__ import annotations

import math

import numpy as np
import pytest

from patched_conics.core.math import as_vec2, dot, norm, polar, unit


def test_as_vec2_validates_shape() -> None:
    assert as_vec2((1, 2)).dtype == np.float64
    with pytest.raises(ValueError, match="vector must have 2 components"):
        as_vec2((1.0, 2.0, 3.0))


def test_polar_and_norm() -> None:
    v = polar(math.pi / 2.0, 3.0)
    assert v[0] == pytest.approx(0.0, abs=1e-12)
    assert v[1] == pytest.approx(3.0)
    assert norm(v) == pytest.approx(3.0)
    assert dot(v, polar(0.0)) == pytest.approx(0.0, abs=1e-12)


def test_unit_of_zero_is_zero() -> None:
    assert np.array_equal(unit(np.zeros(2)), np.zeros(2))
    assert np.allclose(unit(np.array([3.0, 4.0])), [0.6, 0.8])
