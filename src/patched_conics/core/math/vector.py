"""Vector utilities for planar NumPy arrays.

All vectors are expected to be shaped (..., 2).
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]


def as_vec2(value: Sequence[float] | ArrayF) -> ArrayF:
    """Return a fresh float64 copy shaped (2,)."""
    v = np.array(value, dtype=np.float64)
    if v.shape != (2,):
        raise ValueError("vector must have 2 components")
    return v


def norm(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return the L2 norm along an axis."""
    return np.linalg.norm(v, axis=axis)


def unit(v: ArrayF, axis: int = -1) -> ArrayF:
    """Return unit vectors with safe handling of zero vectors."""
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v, axis=axis, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        u = np.where(n > 0.0, v / n, 0.0)
    return u


def dot(a: ArrayF, b: ArrayF) -> float:
    return float(np.dot(a, b))


def polar(angle: float, magnitude: float = 1.0) -> ArrayF:
    """Return ``magnitude * (cos(angle), sin(angle))``."""
    return magnitude * np.array([np.cos(angle), np.sin(angle)], dtype=np.float64)
