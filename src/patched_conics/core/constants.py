"""Physical constants and unit conversions.

Positions and radii are kept in kilometers; velocities, accelerations and
forces are SI. Convert with ``KM_TO_M`` at the gravity and collision seams.
"""

from __future__ import annotations

G = 6.67430e-11  # m^3 kg^-1 s^-2
KM_TO_M = 1000.0
M_TO_KM = 1.0 / KM_TO_M
STANDARD_GRAVITY = 9.80665  # m/s^2
