"""Wall-clock to simulation-time mapping with an adjustable warp factor."""

from __future__ import annotations

import logging
import time as _time
from typing import Callable

logger = logging.getLogger(__name__)

# Warp presets offered by the time-warp buttons.
WARP_FACTORS: tuple[float, ...] = tuple(
    float(2**i) if i <= 2 else float(10 ** (i - 2)) for i in range(10)
)


class ManualTimeSource:
    """Real-time source advanced explicitly, for headless and test runs."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, real_delta: float) -> None:
        if real_delta < 0.0:
            raise ValueError("real_delta must be >= 0")
        self.now += real_delta


class Clock:
    """Simulation time in seconds, advanced from a real-time source.

    ``update_time_stamp`` is called once per rendered frame, before any body
    positions or craft physics read ``time``.
    """

    def __init__(
        self,
        warp_factor: float = 1.0,
        time_source: Callable[[], float] = _time.monotonic,
    ) -> None:
        if warp_factor < 0.0:
            raise ValueError("warp_factor must be >= 0")
        self.time_source = time_source
        self.time = 0.0
        self.warp_factor = float(warp_factor)
        self.last_timestamp = time_source()

    def set_warp_factor(self, warp_factor: float) -> None:
        if warp_factor < 0.0:
            raise ValueError("warp_factor must be >= 0")
        # Time elapsed under the old factor is banked first.
        self.update_time_stamp()
        logger.debug("warp factor %g -> %g", self.warp_factor, warp_factor)
        self.warp_factor = float(warp_factor)

    def get_warp_factor(self) -> float:
        return self.warp_factor

    def get_time(self) -> float:
        return self.time

    def update_time_stamp(self) -> float:
        now = self.time_source()
        delta_real = max(now - self.last_timestamp, 0.0)
        self.last_timestamp = now
        self.time += delta_real * self.warp_factor
        return self.time

    def reset(self) -> None:
        self.time = 0.0
        self.last_timestamp = self.time_source()
