"""Scripted thruster burns for headless runs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class BurnCommand:
    start: float
    duration: float
    angle: float
    strength: float
    label: str | None = None

    def __post_init__(self) -> None:
        if self.start < 0.0:
            raise ValueError("burn start must be >= 0")
        if self.duration < 0.0:
            raise ValueError("burn duration must be >= 0")
        if self.strength < 0.0 or self.strength > 1.0:
            raise ValueError("burn strength must be in [0, 1]")

    @property
    def end(self) -> float:
        return self.start + self.duration

    def active_at(self, t: float) -> bool:
        return self.start <= t < self.end


@dataclass(slots=True)
class BurnSchedule:
    burns: list[BurnCommand]

    def __post_init__(self) -> None:
        self.burns = sorted(self.burns, key=lambda b: b.start)

    def command_at(self, t: float) -> tuple[float, float]:
        """Return ``(angle, strength)`` at simulation time ``t``.

        When burns overlap the one that started last wins; outside every
        burn the thrusters are off.
        """
        for burn in reversed(self.burns):
            if burn.active_at(t):
                return burn.angle, burn.strength
        return 0.0, 0.0

    def finished(self, t: float) -> bool:
        return all(t >= burn.end for burn in self.burns)
