# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulation clock.

Holds the simulation Julian Date and advances it from the render loop's
real elapsed time, scaled by a speed preset and a direction.
"""
from collections.abc import Callable
from dataclasses import dataclass

from orrery.domain.time_conversion import SECONDS_PER_DAY, current_julian_date


@dataclass(frozen=True)
class TimeSpeed:
    label: str
    factor: float  # simulated seconds per real second


TIME_SPEEDS: tuple[TimeSpeed, ...] = (
    TimeSpeed('1s', 1),
    TimeSpeed('1m', 60),
    TimeSpeed('1h', 3600),
    TimeSpeed('1d', 86400),
    TimeSpeed('10d', 864000),
    TimeSpeed('30d', 2592000),
    TimeSpeed('1y', 31536000),
)


class SimulationClock:
    """Mutable simulation time, advanced only through tick()."""

    def __init__(
        self,
        jd: float | None = None,
        speed_index: int = 3,
        playing: bool = True,
        now: Callable[[], float] = current_julian_date,
    ):
        self._now = now
        self.jd = now() if jd is None else jd
        self._speed_index = 0
        self.speed_index = speed_index
        self.playing = playing
        self.direction = 1

    @property
    def speed_index(self) -> int:
        return self._speed_index

    @speed_index.setter
    def speed_index(self, index: int) -> None:
        self._speed_index = max(0, min(index, len(TIME_SPEEDS) - 1))

    @property
    def speed(self) -> TimeSpeed:
        return TIME_SPEEDS[self._speed_index]

    def tick(self, delta_seconds: float) -> float:
        """Advance by `delta_seconds` of real time; returns the new JD."""
        if self.playing:
            self.jd += delta_seconds * self.speed.factor * self.direction / SECONDS_PER_DAY
        return self.jd

    def toggle_play(self) -> None:
        self.playing = not self.playing

    def reverse(self) -> None:
        self.direction *= -1

    def jump_to(self, jd: float) -> None:
        self.jd = jd

    def jump_to_now(self) -> None:
        self.jd = self._now()
        self.playing = True
