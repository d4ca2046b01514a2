# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-line records and externally propagated states.

Tracked satellites are not described by clean Keplerian elements; their
two-line records are handed opaquely to an external SGP4/SDP4 propagator.
This module only checks that both lines are present, splits TLE text into
records, and defines the tagged result the propagator adapter returns:

    PropagationSuccess(state) | PropagationFailure(reason)

A failure means "absent for this instant"; the caller hides the body
rather than showing a stale or zero position.

No external dependencies — only stdlib dataclasses.
"""
from dataclasses import dataclass
from typing import Union

from orrery.domain.orbital_mechanics import Vector3


@dataclass(frozen=True)
class TwoLineRecord:
    """
    A two-line parameter record.

    Raises:
        ValueError: If either line is missing or blank.
    """
    name: str
    line1: str
    line2: str

    def __post_init__(self) -> None:
        if not self.line1 or not self.line1.strip():
            raise ValueError(f"Two-line record '{self.name}' is missing line 1")
        if not self.line2 or not self.line2.strip():
            raise ValueError(f"Two-line record '{self.name}' is missing line 2")

    @property
    def norad_id(self) -> str:
        """NORAD catalog number (columns 3-7 of line 1)."""
        return self.line1[2:7].strip()


def parse_tle_text(text: str, max_count: int | None = None) -> list[TwoLineRecord]:
    """
    Split TLE text into records.

    Accepts the 3-line form (name, line 1, line 2) and the bare 2-line form
    (named "UNKNOWN"). Incomplete or malformed groups are skipped.

    Args:
        text: Raw TLE text.
        max_count: Stop after this many records.

    Returns:
        List of TwoLineRecord in input order.
    """
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    records: list[TwoLineRecord] = []
    i = 0
    while i < len(lines):
        if max_count is not None and len(records) >= max_count:
            break
        if (lines[i].startswith("1 ") and i + 1 < len(lines)
                and lines[i + 1].startswith("2 ")):
            records.append(TwoLineRecord("UNKNOWN", lines[i], lines[i + 1]))
            i += 2
        elif (i + 2 < len(lines) and lines[i + 1].startswith("1 ")
                and lines[i + 2].startswith("2 ")):
            records.append(TwoLineRecord(lines[i], lines[i + 1], lines[i + 2]))
            i += 3
        else:
            i += 1
    return records


@dataclass(frozen=True)
class SatelliteState:
    """Per-frame state of an externally propagated body."""
    position: Vector3           # scene units
    velocity_km_s: Vector3      # ECI
    latitude_deg: float
    longitude_deg: float
    altitude_km: float

    @property
    def speed_km_s(self) -> float:
        vx, vy, vz = self.velocity_km_s
        return (vx**2 + vy**2 + vz**2) ** 0.5


@dataclass(frozen=True)
class PropagationSuccess:
    state: SatelliteState

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class PropagationFailure:
    reason: str
    error_code: int | None = None

    @property
    def ok(self) -> bool:
        return False


PropagationResult = Union[PropagationSuccess, PropagationFailure]
