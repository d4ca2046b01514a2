# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the external SGP4/SDP4 propagator.

Implementations never raise for a bad record or a decayed orbit: they
return PropagationFailure and the caller hides the body for that instant.
"""
from typing import Protocol, runtime_checkable

from orrery.domain.ephemeris import PropagationResult, TwoLineRecord
from orrery.domain.orbital_mechanics import Vector3


@runtime_checkable
class EphemerisPropagator(Protocol):
    """Port for propagating two-line records to scene positions."""

    def propagate(self, record: TwoLineRecord, jd: float) -> PropagationResult:
        """
        Propagate a record to a Julian Date (UTC).

        Args:
            record: Two-line record, handed to the propagator as-is.
            jd: Julian Date.

        Returns:
            PropagationSuccess with scene position, velocity and geodetic
            fields, or PropagationFailure with the reason.
        """
        ...

    def orbit_path(self, record: TwoLineRecord, jd: float, steps: int) -> list[Vector3]:
        """Scene positions at `steps` equal time steps over one nominal period, failures dropped."""
        ...
