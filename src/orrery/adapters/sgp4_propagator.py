# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 adapter: propagates two-line records to scene positions.

External dependency (sgp4) is confined to this layer.

SGP4 propagation:
    TLE mean elements are SGP4-specific, NOT pure Keplerian, so satellites
    never go through the domain Kepler solver. The sgp4 library returns
    TEME position/velocity in km and km/s; its `gstime` supplies the
    Greenwich sidereal angle used for the geodetic conversion.

Failures (unparseable record, decayed orbit, non-finite state) come back as
PropagationFailure values. Nothing here raises for a bad satellite.
"""
import logging
import math

from sgp4.api import SGP4_ERRORS, Satrec
from sgp4.propagation import gstime

from orrery.domain.coordinate_frames import eci_to_geodetic, eci_to_scene
from orrery.domain.ephemeris import (
    PropagationFailure,
    PropagationResult,
    PropagationSuccess,
    SatelliteState,
    TwoLineRecord,
)
from orrery.domain.orbital_mechanics import SceneConstants, Vector3
from orrery.ports.ephemeris import EphemerisPropagator

logger = logging.getLogger(__name__)

_MINUTES_PER_DAY = 1440.0


def split_julian_date(jd: float) -> tuple[float, float]:
    """Split a JD into (whole day at 0h UT, fraction) as sgp4 expects."""
    whole = math.floor(jd - 0.5) + 0.5
    return whole, jd - whole


class Sgp4Propagator(EphemerisPropagator):
    """
    EphemerisPropagator backed by python-sgp4.

    Parsed Satrec objects are cached per record on the instance.
    """

    def __init__(self, km_to_scene: float = SceneConstants.KM_TO_SCENE):
        self._km_to_scene = km_to_scene
        self._satrecs: dict[TwoLineRecord, Satrec | PropagationFailure] = {}

    def _satrec(self, record: TwoLineRecord) -> Satrec | PropagationFailure:
        cached = self._satrecs.get(record)
        if cached is not None:
            return cached
        try:
            satrec = Satrec.twoline2rv(record.line1, record.line2)
        except ValueError as exc:
            logger.debug("Cannot parse record for %s: %s", record.name, exc)
            satrec = PropagationFailure(f"Malformed two-line record: {exc}")
        else:
            if satrec.error != 0:
                satrec = PropagationFailure(
                    SGP4_ERRORS.get(satrec.error, "initialisation failed"), satrec.error,
                )
        self._satrecs[record] = satrec
        return satrec

    def propagate(self, record: TwoLineRecord, jd: float) -> PropagationResult:
        satrec = self._satrec(record)
        if isinstance(satrec, PropagationFailure):
            return satrec

        whole, fraction = split_julian_date(jd)
        error, position_km, velocity_km_s = satrec.sgp4(whole, fraction)
        if error != 0:
            return PropagationFailure(SGP4_ERRORS.get(error, f"SGP4 error {error}"), error)
        if not all(math.isfinite(c) for c in (*position_km, *velocity_km_s)):
            return PropagationFailure("Non-finite state vector")

        lat, lon, alt = eci_to_geodetic(position_km, gstime(jd))
        return PropagationSuccess(SatelliteState(
            position=eci_to_scene(position_km, self._km_to_scene),
            velocity_km_s=(velocity_km_s[0], velocity_km_s[1], velocity_km_s[2]),
            latitude_deg=lat,
            longitude_deg=lon,
            altitude_km=alt,
        ))

    def period_days(self, record: TwoLineRecord) -> float | None:
        """Nominal orbital period from the record's mean motion, or None if unusable."""
        satrec = self._satrec(record)
        if isinstance(satrec, PropagationFailure) or satrec.no_kozai <= 0:
            return None
        return 2.0 * math.pi / satrec.no_kozai / _MINUTES_PER_DAY

    def orbit_path(self, record: TwoLineRecord, jd: float, steps: int) -> list[Vector3]:
        """
        Sample one nominal period starting at jd.

        Points cover `steps + 1` equally spaced instants so a clean orbit
        closes on itself; failed instants are dropped.
        """
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        period = self.period_days(record)
        if period is None:
            return []

        points: list[Vector3] = []
        for k in range(steps + 1):
            result = self.propagate(record, jd + period * k / steps)
            if result.ok:
                points.append(result.state.position)
        return points
