# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the SGP4 propagation adapter."""
import math

import pytest

from orrery.adapters import sgp4_propagator
from orrery.adapters.sgp4_propagator import Sgp4Propagator, split_julian_date
from orrery.domain.ephemeris import PropagationFailure, TwoLineRecord
from orrery.domain.orbital_mechanics import SceneConstants
from orrery.ports.ephemeris import EphemerisPropagator

ISS = TwoLineRecord(
    "ISS (ZARYA)",
    "1 25544U 98067A   24001.50000000  .00016717  00000-0  10270-3 0  9002",
    "2 25544  51.6400 208.9163 0006703  40.5765  30.5612 15.50120000000010",
)
GOES = TwoLineRecord(
    "GOES 16",
    "1 41866U 16071A   24001.50000000 -.00000010  00000-0  00000+0 0  9004",
    "2 41866   0.0200 270.0000 0001400  90.0000 270.0000  1.00270000000010",
)
EPOCH_JD = 2460311.0  # 2024-01-01 12:00 UTC, the records' epoch


def _radius_km(position):
    return math.sqrt(sum(c * c for c in position)) / SceneConstants.KM_TO_SCENE


# ── Fakes for failure paths ──────────────────────────────────────────

class _DecayedSatrec:
    error = 0
    no_kozai = 0.06

    def sgp4(self, jd, fr):
        return 6, (math.nan, math.nan, math.nan), (math.nan, math.nan, math.nan)


class _NanSatrec(_DecayedSatrec):

    def sgp4(self, jd, fr):
        return 0, (math.nan, 0.0, 0.0), (0.0, 0.0, 0.0)


def _patch_satrec(monkeypatch, factory):
    class _Satrec:
        @staticmethod
        def twoline2rv(line1, line2):
            return factory()
    monkeypatch.setattr(sgp4_propagator, "Satrec", _Satrec)


# ── Propagation ──────────────────────────────────────────────────────

class TestPropagate:

    def test_implements_port(self):
        assert isinstance(Sgp4Propagator(), EphemerisPropagator)

    def test_iss_at_epoch(self):
        result = Sgp4Propagator().propagate(ISS, EPOCH_JD)
        assert result.ok
        state = result.state
        assert 350.0 < state.altitude_km < 450.0
        assert 7.5 < state.speed_km_s < 7.9
        assert abs(state.latitude_deg) <= 52.5
        assert -180.0 <= state.longitude_deg <= 180.0
        assert 6700.0 < _radius_km(state.position) < 6850.0

    def test_geostationary_altitude(self):
        result = Sgp4Propagator().propagate(GOES, EPOCH_JD + 0.3)
        assert result.ok
        assert result.state.altitude_km == pytest.approx(35786.0, abs=200.0)
        assert abs(result.state.latitude_deg) < 0.5

    def test_custom_scale(self):
        result = Sgp4Propagator(km_to_scene=1.0).propagate(ISS, EPOCH_JD)
        r = math.sqrt(sum(c * c for c in result.state.position))
        assert 6700.0 < r < 6850.0

    def test_malformed_record_is_failure(self, monkeypatch):
        def _raise():
            raise ValueError("bad line")
        _patch_satrec(monkeypatch, _raise)
        result = Sgp4Propagator().propagate(ISS, EPOCH_JD)
        assert isinstance(result, PropagationFailure)
        assert "bad line" in result.reason

    def test_decayed_orbit_is_failure(self, monkeypatch):
        _patch_satrec(monkeypatch, _DecayedSatrec)
        result = Sgp4Propagator().propagate(ISS, EPOCH_JD)
        assert not result.ok
        assert result.error_code == 6

    def test_non_finite_state_is_failure(self, monkeypatch):
        _patch_satrec(monkeypatch, _NanSatrec)
        result = Sgp4Propagator().propagate(ISS, EPOCH_JD)
        assert not result.ok
        assert "Non-finite" in result.reason

    def test_split_julian_date(self):
        whole, fraction = split_julian_date(2460311.25)
        assert whole == 2460310.5
        assert fraction == pytest.approx(0.75)


# ── Paths ────────────────────────────────────────────────────────────

class TestOrbitPath:

    def test_period_from_mean_motion(self):
        assert Sgp4Propagator().period_days(ISS) == pytest.approx(1 / 15.5012, rel=1e-3)

    def test_one_revolution(self):
        points = Sgp4Propagator().orbit_path(ISS, EPOCH_JD, 90)
        assert len(points) == 91
        assert math.dist(points[0], points[-1]) < 0.25

    def test_failed_instants_dropped(self, monkeypatch):
        _patch_satrec(monkeypatch, _DecayedSatrec)
        assert Sgp4Propagator().orbit_path(ISS, EPOCH_JD, 10) == []

    def test_rejects_zero_steps(self):
        with pytest.raises(ValueError, match="steps"):
            Sgp4Propagator().orbit_path(ISS, EPOCH_JD, 0)
