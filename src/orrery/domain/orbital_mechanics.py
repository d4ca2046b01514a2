# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital position computation.

Turns Keplerian elements and a Julian Date into a scene-space position,
and samples one revolution into a closed polyline for orbit guides.

Scene axis convention:
    The ecliptic frame (X toward the vernal equinox, Z toward the ecliptic
    pole) is mapped so that the out-of-plane component becomes scene "up":
        scene x = ecliptic X
        scene y = ecliptic Z
        scene z = ecliptic Y
    The renderer relies on this mapping; do not change it.
"""
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from orrery.domain.kepler import (
    TWO_PI,
    mean_anomaly,
    radial_distance,
    solve_kepler,
    true_anomaly,
)
from orrery.domain.time_conversion import J2000_JD, years_since_epoch


@dataclass(frozen=True)
class _SceneConstants:
    """Scene scaling constants (visual mode)."""
    AU_TO_SCENE: float = 50.0            # scene units per AU
    REAL_AU_TO_SCENE: float = 500.0      # scene units per AU, real-scale mode
    VISUAL_RADIUS_SCALE: float = 0.0004  # km → scene units, exaggerated
    STAR_RADIUS_SCALE: float = 0.000004  # km → scene units for stars
    MIN_PLANET_RADIUS: float = 0.25      # scene units
    MIN_MOON_RADIUS: float = 0.12        # scene units
    # Earth-centred satellite scene
    EARTH_RADIUS_SCENE: float = 6.0
    EARTH_RADIUS_KM: float = 6371.0

    @property
    def KM_TO_SCENE(self) -> float:
        """Scene units per km in the Earth-centred satellite scene."""
        return self.EARTH_RADIUS_SCENE / self.EARTH_RADIUS_KM


SceneConstants: _SceneConstants = _SceneConstants()

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class OrbitalElements:
    """
    Keplerian elements of a heliocentric (or planetocentric) orbit.

    Angles are in degrees, the semi-major axis in AU, the period in Julian
    years. ``semi_major_axis_au == 0`` together with ``period_years == 0``
    marks a fixed, non-orbiting body.

    Raises:
        ValueError: On eccentricity outside [0, 1), negative axis or period,
            or a half-specified fixed-body sentinel.
    """
    semi_major_axis_au: float
    eccentricity: float
    inclination_deg: float
    longitude_ascending_node_deg: float
    arg_perihelion_deg: float
    mean_anomaly_deg: float
    period_years: float
    epoch_jd: float = J2000_JD

    def __post_init__(self) -> None:
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(
                f"Eccentricity must be in [0, 1) for a closed orbit, got {self.eccentricity}"
            )
        if self.semi_major_axis_au < 0:
            raise ValueError(f"Semi-major axis must be non-negative, got {self.semi_major_axis_au}")
        if self.period_years < 0:
            raise ValueError(f"Period must be non-negative, got {self.period_years}")
        if (self.semi_major_axis_au == 0) != (self.period_years == 0):
            raise ValueError(
                "Semi-major axis and period must both be zero (fixed body) or both positive, "
                f"got a={self.semi_major_axis_au}, period={self.period_years}"
            )

    @property
    def is_fixed(self) -> bool:
        """True for the non-orbiting sentinel (a = 0, T = 0)."""
        return self.period_years == 0

    @property
    def perihelion_au(self) -> float:
        return self.semi_major_axis_au * (1.0 - self.eccentricity)

    @property
    def aphelion_au(self) -> float:
        return self.semi_major_axis_au * (1.0 + self.eccentricity)

    @classmethod
    def fixed(cls) -> 'OrbitalElements':
        """The fixed-body sentinel."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


class PathSampling(Enum):
    """How generate_orbit_path distributes its points."""
    TRUE_ANOMALY = "true_anomaly"
    TIME = "time"


def _rotate_to_scene(elements: OrbitalElements, x_prime, y_prime, scale: float):
    """
    Rotate in-plane coordinates through ω, i, Ω and map to scene axes.

    Works element-wise on floats or numpy arrays.
    """
    i = math.radians(elements.inclination_deg)
    big_omega = math.radians(elements.longitude_ascending_node_deg)
    omega = math.radians(elements.arg_perihelion_deg)

    cO = math.cos(big_omega)
    sO = math.sin(big_omega)
    co = math.cos(omega)
    so = math.sin(omega)
    ci = math.cos(i)
    si = math.sin(i)

    x_ecl = (cO * co - sO * so * ci) * x_prime + (-cO * so - sO * co * ci) * y_prime
    y_ecl = (sO * co + cO * so * ci) * x_prime + (-sO * so + cO * co * ci) * y_prime
    z_ecl = (so * si) * x_prime + (co * si) * y_prime

    return x_ecl * scale, z_ecl * scale, y_ecl * scale


def orbital_position(
    elements: OrbitalElements,
    true_anomaly_rad: float,
    radius: float,
    scale: float = SceneConstants.AU_TO_SCENE,
) -> Vector3:
    """
    Scene position for a body at true anomaly ν and radial distance r.

    Args:
        elements: Orbit orientation (i, Ω, ω are used).
        true_anomaly_rad: True anomaly ν (radians).
        radius: Radial distance from the focus (AU).
        scale: Scene units per AU.

    Returns:
        (x, y, z) in scene units, y up.
    """
    x, y, z = _rotate_to_scene(
        elements,
        radius * math.cos(true_anomaly_rad),
        radius * math.sin(true_anomaly_rad),
        scale,
    )
    return (x, y, z)


def position_at_time(
    elements: OrbitalElements,
    jd: float,
    scale: float = SceneConstants.AU_TO_SCENE,
) -> Vector3:
    """
    Scene position of a body at a Julian Date.

    Mean anomaly → Kepler solve → true anomaly → radius → orbital_position.
    A fixed body sits at the origin.
    """
    if elements.is_fixed:
        return (0.0, 0.0, 0.0)

    m = mean_anomaly(
        math.radians(elements.mean_anomaly_deg),
        elements.period_years,
        years_since_epoch(jd, elements.epoch_jd),
    )
    e_anom = solve_kepler(m, elements.eccentricity)
    nu = true_anomaly(e_anom, elements.eccentricity)
    r = radial_distance(elements.semi_major_axis_au, elements.eccentricity, e_anom)
    return orbital_position(elements, nu, r, scale)


def distance_at_time(elements: OrbitalElements, jd: float) -> float:
    """Heliocentric (or parent-centric) distance in AU at a Julian Date."""
    if elements.is_fixed:
        return 0.0
    m = mean_anomaly(
        math.radians(elements.mean_anomaly_deg),
        elements.period_years,
        years_since_epoch(jd, elements.epoch_jd),
    )
    e_anom = solve_kepler(m, elements.eccentricity)
    return radial_distance(elements.semi_major_axis_au, elements.eccentricity, e_anom)


def generate_orbit_path(
    elements: OrbitalElements,
    segments: int = 128,
    scale: float = SceneConstants.AU_TO_SCENE,
    sampling: PathSampling = PathSampling.TRUE_ANOMALY,
) -> list[Vector3]:
    """
    Sample one full revolution as a closed polyline.

    TRUE_ANOMALY sampling sweeps ν uniformly over [0, 2π] with the conic
    radius r = a(1-e²)/(1+e·cos ν) and never calls the Kepler solver; the
    point spacing therefore does not follow the body's angular speed.
    TIME sampling sweeps the mean anomaly uniformly, so consecutive points
    are equal time steps apart.

    Args:
        elements: Orbital elements.
        segments: Number of line segments (points = segments + 1).
        scale: Scene units per AU.
        sampling: Point distribution.

    Returns:
        List of (x, y, z); the last point equals the first.

    Raises:
        ValueError: If segments < 1.
    """
    if segments < 1:
        raise ValueError(f"segments must be >= 1, got {segments}")

    a = elements.semi_major_axis_au
    e = elements.eccentricity

    if sampling is PathSampling.TRUE_ANOMALY:
        nu = np.linspace(0.0, TWO_PI, segments + 1)
        r = a * (1.0 - e**2) / (1.0 + e * np.cos(nu))
    else:
        nu_list = []
        r_list = []
        for k in range(segments + 1):
            e_anom = solve_kepler(TWO_PI * k / segments, e)
            nu_list.append(true_anomaly(e_anom, e))
            r_list.append(radial_distance(a, e, e_anom))
        nu = np.array(nu_list)
        r = np.array(r_list)

    xs, ys, zs = _rotate_to_scene(elements, r * np.cos(nu), r * np.sin(nu), scale)

    points = [(float(x), float(y), float(z)) for x, y, z in zip(xs, ys, zs)]
    points[-1] = points[0]
    return points
