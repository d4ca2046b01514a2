# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions for Earth-orbiting objects.

Reference frames:
    ECI      — Earth-Centered Inertial (non-rotating), as returned by SGP4
    ECEF     — Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic — Latitude, Longitude, Altitude (WGS84 ellipsoid)
    Scene    — renderer frame: ECI x → x, ECI z (north) → y (up), ECI y → z

The ECI→ECEF rotation is a Z-axis rotation by the Greenwich sidereal
angle, which the caller supplies. ECEF→Geodetic iterates the geodetic
latitude on the WGS84 ellipsoid. The sgp4 library stops at TEME state
vectors and a sidereal angle, so the geodetic step lives here.

No external dependencies — only stdlib math.
"""
import math
from dataclasses import dataclass

from orrery.domain.orbital_mechanics import SceneConstants, Vector3


@dataclass(frozen=True)
class _Wgs84:
    """WGS84 ellipsoid."""
    R_EQUATORIAL_KM: float = 6378.137
    E_SQUARED: float = 0.00669437999014  # first eccentricity squared

    @property
    def R_POLAR_KM(self) -> float:
        return self.R_EQUATORIAL_KM * math.sqrt(1.0 - self.E_SQUARED)

    def prime_vertical_radius(self, sin_lat: float) -> float:
        """Radius of curvature in the prime vertical, km."""
        return self.R_EQUATORIAL_KM / math.sqrt(1.0 - self.E_SQUARED * sin_lat * sin_lat)


WGS84: _Wgs84 = _Wgs84()


def eci_to_ecef(pos_eci: Vector3, sidereal_angle_rad: float) -> Vector3:
    """
    Rotate an ECI position into ECEF.

        [x_ecef]   [ cos(θ)  sin(θ)  0] [x_eci]
        [y_ecef] = [-sin(θ)  cos(θ)  0] [y_eci]
        [z_ecef]   [   0       0     1] [z_eci]
    """
    cos_t = math.cos(sidereal_angle_rad)
    sin_t = math.sin(sidereal_angle_rad)
    return (
        cos_t * pos_eci[0] + sin_t * pos_eci[1],
        -sin_t * pos_eci[0] + cos_t * pos_eci[1],
        pos_eci[2],
    )


def ecef_to_geodetic(
    pos_ecef_km: Vector3,
    tolerance_rad: float = 1e-12,
    max_iterations: int = 10,
) -> tuple[float, float, float]:
    """
    Convert an ECEF position to geodetic coordinates (WGS84).

    Latitude is refined by fixed-point iteration until it moves less than
    `tolerance_rad`. Height is measured along the ellipsoid normal, which
    stays finite at the poles.

    Args:
        pos_ecef_km: ECEF position (x, y, z) in km.
        tolerance_rad: Latitude convergence threshold.
        max_iterations: Upper bound on refinement steps.

    Returns:
        (latitude_deg, longitude_deg, altitude_km); latitude in [-90, 90],
        longitude in (-180, 180].
    """
    x, y, z = pos_ecef_km
    e2 = WGS84.E_SQUARED
    p = math.hypot(x, y)

    lat = math.atan2(z, p * (1.0 - e2))
    for _ in range(max_iterations):
        sin_lat = math.sin(lat)
        refined = math.atan2(z + e2 * WGS84.prime_vertical_radius(sin_lat) * sin_lat, p)
        converged = abs(refined - lat) < tolerance_rad
        lat = refined
        if converged:
            break

    sin_lat = math.sin(lat)
    height = (p * math.cos(lat) + z * sin_lat
              - WGS84.R_EQUATORIAL_KM * math.sqrt(1.0 - e2 * sin_lat * sin_lat))
    return math.degrees(lat), math.degrees(math.atan2(y, x)), height


def eci_to_geodetic(pos_eci_km: Vector3, sidereal_angle_rad: float) -> tuple[float, float, float]:
    """ECI position (km) → (latitude_deg, longitude_deg, altitude_km)."""
    return ecef_to_geodetic(eci_to_ecef(pos_eci_km, sidereal_angle_rad))


def eci_to_scene(pos_eci_km: Vector3, km_to_scene: float = SceneConstants.KM_TO_SCENE) -> Vector3:
    """
    Map an ECI position in km to scene coordinates.

    ECI z (north) becomes scene y (up) and ECI y becomes scene z.
    """
    return (
        pos_eci_km[0] * km_to_scene,
        pos_eci_km[2] * km_to_scene,
        pos_eci_km[1] * km_to_scene,
    )
