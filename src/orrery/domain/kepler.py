# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Kepler's equation and the anomaly chain.

    M = E - e·sin(E)

Mean anomaly M advances uniformly with time; the eccentric anomaly E is
found by Newton–Raphson; the true anomaly ν and radial distance r follow
in closed form.

No external dependencies — only stdlib math.
"""
import math

TWO_PI = 2.0 * math.pi

DEFAULT_TOLERANCE: float = 1e-8
DEFAULT_MAX_ITERATIONS: int = 50

# Above this eccentricity the iteration starts from π instead of M.
_HIGH_ECCENTRICITY = 0.8


def normalize_angle(angle_rad: float) -> float:
    """Wrap an angle into [0, 2π)."""
    wrapped = math.fmod(angle_rad, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # fmod of a tiny negative value can round up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def mean_anomaly(
    mean_anomaly_at_epoch_rad: float,
    period: float,
    elapsed: float,
) -> float:
    """
    Mean anomaly after `elapsed` time units.

    M(t) = M0 + n·(t - t0),  n = 2π / period

    Args:
        mean_anomaly_at_epoch_rad: M0 in radians.
        period: Orbital period, same unit as `elapsed`. Zero marks a
            fixed body.
        elapsed: Time since the element epoch.

    Returns:
        Mean anomaly in radians, normalized to [0, 2π). Zero for a fixed body.
    """
    if period == 0:
        return 0.0
    n = TWO_PI / period
    return normalize_angle(mean_anomaly_at_epoch_rad + n * elapsed)


def solve_kepler(
    mean_anomaly_rad: float,
    eccentricity: float,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Solve Kepler's equation for the eccentric anomaly.

    Newton–Raphson on f(E) = E - e·sin(E) - M with f'(E) = 1 - e·cos(E).
    The initial guess is M for e < 0.8 and π otherwise. Iteration stops
    once |ΔE| < tolerance; if the iterations run out the last estimate is
    returned. This never raises.

    Args:
        mean_anomaly_rad: Mean anomaly (radians), need not be normalized.
        eccentricity: Eccentricity in [0, 1).
        tolerance: Step-size convergence threshold (radians).
        max_iterations: Maximum Newton steps.

    Returns:
        Eccentric anomaly in radians.
    """
    if eccentricity == 0:
        return mean_anomaly_rad

    e_anom = mean_anomaly_rad if eccentricity < _HIGH_ECCENTRICITY else math.pi

    for _ in range(max_iterations):
        f = e_anom - eccentricity * math.sin(e_anom) - mean_anomaly_rad
        f_prime = 1.0 - eccentricity * math.cos(e_anom)
        delta = f / f_prime
        e_anom -= delta
        if abs(delta) < tolerance:
            break

    return e_anom


def true_anomaly(eccentric_anomaly_rad: float, eccentricity: float) -> float:
    """
    True anomaly from eccentric anomaly (half-angle form).

    ν = 2·atan2(√(1+e)·sin(E/2), √(1-e)·cos(E/2))

    Returns:
        True anomaly in radians, in (-π, π].
    """
    half = eccentric_anomaly_rad / 2.0
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(half),
        math.sqrt(1.0 - eccentricity) * math.cos(half),
    )


def radial_distance(
    semi_major_axis: float,
    eccentricity: float,
    eccentric_anomaly_rad: float,
) -> float:
    """r = a·(1 - e·cos(E)), in the unit of the semi-major axis."""
    return semi_major_axis * (1.0 - eccentricity * math.cos(eccentric_anomaly_rad))


def conic_radius(semi_major_axis: float, eccentricity: float, true_anomaly_rad: float) -> float:
    """r = a(1-e²) / (1 + e·cos ν), in the unit of the semi-major axis."""
    return (semi_major_axis * (1.0 - eccentricity**2)
            / (1.0 + eccentricity * math.cos(true_anomaly_rad)))
