# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orrery

Time-driven propagation for a solar-system and satellite visualiser:
calendar ↔ Julian Date conversion, Kepler-equation solving, Keplerian
positions and closed orbit paths in scene space, moon placement around
exaggerated parents, SGP4 propagation of two-line records, and a
per-frame scheduler with fixed cost ceilings.
"""

from orrery.domain.time_conversion import (
    J2000_JD,
    CalendarInstant,
    to_julian_date,
    from_julian_date,
    datetime_to_jd,
    jd_to_datetime,
    current_julian_date,
    format_julian_date,
)
from orrery.domain.kepler import (
    mean_anomaly,
    solve_kepler,
    true_anomaly,
)
from orrery.domain.orbital_mechanics import (
    SceneConstants,
    OrbitalElements,
    PathSampling,
    orbital_position,
    position_at_time,
    generate_orbit_path,
)
from orrery.domain.bodies import (
    BodyCategory,
    CelestialBody,
    BodyCatalog,
)
from orrery.domain.placement import (
    PlacementConfig,
    ParentScalingProfile,
    HierarchicalPlacementResolver,
    build_scaling_profiles,
)
from orrery.domain.ephemeris import (
    TwoLineRecord,
    SatelliteState,
    PropagationSuccess,
    PropagationFailure,
)
from orrery.domain.satellites import (
    SATELLITE_CATEGORIES,
    TrackedSatellite,
)
from orrery.domain.simulation_clock import SimulationClock
from orrery.domain.scheduler import (
    SchedulerConfig,
    FilterCriteria,
    FrameSnapshot,
    BodyPropagationScheduler,
)

__version__ = "1.0.0"
