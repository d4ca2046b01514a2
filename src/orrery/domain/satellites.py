# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracked satellite metadata: categories, identities, data-layer relevance.
"""
from dataclasses import dataclass

from orrery.domain.ephemeris import TwoLineRecord


@dataclass(frozen=True)
class SatelliteCategory:
    """A satellite category and the external group it is sourced from."""
    category_id: str
    label: str
    source_group: str
    max_count: int


SATELLITE_CATEGORIES: tuple[SatelliteCategory, ...] = (
    SatelliteCategory('stations', 'Space Stations', 'stations', 25),
    SatelliteCategory('earth_observation', 'Earth Observation', 'resource', 80),
    SatelliteCategory('weather', 'Weather & Climate', 'weather', 100),
    SatelliteCategory('navigation', 'Navigation (GNSS)', 'gnss', 120),
    SatelliteCategory('scientific', 'Science & Research', 'science', 80),
    SatelliteCategory('communications', 'Communications', 'geo', 200),
    SatelliteCategory('starlink', 'Starlink', 'starlink', 300),
    SatelliteCategory('military', 'Military / Recon', 'military', 60),
    SatelliteCategory('debris', 'Debris (Tracked)', 'cosmos-2251-debris', 100),
)

CATEGORY_IDS: frozenset[str] = frozenset(c.category_id for c in SATELLITE_CATEGORIES)


def find_category(name: str) -> SatelliteCategory:
    """
    Look up a category by its id or by the source group it is fetched from.

    Raises:
        ValueError: If no category matches.
    """
    for category in SATELLITE_CATEGORIES:
        if name in (category.category_id, category.source_group):
            return category
    raise ValueError(f"Unknown satellite category '{name}'")

# Orbits drawn regardless of the path toggle
ALWAYS_SHOW_ORBIT_NAMES: frozenset[str] = frozenset({
    'ISS (ZARYA)', 'ISS', 'CSS (TIANHE)', 'HST',
})

# Data layer → fragments of the names of satellites that measure it.
# An empty list means the layer applies no filter.
DATA_LAYER_SATELLITES: dict[str, tuple[str, ...]] = {
    'satellites_now': (),
    'visible_earth': (),
    'air_temperature': (
        'AQUA', 'TERRA', 'NOAA 20', 'NOAA 21', 'NOAA 19', 'NOAA 18',
        'GOES 16', 'GOES 18', 'METOP-A', 'METOP-B', 'METOP-C',
        'SUOMI NPP', 'JPSS-1', 'SENTINEL-3A', 'SENTINEL-3B',
        'FY-3D', 'FY-3E', 'HIMAWARI-8', 'HIMAWARI-9',
    ),
    'water_storage': (
        'GRACE-FO 1', 'GRACE-FO 2', 'SENTINEL-6A', 'JASON-3',
        'CRYOSAT 2', 'SARAL', 'SMAP',
    ),
    'precipitation': (
        'GPM-CORE', 'NOAA 20', 'NOAA 19', 'NOAA 18',
        'METOP-B', 'METOP-C', 'GOES 16', 'GOES 18',
        'HIMAWARI-8', 'HIMAWARI-9',
    ),
    'sea_level': (
        'SENTINEL-6A', 'JASON-3', 'SENTINEL-3A', 'SENTINEL-3B',
        'CRYOSAT 2', 'SARAL',
    ),
    'sea_surface_temp': (
        'AQUA', 'TERRA', 'SUOMI NPP', 'NOAA 20',
        'SENTINEL-3A', 'SENTINEL-3B', 'GOES 16', 'GOES 18',
    ),
    'soil_moisture': (
        'SMAP', 'SMOS', 'SENTINEL-1A', 'SENTINEL-1B',
        'AQUA', 'METOP-B', 'METOP-C',
    ),
    'ozone': (
        'SENTINEL-5P', 'SUOMI NPP', 'NOAA 20', 'AURA',
        'METOP-B', 'METOP-C', 'NOAA 19',
    ),
}


@dataclass(frozen=True)
class TrackedSatellite:
    """A satellite propagated from a two-line record."""
    body_id: str
    name: str
    record: TwoLineRecord
    category: str

    @classmethod
    def from_record(cls, record: TwoLineRecord, category: str) -> 'TrackedSatellite':
        """Identify a satellite by the NORAD id in its record."""
        if category not in CATEGORY_IDS:
            raise ValueError(f"Unknown satellite category '{category}'")
        return cls(body_id=record.norad_id, name=record.name, record=record, category=category)


def layer_name_fragments(layer_id: str | None) -> tuple[str, ...]:
    """Name fragments for a data layer; empty for no layer or a layer without a filter."""
    if layer_id is None:
        return ()
    try:
        return DATA_LAYER_SATELLITES[layer_id]
    except KeyError:
        raise ValueError(f"Unknown data layer '{layer_id}'") from None


def is_relevant_to_layer(name: str, layer_id: str | None) -> bool:
    """True if a satellite name matches the data layer (or the layer has no filter)."""
    fragments = layer_name_fragments(layer_id)
    if not fragments:
        return True
    upper = name.upper()
    return any(fragment in upper for fragment in fragments)
