# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON catalog adapter.

Loads the bundled solar-system catalog and fallback two-line records, and
reads TLE text files into tracked satellites. External dependencies
(json, file I/O) are confined to this adapter.
"""
import json
import logging
import pathlib
from typing import Any

from orrery.domain.bodies import BodyCatalog, BodyCategory, CelestialBody
from orrery.domain.ephemeris import TwoLineRecord, parse_tle_text
from orrery.domain.orbital_mechanics import OrbitalElements
from orrery.domain.satellites import TrackedSatellite, find_category
from orrery.domain.time_conversion import J2000_JD
from orrery.ports import CatalogSource

logger = logging.getLogger(__name__)

_DATA_DIR = pathlib.Path(__file__).resolve().parent.parent / "data"
SOLAR_SYSTEM_PATH = _DATA_DIR / "solar_system.json"
FALLBACK_SATELLITES_PATH = _DATA_DIR / "fallback_satellites.json"


def _parse_elements(raw: dict[str, Any] | None, epoch_jd: float) -> OrbitalElements:
    if raw is None:
        return OrbitalElements.fixed()
    return OrbitalElements(
        semi_major_axis_au=raw["a"],
        eccentricity=raw["e"],
        inclination_deg=raw["i"],
        longitude_ascending_node_deg=raw["node"],
        arg_perihelion_deg=raw["peri"],
        mean_anomaly_deg=raw["m0"],
        period_years=raw["period"],
        epoch_jd=epoch_jd,
    )


def parse_body(raw: dict[str, Any], epoch_jd: float = J2000_JD) -> CelestialBody:
    """
    Build a CelestialBody from one catalog entry.

    Raises:
        KeyError: If a required field is missing.
        ValueError: On an unknown category or invalid elements.
    """
    return CelestialBody(
        body_id=raw["id"],
        name=raw["name"],
        category=BodyCategory(raw["category"]),
        elements=_parse_elements(raw.get("elements"), epoch_jd),
        radius_km=raw["radius_km"],
        parent_id=raw.get("parent"),
        has_rings=raw.get("has_rings", False),
    )


def load_body_catalog(path: str | pathlib.Path | None = None) -> BodyCatalog:
    """
    Load a body catalog from JSON (default: the bundled solar system).

    Errors in the catalog propagate; a broken static catalog is not a
    per-frame condition to skip over.
    """
    path = SOLAR_SYSTEM_PATH if path is None else pathlib.Path(path)
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)
    epoch_jd = raw.get("epoch_jd", J2000_JD)
    return BodyCatalog(parse_body(entry, epoch_jd) for entry in raw["bodies"])


def load_fallback_satellites(path: str | pathlib.Path | None = None) -> list[TrackedSatellite]:
    """Load the bundled representative satellites."""
    path = FALLBACK_SATELLITES_PATH if path is None else pathlib.Path(path)
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)

    satellites: list[TrackedSatellite] = []
    for entry in raw["satellites"]:
        try:
            record = TwoLineRecord(entry["name"], entry["line1"], entry["line2"])
            satellites.append(TrackedSatellite.from_record(record, entry["category"]))
        except (KeyError, ValueError) as exc:
            logger.warning("Skipping %s: %s", entry.get("name", "<unnamed>"), exc)
    return satellites


def read_tle_file(
    path: str | pathlib.Path,
    category: str,
    max_count: int | None = None,
) -> list[TrackedSatellite]:
    """
    Read a TLE text file into tracked satellites of one category.

    Args:
        path: 2-line or 3-line TLE text file.
        category: Category id, or the source group the file was fetched
            from (e.g. "gnss" for navigation).
        max_count: Keep at most this many satellites (default: the
            category's own limit).

    Returns:
        Satellites in file order; duplicate NORAD ids keep the first record.

    Raises:
        ValueError: On an unknown category.
    """
    group = find_category(category)
    limit = group.max_count if max_count is None else max_count
    text = pathlib.Path(path).read_text(encoding='utf-8')
    satellites: list[TrackedSatellite] = []
    seen: set[str] = set()
    for record in parse_tle_text(text):
        if len(satellites) >= limit:
            logger.info("Keeping the first %d %s satellites from %s", limit, group.category_id, path)
            break
        satellite = TrackedSatellite.from_record(record, group.category_id)
        if satellite.body_id in seen:
            logger.warning("Skipping %s: duplicate NORAD id %s", record.name, satellite.body_id)
            continue
        seen.add(satellite.body_id)
        satellites.append(satellite)
    return satellites


class JsonCatalogSource(CatalogSource):
    """CatalogSource over a JSON body catalog plus optional TLE files."""

    def __init__(
        self,
        bodies_path: str | pathlib.Path | None = None,
        tle_files: dict[str, str | pathlib.Path] | None = None,
    ):
        """
        Args:
            bodies_path: Body catalog JSON (default: bundled).
            tle_files: Category id → TLE file. When empty, the bundled
                fallback satellites are used.
        """
        self._bodies_path = bodies_path
        self._tle_files = dict(tle_files or {})

    def load_bodies(self) -> BodyCatalog:
        return load_body_catalog(self._bodies_path)

    def load_satellites(self) -> list[TrackedSatellite]:
        if not self._tle_files:
            return load_fallback_satellites()
        satellites: list[TrackedSatellite] = []
        for category, path in self._tle_files.items():
            satellites.extend(read_tle_file(path, category))
        logger.info("Loaded %d satellites from %d TLE file(s)", len(satellites), len(self._tle_files))
        return satellites
