# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the JSON catalog adapter and TLE file reading."""
import json
import logging

import pytest

from orrery.adapters.catalog_json import (
    JsonCatalogSource,
    load_body_catalog,
    load_fallback_satellites,
    parse_body,
    read_tle_file,
)
from orrery.domain.bodies import BodyCategory
from orrery.ports import CatalogSource

ISS_LINE1 = "1 25544U 98067A   24001.50000000  .00016717  00000-0  10270-3 0  9002"
ISS_LINE2 = "2 25544  51.6400 208.9163 0006703  40.5765  30.5612 15.50120000000010"


def _numbered_records(count):
    """TLE text with `count` records numbered from NORAD 10000."""
    blocks = []
    for k in range(count):
        norad = 10000 + k
        blocks.append(
            f"SAT-{k}\n"
            f"1 {norad}U 98067A   24001.50000000  .00016717  00000-0  10270-3 0  9002\n"
            f"2 {norad}  51.6400 208.9163 0006703  40.5765  30.5612 15.50120000000010\n"
        )
    return "".join(blocks)


# ── Bundled catalog ──────────────────────────────────────────────────

class TestBundledCatalog:

    def test_contents(self):
        catalog = load_body_catalog()
        assert len(catalog.by_category(BodyCategory.STAR)) == 1
        assert len(catalog.by_category(BodyCategory.PLANET)) == 8
        assert len(catalog.by_category(BodyCategory.MOON)) == 13
        assert catalog.get('ceres').category is BodyCategory.DWARF_PLANET
        assert catalog.get('saturn').has_rings
        assert catalog.get('sun').elements.is_fixed

    def test_moons_have_planet_parents(self):
        catalog = load_body_catalog()
        for moon in catalog.by_category(BodyCategory.MOON):
            assert catalog.get(moon.parent_id).category is BodyCategory.PLANET

    def test_earth_elements(self):
        earth = load_body_catalog().get('earth').elements
        assert earth.semi_major_axis_au == pytest.approx(1.0, abs=1e-5)
        assert earth.eccentricity == pytest.approx(0.0167086)

    def test_fallback_satellites(self):
        satellites = load_fallback_satellites()
        assert len(satellites) == 10
        assert satellites[0].name == "ISS (ZARYA)"
        assert satellites[0].body_id == "25544"
        assert {s.category for s in satellites} >= {'stations', 'starlink', 'debris'}


# ── Custom files ─────────────────────────────────────────────────────

class TestCustomFiles:

    def test_parse_body_defaults(self):
        body = parse_body({"id": "x", "name": "X", "category": "asteroid", "radius_km": 1.0,
                           "elements": {"a": 2.0, "e": 0.1, "i": 1.0, "node": 2.0,
                                        "peri": 3.0, "m0": 4.0, "period": 2.83}})
        assert body.parent_id is None
        assert body.has_rings is False

    def test_invalid_category_propagates(self):
        with pytest.raises(ValueError):
            parse_body({"id": "x", "name": "X", "category": "nebula", "radius_km": 1.0})

    def test_structure_errors_propagate(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"bodies": [
            {"id": "moon", "name": "Moon", "category": "moon", "radius_km": 1737.4,
             "parent": "earth", "elements": {"a": 0.00257, "e": 0.05, "i": 5.1, "node": 125.0,
                                             "peri": 318.0, "m0": 135.0, "period": 0.0748}},
        ]}))
        with pytest.raises(ValueError, match="unknown parent"):
            load_body_catalog(path)

    def test_read_tle_file(self, tmp_path, caplog):
        path = tmp_path / "stations.tle"
        path.write_text(
            f"ISS (ZARYA)\n{ISS_LINE1}\n{ISS_LINE2}\n"
            f"ISS DUPLICATE\n{ISS_LINE1}\n{ISS_LINE2}\n"
        )
        with caplog.at_level(logging.WARNING, logger="orrery.adapters.catalog_json"):
            satellites = read_tle_file(path, 'stations')
        assert [s.name for s in satellites] == ["ISS (ZARYA)"]
        assert "Skipping ISS DUPLICATE" in caplog.text

    def test_unknown_category_raises(self, tmp_path):
        path = tmp_path / "x.tle"
        path.write_text(f"ISS\n{ISS_LINE1}\n{ISS_LINE2}\n")
        with pytest.raises(ValueError, match="balloons"):
            read_tle_file(path, 'balloons')

    def test_category_limit_applies_by_default(self, tmp_path):
        """A stations file never yields more than the stations limit."""
        path = tmp_path / "stations.tle"
        path.write_text(_numbered_records(40))
        satellites = read_tle_file(path, 'stations')
        assert len(satellites) == 25
        assert satellites[0].body_id == "10000"

    def test_explicit_limit_overrides_category(self, tmp_path):
        path = tmp_path / "stations.tle"
        path.write_text(_numbered_records(40))
        assert len(read_tle_file(path, 'stations', max_count=30)) == 30

    def test_source_group_name_selects_category(self, tmp_path):
        path = tmp_path / "gnss.tle"
        path.write_text(_numbered_records(130))
        satellites = read_tle_file(path, 'gnss')
        assert len(satellites) == 120
        assert {s.category for s in satellites} == {'navigation'}


# ── CatalogSource ────────────────────────────────────────────────────

class TestJsonCatalogSource:

    def test_implements_port(self):
        assert isinstance(JsonCatalogSource(), CatalogSource)

    def test_defaults_to_fallback(self):
        assert len(JsonCatalogSource().load_satellites()) == 10

    def test_tle_files_by_category(self, tmp_path):
        path = tmp_path / "stations.tle"
        path.write_text(f"ISS\n{ISS_LINE1}\n{ISS_LINE2}\n")
        satellites = JsonCatalogSource(tle_files={'stations': path}).load_satellites()
        assert [(s.name, s.category) for s in satellites] == [("ISS", 'stations')]
