# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for hierarchical moon placement."""
import math

import pytest

from orrery.adapters.catalog_json import load_body_catalog
from orrery.domain.bodies import BodyCatalog, BodyCategory, CelestialBody
from orrery.domain.orbital_mechanics import OrbitalElements, SceneConstants, position_at_time
from orrery.domain.placement import (
    HierarchicalPlacementResolver,
    ParentScalingProfile,
    PlacementConfig,
    build_scaling_profiles,
    compute_child_scales,
)
from orrery.domain.time_conversion import J2000_JD


@pytest.fixture(scope="module")
def catalog():
    return load_body_catalog()


@pytest.fixture(scope="module")
def resolver(catalog):
    return HierarchicalPlacementResolver(catalog)


# ── Profiles ──────────────────────────────────────────────────────

class TestScalingProfiles:

    def test_every_parent_has_a_profile(self, catalog):
        profiles = build_scaling_profiles(catalog)
        assert set(profiles) == {'earth', 'mars', 'jupiter', 'saturn', 'uranus', 'neptune'}

    def test_ringed_parent_gets_wider_clearance(self, catalog):
        profiles = build_scaling_profiles(catalog)
        config = PlacementConfig()
        saturn = catalog.get('saturn')
        jupiter = catalog.get('jupiter')
        assert profiles['saturn'].clearance == pytest.approx(
            saturn.visual_radius() * config.ringed_clearance_factor)
        assert profiles['jupiter'].clearance == pytest.approx(
            jupiter.visual_radius() * config.clearance_factor)

    def test_sibling_range(self, catalog):
        jupiter = build_scaling_profiles(catalog)['jupiter']
        assert jupiter.min_child_a_au == pytest.approx(0.00282)
        assert jupiter.max_child_a_au == pytest.approx(0.01259)

    def test_child_fraction(self):
        profile = ParentScalingProfile('p', clearance=2.0, spread=4.0,
                                       min_child_a_au=1.0, max_child_a_au=3.0)
        assert profile.child_fraction(1.0) == 0.0
        assert profile.child_fraction(2.0) == 0.5
        assert profile.child_fraction(3.0) == 1.0
        assert profile.target_distance(2.0) == pytest.approx(4.0)

    def test_single_child_uses_default_fraction(self, catalog):
        earth = build_scaling_profiles(catalog)['earth']
        assert earth.child_fraction(0.00257) == 0.5

    def test_rejects_profiles_missing_a_parent(self, catalog):
        """Every parent in the catalog needs a profile up front."""
        profiles = build_scaling_profiles(catalog)
        del profiles['mars']
        with pytest.raises(ValueError, match="mars"):
            HierarchicalPlacementResolver(catalog, profiles)

    def test_profiles_are_explicit_inputs(self, catalog):
        """A resolver uses the map it is given and never rebuilds it."""
        profiles = build_scaling_profiles(catalog, PlacementConfig(clearance_factor=10.0))
        resolver = HierarchicalPlacementResolver(catalog, profiles)
        assert resolver.profile('jupiter') is profiles['jupiter']


# ── Clearance invariant ───────────────────────────────────────────

class TestClearance:

    def test_children_never_inside_clearance(self, catalog, resolver):
        """Every child stays at least the parent's clearance away from it."""
        for parent in catalog.parents():
            clearance = resolver.profile(parent.body_id).clearance
            for child in catalog.children_of(parent.body_id):
                period_days = child.elements.period_years * 365.25
                for k in range(48):
                    jd = J2000_JD + period_days * k / 48
                    p = resolver.world_position(parent, jd)
                    c = resolver.world_position(child, jd)
                    assert math.dist(p, c) >= clearance - 1e-9, (child.body_id, jd)

    def test_perihelion_lands_on_target(self, catalog, resolver):
        profile = resolver.profile('jupiter')
        io = catalog.get('io')
        scale = resolver.child_scale('io')
        assert io.elements.perihelion_au * scale == pytest.approx(profile.clearance)

    def test_outer_sibling_placed_further_out(self, resolver):
        assert (resolver.child_scale('callisto') * 0.01259
                > resolver.child_scale('io') * 0.00282)

    def test_rejects_zero_perihelion_child(self):
        catalog = BodyCatalog([
            CelestialBody('p', 'P', BodyCategory.PLANET,
                          OrbitalElements(1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0), 5000.0),
            CelestialBody('c', 'C', BodyCategory.MOON, OrbitalElements.fixed(), 100.0, parent_id='p'),
        ])
        with pytest.raises(ValueError, match="positive orbit"):
            compute_child_scales(catalog, build_scaling_profiles(catalog))


# ── World positions ───────────────────────────────────────────────

class TestWorldPosition:

    def test_top_level_uses_global_scale(self, catalog, resolver):
        mars = catalog.get('mars')
        jd = J2000_JD + 500.0
        assert resolver.world_position(mars, jd) == position_at_time(
            mars.elements, jd, SceneConstants.AU_TO_SCENE)

    def test_child_is_parent_plus_offset(self, catalog, resolver):
        jd = J2000_JD + 12.3
        earth = resolver.resolve('earth', jd)
        moon = resolver.resolve('moon', jd)
        offset = resolver.relative_offset(catalog.get('moon'), jd)
        for i in range(3):
            assert moon[i] == pytest.approx(earth[i] + offset[i])

    def test_supplied_parent_position_is_used(self, catalog, resolver):
        moon = catalog.get('moon')
        jd = J2000_JD
        offset = resolver.relative_offset(moon, jd)
        assert resolver.world_position(moon, jd, (1.0, 2.0, 3.0)) == pytest.approx(
            (1.0 + offset[0], 2.0 + offset[1], 3.0 + offset[2]))

    def test_sun_at_origin(self, resolver):
        assert resolver.resolve('sun', J2000_JD + 999.0) == (0.0, 0.0, 0.0)
