# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Hierarchical placement of moons around exaggerated parents.

Rendered planet radii are many times larger than to-scale, so a moon placed
at its true semi-major axis would sit inside its parent. Each parent gets a
ParentScalingProfile (a clearance shell plus a spread range in scene
units) and each child an effective orbit scale so that its closest
approach lands on a target distance inside that range:

    f      = (a - a_min) / (a_max - a_min)          over the siblings
    target = clearance + f · spread
    scale  = target / (a · (1 - e))                 perihelion → target

The child's world position is the parent's position plus the child orbit
evaluated at that scale. Profiles and scales depend only on the static
catalog: they are computed once and held in explicit maps.
"""
from collections.abc import Mapping
from dataclasses import dataclass

from orrery.domain.bodies import BodyCatalog, CelestialBody
from orrery.domain.orbital_mechanics import SceneConstants, Vector3, position_at_time


@dataclass(frozen=True)
class PlacementConfig:
    """Clearance and spread tuning, in multiples of the parent's visual radius."""
    clearance_factor: float = 1.6
    ringed_clearance_factor: float = 2.6
    spread_factor: float = 3.0
    min_spread: float = 1.0
    single_child_fraction: float = 0.5


@dataclass(frozen=True)
class ParentScalingProfile:
    """Derived per-parent placement geometry (scene units / AU)."""
    parent_id: str
    clearance: float
    spread: float
    min_child_a_au: float
    max_child_a_au: float
    single_child_fraction: float = 0.5

    def child_fraction(self, semi_major_axis_au: float) -> float:
        """Position of a child's semi-major axis within the sibling range, in [0, 1]."""
        span = self.max_child_a_au - self.min_child_a_au
        if span <= 0:
            return self.single_child_fraction
        f = (semi_major_axis_au - self.min_child_a_au) / span
        return min(max(f, 0.0), 1.0)

    def target_distance(self, semi_major_axis_au: float) -> float:
        """Scene distance at which the child's perihelion is placed."""
        return self.clearance + self.child_fraction(semi_major_axis_au) * self.spread


def build_scaling_profiles(
    catalog: BodyCatalog,
    config: PlacementConfig = PlacementConfig(),
) -> dict[str, ParentScalingProfile]:
    """
    Compute the scaling profile of every parent in the catalog.

    Args:
        catalog: Validated body catalog.
        config: Clearance/spread tuning.

    Returns:
        Map of parent id → ParentScalingProfile.
    """
    profiles: dict[str, ParentScalingProfile] = {}
    for parent in catalog.parents():
        children = catalog.children_of(parent.body_id)
        axes = [c.elements.semi_major_axis_au for c in children]
        radius = parent.visual_radius()
        factor = config.ringed_clearance_factor if parent.has_rings else config.clearance_factor
        profiles[parent.body_id] = ParentScalingProfile(
            parent_id=parent.body_id,
            clearance=radius * factor,
            spread=max(radius * config.spread_factor, config.min_spread),
            min_child_a_au=min(axes),
            max_child_a_au=max(axes),
            single_child_fraction=config.single_child_fraction,
        )
    return profiles


def compute_child_scales(
    catalog: BodyCatalog,
    profiles: Mapping[str, ParentScalingProfile],
) -> dict[str, float]:
    """Effective orbit scale (scene units per AU) of every child body."""
    scales: dict[str, float] = {}
    for parent_id, profile in profiles.items():
        for child in catalog.children_of(parent_id):
            perihelion = child.elements.perihelion_au
            if perihelion <= 0:
                raise ValueError(f"Child body '{child.body_id}' must have a positive orbit")
            scales[child.body_id] = profile.target_distance(child.elements.semi_major_axis_au) / perihelion
    return scales


class HierarchicalPlacementResolver:
    """
    Resolves world positions for bodies with or without a parent.

    Profiles are passed in (or built once here) and never recomputed.
    """

    def __init__(
        self,
        catalog: BodyCatalog,
        profiles: Mapping[str, ParentScalingProfile] | None = None,
        config: PlacementConfig = PlacementConfig(),
        scale: float = SceneConstants.AU_TO_SCENE,
    ):
        self._catalog = catalog
        self._profiles = dict(profiles) if profiles is not None else build_scaling_profiles(catalog, config)
        missing = [p.body_id for p in catalog.parents() if p.body_id not in self._profiles]
        if missing:
            raise ValueError(f"No scaling profile for parent(s): {', '.join(missing)}")
        self._child_scales = compute_child_scales(catalog, self._profiles)
        self._scale = scale

    @property
    def scale(self) -> float:
        return self._scale

    def profile(self, parent_id: str) -> ParentScalingProfile:
        return self._profiles[parent_id]

    def child_scale(self, body_id: str) -> float:
        return self._child_scales[body_id]

    def relative_offset(self, body: CelestialBody, jd: float) -> Vector3:
        """A child's offset from its parent in scene units."""
        return position_at_time(body.elements, jd, self._child_scales[body.body_id])

    def world_position(
        self,
        body: CelestialBody,
        jd: float,
        parent_position: Vector3 | None = None,
    ) -> Vector3:
        """
        World position of a body at a Julian Date.

        Args:
            body: Catalog body.
            jd: Julian Date.
            parent_position: The parent's world position at the same jd, if
                the caller already has it.

        Returns:
            (x, y, z) in scene units.
        """
        if body.parent_id is None:
            return position_at_time(body.elements, jd, self._scale)

        if parent_position is None:
            parent = self._catalog.get(body.parent_id)
            parent_position = position_at_time(parent.elements, jd, self._scale)

        ox, oy, oz = self.relative_offset(body, jd)
        return (parent_position[0] + ox, parent_position[1] + oy, parent_position[2] + oz)

    def resolve(self, body_id: str, jd: float) -> Vector3:
        """World position of the body with the given id."""
        return self.world_position(self._catalog.get(body_id), jd)
