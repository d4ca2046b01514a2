# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Celestial body catalog.

Bodies are created once from static data and never destroyed; only their
derived positions change per frame. Parent links form a shallow tree
(a moon orbits a planet, a planet orbits the fixed origin).
"""
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from orrery.domain.orbital_mechanics import OrbitalElements, SceneConstants


class BodyCategory(Enum):
    STAR = "star"
    PLANET = "planet"
    DWARF_PLANET = "dwarf-planet"
    MOON = "moon"
    ASTEROID = "asteroid"


@dataclass(frozen=True)
class CelestialBody:
    """A catalog body with orbital elements and physical size."""
    body_id: str
    name: str
    category: BodyCategory
    elements: OrbitalElements
    radius_km: float
    parent_id: str | None = None
    has_rings: bool = False

    def visual_radius(self) -> float:
        """Exaggerated render radius in scene units."""
        c = SceneConstants
        if self.category is BodyCategory.STAR:
            return self.radius_km * c.STAR_RADIUS_SCALE
        minimum = c.MIN_MOON_RADIUS if self.category is BodyCategory.MOON else c.MIN_PLANET_RADIUS
        return max(self.radius_km * c.VISUAL_RADIUS_SCALE, minimum)


class BodyCatalog:
    """
    Immutable, validated collection of bodies keyed by id.

    Raises:
        ValueError: On duplicate ids, unknown parents, or parent chains
            deeper than one level (which also rules out cycles).
    """

    def __init__(self, bodies: Iterable[CelestialBody]):
        by_id: dict[str, CelestialBody] = {}
        for body in bodies:
            if body.body_id in by_id:
                raise ValueError(f"Duplicate body id '{body.body_id}'")
            by_id[body.body_id] = body

        children: dict[str, list[CelestialBody]] = {}
        for body in by_id.values():
            if body.parent_id is None:
                continue
            parent = by_id.get(body.parent_id)
            if parent is None:
                raise ValueError(f"Body '{body.body_id}' has unknown parent '{body.parent_id}'")
            if parent.parent_id is not None:
                raise ValueError(
                    f"Body '{body.body_id}' orbits '{parent.body_id}', which itself has a parent; "
                    "only one level of nesting is supported"
                )
            children.setdefault(parent.body_id, []).append(body)

        self._bodies = by_id
        self._children = {k: tuple(v) for k, v in children.items()}

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[CelestialBody]:
        return iter(self._bodies.values())

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._bodies

    def get(self, body_id: str) -> CelestialBody:
        """Look up a body; raises KeyError for an unknown id."""
        try:
            return self._bodies[body_id]
        except KeyError:
            raise KeyError(f"Unknown body id '{body_id}'") from None

    def children_of(self, parent_id: str) -> tuple[CelestialBody, ...]:
        return self._children.get(parent_id, ())

    def parents(self) -> list[CelestialBody]:
        """Bodies that have at least one child."""
        return [self._bodies[pid] for pid in self._children]

    def top_level(self) -> list[CelestialBody]:
        return [b for b in self._bodies.values() if b.parent_id is None]

    def by_category(self, category: BodyCategory) -> list[CelestialBody]:
        return [b for b in self._bodies.values() if b.category is category]
