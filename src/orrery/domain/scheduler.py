# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-frame body propagation.

One tick propagates every catalog body and every tracked satellite in the
capped working set against a single Julian Date. Catalog bodies go
through the Kepler pipeline via the placement resolver; satellites go
through an EphemerisPropagator. Satellite positions land in a scratch
buffer that is allocated once and reused every tick.

Aggregate state (positions plus geodetic fields) is published as an
immutable FrameSnapshot only every `publish_interval` ticks.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from orrery.domain.bodies import BodyCatalog, CelestialBody
from orrery.domain.ephemeris import SatelliteState
from orrery.domain.orbit_path import OrbitPath, OrbitPathCache
from orrery.domain.orbital_mechanics import Vector3, generate_orbit_path
from orrery.domain.placement import HierarchicalPlacementResolver
from orrery.domain.satellites import (
    ALWAYS_SHOW_ORBIT_NAMES,
    SATELLITE_CATEGORIES,
    TrackedSatellite,
    is_relevant_to_layer,
)

if TYPE_CHECKING:
    from orrery.ports.ephemeris import EphemerisPropagator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Per-frame cost bounds.

    Raises:
        ValueError: If a ceiling or interval is not positive, or the path
            ceiling exceeds the point ceiling.
    """
    point_ceiling: int = 2000
    path_ceiling: int = 250
    publish_interval: int = 60
    path_segments: int = 90
    featured_path_segments: int = 180
    representatives_per_category: int = 3
    path_refresh_days: float = 0.25

    def __post_init__(self) -> None:
        for name in ('point_ceiling', 'path_ceiling', 'publish_interval',
                     'path_segments', 'featured_path_segments'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.path_ceiling > self.point_ceiling:
            raise ValueError(
                f"path_ceiling ({self.path_ceiling}) must not exceed point_ceiling ({self.point_ceiling})"
            )
        if self.representatives_per_category < 0:
            raise ValueError("representatives_per_category must be >= 0")
        if self.path_refresh_days <= 0:
            raise ValueError("path_refresh_days must be positive")


@dataclass(frozen=True)
class FilterCriteria:
    """Satellite filters; an empty category set means every category."""
    categories: frozenset[str] = frozenset()
    search: str = ''
    data_layer: str | None = None

    def matches(self, satellite: TrackedSatellite) -> bool:
        if self.categories and satellite.category not in self.categories:
            return False
        query = self.search.strip().lower()
        if query and query not in satellite.name.lower():
            return False
        return is_relevant_to_layer(satellite.name, self.data_layer)


class ScratchBuffer:
    """Fixed-capacity position array and visibility mask reused across ticks."""

    def __init__(self, capacity: int):
        self.positions = np.zeros((capacity, 3), dtype=np.float64)
        self.visible = np.zeros(capacity, dtype=bool)
        self.count = 0

    @property
    def capacity(self) -> int:
        return self.positions.shape[0]

    def reset(self, count: int) -> None:
        if count > self.capacity:
            raise ValueError(f"count {count} exceeds scratch capacity {self.capacity}")
        self.count = count
        self.visible[:] = False

    def write(self, index: int, position: Vector3) -> None:
        self.positions[index] = position
        self.visible[index] = True

    def hide(self, index: int) -> None:
        self.positions[index] = 0.0
        self.visible[index] = False


@dataclass(frozen=True)
class BodyFix:
    """A published position; geodetic fields are set for satellites only."""
    body_id: str
    name: str
    position: Vector3
    latitude_deg: float | None = None
    longitude_deg: float | None = None
    altitude_km: float | None = None
    speed_km_s: float | None = None


@dataclass(frozen=True)
class FrameSnapshot:
    """Immutable aggregate state of one published tick."""
    tick: int
    jd: float
    bodies: tuple[BodyFix, ...]
    satellites: tuple[BodyFix, ...]
    hidden: tuple[str, ...] = ()

    def find(self, body_id: str) -> BodyFix | None:
        for fix in self.bodies + self.satellites:
            if fix.body_id == body_id:
                return fix
        return None


@dataclass
class FrameResult:
    """
    Output of one tick.

    `satellite_positions` and `satellite_visible` are views of the
    scheduler's scratch buffer and are only valid until the next tick.
    """
    tick: int
    jd: float
    body_positions: dict[str, Vector3]
    satellite_ids: tuple[str, ...]
    satellite_positions: np.ndarray
    satellite_visible: np.ndarray
    hidden: list[str] = field(default_factory=list)
    snapshot: FrameSnapshot | None = None


def _representatives(candidates: list[TrackedSatellite], count: int) -> list[TrackedSatellite]:
    """Evenly spaced picks from a category's satellites."""
    if count <= 0 or not candidates:
        return []
    step = max(1, len(candidates) // count)
    return candidates[::step][:count]


class BodyPropagationScheduler:
    """
    Drives per-frame recomputation for catalog bodies and tracked satellites.

    Not thread-safe: tick() is meant to be called from a single render loop.
    """

    def __init__(
        self,
        catalog: BodyCatalog,
        resolver: HierarchicalPlacementResolver,
        propagator: EphemerisPropagator,
        satellites: Iterable[TrackedSatellite] = (),
        config: SchedulerConfig = SchedulerConfig(),
        on_publish: Callable[[FrameSnapshot], None] | None = None,
    ):
        self._catalog = catalog
        self._resolver = resolver
        self._propagator = propagator
        self._satellites = list(satellites)
        self._config = config
        self._on_publish = on_publish

        # Parents before children so each child reuses its parent's position
        top = catalog.top_level()
        self._body_order: list[CelestialBody] = top + [
            child for parent in top for child in catalog.children_of(parent.body_id)
        ]

        self._scratch = ScratchBuffer(config.point_ceiling)
        self._states: list[SatelliteState | None] = [None] * config.point_ceiling
        self._filters = FilterCriteria()
        self._working_set = self._select_working_set()
        self._show_paths = False
        self._path_cache = OrbitPathCache()
        self._body_path_cache = OrbitPathCache()
        self._ticks = 0
        self._snapshot: FrameSnapshot | None = None

    # ── Working set ──────────────────────────────────────────────────

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    @property
    def filters(self) -> FilterCriteria:
        return self._filters

    @property
    def working_set(self) -> tuple[TrackedSatellite, ...]:
        return self._working_set

    @property
    def snapshot(self) -> FrameSnapshot | None:
        """Most recently published snapshot."""
        return self._snapshot

    @property
    def tick_count(self) -> int:
        return self._ticks

    def set_satellites(self, satellites: Iterable[TrackedSatellite]) -> None:
        """Replace the tracked satellites (e.g. after a catalog refresh)."""
        self._satellites = list(satellites)
        self._working_set = self._select_working_set()
        self._path_cache.invalidate()

    def set_filters(self, filters: FilterCriteria) -> None:
        self._filters = filters
        self._working_set = self._select_working_set()

    def show_paths(self, enabled: bool) -> None:
        self._show_paths = enabled

    def _select_working_set(self) -> tuple[TrackedSatellite, ...]:
        matching = [s for s in self._satellites if self._filters.matches(s)]
        return tuple(matching[:self._config.point_ceiling])

    # ── Tick ─────────────────────────────────────────────────────────

    def tick(self, jd: float) -> FrameResult:
        """
        Propagate everything against one Julian Date.

        A body whose computation fails is hidden for this tick and logged
        at DEBUG; the remaining bodies are still propagated.
        """
        hidden: list[str] = []
        body_positions = self._propagate_bodies(jd, hidden)

        scratch = self._scratch
        scratch.reset(len(self._working_set))
        for index, satellite in enumerate(self._working_set):
            result = self._propagator.propagate(satellite.record, jd)
            if result.ok:
                scratch.write(index, result.state.position)
                self._states[index] = result.state
            else:
                logger.debug("Hiding %s at JD %.5f: %s", satellite.name, jd, result.reason)
                scratch.hide(index)
                self._states[index] = None
                hidden.append(satellite.body_id)

        snapshot = None
        if self._ticks % self._config.publish_interval == 0:
            snapshot = self._publish(jd, body_positions, hidden)
        self._ticks += 1

        n = scratch.count
        return FrameResult(
            tick=self._ticks - 1,
            jd=jd,
            body_positions=body_positions,
            satellite_ids=tuple(s.body_id for s in self._working_set),
            satellite_positions=scratch.positions[:n],
            satellite_visible=scratch.visible[:n],
            hidden=hidden,
            snapshot=snapshot,
        )

    def _propagate_bodies(self, jd: float, hidden: list[str]) -> dict[str, Vector3]:
        positions: dict[str, Vector3] = {}
        for body in self._body_order:
            parent_position = None
            if body.parent_id is not None:
                parent_position = positions.get(body.parent_id)
                if parent_position is None:
                    hidden.append(body.body_id)
                    continue
            try:
                positions[body.body_id] = self._resolver.world_position(body, jd, parent_position)
            except (KeyError, ValueError, ArithmeticError) as exc:
                logger.debug("Hiding %s at JD %.5f: %s", body.body_id, jd, exc)
                hidden.append(body.body_id)
        return positions

    def _publish(self, jd: float, body_positions: dict[str, Vector3], hidden: list[str]) -> FrameSnapshot:
        bodies = tuple(
            BodyFix(body_id=b.body_id, name=b.name, position=body_positions[b.body_id])
            for b in self._body_order if b.body_id in body_positions
        )
        fixes = []
        for index, satellite in enumerate(self._working_set):
            state = self._states[index]
            if state is None:
                continue
            fixes.append(BodyFix(
                body_id=satellite.body_id,
                name=satellite.name,
                position=state.position,
                latitude_deg=state.latitude_deg,
                longitude_deg=state.longitude_deg,
                altitude_km=state.altitude_km,
                speed_km_s=state.speed_km_s,
            ))
        snapshot = FrameSnapshot(
            tick=self._ticks, jd=jd, bodies=bodies, satellites=tuple(fixes), hidden=tuple(hidden),
        )
        self._snapshot = snapshot
        if self._on_publish is not None:
            self._on_publish(snapshot)
        return snapshot

    # ── Orbit paths ──────────────────────────────────────────────────

    def path_satellites(self) -> list[TrackedSatellite]:
        """
        Satellites whose orbits are drawn.

        Featured names are always included. With paths enabled the filtered
        working set follows, capped at the path ceiling; otherwise a few
        evenly spaced representatives per active category (debris excluded).
        """
        featured = [s for s in self._satellites if s.name in ALWAYS_SHOW_ORBIT_NAMES]
        rest: list[TrackedSatellite] = []
        if self._show_paths:
            rest = [s for s in self._working_set if s.name not in ALWAYS_SHOW_ORBIT_NAMES]
            rest = rest[:self._config.path_ceiling]
        else:
            active = self._filters.categories
            for category in SATELLITE_CATEGORIES:
                if category.category_id == 'debris':
                    continue
                if active and category.category_id not in active:
                    continue
                members = [
                    s for s in self._satellites
                    if s.category == category.category_id and s.name not in ALWAYS_SHOW_ORBIT_NAMES
                ]
                rest.extend(_representatives(members, self._config.representatives_per_category))
        return featured + rest

    def satellite_paths(self, jd: float) -> dict[str, OrbitPath]:
        """Orbit paths for path_satellites(), rebuilt when the record changes or jd drifts."""
        paths: dict[str, OrbitPath] = {}
        for satellite in self.path_satellites():
            segments = (self._config.featured_path_segments
                        if satellite.name in ALWAYS_SHOW_ORBIT_NAMES
                        else self._config.path_segments)
            refresh = self._path_is_stale(satellite.body_id, jd)
            path = self._path_cache.get(
                satellite.body_id,
                satellite.record,
                segments,
                build=lambda s=satellite, n=segments: self._propagator.orbit_path(s.record, jd, n),
                reference_jd=jd,
                refresh=refresh,
            )
            if len(path.points) >= 2:
                paths[satellite.body_id] = path
        return paths

    def _path_is_stale(self, body_id: str, jd: float) -> bool:
        cached = self._path_cache.peek(body_id)
        if cached is None or cached.reference_jd is None:
            return False
        return abs(jd - cached.reference_jd) >= self._config.path_refresh_days

    def body_paths(self, segments: int | None = None) -> dict[str, OrbitPath]:
        """
        Orbit paths of catalog bodies.

        Top-level paths are in world scene units; a child's path is relative
        to its parent and drawn at the child's placement scale.
        """
        n = segments or self._config.path_segments
        paths: dict[str, OrbitPath] = {}
        for body in self._body_order:
            if body.elements.is_fixed:
                continue
            if body.parent_id is None:
                scale = self._resolver.scale
            else:
                scale = self._resolver.child_scale(body.body_id)
            paths[body.body_id] = self._body_path_cache.get(
                body.body_id,
                (body.elements, scale),
                n,
                build=lambda b=body, s=scale: generate_orbit_path(b.elements, n, s),
            )
        return paths
