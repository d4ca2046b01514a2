# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit path cache.

An orbit path is a recomputable artifact: it stays valid until the owning
body's source data changes or the caller asks for a refresh at a new
reference time. The cache stores the inputs each path was built from and
rebuilds on mismatch.
"""
from collections.abc import Callable, Hashable
from dataclasses import dataclass

from orrery.domain.orbital_mechanics import Vector3


@dataclass(frozen=True)
class OrbitPath:
    """A closed polyline for one revolution, with the inputs it came from."""
    body_id: str
    source: Hashable
    segments: int
    reference_jd: float | None
    points: tuple[Vector3, ...]


class OrbitPathCache:
    """Per-body path cache owned by its caller (no module-level state)."""

    def __init__(self) -> None:
        self._paths: dict[str, OrbitPath] = {}

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._paths

    def peek(self, body_id: str) -> OrbitPath | None:
        """The cached entry, without building or validating it."""
        return self._paths.get(body_id)

    def get(
        self,
        body_id: str,
        source: Hashable,
        segments: int,
        build: Callable[[], list[Vector3]],
        reference_jd: float | None = None,
        refresh: bool = False,
    ) -> OrbitPath:
        """
        Return the cached path, rebuilding it when stale.

        Args:
            body_id: Owning body.
            source: The data the path is derived from (elements or record);
                a different value invalidates the entry.
            segments: Sample count; a different value invalidates the entry.
            build: Callable producing the points.
            reference_jd: Reference time stored with a rebuilt path.
            refresh: Rebuild at reference_jd even if the entry matches.

        Returns:
            The cached or freshly built OrbitPath.
        """
        cached = self._paths.get(body_id)
        if (cached is not None and not refresh
                and cached.source == source and cached.segments == segments):
            return cached

        path = OrbitPath(
            body_id=body_id,
            source=source,
            segments=segments,
            reference_jd=reference_jd,
            points=tuple(build()),
        )
        self._paths[body_id] = path
        return path

    def invalidate(self, body_id: str | None = None) -> None:
        """Drop one entry, or all entries when body_id is None."""
        if body_id is None:
            self._paths.clear()
        else:
            self._paths.pop(body_id, None)
