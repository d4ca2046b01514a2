# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for loading the static body catalog and tracked satellites.

Adapters decide where the data comes from (bundled JSON, TLE text files).
"""
from typing import Protocol, runtime_checkable

from orrery.domain.bodies import BodyCatalog
from orrery.domain.satellites import TrackedSatellite


@runtime_checkable
class CatalogSource(Protocol):
    """Port for loading bodies and satellites."""

    def load_bodies(self) -> BodyCatalog:
        """Load and validate the celestial body catalog."""
        ...

    def load_satellites(self) -> list[TrackedSatellite]:
        """Load tracked satellites with their two-line records."""
        ...
