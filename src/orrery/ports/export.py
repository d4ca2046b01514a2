# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for frame snapshot export.

Adapters implement this to write published snapshots in various formats.
"""
from typing import Protocol, runtime_checkable

from orrery.domain.scheduler import FrameSnapshot


@runtime_checkable
class FrameExporter(Protocol):
    """Port for exporting a published frame snapshot to file."""

    def export(self, snapshot: FrameSnapshot, path: str) -> int:
        """
        Export every body and satellite fix in a snapshot.

        Returns:
            Number of rows written.
        """
        ...
