# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV snapshot exporter.

Exports a published frame snapshot as CSV: scene positions for every body,
plus geodetic coordinates for satellites.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv

from orrery.domain.scheduler import BodyFix, FrameSnapshot
from orrery.domain.time_conversion import format_julian_date
from orrery.ports.export import FrameExporter


_HEADER = [
    'body_id', 'name', 'kind', 'x', 'y', 'z',
    'lat_deg', 'lon_deg', 'alt_km', 'speed_km_s', 'jd', 'utc',
]


def _optional(value: float | None, fmt: str) -> str:
    return '' if value is None else format(value, fmt)


class CsvFrameExporter(FrameExporter):
    """Exports snapshot positions to CSV."""

    def export(self, snapshot: FrameSnapshot, path: str) -> int:
        utc = format_julian_date(snapshot.jd)
        rows = 0
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for kind, fixes in (('body', snapshot.bodies), ('satellite', snapshot.satellites)):
                for fix in fixes:
                    writer.writerow(self._row(fix, kind, snapshot.jd, utc))
                    rows += 1

        return rows

    @staticmethod
    def _row(fix: BodyFix, kind: str, jd: float, utc: str) -> list[str]:
        x, y, z = fix.position
        return [
            fix.body_id,
            fix.name,
            kind,
            f'{x:.6f}',
            f'{y:.6f}',
            f'{z:.6f}',
            _optional(fix.latitude_deg, '.6f'),
            _optional(fix.longitude_deg, '.6f'),
            _optional(fix.altitude_km, '.3f'),
            _optional(fix.speed_km_s, '.4f'),
            f'{jd:.6f}',
            utc,
        ]
