# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the CSV snapshot exporter."""
import csv

from orrery.adapters.csv_exporter import CsvFrameExporter
from orrery.domain.scheduler import BodyFix, FrameSnapshot
from orrery.domain.time_conversion import J2000_JD
from orrery.ports.export import FrameExporter


def _snapshot():
    return FrameSnapshot(
        tick=60,
        jd=J2000_JD,
        bodies=(BodyFix('earth', 'Earth', (-8.8, 0.0, 48.9)),),
        satellites=(BodyFix('25544', 'ISS (ZARYA)', (1.0, 2.0, 3.0),
                            latitude_deg=51.2, longitude_deg=-12.5,
                            altitude_km=415.3, speed_km_s=7.66),),
    )


class TestCsvFrameExporter:

    def test_implements_port(self):
        assert isinstance(CsvFrameExporter(), FrameExporter)

    def test_rows(self, tmp_path):
        path = str(tmp_path / "frame.csv")
        assert CsvFrameExporter().export(_snapshot(), path) == 2

        with open(path, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))
        assert [r['kind'] for r in rows] == ['body', 'satellite']
        assert rows[0]['lat_deg'] == ''
        assert float(rows[1]['alt_km']) == 415.3
        assert rows[1]['utc'] == "2000 Jan 01 12:00 UTC"

    def test_empty_snapshot_writes_header(self, tmp_path):
        path = tmp_path / "empty.csv"
        count = CsvFrameExporter().export(FrameSnapshot(0, J2000_JD, (), ()), str(path))
        assert count == 0
        assert path.read_text(encoding='utf-8').startswith('body_id,name,kind')
