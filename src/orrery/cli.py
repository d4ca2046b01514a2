# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for the orrery propagation engine.

Usage:
    # Scene positions of every catalog body and the bundled satellites, now
    orrery

    # At a given instant, stepping the simulation clock for 600 frames at 1 d/s
    orrery --date 2024-03-20T03:06:00 --frames 600 --speed 1d

    # Propagate your own two-line records, filtered
    orrery --tle stations.tle --tle-category stations --search iss
    orrery --category weather --layer precipitation

    # Print an orbit path, export the published snapshot
    orrery --path mars --segments 64
    orrery --export-csv frame.csv
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from orrery.adapters.catalog_json import JsonCatalogSource
from orrery.adapters.csv_exporter import CsvFrameExporter
from orrery.adapters.sgp4_propagator import Sgp4Propagator
from orrery.domain.orbital_mechanics import PathSampling, SceneConstants, generate_orbit_path
from orrery.domain.placement import HierarchicalPlacementResolver
from orrery.domain.satellites import CATEGORY_IDS, DATA_LAYER_SATELLITES, SATELLITE_CATEGORIES
from orrery.domain.scheduler import (
    BodyPropagationScheduler,
    FilterCriteria,
    FrameSnapshot,
)
from orrery.domain.simulation_clock import TIME_SPEEDS, SimulationClock
from orrery.domain.time_conversion import datetime_to_jd, format_julian_date

_FRAME_SECONDS = 1.0 / 60.0


def _parse_date(text: str) -> float:
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 date: {text!r}") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return datetime_to_jd(dt)


def _print_snapshot(snapshot: FrameSnapshot) -> None:
    print(f"Frame {snapshot.tick} at {format_julian_date(snapshot.jd)} (JD {snapshot.jd:.5f})")
    print(f"\n{'body':<28} {'x':>11} {'y':>11} {'z':>11}")
    for fix in snapshot.bodies:
        x, y, z = fix.position
        print(f"{fix.name:<28} {x:>11.4f} {y:>11.4f} {z:>11.4f}")

    if snapshot.satellites:
        print(f"\n{'satellite':<28} {'lat':>9} {'lon':>10} {'alt km':>10} {'km/s':>7}")
        for fix in snapshot.satellites:
            print(
                f"{fix.name:<28} {fix.latitude_deg:>9.3f} {fix.longitude_deg:>10.3f} "
                f"{fix.altitude_km:>10.1f} {fix.speed_km_s:>7.3f}"
            )
    if snapshot.hidden:
        print(f"\nHidden this frame: {', '.join(snapshot.hidden)}")


def _print_path(resolver, catalog, body_id: str, segments: int, sampling: PathSampling) -> None:
    body = catalog.get(body_id)
    if body.elements.is_fixed:
        print(f"{body.name} does not orbit.")
        return
    if body.parent_id is None:
        scale = resolver.scale
        frame = "world"
    else:
        scale = resolver.child_scale(body_id)
        frame = f"relative to {catalog.get(body.parent_id).name}"
    points = generate_orbit_path(body.elements, segments, scale, sampling)
    print(f"\nOrbit path of {body.name} ({len(points)} points, {frame}):")
    for x, y, z in points:
        print(f"  {x:.4f} {y:.4f} {z:.4f}")


def main():
    parser = argparse.ArgumentParser(
        description="Propagate solar-system bodies and tracked satellites to scene positions"
    )
    parser.add_argument(
        '--date', type=_parse_date,
        help="Start instant, ISO 8601 (naive = UTC; default: now)"
    )
    parser.add_argument(
        '--frames', type=int, default=1,
        help="Number of render frames (1/60 s each) to simulate (default: 1)"
    )
    parser.add_argument(
        '--speed', choices=[s.label for s in TIME_SPEEDS], default='1d',
        help="Simulated time per real second (default: 1d)"
    )
    parser.add_argument(
        '--real-scale', action='store_true', default=False,
        help="Place top-level bodies at real-scale distances (500 scene units per AU)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log per-body failures and loading details"
    )

    sat_group = parser.add_argument_group('satellites')
    sat_group.add_argument(
        '--tle',
        help="TLE text file to propagate (default: bundled representative set)"
    )
    sat_group.add_argument(
        '--tle-category', choices=sorted(CATEGORY_IDS | {c.source_group for c in SATELLITE_CATEGORIES}),
        default='stations',
        help="Category id or source group of the records in --tle (default: stations)"
    )
    sat_group.add_argument(
        '--category', action='append', choices=sorted(CATEGORY_IDS),
        help="Only show this category (repeatable)"
    )
    sat_group.add_argument('--search', default='', help="Case-insensitive name filter")
    sat_group.add_argument(
        '--layer', choices=sorted(DATA_LAYER_SATELLITES),
        help="Only satellites relevant to this data layer"
    )

    path_group = parser.add_argument_group('orbit paths')
    path_group.add_argument('--path', metavar='BODY_ID', help="Print the orbit path of a catalog body")
    path_group.add_argument(
        '--segments', type=int, default=90,
        help="Path segments (default: 90)"
    )
    path_group.add_argument(
        '--time-sampling', action='store_true', default=False,
        help="Sample the path uniformly in time instead of true anomaly"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument(
        '--export-csv',
        help="Export the last published snapshot to CSV"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.frames < 1:
        parser.error("--frames must be >= 1")
    if args.segments < 1:
        parser.error("--segments must be >= 1")

    tle_files = {args.tle_category: args.tle} if args.tle else None
    source = JsonCatalogSource(tle_files=tle_files)
    try:
        catalog = source.load_bodies()
        satellites = source.load_satellites()
    except FileNotFoundError as e:
        print(f"Error: file not found: {e.filename}", file=sys.stderr)
        sys.exit(1)

    scale = SceneConstants.REAL_AU_TO_SCENE if args.real_scale else SceneConstants.AU_TO_SCENE
    resolver = HierarchicalPlacementResolver(catalog, scale=scale)
    scheduler = BodyPropagationScheduler(catalog, resolver, Sgp4Propagator(), satellites)
    scheduler.set_filters(FilterCriteria(
        categories=frozenset(args.category or ()),
        search=args.search,
        data_layer=args.layer,
    ))

    clock = SimulationClock(jd=args.date)
    clock.speed_index = [s.label for s in TIME_SPEEDS].index(args.speed)

    scheduler.tick(clock.jd)
    for _ in range(args.frames - 1):
        scheduler.tick(clock.tick(_FRAME_SECONDS))

    snapshot = scheduler.snapshot
    _print_snapshot(snapshot)

    if args.path:
        sampling = PathSampling.TIME if args.time_sampling else PathSampling.TRUE_ANOMALY
        try:
            _print_path(resolver, catalog, args.path, args.segments, sampling)
        except KeyError:
            print(f"Error: unknown body '{args.path}'", file=sys.stderr)
            sys.exit(1)

    if args.export_csv:
        rows = CsvFrameExporter().export(snapshot, args.export_csv)
        print(f"\nExported {rows} rows to {args.export_csv}")


if __name__ == '__main__':
    main()
