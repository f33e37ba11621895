"""gpxtrack: analyze a GPX file or a directory of GPX files.

Usage:
    gpxtrack PATH [--verbose] [--sort]

Options:
    --verbose   Show full statistics and per-track details
    --sort      With a directory, order files by metadata date

Exit status is 0 on success and 1 when a file cannot be read or decoded
(or a directory holds no loadable GPX files).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from gpxtrack.config import settings
from gpxtrack.errors import GpxParseError
from gpxtrack.files import LoadedGpx, load_directory, load_gpx
from gpxtrack.model import GpxDocument
from gpxtrack.stats import compute_statistics

RULE = "-" * 46


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def print_gpx_info(document: GpxDocument, verbose: bool) -> None:
    stats = compute_statistics(document)

    if not verbose:
        print(
            f"  Tracks: {stats.total_tracks} | Waypoints: {stats.total_waypoints} | "
            f"Points: {stats.total_points} | Distance: {stats.total_distance_km:.2f} km"
        )
        return

    print(RULE)
    if document.date is not None:
        print(f"Date: {document.date.isoformat()}")
    print(stats.summary())

    if document.tracks:
        print()
        print("Track Details:")
        for i, track in enumerate(document.tracks, 1):
            print(
                f"  Track #{i}: {track.display_name} "
                f"({len(track.segments)} segments, {track.total_points} points)"
            )
            for j, segment in enumerate(track.segments, 1):
                print(f"    Segment {j}: {segment.point_count} points")

    if document.waypoints:
        print()
        print("Waypoints:")
        for name in document.waypoint_names():
            print(f"  {name}")
    print(RULE)


def process_file(path: Path, verbose: bool) -> int:
    try:
        document = load_gpx(path)
    except (OSError, GpxParseError) as e:
        logger.error(f"Failed to load {path}: {e}")
        return 1

    print(path)
    print_gpx_info(document, verbose)
    return 0


def process_directory(path: Path, verbose: bool, sort_by_date: bool) -> int:
    try:
        items: list[LoadedGpx] = load_directory(path, sort_by_date=sort_by_date)
    except OSError as e:
        logger.error(f"Failed to read directory {path}: {e}")
        return 1

    if not items:
        logger.error(f"No loadable GPX files in {path}")
        return 1

    for i, item in enumerate(items, 1):
        print()
        print(f"=== GPX File #{i}: {item.path.name} ===")
        print_gpx_info(item.document, verbose)

    total = sum(compute_statistics(item.document).total_distance_km for item in items)
    print()
    print(f"Total distance across all files: {total:.2f} km")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gpxtrack", description="GPX file analyzer and processor",
    )
    parser.add_argument("path", type=Path, help="GPX file or directory to process")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Show detailed statistics",
    )
    parser.add_argument(
        "-s", "--sort", action="store_true",
        help="Sort GPX files by date",
    )
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.path.is_dir():
        return process_directory(args.path, args.verbose, args.sort)
    return process_file(args.path, args.verbose)


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
