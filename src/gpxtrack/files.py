"""Load and save GPX files.

Thin filesystem wrappers around parse_gpx/export_gpx. The codec itself
never touches the disk or logs; this module does both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from gpxtrack.errors import GpxParseError
from gpxtrack.exporters.gpx import export_gpx
from gpxtrack.model import GpxDocument
from gpxtrack.parsers.gpx import parse_gpx

GPX_SUFFIX = ".gpx"


@dataclass
class LoadedGpx:
    """A decoded document and the file it came from."""

    path: Path
    document: GpxDocument


def load_gpx(path: str | os.PathLike) -> GpxDocument:
    """Read a GPX file and decode it.

    Raises:
        OSError: The file cannot be read.
        GpxParseError: The content is not a valid GPX document.
    """
    data = Path(path).read_bytes()
    return parse_gpx(data)


def save_gpx(document: GpxDocument, path: str | os.PathLike) -> Path:
    """Encode a document and write it as UTF-8. Returns the written path."""
    path = Path(path)
    path.write_text(export_gpx(document), encoding="utf-8")
    logger.info(f"Saved GPX to {path}")
    return path


def find_gpx_files(directory: str | os.PathLike) -> list[Path]:
    """All *.gpx files directly inside a directory, sorted by name."""
    return sorted(
        entry
        for entry in Path(directory).iterdir()
        if entry.is_file() and entry.suffix.lower() == GPX_SUFFIX
    )


def _date_sort_key(item: LoadedGpx) -> tuple[int, datetime]:
    date = item.document.date
    if date is None:
        return (1, datetime.min.replace(tzinfo=timezone.utc))
    return (0, date)


def load_directory(
    directory: str | os.PathLike, sort_by_date: bool = False
) -> list[LoadedGpx]:
    """Load every GPX file in a directory.

    Files that cannot be read or decoded are logged and skipped.

    Args:
        directory: Directory to scan (not recursive).
        sort_by_date: Order by metadata time, oldest first; files without
            one go last, in name order.

    Returns:
        The successfully loaded files.
    """
    files = find_gpx_files(directory)
    logger.info(f"Found {len(files)} GPX files in {directory}")

    loaded: list[LoadedGpx] = []
    for path in files:
        try:
            loaded.append(LoadedGpx(path=path, document=load_gpx(path)))
        except (OSError, GpxParseError) as e:
            logger.warning(f"Skipping {path}: {e}")

    if sort_by_date:
        loaded.sort(key=_date_sort_key)

    logger.info(f"Loaded {len(loaded)} of {len(files)} GPX files")
    return loaded
