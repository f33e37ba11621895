"""gpxtrack — read, build, write and measure GPX track logs.

Decode with parse_gpx, encode with export_gpx, and derive distance,
elevation, duration and speed with compute_statistics. The codec and
statistics use only the standard library XML parser and math.
"""

from gpxtrack.builder import GpxBuilder
from gpxtrack.errors import GpxParseError, MalformedXmlError, StructuralError
from gpxtrack.exporters.gpx import export_gpx
from gpxtrack.model import GpxDocument, Track, TrackPoint, TrackSegment, Waypoint
from gpxtrack.parsers.gpx import parse_gpx
from gpxtrack.stats import GpxStatistics, compute_statistics

__all__ = [
    "GpxBuilder",
    "GpxDocument",
    "GpxParseError",
    "GpxStatistics",
    "MalformedXmlError",
    "StructuralError",
    "Track",
    "TrackPoint",
    "TrackSegment",
    "Waypoint",
    "compute_statistics",
    "export_gpx",
    "parse_gpx",
]
