"""Parse GPX 1.1 XML into a GpxDocument using xml.etree.ElementTree.

Handles metadata/time, wpt (waypoint) and trk/trkseg/trkpt (track points).
Extracts name, time, ele (elevation). Everything else (rte, extensions,
links, desc, ...) is skipped.

Elements may be unqualified or in the GPX default namespace. Every failure
raises a GpxParseError subclass; this module never returns an empty
document in place of an error.
"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from datetime import datetime

from gpxtrack.errors import MalformedXmlError, StructuralError
from gpxtrack.model import GpxDocument, Track, TrackPoint, TrackSegment, Waypoint


def parse_gpx(data: str | bytes) -> GpxDocument:
    """Parse a GPX XML document.

    Args:
        data: Raw GPX content, UTF-8 bytes or an already decoded string.

    Returns:
        The decoded GpxDocument. May be empty if the file holds no
        tracks or waypoints.

    Raises:
        MalformedXmlError: The input is not well-formed XML.
        StructuralError: A mandatory attribute or value is missing or
            invalid, or the root element is not <gpx>.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedXmlError(f"Invalid XML: {e}", getattr(e, "position", None)) from e

    ns = _detect_namespace(root)
    if _local_name(root.tag) != "gpx":
        raise StructuralError(
            f"Root element must be <gpx>, found <{_local_name(root.tag)}>",
            _local_name(root.tag),
        )

    metadata_time = None
    metadata = root.find(_tag("metadata", ns))
    if metadata is not None:
        metadata_time = _parse_time(metadata, ns, "gpx/metadata")

    waypoints = [
        _parse_waypoint(wpt, ns, f"gpx/wpt[{i}]")
        for i, wpt in enumerate(_find_all(root, "wpt", ns), 1)
    ]
    tracks = [
        _parse_track(trk, ns, f"gpx/trk[{i}]")
        for i, trk in enumerate(_find_all(root, "trk", ns), 1)
    ]

    return GpxDocument(metadata_time=metadata_time, tracks=tracks, waypoints=waypoints)


def _detect_namespace(root: ET.Element) -> str:
    """Detect GPX namespace from root tag."""
    tag = root.tag
    if "{" in tag:
        return tag.split("}")[0] + "}"
    return ""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _tag(name: str, ns: str) -> str:
    return f"{ns}{name}" if ns else name


def _find_all(parent: ET.Element, tag: str, ns: str) -> list[ET.Element]:
    """Find all direct children with the given tag."""
    return parent.findall(_tag(tag, ns))


def _parse_float(text: str | None, what: str, path: str) -> float:
    raw = (text or "").strip()
    try:
        value = float(raw)
    except ValueError:
        raise StructuralError(f"Invalid {what} value {raw!r}", path) from None
    if not math.isfinite(value):
        raise StructuralError(f"Invalid {what} value {raw!r}", path)
    return value


def _parse_lat_lon(elem: ET.Element, path: str) -> tuple[float, float]:
    """Read the mandatory lat/lon attributes of a wpt or trkpt."""
    coords = []
    for attr in ("lat", "lon"):
        raw = elem.get(attr)
        if raw is None:
            raise StructuralError(
                f"Missing required attribute '{attr}' on <{_local_name(elem.tag)}>", path
            )
        coords.append(_parse_float(raw, attr, path))
    return coords[0], coords[1]


def _parse_elevation(elem: ET.Element, ns: str, path: str) -> float | None:
    ele = elem.find(_tag("ele", ns))
    if ele is None:
        return None
    return _parse_float(ele.text, "ele", f"{path}/ele")


def _parse_time(elem: ET.Element, ns: str, path: str) -> datetime | None:
    """Parse an ISO 8601 / RFC 3339 <time> child, e.g. 2024-07-11T17:16:43Z."""
    time_elem = elem.find(_tag("time", ns))
    if time_elem is None:
        return None

    raw = (time_elem.text or "").strip()
    text = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise StructuralError(f"Invalid time value {raw!r}", f"{path}/time") from None


def _parse_name(elem: ET.Element, ns: str) -> str | None:
    name = elem.find(_tag("name", ns))
    if name is None:
        return None
    return name.text or ""


def _parse_waypoint(wpt: ET.Element, ns: str, path: str) -> Waypoint:
    """Parse a wpt element."""
    lat, lon = _parse_lat_lon(wpt, path)
    elevation = _parse_elevation(wpt, ns, path)
    name = _parse_name(wpt, ns)
    time = _parse_time(wpt, ns, path)
    try:
        return Waypoint(lat, lon, elevation=elevation, name=name, time=time)
    except ValueError as e:
        raise StructuralError(str(e), path) from e


def _parse_track_point(trkpt: ET.Element, ns: str, path: str) -> TrackPoint:
    lat, lon = _parse_lat_lon(trkpt, path)
    elevation = _parse_elevation(trkpt, ns, path)
    time = _parse_time(trkpt, ns, path)
    try:
        return TrackPoint(lat, lon, elevation=elevation, time=time)
    except ValueError as e:
        raise StructuralError(str(e), path) from e


def _parse_track(trk: ET.Element, ns: str, path: str) -> Track:
    """Parse a trk element. Segments and points keep their document order."""
    track = Track(name=_parse_name(trk, ns))

    for i, seg in enumerate(_find_all(trk, "trkseg", ns), 1):
        seg_path = f"{path}/trkseg[{i}]"
        segment = TrackSegment()
        for j, trkpt in enumerate(_find_all(seg, "trkpt", ns), 1):
            segment.points.append(_parse_track_point(trkpt, ns, f"{seg_path}/trkpt[{j}]"))
        track.segments.append(segment)

    return track
