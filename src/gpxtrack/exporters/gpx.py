"""Export a GpxDocument to a GPX 1.1 XML string.

Uses only xml.etree.ElementTree (stdlib).
Element order is fixed by the GPX 1.1 schema, not by which optional
fields happen to be set, so identical documents always produce identical
output. Optional fields that are None are left out entirely.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from gpxtrack.config import GPX_NAMESPACE, GpxSettings, settings as default_settings
from gpxtrack.model import GpxDocument, Track, TrackPoint, Waypoint

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def export_gpx(document: GpxDocument, settings: GpxSettings | None = None) -> str:
    """Export a GpxDocument to a GPX 1.1 XML string.

    Children of <gpx> are written in schema order: metadata, wpt, trk.

    Args:
        document: The document to export.
        settings: Encoder settings; defaults to the module-level settings.

    Returns:
        GPX XML string with an XML declaration.
    """
    settings = settings or default_settings

    gpx = ET.Element("gpx")
    gpx.set("version", settings.gpx_version)
    gpx.set("creator", settings.creator)
    if settings.write_namespace:
        gpx.set("xmlns", GPX_NAMESPACE)

    if document.metadata_time is not None:
        metadata = ET.SubElement(gpx, "metadata")
        _write_text(metadata, "time", format_time(document.metadata_time))

    for waypoint in document.waypoints:
        _write_waypoint(gpx, waypoint)

    for track in document.tracks:
        _write_track(gpx, track)

    ET.indent(gpx, space="  ")
    # ElementTree leaves \r in text as is, and XML parsers fold it into \n.
    body = ET.tostring(gpx, encoding="unicode").replace("\r", "&#13;")
    return XML_DECLARATION + body + "\n"


def format_number(value: float) -> str:
    """Shortest text that parses back to exactly the same float."""
    return repr(float(value))


def format_time(value: datetime) -> str:
    """RFC 3339 UTC timestamp with a Z suffix, e.g. 2024-07-11T17:16:43Z.

    Fractional seconds are only written when present.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    timespec = "microseconds" if utc.microsecond else "seconds"
    return utc.replace(tzinfo=None).isoformat(timespec=timespec) + "Z"


def _write_text(parent: ET.Element, tag: str, text: str) -> None:
    elem = ET.SubElement(parent, tag)
    elem.text = text


def _write_point_fields(elem: ET.Element, elevation: float | None, time: datetime | None) -> None:
    if elevation is not None:
        _write_text(elem, "ele", format_number(elevation))
    if time is not None:
        _write_text(elem, "time", format_time(time))


def _write_waypoint(parent: ET.Element, waypoint: Waypoint) -> None:
    """Write a <wpt> element: ele, time, name."""
    wpt = ET.SubElement(parent, "wpt")
    wpt.set("lat", format_number(waypoint.latitude))
    wpt.set("lon", format_number(waypoint.longitude))

    _write_point_fields(wpt, waypoint.elevation, waypoint.time)
    if waypoint.name is not None:
        _write_text(wpt, "name", waypoint.name)


def _write_track_point(parent: ET.Element, point: TrackPoint) -> None:
    trkpt = ET.SubElement(parent, "trkpt")
    trkpt.set("lat", format_number(point.latitude))
    trkpt.set("lon", format_number(point.longitude))
    _write_point_fields(trkpt, point.elevation, point.time)


def _write_track(parent: ET.Element, track: Track) -> None:
    """Write a <trk> element with its name and one <trkseg> per segment."""
    trk = ET.SubElement(parent, "trk")

    if track.name is not None:
        _write_text(trk, "name", track.name)

    for segment in track.segments:
        trkseg = ET.SubElement(trk, "trkseg")
        for point in segment.points:
            _write_track_point(trkseg, point)
