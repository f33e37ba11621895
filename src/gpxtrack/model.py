"""Dataclasses for the GPX document model.

Ownership is strictly top-down: a GpxDocument owns its tracks and
waypoints, a Track owns its segments, a TrackSegment owns its points.
Nothing holds a reference back to its owner.

Optional values (elevation, time, name) are None when absent. An elevation
of 0.0 is a recorded elevation, not a missing one.

Field values are checked on every assignment, not only in __init__, so a
document stays encodable and measurable after it has been edited.

Documents are plain mutable dataclasses with no internal locking. Reading a
shared document from several threads is safe; mutating one is the caller's
responsibility to synchronize.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator

from gpxtrack.geo import haversine_km

# Characters outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _latitude(value: Any) -> float:
    value = float(value)
    if not math.isfinite(value) or not -90.0 <= value <= 90.0:
        raise ValueError(f"Latitude {value} outside range (-90 to 90)")
    return value


def _longitude(value: Any) -> float:
    value = float(value)
    if not math.isfinite(value) or not -180.0 <= value <= 180.0:
        raise ValueError(f"Longitude {value} outside range (-180 to 180)")
    return value


def _elevation(value: Any) -> float | None:
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Elevation {value} is not a finite number")
    return value


def _name(value: str | None) -> str | None:
    if value is not None:
        bad = _XML_ILLEGAL.search(value)
        if bad:
            raise ValueError(
                f"Name {value!r} contains character U+{ord(bad.group()):04X}, "
                "which XML cannot carry"
            )
    return value


def as_utc(value: datetime | None) -> datetime | None:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


_FIELD_CHECKS = {
    "latitude": _latitude,
    "longitude": _longitude,
    "elevation": _elevation,
    "time": as_utc,
    "metadata_time": as_utc,
    "name": _name,
}


def _checked(name: str, value: Any) -> Any:
    check = _FIELD_CHECKS.get(name)
    return check(value) if check is not None else value


def _elevation_range(points: Iterable[TrackPoint]) -> tuple[float, float] | None:
    elevations = [p.elevation for p in points if p.elevation is not None]
    if not elevations:
        return None
    return (min(elevations), max(elevations))


@dataclass
class TrackPoint:
    """A recorded sample on a track path.

    Attributes:
        latitude: Decimal degrees, WGS84, -90..90.
        longitude: Decimal degrees, WGS84, -180..180.
        elevation: Meters above sea level, or None if not recorded.
        time: Aware UTC timestamp, or None if not recorded.

    Raises:
        ValueError: On construction or assignment of an out-of-range or
            non-finite coordinate or elevation.
    """

    latitude: float
    longitude: float
    elevation: float | None = None
    time: datetime | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, _checked(name, value))


@dataclass
class TrackSegment:
    """A continuous run of points. A new segment marks a recording gap."""

    points: list[TrackPoint] = field(default_factory=list)

    def add_point(self, point: TrackPoint) -> None:
        self.points.append(point)

    @property
    def point_count(self) -> int:
        return len(self.points)

    def distance_km(self) -> float:
        """Haversine length of the segment; 0.0 with fewer than two points."""
        return sum(
            (
                haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
                for a, b in zip(self.points, self.points[1:])
            ),
            0.0,
        )

    def elevation_range(self) -> tuple[float, float] | None:
        return _elevation_range(self.points)


@dataclass
class Track:
    """A named recording made of one or more segments."""

    name: str | None = None
    segments: list[TrackSegment] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, _checked(name, value))

    def add_segment(self, segment: TrackSegment) -> None:
        self.segments.append(segment)

    def iter_points(self) -> Iterator[TrackPoint]:
        """Yield every point of every segment, in recording order."""
        for segment in self.segments:
            yield from segment.points

    @property
    def total_points(self) -> int:
        return sum(segment.point_count for segment in self.segments)

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else "Unnamed Track"

    def total_distance_km(self) -> float:
        """Sum of segment lengths. Gaps between segments are not bridged."""
        return sum((segment.distance_km() for segment in self.segments), 0.0)

    def elevation_range(self) -> tuple[float, float] | None:
        return _elevation_range(self.iter_points())


@dataclass
class Waypoint:
    """A standalone point of interest, not part of a recorded path.

    Attributes:
        latitude: Decimal degrees, WGS84, -90..90.
        longitude: Decimal degrees, WGS84, -180..180.
        elevation: Meters above sea level, or None.
        name: Label for the point, or None.
        time: Aware UTC timestamp, or None.
    """

    latitude: float
    longitude: float
    elevation: float | None = None
    name: str | None = None
    time: datetime | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, _checked(name, value))

    @property
    def has_elevation(self) -> bool:
        return self.elevation is not None

    @property
    def has_time(self) -> bool:
        return self.time is not None

    @property
    def display_name(self) -> str:
        if self.name is not None:
            return self.name
        return f"Waypoint ({self.latitude:.4f}, {self.longitude:.4f})"

    def description(self) -> str:
        """Name and coordinates, plus elevation and time when recorded."""
        desc = f"{self.display_name} at ({self.latitude:.6f}, {self.longitude:.6f})"
        if self.elevation is not None:
            desc += f", elevation: {self.elevation:.1f}m"
        if self.time is not None:
            desc += f", time: {self.time:%Y-%m-%d %H:%M:%S} UTC"
        return desc


@dataclass
class GpxDocument:
    """Root of a GPX file: optional creation time, tracks and waypoints.

    A document with no tracks and no waypoints is valid and empty.
    """

    metadata_time: datetime | None = None
    tracks: list[Track] = field(default_factory=list)
    waypoints: list[Waypoint] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, _checked(name, value))

    @property
    def date(self) -> datetime | None:
        """Creation time from the metadata block, if any."""
        return self.metadata_time

    @property
    def is_empty(self) -> bool:
        return not self.tracks and not self.waypoints

    def add_track(self, track: Track) -> None:
        self.tracks.append(track)

    def add_waypoint(self, waypoint: Waypoint) -> None:
        self.waypoints.append(waypoint)

    def iter_points(self) -> Iterator[TrackPoint]:
        """Yield all track points in document order. Waypoints are excluded."""
        for track in self.tracks:
            yield from track.iter_points()

    def total_points(self) -> int:
        return sum(track.total_points for track in self.tracks)

    def total_segments(self) -> int:
        return sum(len(track.segments) for track in self.tracks)

    def track_names(self) -> list[str]:
        return [track.display_name for track in self.tracks]

    def waypoint_names(self) -> list[str]:
        return [waypoint.display_name for waypoint in self.waypoints]
