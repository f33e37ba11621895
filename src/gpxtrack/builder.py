"""GpxBuilder — chained construction of GpxDocument objects.

    document = (
        GpxBuilder()
        .track("Morning Run")
        .point(40.7829, -73.9654, elevation=15.0)
        .point(40.7851, -73.9683, elevation=16.0)
        .segment()
        .point(40.7900, -73.9700, elevation=18.0)
        .waypoint(40.7829, -73.9654, name="Start")
        .build()
    )

Points go into the current segment of the current track; both are opened
on demand, so a bare ``.point(...)`` call starts an unnamed track.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from gpxtrack.model import (
    GpxDocument,
    Track,
    TrackPoint,
    TrackSegment,
    Waypoint,
    as_utc,
)


class GpxBuilder:
    """Builds a GpxDocument one track, segment, point or waypoint at a time."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._document = GpxDocument()
        self._track: Track | None = None
        self._segment: TrackSegment | None = None

    def metadata_time(self, when: datetime | None) -> GpxBuilder:
        self._document.metadata_time = as_utc(when)
        return self

    def track(self, name: str | None = None) -> GpxBuilder:
        """Start a new track. Its first segment opens with the next point."""
        self._track = Track(name=name)
        self._document.add_track(self._track)
        self._segment = None
        return self

    def segment(self) -> GpxBuilder:
        """Start a new segment in the current track (a recording gap)."""
        if self._track is None:
            self.track()
        self._segment = TrackSegment()
        self._track.add_segment(self._segment)
        return self

    def point(
        self,
        latitude: float,
        longitude: float,
        elevation: float | None = None,
        time: datetime | None = None,
    ) -> GpxBuilder:
        """Append a point to the current segment.

        Raises:
            ValueError: If the coordinates or elevation are invalid.
        """
        point = TrackPoint(latitude, longitude, elevation=elevation, time=time)
        if self._segment is None:
            self.segment()
        self._segment.add_point(point)
        return self

    def points(self, points: Iterable[TrackPoint]) -> GpxBuilder:
        """Append already constructed points to the current segment."""
        for p in points:
            self.point(p.latitude, p.longitude, elevation=p.elevation, time=p.time)
        return self

    def waypoint(
        self,
        latitude: float,
        longitude: float,
        name: str | None = None,
        elevation: float | None = None,
        time: datetime | None = None,
    ) -> GpxBuilder:
        self._document.add_waypoint(
            Waypoint(latitude, longitude, elevation=elevation, name=name, time=time)
        )
        return self

    def build(self) -> GpxDocument:
        """Return the finished document and reset the builder."""
        document = self._document
        self._reset()
        return document
