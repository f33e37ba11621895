"""Path statistics over a GpxDocument.

All functions are pure and read-only. Nothing is cached: every call walks
the document again, so results always reflect its current contents.

Distances are Haversine great-circle distances between consecutive points
of the same segment. A segment boundary is a recording gap and is never
bridged, for distance or for elevation deltas. Waypoints are points of
interest, not path samples, and never contribute to path statistics.

Degenerate documents (no tracks, empty segments, no timestamps, no
elevations) are not errors: they yield zero or None values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from gpxtrack.model import GpxDocument, TrackPoint, TrackSegment


@dataclass(frozen=True)
class GpxStatistics:
    """Aggregate metrics for one document. Built fresh on every request."""

    total_tracks: int
    total_segments: int
    total_points: int
    total_waypoints: int
    total_distance_km: float
    total_duration_seconds: int | None = None
    average_speed_kmh: float | None = None
    elevation_min: float | None = None
    elevation_max: float | None = None
    elevation_gain: float | None = None
    elevation_loss: float | None = None

    @property
    def elevation_range(self) -> tuple[float, float] | None:
        if self.elevation_min is None or self.elevation_max is None:
            return None
        return (self.elevation_min, self.elevation_max)

    @property
    def elevation_difference(self) -> float | None:
        """Highest minus lowest elevation, in meters."""
        if self.elevation_range is None:
            return None
        return self.elevation_max - self.elevation_min

    @property
    def duration_formatted(self) -> str | None:
        if self.total_duration_seconds is None:
            return None
        return format_duration(self.total_duration_seconds)

    def summary(self) -> str:
        """Multi-line human-readable description."""
        lines = [
            "GPX Statistics:",
            f"- Tracks: {self.total_tracks}",
            f"- Waypoints: {self.total_waypoints}",
            f"- Segments: {self.total_segments}",
            f"- Points: {self.total_points}",
            f"- Distance: {self.total_distance_km:.2f} km",
        ]
        if self.duration_formatted is not None:
            lines.append(f"- Duration: {self.duration_formatted}")
        if self.average_speed_kmh is not None:
            lines.append(f"- Average speed: {self.average_speed_kmh:.2f} km/h")
        if self.elevation_range is not None:
            lines.append(
                f"- Elevation: {self.elevation_min:.1f}m - {self.elevation_max:.1f}m"
            )
        if self.elevation_gain is not None and self.elevation_loss is not None:
            lines.append(
                f"- Elevation change: gain: {self.elevation_gain:.1f}m, "
                f"loss: {self.elevation_loss:.1f}m"
            )
        return "\n".join(lines)


def iter_points(document: GpxDocument) -> Iterator[TrackPoint]:
    """All track points in document order, segments concatenated."""
    return document.iter_points()


def _iter_segments(document: GpxDocument) -> Iterator[TrackSegment]:
    for track in document.tracks:
        yield from track.segments


def segment_distance_km(segment: TrackSegment) -> float:
    """Sum of Haversine distances between consecutive points, in km.

    A segment with fewer than two points has no length.
    """
    return segment.distance_km()


def total_distance_km(document: GpxDocument) -> float:
    return sum((track.total_distance_km() for track in document.tracks), 0.0)


def total_duration_seconds(document: GpxDocument) -> int | None:
    """Seconds between the earliest and latest point timestamp.

    Uses min/max rather than first/last point so out-of-order timestamps
    still give the full span. None unless at least two points are timed.
    """
    times = [p.time for p in iter_points(document) if p.time is not None]
    if len(times) < 2:
        return None
    return int((max(times) - min(times)).total_seconds())


def average_speed_kmh(distance_km: float, duration_seconds: int | None) -> float | None:
    """Average speed, or None when distance or duration is zero or missing."""
    if duration_seconds is None or duration_seconds <= 0 or distance_km <= 0:
        return None
    return distance_km / (duration_seconds / 3600.0)


def elevation_range(document: GpxDocument) -> tuple[float, float] | None:
    """(min, max) elevation over all points that carry one."""
    ranges = [r for r in (track.elevation_range() for track in document.tracks) if r]
    if not ranges:
        return None
    return (min(lo for lo, _ in ranges), max(hi for _, hi in ranges))


def elevation_gain_loss(document: GpxDocument) -> tuple[float | None, float | None]:
    """Total ascent and descent in meters.

    Only pairs of consecutive points that both carry an elevation count;
    a point without elevation breaks the chain. Returns (None, None) when
    no such pair exists.
    """
    gain = 0.0
    loss = 0.0
    paired = False

    for segment in _iter_segments(document):
        for a, b in zip(segment.points, segment.points[1:]):
            if a.elevation is None or b.elevation is None:
                continue
            paired = True
            delta = b.elevation - a.elevation
            if delta > 0:
                gain += delta
            else:
                loss -= delta

    if not paired:
        return (None, None)
    return (gain, loss)


def format_duration(seconds: int) -> str:
    """HH:MM:SS with zero-padded fields; hours widen past 99."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def compute_statistics(document: GpxDocument) -> GpxStatistics:
    """Compute all path statistics for a document in one call."""
    distance = total_distance_km(document)
    duration = total_duration_seconds(document)
    ele_range = elevation_range(document)
    gain, loss = elevation_gain_loss(document)

    return GpxStatistics(
        total_tracks=len(document.tracks),
        total_segments=document.total_segments(),
        total_points=document.total_points(),
        total_waypoints=len(document.waypoints),
        total_distance_km=distance,
        total_duration_seconds=duration,
        average_speed_kmh=average_speed_kmh(distance, duration),
        elevation_min=ele_range[0] if ele_range else None,
        elevation_max=ele_range[1] if ele_range else None,
        elevation_gain=gain,
        elevation_loss=loss,
    )
