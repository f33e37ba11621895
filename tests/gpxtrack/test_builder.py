"""Tests for GpxBuilder chained construction."""

from datetime import datetime, timezone

import pytest

from gpxtrack.builder import GpxBuilder
from gpxtrack.exporters.gpx import export_gpx
from gpxtrack.model import TrackPoint
from gpxtrack.parsers.gpx import parse_gpx


class TestGpxBuilder:
    """Chained document construction."""

    @pytest.mark.unit
    def test_empty_build(self):
        doc = GpxBuilder().build()
        assert doc.is_empty
        assert doc.metadata_time is None

    @pytest.mark.unit
    def test_empty_build_roundtrip(self):
        doc = GpxBuilder().build()
        reparsed = parse_gpx(export_gpx(doc))
        assert reparsed.is_empty
        assert reparsed == doc

    @pytest.mark.unit
    def test_tracks_segments_points(self):
        doc = (
            GpxBuilder()
            .track("Morning Run in NYC")
            .point(40.7829, -73.9654, elevation=15.0)
            .point(40.7851, -73.9683, elevation=16.0)
            .segment()
            .point(40.7900, -73.9700, elevation=18.0)
            .track("Evening")
            .point(40.7940, -73.9740)
            .build()
        )
        assert doc.track_names() == ["Morning Run in NYC", "Evening"]
        assert [len(s.points) for s in doc.tracks[0].segments] == [2, 1]
        assert [len(s.points) for s in doc.tracks[1].segments] == [1]
        assert doc.total_points() == 4

    @pytest.mark.unit
    def test_point_without_track_starts_unnamed_track(self):
        doc = GpxBuilder().point(1.0, 2.0).build()
        assert len(doc.tracks) == 1
        assert doc.tracks[0].name is None
        assert doc.total_points() == 1

    @pytest.mark.unit
    def test_segment_without_track(self):
        doc = GpxBuilder().segment().segment().build()
        assert len(doc.tracks) == 1
        assert len(doc.tracks[0].segments) == 2

    @pytest.mark.unit
    def test_points_from_iterable(self):
        pts = [TrackPoint(1.0, 2.0, elevation=3.0), TrackPoint(1.1, 2.1)]
        doc = GpxBuilder().track("T").points(pts).build()
        assert doc.tracks[0].segments[0].points == pts

    @pytest.mark.unit
    def test_waypoints_and_metadata(self):
        doc = (
            GpxBuilder()
            .metadata_time(datetime(2024, 7, 11, 10, 0))
            .waypoint(40.7829, -73.9654, name="Start - Central Park")
            .waypoint(40.7851, -73.9683)
            .build()
        )
        assert doc.metadata_time == datetime(2024, 7, 11, 10, 0, tzinfo=timezone.utc)
        assert doc.waypoint_names() == ["Start - Central Park", "Waypoint (40.7851, -73.9683)"]
        assert doc.tracks == []

    @pytest.mark.unit
    def test_invalid_point_raises(self):
        builder = GpxBuilder().track("T")
        with pytest.raises(ValueError):
            builder.point(95.0, 0.0)
        assert builder.build().tracks[0].segments == []

    @pytest.mark.unit
    def test_build_resets(self):
        builder = GpxBuilder().track("First").point(1.0, 2.0)
        first = builder.build()
        second = builder.point(3.0, 4.0).build()
        assert first.total_points() == 1
        assert second.total_points() == 1
        assert second.tracks[0].name is None
