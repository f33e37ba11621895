"""Tests for GPX file loading and saving."""

from datetime import datetime, timezone

import pytest

from gpxtrack.builder import GpxBuilder
from gpxtrack.errors import MalformedXmlError
from gpxtrack.files import find_gpx_files, load_directory, load_gpx, save_gpx


def _dated_gpx(date: str | None, name: str) -> str:
    metadata = f"<metadata><time>{date}</time></metadata>" if date else ""
    return f'<gpx>{metadata}<trk><name>{name}</name></trk></gpx>'


@pytest.fixture
def gpx_dir(tmp_path):
    (tmp_path / "a.gpx").write_text(_dated_gpx("2024-07-11T10:00:00Z", "A"), encoding="utf-8")
    (tmp_path / "b.gpx").write_text(_dated_gpx(None, "B"), encoding="utf-8")
    (tmp_path / "c.GPX").write_text(_dated_gpx("2023-01-01T00:00:00Z", "C"), encoding="utf-8")
    (tmp_path / "broken.gpx").write_text("<gpx><trk>", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a track", encoding="utf-8")
    (tmp_path / "sub.gpx").mkdir()
    return tmp_path


class TestLoadSave:
    """Reading and writing single GPX files."""

    def test_save_and_load(self, tmp_path):
        doc = (
            GpxBuilder()
            .metadata_time(datetime(2024, 7, 11, 17, 16, 43, tzinfo=timezone.utc))
            .track("File Test")
            .point(5.0, 6.0, elevation=1.0)
            .build()
        )
        path = save_gpx(doc, tmp_path / "out.gpx")
        assert path.exists()
        content = path.read_text(encoding="utf-8")
        assert content.startswith("<?xml")
        assert "File Test" in content
        assert load_gpx(path) == doc

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_gpx(tmp_path / "missing.gpx")

    def test_load_malformed_file_raises(self, tmp_path):
        path = tmp_path / "bad.gpx"
        path.write_text("<gpx>", encoding="utf-8")
        with pytest.raises(MalformedXmlError):
            load_gpx(path)

    def test_load_utf8_names(self, tmp_path):
        path = tmp_path / "utf8.gpx"
        path.write_bytes('<gpx><wpt lat="1" lon="2"><name>Café Ñandú</name></wpt></gpx>'.encode("utf-8"))
        assert load_gpx(path).waypoints[0].name == "Café Ñandú"


class TestLoadDirectory:
    """Loading every GPX file in a directory."""

    def test_find_gpx_files(self, gpx_dir):
        names = [p.name for p in find_gpx_files(gpx_dir)]
        assert names == ["a.gpx", "b.gpx", "broken.gpx", "c.GPX"]

    def test_broken_files_are_skipped(self, gpx_dir):
        loaded = load_directory(gpx_dir)
        assert [item.path.name for item in loaded] == ["a.gpx", "b.gpx", "c.GPX"]

    def test_sort_by_date(self, gpx_dir):
        loaded = load_directory(gpx_dir, sort_by_date=True)
        assert [item.document.tracks[0].name for item in loaded] == ["C", "A", "B"]

    def test_empty_directory(self, tmp_path):
        assert load_directory(tmp_path) == []

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_directory(tmp_path / "nope")
