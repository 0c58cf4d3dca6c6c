"""Tests for manifest and built marker persistence."""

from datetime import datetime, timezone

import pytest

from cmakebridge.adapters.file_adapter import create_file_adapter
from cmakebridge.targets.manifest_store import (
    ManifestStore,
    create_manifest_store,
    parse_manifest,
    split_list,
    truncate_to_seconds,
)


@pytest.fixture
def store() -> ManifestStore:
    return create_manifest_store(create_file_adapter())


class TestParseManifest:
    def test_well_formed_lines(self):
        values = parse_manifest("includes=/a,/b\nlibraries=/lib/libz.a\ncppStandard=17\n")

        assert values == {
            "includes": "/a,/b",
            "libraries": "/lib/libz.a",
            "cppStandard": "17",
        }

    def test_malformed_lines_are_skipped(self):
        text = "includes=/a\nthis line has no separator\nlibraries=a=b\n\nsourcePath=/src\n"

        values = parse_manifest(text)

        assert values == {"includes": "/a", "sourcePath": "/src"}

    def test_empty_value_is_kept(self):
        assert parse_manifest("sourceDependencies=\n") == {"sourceDependencies": ""}

    def test_last_duplicate_wins(self):
        assert parse_manifest("includes=/a\nincludes=/b\n") == {"includes": "/b"}

    def test_windows_line_endings(self):
        assert parse_manifest("includes=/a\r\nlibraries=z\r\n") == {
            "includes": "/a",
            "libraries": "z",
        }


def test_split_list_drops_empty_tokens():
    assert split_list("/a,/b,,/c") == ["/a", "/b", "/c"]
    assert split_list("") == []


class TestManifestStore:
    def test_write_then_read(self, store, tmp_path):
        path = tmp_path / "build" / "buildinfo_Release.output"
        values = {"includes": "/x,/y,/z", "libraries": "/lib/libz.a"}

        store.write_manifest(path, values)

        assert store.read_manifest(path) == values

    def test_missing_manifest(self, store, tmp_path):
        assert store.read_manifest(tmp_path / "buildinfo_Debug.output") is None

    def test_built_marker_round_trip(self, store, tmp_path):
        path = tmp_path / "Release.built"
        timestamp = datetime(2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc)

        store.write_built_marker(path, timestamp)

        assert store.read_built_marker(path) == timestamp

    def test_missing_built_marker(self, store, tmp_path):
        assert store.read_built_marker(tmp_path / "Release.built") is None

    def test_unparsable_built_marker_is_treated_as_missing(self, store, tmp_path):
        path = tmp_path / "Release.built"
        path.write_text("5/1/2024 12:30:15 PM")

        assert store.read_built_marker(path) is None


def test_truncate_to_seconds():
    timestamp = datetime(2024, 5, 1, 12, 30, 15, 999999, tzinfo=timezone.utc)

    assert truncate_to_seconds(timestamp) == datetime(
        2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc
    )
