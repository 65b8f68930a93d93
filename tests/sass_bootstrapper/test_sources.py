"""Tests for source pattern expansion."""

from __future__ import annotations

import os

from sass_bootstrapper.sources import collect_sources, expand_patterns, modification_time


class TestExpandPatterns:
    """Test expand_patterns()."""

    def test_recursive_glob_is_sorted(self, project, write_partial):
        write_partial("src/b.scss")
        write_partial("src/a.scss")
        write_partial("src/deep/c.scss")
        write_partial("src/notes.txt")

        assert expand_patterns(["src/**/*.scss"], project) == [
            "src/a.scss",
            "src/b.scss",
            "src/deep/c.scss",
        ]

    def test_literal_path_is_kept_when_missing(self, project):
        assert expand_patterns(["src/missing.scss"], project) == ["src/missing.scss"]

    def test_negated_pattern_removes_matches(self, project, write_partial):
        write_partial("src/a.scss")
        write_partial("src/vendor/v.scss")

        assert expand_patterns(["src/**/*.scss", "!src/vendor/*.scss"], project) == ["src/a.scss"]

    def test_duplicates_are_collapsed(self, project, write_partial):
        write_partial("src/a.scss")
        assert expand_patterns(["src/*.scss", "src/a.scss"], project) == ["src/a.scss"]


class TestCollectSources:
    """Test collect_sources()."""

    def test_exclude_and_existence(self, project, write_partial):
        write_partial("src/a.scss")
        write_partial("src/vendor.scss")

        sources = collect_sources(
            ["src/*.scss", "src/missing.scss"], project, exclude=["src/vendor.scss"]
        )

        assert [(s.path, s.exists) for s in sources] == [
            ("src/a.scss", True),
            ("src/missing.scss", False),
        ]

    def test_modification_time_in_milliseconds(self, project, write_partial):
        path = write_partial("src/a.scss")
        os.utime(path, ns=(1_700_000_000_123_456_789, 1_700_000_000_123_456_789))

        assert modification_time(path) == 1_700_000_000_123
        assert collect_sources(["src/a.scss"], project)[0].mod_time == 1_700_000_000_123
