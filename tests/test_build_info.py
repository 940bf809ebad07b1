"""
Tests for versiongate.build_info module.

Tests build metadata handling including:
- Reading stamped values and the environment
- Release/modified derivation
- JSON and human-readable output
"""

from __future__ import annotations

from datetime import datetime, timezone
import json

import pytest

from versiongate.build_info import (
    ENV_COMMIT,
    ENV_RELEASE,
    ENV_TIMESTAMP,
    ENV_VERSION,
    BuildInfo,
)
from versiongate.exceptions import ConfigError
from versiongate.versioning import SemanticVersion

STAMP = {
    "version": "v1.2.3",
    "timestamp": "1700000000",
    "commit_hash": "abc123",
    "release": "true",
}


class TestFromValues:
    """Tests for BuildInfo.from_values."""

    def test_all_empty_is_zero(self):
        """Test an unstamped build is the zero BuildInfo."""
        info = BuildInfo.from_values()
        assert info == BuildInfo()
        assert info.is_zero()

    def test_release_build(self):
        """Test a fully stamped release build."""
        info = BuildInfo.from_values(**STAMP)
        assert info.version == SemanticVersion(1, 2, 3)
        assert info.timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert info.commit_hash == "abc123"
        assert info.release
        assert not info.modified
        assert not info.is_zero()

    def test_zero_timestamp_is_not_release(self):
        """Test a zero timestamp forces a development build."""
        info = BuildInfo.from_values(**{**STAMP, "timestamp": "0"})
        assert not info.release

    def test_missing_commit_is_not_release(self):
        """Test a build without a commit hash is not a release."""
        info = BuildInfo.from_values(**{**STAMP, "commit_hash": ""})
        assert not info.release

    def test_dirty_commit_is_modified(self):
        """Test a "-dirty" commit marks the build as modified."""
        info = BuildInfo.from_values(**{**STAMP, "commit_hash": "abc123-dirty"})
        assert info.modified

    @pytest.mark.parametrize("release", ["", "false", "yes"])
    def test_release_flag_must_be_true(self, release):
        """Test only "true" marks a release build."""
        info = BuildInfo.from_values(**{**STAMP, "release": release})
        assert not info.release

    def test_invalid_timestamp_raises(self):
        """Test a non-integer timestamp raises ConfigError."""
        with pytest.raises(ConfigError, match="timestamp"):
            BuildInfo.from_values(**{**STAMP, "timestamp": "yesterday"})

    @pytest.mark.parametrize("timestamp", ["99999999999999", str(10**30)])
    def test_out_of_range_timestamp_raises(self, timestamp):
        """Test a timestamp no datetime can hold raises ConfigError."""
        with pytest.raises(ConfigError, match="out of range"):
            BuildInfo.from_values(**{**STAMP, "timestamp": timestamp})

    def test_missing_timestamp_raises(self):
        """Test a partly stamped build without a timestamp is rejected."""
        with pytest.raises(ConfigError):
            BuildInfo.from_values(version="v1.0.0")

    def test_invalid_version_raises(self):
        """Test an invalid version raises ConfigError."""
        with pytest.raises(ConfigError, match="version"):
            BuildInfo.from_values(**{**STAMP, "version": "latest"})


class TestFromEnviron:
    """Tests for BuildInfo.from_environ."""

    def test_reads_mapping(self):
        """Test reading from an explicit mapping."""
        environ = {
            ENV_VERSION: "v2.0.0",
            ENV_TIMESTAMP: "1700000000",
            ENV_COMMIT: "def456",
            ENV_RELEASE: "true",
        }
        info = BuildInfo.from_environ(environ)
        assert info.version == SemanticVersion(2, 0, 0)
        assert info.release

    def test_empty_mapping_is_zero(self):
        """Test no variables gives a development build."""
        assert BuildInfo.from_environ({}).is_zero()

    def test_reads_os_environ(self, monkeypatch, tmp_path):
        """Test the process environment is used by default."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(ENV_VERSION, "v3.1.4")
        monkeypatch.setenv(ENV_TIMESTAMP, "1700000000")
        monkeypatch.delenv(ENV_COMMIT, raising=False)
        monkeypatch.delenv(ENV_RELEASE, raising=False)
        info = BuildInfo.from_environ()
        assert info.version == SemanticVersion(3, 1, 4)
        assert not info.release


class TestOutput:
    """Tests for JSON and string output."""

    def test_to_dict(self):
        """Test the JSON-ready form."""
        info = BuildInfo.from_values(**{**STAMP, "commit_hash": "abc-dirty"})
        assert info.to_dict() == {
            "timestamp": "2023-11-14T22:13:20+00:00",
            "commitHash": "abc-dirty",
            "version": "v1.2.3",
            "release": True,
            "modified": True,
        }

    def test_zero_to_dict_keeps_version(self):
        """Test empty fields are omitted but the version is kept."""
        assert BuildInfo().to_dict() == {"version": "v0.0.0"}

    def test_json_round_trip(self):
        """Test from_json(to_json(info)) == info."""
        info = BuildInfo.from_values(**STAMP)
        assert json.loads(info.to_json())["version"] == "v1.2.3"
        assert BuildInfo.from_json(info.to_json()) == info
        assert BuildInfo.from_json(BuildInfo().to_json()) == BuildInfo()

    @pytest.mark.parametrize("text", ["not json", "[1, 2]", '{"version": "latest"}'])
    def test_from_json_invalid_raises(self, text):
        """Test invalid JSON raises ConfigError."""
        with pytest.raises(ConfigError):
            BuildInfo.from_json(text)

    def test_str_release(self):
        """Test the human-readable summary of a release build."""
        info = BuildInfo.from_values(**STAMP)
        assert str(info) == (
            "Release build\n"
            "Version: v1.2.3\n"
            "Build timestamp: 14 Nov 23 22:13 UTC\n"
            "Git commit: abc123\n"
        )

    def test_str_development(self):
        """Test the summary of an unstamped build."""
        assert str(BuildInfo()) == "Development build\n"

    def test_immutable(self):
        """Test BuildInfo is frozen."""
        with pytest.raises(AttributeError):
            BuildInfo().release = True  # type: ignore[misc]

    def test_log(self):
        """Test log writes one verbose BUILD line."""
        calls = []

        class _Recorder:
            def step(self, step, total, message):
                pass

            def verbose(self, prefix, message):
                calls.append((prefix, message))

            def debug(self, prefix, message):
                pass

        BuildInfo.from_values(**STAMP).log(_Recorder())
        assert len(calls) == 1
        assert calls[0][0] == "BUILD"
        assert "version=v1.2.3" in calls[0][1]
