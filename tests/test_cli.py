"""
Tests for versiongate.cli module.

Tests the command-line interface including:
- check / cursor / candidate / validate / info commands
- Exit codes
- Error reporting
"""

from __future__ import annotations

import json

import pytest
import requests_mock

from versiongate.build_info import ENV_COMMIT, ENV_RELEASE, ENV_TIMESTAMP, ENV_VERSION
from versiongate.cli import main

SEED_HEX = "5c" * 16 + "e1" * 16
URL = "https://version.example.com/"


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestCheckCommand:
    """Tests for 'versiongate check'."""

    def test_should_update(self, create_yaml_file, multi_process_data, capsys):
        """Test a rollout candidate is reported with its target."""
        path = create_yaml_file("versions.yaml", multi_process_data)
        code = _run(
            [
                "check",
                str(path),
                "--identity",
                "00" * 32,
                "--current",
                "v1.0.0",
                "--process",
                "storagenode",
            ]
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "UPDATE DECISION" in out
        assert "Action:          should_update" in out
        assert "Target Version:  v1.1.0" in out
        assert "Reason:          rollout candidate" in out

    def test_no_update_has_no_target(self, sample_requirement_data, capsys):
        """Test an up-to-date node prints no target lines."""
        with requests_mock.Mocker() as m:
            m.get(URL, json=sample_requirement_data)
            code = _run(["check", URL, "--identity", "ab" * 32, "--current", "v1.1.0"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Action:          no_update" in out
        assert "Target Version" not in out

    def test_bad_identity(self, create_yaml_file, sample_requirement_data, capsys):
        """Test a non-hex identity exits 1."""
        path = create_yaml_file("versions.yaml", sample_requirement_data)
        code = _run(["check", str(path), "--identity", "xyz", "--current", "v1.0.0"])
        assert code == 1
        assert "Error: node identity must be hex" in capsys.readouterr().out

    def test_missing_document(self, tmp_test_dir, capsys):
        """Test a missing document exits 1 with an error line."""
        code = _run(
            [
                "check",
                str(tmp_test_dir / "missing.yaml"),
                "--identity",
                "00",
                "--current",
                "v1.0.0",
            ]
        )
        assert code == 1
        assert "Error: file not found" in capsys.readouterr().out

    def test_network_error(self, capsys):
        """Test fetch failures exit 1."""
        with requests_mock.Mocker() as m:
            m.get(URL, status_code=500, reason="Internal Server Error")
            code = _run(["check", URL, "--identity", "00", "--current", "v1.0.0"])
        assert code == 1
        assert "Error: version server returned 500" in capsys.readouterr().out


class TestCursorCommand:
    """Tests for 'versiongate cursor'."""

    def test_precise(self, capsys):
        """Test 50% prints half of the cursor space."""
        assert _run(["cursor", "50"]) == 0
        assert capsys.readouterr().out.strip() == "7f" + "ff" * 31

    def test_zero_prints_empty(self, capsys):
        """Test 0% prints the empty (zero) cursor."""
        assert _run(["cursor", "0"]) == 0
        assert capsys.readouterr().out == "\n"

    def test_legacy(self, capsys):
        """Test the whole-percentage mapping."""
        assert _run(["cursor", "100", "--legacy"]) == 0
        assert capsys.readouterr().out.strip() == "ff" * 32

    def test_legacy_rejects_fraction(self, capsys):
        """Test --legacy refuses fractional percentages."""
        assert _run(["cursor", "12.5", "--legacy"]) == 1
        assert "whole percentages" in capsys.readouterr().out

    def test_legacy_infinite_rejected(self, capsys):
        """Test --legacy reports an infinite percentage as an error."""
        assert _run(["cursor", "--legacy", "inf"]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_nan_rejected(self, capsys):
        """Test NaN is reported as an error."""
        assert _run(["cursor", "nan"]) == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestCandidateCommand:
    """Tests for 'versiongate candidate'."""

    def test_full_rollout(self, capsys):
        """Test 100% makes any node a candidate."""
        code = _run(
            ["candidate", "--identity", "01" * 32, "--seed", SEED_HEX, "--percent", "100"]
        )
        assert code == 0
        assert capsys.readouterr().out.strip() == "candidate"

    def test_empty_cursor(self, capsys):
        """Test the default (zero) cursor excludes the node."""
        code = _run(["candidate", "--identity", "01" * 32, "--seed", SEED_HEX])
        assert code == 0
        assert capsys.readouterr().out.strip() == "not a candidate"

    def test_bad_cursor(self, capsys):
        """Test a malformed cursor exits 1."""
        code = _run(["candidate", "--identity", "01", "--cursor", "abc"])
        assert code == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_cursor_and_percent_exclusive(self):
        """Test --cursor and --percent cannot be combined."""
        assert _run(["candidate", "--identity", "01", "--cursor", "", "--percent", "5"]) == 2

    def test_explicit_empty_cursor(self, capsys):
        """Test an explicit empty cursor is the zero cursor."""
        code = _run(["candidate", "--identity", "01" * 32, "--seed", SEED_HEX, "--cursor", ""])
        assert code == 0
        assert capsys.readouterr().out.strip() == "not a candidate"


class TestValidateCommand:
    """Tests for 'versiongate validate'."""

    def test_valid(self, create_yaml_file, multi_process_data, capsys):
        """Test a valid document exits 0 and lists warnings."""
        path = create_yaml_file("versions.yaml", multi_process_data)
        assert _run(["validate", str(path)]) == 0
        out = capsys.readouterr().out
        assert "VALIDATION RESULTS" in out
        assert "Status:        VALID" in out
        assert "Requirements:  2" in out
        assert "[WARNING] processes.satellite.rollout.cursor" in out
        assert "[SUCCESS] Document is valid!" in out

    def test_invalid(self, create_yaml_file, capsys):
        """Test an invalid document exits 1 and lists errors."""
        path = create_yaml_file("versions.yaml", {"minimum": {"version": "bad"}})
        assert _run(["validate", str(path)]) == 1
        out = capsys.readouterr().out
        assert "Status:        INVALID" in out
        assert "[X] suggested: Missing required section" in out
        assert "[FAILED]" in out


class TestInfoCommand:
    """Tests for 'versiongate info'."""

    @pytest.fixture
    def stamped_env(self, monkeypatch):
        monkeypatch.setenv(ENV_VERSION, "v1.2.3")
        monkeypatch.setenv(ENV_TIMESTAMP, "1700000000")
        monkeypatch.setenv(ENV_COMMIT, "abc123")
        monkeypatch.setenv(ENV_RELEASE, "true")

    def test_text(self, stamped_env, capsys):
        """Test the human-readable build summary."""
        assert _run(["info"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Release build\n")
        assert "Version: v1.2.3" in out

    def test_json(self, stamped_env, capsys):
        """Test --json prints the JSON form."""
        assert _run(["info", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["version"] == "v1.2.3"
        assert data["commitHash"] == "abc123"
        assert data["release"] is True

    def test_invalid_stamp(self, monkeypatch, capsys):
        """Test invalid build metadata exits 1."""
        monkeypatch.setenv(ENV_VERSION, "v1.2.3")
        monkeypatch.setenv(ENV_TIMESTAMP, "soon")
        assert _run(["info"]) == 1
        assert "Error: invalid build timestamp" in capsys.readouterr().out

    def test_out_of_range_stamp(self, monkeypatch, capsys):
        """Test a timestamp beyond the datetime range exits 1."""
        monkeypatch.setenv(ENV_VERSION, "v1.2.3")
        monkeypatch.setenv(ENV_TIMESTAMP, "99999999999999")
        assert _run(["info"]) == 1
        assert "out of range" in capsys.readouterr().out


class TestParser:
    """Tests for top-level parser behavior."""

    def test_version_flag(self, capsys):
        """Test --version prints the program name."""
        assert _run(["--version"]) == 0
        assert capsys.readouterr().out.startswith("versiongate ")

    def test_command_required(self):
        """Test running without a command is a usage error."""
        assert _run([]) == 2
