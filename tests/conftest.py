"""
Pytest configuration and shared fixtures for versiongate tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from versiongate.logging import SilentLogger, set_global_logger

MAX_HEX = "ff" * 32
SEED_HEX = "5c" * 16 + "e1" * 16


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the global logger so CLI tests don't leak verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def node_identity() -> bytes:
    """Provide a fixed 32-byte node identity."""
    return bytes(range(32))


@pytest.fixture
def sample_requirement_data() -> dict[str, Any]:
    """
    Provide a single-requirement document with a 100% rollout.
    """
    return {
        "minimum": {
            "version": "v1.0.0",
            "url": "https://example.com/v1.0.0/storagenode.zip",
        },
        "suggested": {
            "version": "v1.1.0",
            "url": "https://example.com/v1.1.0/storagenode.zip",
        },
        "rollout": {"seed": SEED_HEX, "cursor": MAX_HEX},
    }


@pytest.fixture
def multi_process_data(sample_requirement_data: dict[str, Any]) -> dict[str, Any]:
    """
    Provide a multi-process document: storagenode fully rolled out,
    satellite with no rollout at all.
    """
    return {
        "processes": {
            "storagenode": sample_requirement_data,
            "satellite": {
                "minimum": {"version": "v1.2.0", "url": "https://example.com/sat/1.2"},
                "suggested": {"version": "v1.3.0", "url": "https://example.com/sat/1.3"},
                "rollout": {"seed": SEED_HEX, "cursor": ""},
            },
        }
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("versions.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def create_json_file(tmp_test_dir: Path):
    """Factory fixture for creating temporary JSON files."""

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _create
