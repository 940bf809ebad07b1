# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Core orchestration for versiongate.

This module ties the pieces together for one poll: obtain the requirement
document, pick the requirement for this binary, and run the update decision.

Workflow:

1. Load the document from a local file, or fetch it from an http(s) URL
2. Select the requirement (by process name or JSONPath)
3. Parse the node's current version
4. Run should_update_version and package the outcome as a CheckResult

Nothing is cached between calls; every check starts from a fresh document.

Example:
    from versiongate.core import check_node

    result = check_node(
        "https://version.example.com/",
        identity=node_id,
        current_version="v1.0.0",
        process="storagenode",
    )
    if result.action != "no_update":
        print(f"Upgrade to {result.target_version} from {result.target_url}")

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from versiongate.config.loader import load_document_data
from versiongate.io import fetch_requirement_document
from versiongate.logging import get_global_logger
from versiongate.policy import should_update_version
from versiongate.requirements import select_requirement
from versiongate.results import CheckResult
from versiongate.versioning import SemanticVersion

__all__ = ["check_node", "load_document_source"]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_document_source(
    source: str | Path, *, timeout: float = 30
) -> dict[str, Any]:
    """Load raw document data from a file path or an http(s) URL.

    Raises:
        ConfigError: If the file is missing/invalid or the body is not a mapping.
        NetworkError: If fetching from a URL fails.
    """
    if isinstance(source, str) and _is_url(source):
        return fetch_requirement_document(source, timeout=timeout)
    return load_document_data(Path(source))


def check_node(
    source: str | Path,
    *,
    identity: bytes,
    current_version: str | SemanticVersion,
    process: str | None = None,
    path: str | None = None,
    timeout: float = 30,
) -> CheckResult:
    """Decide whether a node should upgrade according to a requirement document.

    Args:
        source: File path or http(s) URL of the requirement document.
        identity: Stable node identity bytes.
        current_version: Version the node runs (string or parsed).
        process: Process name inside a multi-process document.
        path: JSONPath to the requirement; overrides process.
        timeout: HTTP timeout in seconds when source is a URL.

    Returns:
        The decision, flattened for display or serialization.

    Raises:
        ConfigError: If the document is missing or malformed.
        NetworkError: If the document cannot be fetched.
        ParseError: If any version string is invalid.
        DecodeError: If a rollout seed or cursor is malformed.
        InternalHashError: If the rollout hash fails.

    """
    logger = get_global_logger()

    logger.step(1, 3, "Loading requirement document...")
    data = load_document_source(source, timeout=timeout)

    logger.step(2, 3, "Selecting requirement...")
    requirement = select_requirement(data, process=process, path=path)
    logger.verbose(
        "DOCUMENT",
        f"minimum={requirement.minimum.version or '-'} "
        f"suggested={requirement.suggested.version or '-'}",
    )

    if not isinstance(current_version, SemanticVersion):
        current_version = SemanticVersion.parse(current_version)

    logger.step(3, 3, "Evaluating update decision...")
    decision = should_update_version(current_version, identity, requirement)

    return CheckResult(
        source=str(source),
        process=process,
        current_version=current_version.format(),
        action=decision.action,
        target_version=decision.target.version if decision.target else "",
        target_url=decision.target.url if decision.target else "",
        reason=decision.reason,
    )
