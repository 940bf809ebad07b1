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

"""Requirement document validation.

Checks a requirement document file without deciding anything for any node
and without network calls. Useful before publishing a document to the
version server, and in CI.

Validation Checks:

- File parses as YAML/JSON and is a mapping
- Each requirement has minimum and suggested sections
- Version strings parse as semantic versions
- Rollout seed and cursor are valid hex of the right length
- Minimum is not above suggested (warning)
- Rollout seed or cursor left at zero (warning)

Example:
    Validate a document and handle results:
        ```python
        from pathlib import Path
        from versiongate.validation import validate_document

        result = validate_document(Path("versions.yaml"))
        if result.status == "valid":
            print(f"Document is valid with {result.process_count} requirement(s)")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from versiongate.config.loader import load_document_data
from versiongate.exceptions import ConfigError, DecodeError, ParseError
from versiongate.logging import get_global_logger
from versiongate.results import ValidationResult
from versiongate.rollout import RolloutCursor
from versiongate.versioning import SemanticVersion

__all__ = ["validate_document"]


def _check_version(
    section: Any, where: str, errors: list[str]
) -> SemanticVersion | None:
    if section is None:
        errors.append(f"{where}: Missing required section")
        return None
    if not isinstance(section, dict):
        errors.append(f"{where}: Must be a mapping with 'version' and 'url'")
        return None

    version = section.get("version")
    if version is None:
        errors.append(f"{where}: Missing required field: version")
        return None
    if not isinstance(version, str):
        errors.append(f"{where}.version: Must be a string (quote it in YAML)")
        return None
    if "url" in section and not isinstance(section["url"], str):
        errors.append(f"{where}.url: Must be a string")
    try:
        return SemanticVersion.parse(version)
    except ParseError as err:
        errors.append(f"{where}.version: {err}")
        return None


def _check_requirement(
    requirement: Any, prefix: str, errors: list[str], warnings: list[str]
) -> None:
    if not isinstance(requirement, dict):
        errors.append(f"{prefix.rstrip('.')}: Requirement must be a mapping")
        return

    minimum = _check_version(requirement.get("minimum"), f"{prefix}minimum", errors)
    suggested = _check_version(
        requirement.get("suggested"), f"{prefix}suggested", errors
    )
    if minimum is not None and suggested is not None and minimum > suggested:
        warnings.append(
            f"{prefix}minimum {minimum} is above suggested {suggested}; "
            "nodes will be sent to the minimum"
        )

    rollout = requirement.get("rollout")
    if rollout is None:
        warnings.append(f"{prefix}rollout: Missing; no node is a rollout candidate")
        return
    if not isinstance(rollout, dict):
        errors.append(f"{prefix}rollout: Must be a mapping with 'seed' and 'cursor'")
        return
    for key in ("seed", "cursor"):
        try:
            value = RolloutCursor.decode(rollout.get(key))
        except DecodeError as err:
            errors.append(f"{prefix}rollout.{key}: {err}")
            continue
        if value.is_zero():
            warnings.append(f"{prefix}rollout.{key}: Zero (empty or omitted)")


def validate_document(document_path: Path) -> ValidationResult:
    """Validate a requirement document file.

    Does NOT:

    - Fetch anything from the network
    - Check that download URLs are reachable
    - Evaluate any node

    Args:
        document_path: Path to a YAML or JSON requirement document.

    Returns:
        Validation status, errors, warnings and requirement count.

    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []

    def _result(count: int) -> ValidationResult:
        return ValidationResult(
            status="valid" if not errors else "invalid",
            errors=errors,
            warnings=warnings,
            process_count=count,
            document_path=str(document_path),
        )

    try:
        data = load_document_data(Path(document_path))
    except ConfigError as err:
        errors.append(str(err))
        return _result(0)

    logger.verbose("VALIDATE", "[OK] Document parses and is a mapping")

    processes = data.get("processes")
    if processes is None:
        _check_requirement(data, "", errors, warnings)
        return _result(1)

    if not isinstance(processes, dict):
        errors.append("Field 'processes' must be a mapping")
        return _result(0)
    if not processes:
        errors.append("Field 'processes' must contain at least one process")
        return _result(0)

    for name, requirement in processes.items():
        _check_requirement(requirement, f"processes.{name}.", errors, warnings)
        logger.verbose("VALIDATE", f"Checked process: {name}")

    result = _result(len(processes))
    if result.status == "valid":
        logger.verbose("VALIDATE", "[OK] Document is valid!")
    else:
        logger.verbose("VALIDATE", f"[ERROR] Document has {len(errors)} error(s)")
    return result
