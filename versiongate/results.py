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

"""Public API return types for versiongate.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types
    (like SemanticVersion or UpdateDecision) stay next to their logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckResult:
    """Result from checking one node against a requirement document.

    Attributes:
        source: File path or URL the document came from.
        process: Process name the requirement was selected for (or None).
        current_version: Version the node runs, formatted.
        action: "no_update", "should_update" or "must_update".
        target_version: Version to upgrade to ("" for no update).
        target_url: Download URL for the target ("" for no update).
        reason: Why the decision was made.
    """

    source: str
    process: str | None
    current_version: str
    action: str
    target_version: str
    target_url: str
    reason: str


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a requirement document.

    Attributes:
        status: "valid" or "invalid".
        errors: Error messages (empty if valid).
        warnings: Warning messages.
        process_count: Number of requirements in the document.
        document_path: String path to the validated document.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    process_count: int
    document_path: str
