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

"""Update decision policy for versiongate.

Determines whether a node running a given version should upgrade, based on
the minimum and suggested versions and the rollout gate published by the
version server.

The steps run strictly in order and the first match wins:

1. current >= suggested: no update ("version is up to date").
2. current < minimum: must update to minimum, whatever the rollout says.
3. Rollout candidate: should update to suggested; otherwise wait.

Example:
    Decide for one node:

        from versiongate.policy.updates import should_update_version
        from versiongate.requirements import VersionRequirement
        from versiongate.versioning import SemanticVersion

        decision = should_update_version(
            SemanticVersion.parse("v1.0.0"),
            node_id,
            VersionRequirement.from_dict(document),
        )
        if decision.action != "no_update":
            print(f"upgrade to {decision.target.version}: {decision.reason}")

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from versiongate.logging import get_global_logger
from versiongate.requirements import VersionRequirement
from versiongate.rollout import is_candidate
from versiongate.versioning import SemanticVersion, VersionLocator

Action = Literal["no_update", "should_update", "must_update"]

NO_UPDATE: Action = "no_update"
SHOULD_UPDATE: Action = "should_update"
MUST_UPDATE: Action = "must_update"

REASON_UP_TO_DATE = "version is up to date"
REASON_BELOW_MINIMUM = "version is below minimum allowed"
REASON_CANDIDATE = "rollout candidate"
REASON_PENDING = "rollout pending for this node"


@dataclass(frozen=True)
class UpdateDecision:
    """Outcome of one update evaluation.

    Attributes:
        action: "no_update", "should_update" or "must_update".
        target: Version to upgrade to; None for "no_update".
        reason: Human-readable explanation, suitable for logs.
    """

    action: Action
    target: VersionLocator | None
    reason: str

    @property
    def update(self) -> bool:
        return self.action != NO_UPDATE


def should_update_version(
    current_version: SemanticVersion,
    identity: bytes,
    requirement: VersionRequirement,
) -> UpdateDecision:
    """Decide whether this node should move off its current version.

    Pure function: nothing is cached between calls and no I/O is done.

    Args:
        current_version: Version the node is running.
        identity: Stable node identity bytes (used only for rollout gating).
        requirement: Minimum, suggested and rollout published for this binary.

    Returns:
        The decision with its target and reason.

    Raises:
        ParseError: If the minimum or suggested version string is invalid.
        InternalHashError: If the rollout hash fails.

    """
    logger = get_global_logger()

    suggested = requirement.suggested.semver()
    if current_version.compare(suggested) >= 0:
        logger.verbose(
            "DECISION", f"{current_version} >= suggested {suggested}: up to date"
        )
        return UpdateDecision(NO_UPDATE, None, REASON_UP_TO_DATE)

    # The minimum overrides rollout gating: nodes below it upgrade now.
    minimum = requirement.minimum.semver()
    if current_version.compare(minimum) < 0:
        logger.verbose("DECISION", f"{current_version} < minimum {minimum}")
        return UpdateDecision(MUST_UPDATE, requirement.minimum, REASON_BELOW_MINIMUM)

    if is_candidate(identity, requirement.rollout):
        logger.verbose("DECISION", f"rollout candidate for {suggested}")
        return UpdateDecision(SHOULD_UPDATE, requirement.suggested, REASON_CANDIDATE)

    logger.verbose("DECISION", f"rollout of {suggested} has not reached this node")
    return UpdateDecision(NO_UPDATE, None, REASON_PENDING)
