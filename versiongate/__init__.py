"""
versiongate - staged rollout update decisions

Decides, for one node in a large fleet, whether it should upgrade during a
staged ("canary") rollout. The version server publishes a requirement
document (minimum version, suggested version, rollout seed and cursor);
each node evaluates it locally and deterministically, without talking to
other nodes and without state carried between evaluations.

versiongate provides:
  - Semantic version parsing and ordering
  - 256-bit rollout cursors with their hex text form
  - Percentage to cursor mapping (precise and legacy)
  - Keyed-hash (HMAC-SHA256) rollout candidacy
  - The update decision: up to date / below minimum / rollout candidate
  - Requirement document loading (YAML/JSON file or HTTP) and validation
  - Immutable build metadata for the running binary

Quick Start
-----------
Check a node against a requirement document:

    $ versiongate check versions.json --identity 0a1b... --current v1.0.0

Compute the cursor for a 25% rollout:

    $ versiongate cursor 25

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    High-level orchestration (load, select, decide).
versioning : package
    SemanticVersion and VersionLocator.
rollout : package
    RolloutCursor, percentage mappings and the candidacy check.
policy : package
    The update decision.
config : package
    Requirement document files.
io : package
    Requirement document fetching.

Public API
----------
    from versiongate import SemanticVersion, should_update_version
    from versiongate.requirements import VersionRequirement
    from versiongate.rollout import percentage_to_cursor_precise
    from versiongate.core import check_node

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Staged rollout update decisions for fleet nodes"

from versiongate.build_info import BuildInfo
from versiongate.policy import UpdateDecision, should_update_version
from versiongate.requirements import RequirementDocument, VersionRequirement
from versiongate.rollout import (
    RolloutConfig,
    RolloutCursor,
    is_candidate,
    percentage_to_cursor_legacy,
    percentage_to_cursor_precise,
)
from versiongate.versioning import SemanticVersion, VersionLocator, compare

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "BuildInfo",
    "RequirementDocument",
    "RolloutConfig",
    "RolloutCursor",
    "SemanticVersion",
    "UpdateDecision",
    "VersionLocator",
    "VersionRequirement",
    "compare",
    "is_candidate",
    "percentage_to_cursor_legacy",
    "percentage_to_cursor_precise",
    "should_update_version",
]
