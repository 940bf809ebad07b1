"""Staged rollout gating for versiongate.

Modules:

cursor : module
    RolloutCursor, the 32-byte seed/threshold value and its hex codec.
percentage : module
    Percentage to cursor mappings (precise and legacy).
gate : module
    RolloutConfig and the keyed-hash candidacy check.

Example:
    from versiongate.rollout import (
        RolloutConfig,
        RolloutCursor,
        is_candidate,
        percentage_to_cursor_precise,
    )

    config = RolloutConfig(
        seed=RolloutCursor.decode("05" * 32),
        cursor=percentage_to_cursor_precise(12.5),
    )
    if is_candidate(node_id, config):
        print("this node is in the first 12.5%")
"""

from .cursor import CURSOR_SIZE, MAX_CURSOR_INT, RolloutCursor
from .gate import RolloutConfig, is_candidate, rollout_position
from .percentage import percentage_to_cursor_legacy, percentage_to_cursor_precise

__all__ = [
    "CURSOR_SIZE",
    "MAX_CURSOR_INT",
    "RolloutCursor",
    "RolloutConfig",
    "is_candidate",
    "rollout_position",
    "percentage_to_cursor_precise",
    "percentage_to_cursor_legacy",
]
