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

"""Rollout candidacy check.

Each node gets a stable, pseudo-random position in the 256-bit space: the
HMAC-SHA256 of its identity, keyed by the rollout seed. The node is a
candidate when that position is at or below the rollout cursor. Because the
seed keys the hash, a new rollout (new seed) reshuffles which nodes go
first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import hashlib
import hmac

from versiongate.exceptions import InternalHashError
from versiongate.logging import get_global_logger

from .cursor import RolloutCursor


@dataclass(frozen=True)
class RolloutConfig:
    """Rollout state published with a requirement.

    Attributes:
        seed: Hash key for candidacy; not compared numerically.
        cursor: Inclusive upper bound on candidate hash values.
    """

    seed: RolloutCursor = field(default_factory=RolloutCursor.zero)
    cursor: RolloutCursor = field(default_factory=RolloutCursor.zero)

    @classmethod
    def from_dict(cls, data: dict | None) -> RolloutConfig:
        """Decode {"seed": hex, "cursor": hex}; missing fields read as zero.

        Raises:
            DecodeError: If either value is malformed.
        """
        data = data or {}
        return cls(
            seed=RolloutCursor.decode(data.get("seed")),
            cursor=RolloutCursor.decode(data.get("cursor")),
        )

    def to_dict(self) -> dict[str, str]:
        return {"seed": self.seed.encode(), "cursor": self.cursor.encode()}


def rollout_position(identity: bytes, seed: RolloutCursor) -> RolloutCursor:
    """Keyed hash of a node identity, as a 256-bit value.

    Raises:
        TypeError: If identity is not bytes.
        InternalHashError: If the hash primitive fails.
    """
    if not isinstance(identity, (bytes, bytearray)):
        raise TypeError(f"node identity must be bytes, got {type(identity).__name__}")
    try:
        digest = hmac.new(seed.value, bytes(identity), hashlib.sha256).digest()
    except (TypeError, ValueError) as err:
        raise InternalHashError(f"rollout hash failed: {err}") from err
    return RolloutCursor(digest)


def is_candidate(identity: bytes, config: RolloutConfig) -> bool:
    """Decide whether a node falls inside the current rollout.

    Args:
        identity: Opaque, stable node identity bytes.
        config: Rollout seed and cursor.

    Returns:
        True iff HMAC-SHA256(seed, identity) <= cursor.

    Raises:
        TypeError: If identity is not bytes.
        InternalHashError: If the hash primitive fails.
    """
    position = rollout_position(identity, config.seed)
    candidate = position <= config.cursor
    get_global_logger().debug(
        "ROLLOUT",
        f"position={position.value.hex()} cursor={config.cursor.value.hex()} "
        f"candidate={candidate}",
    )
    return candidate
