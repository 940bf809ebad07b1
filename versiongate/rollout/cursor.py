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

"""256-bit rollout values (seeds and cursors) and their hex text form.

A RolloutCursor holds exactly 32 bytes, read as a big-endian unsigned
integer. The same type carries both the rollout threshold ("cursor") and
the hash key ("seed").

Text form is lowercase hex, except that the all-zero value is written as
the empty string, and the empty string reads back as all-zero. Version
server documents rely on this: an omitted or blank field means zero.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass
import functools

from versiongate.exceptions import DecodeError

CURSOR_SIZE = 32
MAX_CURSOR_INT = (1 << (8 * CURSOR_SIZE)) - 1


@functools.total_ordering
@dataclass(frozen=True)
class RolloutCursor:
    """Immutable 32-byte rollout value ordered as an unsigned 256-bit integer.

    Attributes:
        value: The raw 32 bytes, most significant byte first.
    """

    value: bytes = bytes(CURSOR_SIZE)

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray)):
            raise DecodeError(
                f"rollout value must be bytes, got {type(self.value).__name__}"
            )
        if len(self.value) != CURSOR_SIZE:
            raise DecodeError(
                f"rollout value must be {CURSOR_SIZE} bytes, got {len(self.value)}"
            )
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def zero(cls) -> RolloutCursor:
        return cls()

    @classmethod
    def max(cls) -> RolloutCursor:
        return cls(b"\xff" * CURSOR_SIZE)

    @classmethod
    def from_int(cls, number: int) -> RolloutCursor:
        """Build a cursor from an integer in [0, 2**256 - 1].

        Raises:
            DecodeError: If the integer is out of range.
        """
        if number < 0 or number > MAX_CURSOR_INT:
            raise DecodeError(f"rollout value out of 256-bit range: {number}")
        return cls(number.to_bytes(CURSOR_SIZE, "big"))

    def to_int(self) -> int:
        return int.from_bytes(self.value, "big")

    def is_zero(self) -> bool:
        return not any(self.value)

    def encode(self) -> str:
        """Return lowercase hex, or "" for the all-zero value."""
        if self.is_zero():
            return ""
        return self.value.hex()

    @classmethod
    def decode(cls, text: str | None) -> RolloutCursor:
        """Parse the hex text form.

        Args:
            text: 64 hex digits, or "" (or None) for the all-zero value.

        Raises:
            DecodeError: If the text is not hex or is not 32 bytes long.
        """
        if not text:
            return cls()
        if not isinstance(text, str):
            raise DecodeError(f"rollout value must be a hex string, got {text!r}")
        try:
            raw = binascii.unhexlify(text)
        except (binascii.Error, ValueError) as err:
            raise DecodeError(f"invalid hex in rollout value {text!r}: {err}") from err
        if len(raw) != CURSOR_SIZE:
            raise DecodeError(
                f"rollout value must decode to {CURSOR_SIZE} bytes, got {len(raw)}"
            )
        return cls(raw)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RolloutCursor):
            return NotImplemented
        # Equal-length big-endian bytes order the same as their integers.
        return self.value < other.value

    def __str__(self) -> str:
        return self.encode()
