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

"""Map a rollout percentage onto a 256-bit cursor.

Two mappings exist and are NOT interchangeable:

- percentage_to_cursor_precise: four decimal digits of percentage
  precision (e.g. 12.3456%), computed with integer arithmetic over the full
  256-bit range.
- percentage_to_cursor_legacy: whole percentages only. Cursors already
  published with this mapping keep their exact value.

Both are pure and monotonic non-decreasing. Percentages at or below 0 give
the all-zero cursor; at or above 100 they give MAX.

Example:
    >>> from versiongate.rollout import percentage_to_cursor_precise
    >>> percentage_to_cursor_precise(0).encode()
    ''
    >>> percentage_to_cursor_precise(50).encode()[:4]
    '7fff'
"""

from __future__ import annotations

import math

from .cursor import MAX_CURSOR_INT, RolloutCursor

# pct * 10_000 ranges over [0, 1_000_000] for pct in [0, 100].
_PRECISE_SCALE = 10_000
_PRECISE_DENOMINATOR = 100 * _PRECISE_SCALE


def percentage_to_cursor_precise(pct: float) -> RolloutCursor:
    """Cursor for a (fractional) percentage of nodes that should update.

    Computes floor(MAX * round(pct * 10000) / 1_000_000).

    Args:
        pct: Percentage of nodes, typically in [0, 100]. Values outside the
            range are clamped.

    Returns:
        The threshold cursor.

    Raises:
        ValueError: If pct is NaN.
    """
    if math.isnan(pct):
        raise ValueError("rollout percentage must be a number, got NaN")
    if pct <= 0:
        return RolloutCursor.zero()
    pct = min(pct, 100)
    scaled = round(pct * _PRECISE_SCALE)
    return RolloutCursor.from_int(MAX_CURSOR_INT * scaled // _PRECISE_DENOMINATOR)


def percentage_to_cursor_legacy(pct: int) -> RolloutCursor:
    """Cursor for a whole percentage of nodes that should update.

    Computes floor(MAX * pct / 100). Prefer percentage_to_cursor_precise in
    new code; this mapping is kept because published cursors depend on it.

    Args:
        pct: Whole percentage of nodes. Values outside [0, 100] are clamped.
    """
    pct = int(pct)
    if pct <= 0:
        return RolloutCursor.zero()
    pct = min(pct, 100)
    return RolloutCursor.from_int(MAX_CURSOR_INT * pct // 100)
