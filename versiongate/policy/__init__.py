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

"""Update policy for versiongate.

Modules:

updates : module
    The update decision: minimum floor, suggested target, rollout gate.

Public API:

UpdateDecision : class
    Action, target version and reason for one evaluation.
should_update_version : function
    Decide whether a node should upgrade.

Example:
    from versiongate.policy import should_update_version

    decision = should_update_version(current, node_id, requirement)
    print(decision.action, decision.reason)

"""

from .updates import (
    MUST_UPDATE,
    NO_UPDATE,
    SHOULD_UPDATE,
    UpdateDecision,
    should_update_version,
)

__all__ = [
    "MUST_UPDATE",
    "NO_UPDATE",
    "SHOULD_UPDATE",
    "UpdateDecision",
    "should_update_version",
]
