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

"""Exception hierarchy for versiongate.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ParseError: A version string is not valid semantic-version syntax
- DecodeError: A hex-encoded rollout seed or cursor is malformed
- InternalHashError: The keyed hash primitive failed (should never happen)
- ConfigError: Requirement document or build metadata is missing or invalid
- NetworkError: The requirement document could not be fetched

All exceptions inherit from VersionGateError, allowing users to catch all
versiongate errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from versiongate.core import check_node
        from versiongate.exceptions import ConfigError, NetworkError

        try:
            result = check_node(
                "https://version.example.com/",
                identity=node_id,
                current_version="v1.0.0",
                process="storagenode",
            )
        except ConfigError as e:
            print(f"Bad requirement document: {e}")
        except NetworkError as e:
            print(f"Could not fetch requirement document: {e}")
        ```

    Catching all versiongate errors:
        ```python
        from versiongate.exceptions import VersionGateError

        try:
            decision = should_update_version(current, node_id, requirement)
        except VersionGateError as e:
            print(f"versiongate error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "VersionGateError",
    "ParseError",
    "DecodeError",
    "InternalHashError",
    "ConfigError",
    "NetworkError",
]


class VersionGateError(Exception):
    """Base exception for all versiongate errors.

    All versiongate-specific exceptions inherit from this class, allowing
    users to catch all versiongate errors with a single except clause if
    needed.
    """

    pass


class ParseError(VersionGateError, ValueError):
    """Raised when a version string is not valid semantic-version syntax.

    This exception is raised when there are problems with:

    - Empty version strings
    - Non-numeric major, minor or patch components
    - Malformed prerelease identifiers

    The error aborts the current update evaluation; no decision is
    returned alongside it.
    """

    pass


class DecodeError(VersionGateError, ValueError):
    """Raised when a rollout seed or cursor cannot be decoded.

    This exception is raised when the text is not valid hex or does not
    decode to exactly 32 bytes.
    """

    pass


class InternalHashError(VersionGateError):
    """Raised when the keyed hash used for rollout gating fails.

    HMAC-SHA256 over in-memory bytes does not fail in practice. If it does,
    the evaluation is aborted and the fault is fatal; it is not retryable.
    """

    pass


class ConfigError(VersionGateError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - Requirement document files (missing, YAML/JSON parse errors, empty)
    - Missing or invalid document sections
    - Unknown process names in multi-process documents
    - Invalid build metadata in the environment
    """

    pass


class NetworkError(VersionGateError):
    """Raised when the requirement document cannot be fetched.

    This exception is raised when there are problems with:

    - HTTP errors returned by the version server
    - Connection failures and timeouts
    - Responses that are not valid JSON

    No retry is attempted; polling again later is the caller's concern.
    """

    pass
