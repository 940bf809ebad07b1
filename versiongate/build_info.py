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

"""Build metadata for versiongate binaries.

Release pipelines stamp each build with its version, commit and build time.
Here that metadata is an immutable BuildInfo value, read once at process
startup and handed to whatever needs it (the updater compares its own
version against the requirement document, the CLI prints it).

Environment variables (optionally loaded from a .env file):

    VERSIONGATE_BUILD_VERSION     semantic version, e.g. "v1.2.3"
    VERSIONGATE_BUILD_TIMESTAMP   unix seconds since the epoch
    VERSIONGATE_BUILD_COMMIT      git commit hash ("-dirty" marks local changes)
    VERSIONGATE_BUILD_RELEASE     "true" for release builds

If none are set the build is a plain development build (BuildInfo()). If any
is set, the version and timestamp must both parse.

Example:
    from versiongate.build_info import BuildInfo
    from versiongate.logging import get_global_logger

    build = BuildInfo.from_environ()
    build.log(get_global_logger())
    print(build)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import json
import os
from typing import Any, Mapping

from dotenv import load_dotenv

from versiongate.exceptions import ConfigError, ParseError
from versiongate.logging import Logger
from versiongate.versioning import SemanticVersion

ENV_VERSION = "VERSIONGATE_BUILD_VERSION"
ENV_TIMESTAMP = "VERSIONGATE_BUILD_TIMESTAMP"
ENV_COMMIT = "VERSIONGATE_BUILD_COMMIT"
ENV_RELEASE = "VERSIONGATE_BUILD_RELEASE"

_RFC822 = "%d %b %y %H:%M %Z"


@dataclass(frozen=True)
class BuildInfo:
    """Versioning information for a binary.

    Attributes:
        timestamp: Build time (UTC), or None if unknown.
        commit_hash: Git commit the build came from.
        version: Semantic version of the build.
        release: True for release builds.
        modified: True if built from a dirty working tree.
    """

    timestamp: datetime | None = None
    commit_hash: str = ""
    version: SemanticVersion = field(default_factory=SemanticVersion)
    release: bool = False
    modified: bool = False

    @classmethod
    def from_values(
        cls,
        *,
        version: str = "",
        timestamp: str = "",
        commit_hash: str = "",
        release: str = "",
    ) -> BuildInfo:
        """Build from the raw stamped strings.

        Raises:
            ConfigError: If the timestamp or version does not parse.
        """
        if not (version or timestamp or commit_hash or release):
            return cls()

        try:
            seconds = int(timestamp)
        except ValueError as err:
            raise ConfigError(f"invalid build timestamp {timestamp!r}") from err
        try:
            semver = SemanticVersion.parse(version)
        except ParseError as err:
            raise ConfigError(f"invalid build version: {err}") from err

        try:
            built_at = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as err:
            raise ConfigError(f"build timestamp {timestamp!r} out of range") from err

        is_release = release.strip().lower() == "true"
        if seconds == 0 or not commit_hash:
            is_release = False

        return cls(
            timestamp=built_at,
            commit_hash=commit_hash,
            version=semver,
            release=is_release,
            modified="dirty" in commit_hash,
        )

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> BuildInfo:
        """Read build metadata from the environment.

        Args:
            environ: Variables to read. Defaults to os.environ after loading
                a .env file, if one is present.

        Raises:
            ConfigError: If the stamped metadata is invalid.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls.from_values(
            version=environ.get(ENV_VERSION, ""),
            timestamp=environ.get(ENV_TIMESTAMP, ""),
            commit_hash=environ.get(ENV_COMMIT, ""),
            release=environ.get(ENV_RELEASE, ""),
        )

    def is_zero(self) -> bool:
        return self == BuildInfo()

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form; empty fields are omitted except the version."""
        data: dict[str, Any] = {}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        if self.commit_hash:
            data["commitHash"] = self.commit_hash
        data["version"] = self.version.format()
        if self.release:
            data["release"] = True
        if self.modified:
            data["modified"] = True
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str | bytes) -> BuildInfo:
        """Parse the output of to_json.

        Raises:
            ConfigError: If the JSON or any field is invalid.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise ConfigError(f"invalid build info JSON: {err}") from err
        if not isinstance(data, dict):
            raise ConfigError("build info JSON must be an object")
        try:
            timestamp = data.get("timestamp")
            return cls(
                timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
                commit_hash=data.get("commitHash", ""),
                version=SemanticVersion.parse(data.get("version") or "v0.0.0"),
                release=bool(data.get("release", False)),
                modified=bool(data.get("modified", False)),
            )
        except (ParseError, TypeError, ValueError) as err:
            raise ConfigError(f"invalid build info: {err}") from err

    def __str__(self) -> str:
        """Newline-separated summary for humans."""
        lines = ["Release build" if self.release else "Development build"]
        if not self.version.is_zero():
            lines.append(f"Version: {self.version}")
        if self.timestamp is not None:
            lines.append(f"Build timestamp: {self.timestamp.strftime(_RFC822)}")
        if self.commit_hash:
            lines.append(f"Git commit: {self.commit_hash}")
        if self.modified:
            lines.append("Modified (dirty): true")
        return "\n".join(lines) + "\n"

    def log(self, logger: Logger) -> None:
        """Write the version info through a logger at verbose level."""
        logger.verbose(
            "BUILD",
            f"version={self.version} commit={self.commit_hash or '-'} "
            f"timestamp={self.timestamp.isoformat() if self.timestamp else '-'} "
            f"release={self.release} modified={self.modified}",
        )
