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

"""Requirement documents published by the version server.

A requirement tells one binary which versions are acceptable:

    minimum:
      version: "v1.0.0"
      url: "https://example.com/v1.0.0/storagenode.zip"
    suggested:
      version: "v1.1.0"
      url: "https://example.com/v1.1.0/storagenode.zip"
    rollout:
      seed: "5c...e1"      # 64 hex digits, or "" for zero
      cursor: "7f...ff"    # 64 hex digits, or "" for zero

A document may carry one requirement (the form above) or several, one per
binary, under a "processes" mapping:

    processes:
      storagenode: {minimum: ..., suggested: ..., rollout: ...}
      storagenode-updater: {minimum: ..., suggested: ..., rollout: ...}

Version strings are kept as published and parsed only when a decision is
made, so a document with an unparsable version can still be loaded and
reported on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from jsonpath_ng import parse as jsonpath_parse

from versiongate.exceptions import ConfigError, DecodeError
from versiongate.rollout import RolloutConfig
from versiongate.versioning import VersionLocator

__all__ = [
    "VersionRequirement",
    "RequirementDocument",
    "select_requirement",
]


def _locator_from_dict(data: Any, name: str) -> VersionLocator:
    if data is None:
        return VersionLocator()
    if not isinstance(data, Mapping):
        raise ConfigError(f"'{name}' must be a mapping with 'version' and 'url'")
    version = data.get("version", "")
    url = data.get("url", "")
    if not isinstance(version, str):
        raise ConfigError(f"'{name}.version' must be a string")
    if not isinstance(url, str):
        raise ConfigError(f"'{name}.url' must be a string")
    return VersionLocator(version=version, url=url)


@dataclass(frozen=True)
class VersionRequirement:
    """Versions one binary is required/offered to run.

    Attributes:
        minimum: Lowest allowed version; nodes below it always upgrade.
        suggested: Version offered to rollout candidates.
        rollout: Seed and cursor gating the suggested version.
    """

    minimum: VersionLocator = field(default_factory=VersionLocator)
    suggested: VersionLocator = field(default_factory=VersionLocator)
    rollout: RolloutConfig = field(default_factory=RolloutConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionRequirement:
        """Build a requirement from decoded JSON/YAML.

        Raises:
            ConfigError: If a section has the wrong shape.
            DecodeError: If the rollout seed or cursor is malformed.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("requirement must be a mapping")
        rollout = data.get("rollout")
        if rollout is not None and not isinstance(rollout, Mapping):
            raise ConfigError("'rollout' must be a mapping with 'seed' and 'cursor'")
        return cls(
            minimum=_locator_from_dict(data.get("minimum"), "minimum"),
            suggested=_locator_from_dict(data.get("suggested"), "suggested"),
            rollout=RolloutConfig.from_dict(rollout),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "minimum": {"version": self.minimum.version, "url": self.minimum.url},
            "suggested": {
                "version": self.suggested.version,
                "url": self.suggested.url,
            },
            "rollout": self.rollout.to_dict(),
        }


@dataclass(frozen=True)
class RequirementDocument:
    """All requirements in one document, keyed by process name.

    A single-requirement document is stored under the empty name "".
    """

    processes: Mapping[str, VersionRequirement] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RequirementDocument:
        """Build a document from decoded JSON/YAML.

        Raises:
            ConfigError: If the document has the wrong shape.
            DecodeError: If a rollout seed or cursor is malformed.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("requirement document must be a mapping")

        processes = data.get("processes")
        if processes is None:
            return cls(MappingProxyType({"": VersionRequirement.from_dict(data)}))
        if not isinstance(processes, Mapping):
            raise ConfigError("'processes' must be a mapping of process name to requirement")

        parsed: dict[str, VersionRequirement] = {}
        for name, requirement in processes.items():
            try:
                parsed[str(name)] = VersionRequirement.from_dict(requirement)
            except ConfigError as err:
                raise ConfigError(f"processes.{name}: {err}") from err
            except DecodeError as err:
                raise DecodeError(f"processes.{name}: {err}") from err
        return cls(MappingProxyType(parsed))

    def get(self, process: str | None = None) -> VersionRequirement:
        """Return the requirement for a process.

        With process=None the document must hold exactly one requirement.

        Raises:
            ConfigError: If the process is unknown or the choice is ambiguous.
        """
        if process is None:
            if len(self.processes) == 1:
                return next(iter(self.processes.values()))
            names = ", ".join(sorted(self.processes)) or "(none)"
            raise ConfigError(f"document holds several processes, pick one of: {names}")
        try:
            return self.processes[process]
        except KeyError:
            names = ", ".join(sorted(n for n in self.processes if n)) or "(none)"
            raise ConfigError(
                f"unknown process {process!r} (available: {names})"
            ) from None


def select_requirement(
    data: Mapping[str, Any],
    *,
    process: str | None = None,
    path: str | None = None,
) -> VersionRequirement:
    """Pick one requirement out of raw document data.

    Args:
        data: Decoded JSON/YAML document.
        process: Process name inside a multi-process document.
        path: JSONPath expression locating the requirement, for documents
            that nest it somewhere else (e.g. "data.versions.storagenode").
            Takes precedence over process.

    Raises:
        ConfigError: If the path is invalid or matches nothing, or the
            process is unknown.
        DecodeError: If a rollout seed or cursor is malformed.
    """
    if path:
        try:
            matches = jsonpath_parse(path).find(data)
        except Exception as err:
            raise ConfigError(f"invalid requirement path {path!r}: {err}") from err
        if not matches:
            raise ConfigError(f"requirement path {path!r} did not match anything")
        return VersionRequirement.from_dict(matches[0].value)

    if process is not None and isinstance(data, Mapping) and "processes" in data:
        processes = data["processes"]
        if isinstance(processes, Mapping) and process in processes:
            return VersionRequirement.from_dict(processes[process])

    return RequirementDocument.from_dict(data).get(process)
