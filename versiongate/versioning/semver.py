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

"""Semantic version parsing and comparison for versiongate.

This module is format-agnostic: it does NOT fetch or read anything. It
parses version strings published by the version server (and baked into
builds) and orders them consistently.

Parsing is tolerant in the same places the version server is sloppy:
surrounding whitespace, an optional leading "v", and short versions
("v1.2" -> v1.2.0). Everything else follows semantic versioning strictly.
"""

from __future__ import annotations

from dataclasses import dataclass
import functools
import re

from versiongate.exceptions import ParseError

# ----------------------------
# Syntax helpers
# ----------------------------

_NUMERIC = re.compile(r"0|[1-9][0-9]*")
_IDENT = re.compile(r"[0-9A-Za-z-]+")


def _parse_numeric(part: str, name: str, text: str) -> int:
    if not _NUMERIC.fullmatch(part):
        raise ParseError(f"invalid {name} component {part!r} in version {text!r}")
    return int(part)


def _parse_identifiers(raw: str, kind: str, text: str) -> tuple[str, ...]:
    """Split a dot-separated prerelease/build suffix and check each identifier."""
    idents = tuple(raw.split("."))
    for ident in idents:
        if not ident:
            raise ParseError(f"empty {kind} identifier in version {text!r}")
        if not _IDENT.fullmatch(ident):
            raise ParseError(f"invalid {kind} identifier {ident!r} in version {text!r}")
        if kind == "prerelease" and ident.isdigit() and not _NUMERIC.fullmatch(ident):
            raise ParseError(
                f"numeric prerelease identifier {ident!r} has a leading zero in {text!r}"
            )
    return idents


def _compare_identifier(a: str, b: str) -> int:
    """Numeric identifiers compare numerically and sort before alphanumeric ones."""
    a_num, b_num = a.isdigit(), b.isdigit()
    if a_num and b_num:
        ia, ib = int(a), int(b)
        return (ia > ib) - (ia < ib)
    if a_num:
        return -1
    if b_num:
        return 1
    return (a > b) - (a < b)


# ----------------------------
# Version value type
# ----------------------------


@functools.total_ordering
@dataclass(frozen=True)
class SemanticVersion:
    """An immutable semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Prerelease identifiers, e.g. ("rc", "1") for "-rc.1".

    Instances are ordered by semantic-version precedence, so they can be
    compared with the usual operators and sorted directly.

    Example:
        >>> SemanticVersion.parse("v1.0.0-alpha") < SemanticVersion.parse("1.0")
        True
        >>> str(SemanticVersion.parse("1.2.3-rc.1"))
        'v1.2.3-rc.1'
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse a version string.

        Accepts an optional leading "v" and surrounding whitespace. Missing
        minor and patch components default to 0, but a short version may
        not carry a prerelease or build suffix. Build metadata ("+...") is
        validated and then discarded, as it plays no part in ordering.

        Args:
            text: Version string, e.g. "v1.2.3", "1.2", "1.0.0-rc.1+abc".

        Returns:
            The parsed version.

        Raises:
            ParseError: If the text is not a valid semantic version.
        """
        if not isinstance(text, str):
            raise ParseError(f"version must be a string, got {type(text).__name__}")
        s = text.strip()
        if s[:1] in ("v", "V"):
            s = s[1:]
        if not s:
            raise ParseError(f"empty version string: {text!r}")

        core, plus, build = s.partition("+")
        core, dash, pre = core.partition("-")
        if plus:
            _parse_identifiers(build, "build", text)

        parts = core.split(".")
        if len(parts) > 3:
            raise ParseError(f"too many version components in {text!r}")
        if len(parts) < 3 and (plus or dash):
            raise ParseError(
                f"short version cannot carry prerelease or build metadata: {text!r}"
            )
        parts += ["0"] * (3 - len(parts))

        major, minor, patch = (
            _parse_numeric(p, name, text)
            for p, name in zip(parts, ("major", "minor", "patch"))
        )
        prerelease = _parse_identifiers(pre, "prerelease", text) if dash else ()
        return cls(major=major, minor=minor, patch=patch, prerelease=prerelease)

    def compare(self, other: SemanticVersion) -> int:
        """Return -1, 0 or 1 as self is older than, equal to, or newer than other."""
        a = (self.major, self.minor, self.patch)
        b = (other.major, other.minor, other.patch)
        if a != b:
            return (a > b) - (a < b)

        # A release is newer than any of its prereleases.
        if not self.prerelease or not other.prerelease:
            return bool(other.prerelease) - bool(self.prerelease)

        for x, y in zip(self.prerelease, other.prerelease):
            result = _compare_identifier(x, y)
            if result:
                return result
        n, m = len(self.prerelease), len(other.prerelease)
        return (n > m) - (n < m)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) < 0

    def format(self) -> str:
        """Render as "vMAJOR.MINOR.PATCH" plus "-pre.ids" when present."""
        base = f"v{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{'.'.join(self.prerelease)}"
        return base

    def __str__(self) -> str:
        return self.format()

    def is_zero(self) -> bool:
        """True iff this is the default version (v0.0.0, no prerelease)."""
        return self == SemanticVersion()


def compare(a: SemanticVersion, b: SemanticVersion) -> int:
    """Compare two versions, returning -1 if a < b, 0 if equal, 1 if a > b."""
    return a.compare(b)


# ----------------------------
# Version + download location
# ----------------------------


@dataclass(frozen=True)
class VersionLocator:
    """A published version string together with where to download it.

    Attributes:
        version: Version string as published (may be empty when unset).
        url: Download URL for that version's binary.
    """

    version: str = ""
    url: str = ""

    def semver(self) -> SemanticVersion:
        """Parse the version string.

        Raises:
            ParseError: If the version string is not a valid version.
        """
        return SemanticVersion.parse(self.version)

    def is_zero(self) -> bool:
        """True iff no version string was published."""
        return self.version == ""
