"""
Semantic version handling for versiongate.

This package parses and orders the version strings carried by requirement
documents and build metadata.

Modules
-------
semver : module
    SemanticVersion value type, comparison and formatting, and the
    VersionLocator record (version string + download URL).

Public API
----------
SemanticVersion : dataclass
    Immutable, totally ordered semantic version.
VersionLocator : dataclass
    Published version string plus download URL.
compare : function
    Compare two versions, returning -1, 0, or 1.

Ordering
--------
1. (major, minor, patch) compare numerically.
2. A release is newer than any prerelease of the same core version:
   v1.0.0-alpha < v1.0.0
3. Prerelease identifiers compare pairwise; numeric identifiers compare
   numerically and sort before alphanumeric ones:
   v1.0.0-alpha < v1.0.0-alpha.1 < v1.0.0-alpha.beta < v1.0.0-beta.2
   < v1.0.0-beta.11 < v1.0.0-rc.1

Examples
--------
    >>> from versiongate.versioning import SemanticVersion, compare
    >>> compare(SemanticVersion.parse("v1.2.3"), SemanticVersion.parse("1.2.4"))
    -1
    >>> SemanticVersion.parse("v2").format()
    'v2.0.0'
"""

from .semver import SemanticVersion, VersionLocator, compare

__all__ = ["SemanticVersion", "VersionLocator", "compare"]
