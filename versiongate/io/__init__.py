"""Network input for versiongate.

Modules:

fetch : module
    Single-shot HTTP(S) fetch of a requirement document.

Public API:

fetch_requirement_document : function
    GET a requirement document and return the decoded JSON mapping.

Example:
    from versiongate.io import fetch_requirement_document

    data = fetch_requirement_document("https://version.example.com/")

"""

from .fetch import fetch_requirement_document

__all__ = ["fetch_requirement_document"]
