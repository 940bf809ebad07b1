"""
Requirement document loading for versiongate.

Requirement documents are normally served as JSON by the version server,
but operators keep local copies (for pinning, testing, air-gapped nodes)
as YAML or JSON files. YAML is a superset of JSON, so both load through
yaml.safe_load.

Functions
---------
load_document_data : function
    Load the raw mapping from a YAML/JSON file.
load_requirement_document : function
    Load and parse a file into a RequirementDocument.

Error Handling
--------------
- ConfigError: file missing, YAML parse error, empty file, top level not a
  mapping, or sections of the wrong shape
- DecodeError: malformed rollout seed/cursor hex
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from versiongate.config import load_requirement_document
    >>> doc = load_requirement_document(Path("versions.yaml"))
    >>> doc.get("storagenode").suggested.version
    'v1.1.0'
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from versiongate.exceptions import ConfigError
from versiongate.logging import get_global_logger
from versiongate.requirements import RequirementDocument


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML (or JSON) file and return the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, does not parse, or is empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"could not read {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def load_document_data(path: Path) -> dict[str, Any]:
    """Load the raw requirement document mapping from a file.

    Args:
        path: YAML or JSON file.

    Returns:
        The decoded top-level mapping.

    Raises:
        ConfigError: If the file is missing, invalid, empty, or not a mapping.
    """
    logger = get_global_logger()
    path = Path(path)
    logger.verbose("DOCUMENT", f"Loading requirement document: {path}")

    data = _load_yaml_file(path)
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {path}")

    logger.debug("DOCUMENT", f"Top-level keys: {', '.join(map(str, data))}")
    return data


def load_requirement_document(path: Path) -> RequirementDocument:
    """Load and parse a requirement document file.

    Raises:
        ConfigError: If the file or any section is invalid.
        DecodeError: If a rollout seed or cursor is malformed.
    """
    document = RequirementDocument.from_dict(load_document_data(path))
    names = [n for n in document.processes if n]
    if names:
        get_global_logger().verbose(
            "DOCUMENT", f"Found {len(names)} process(es): {', '.join(names)}"
        )
    return document
