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

"""Fetch a requirement document from a version server.

One GET, one JSON body. No retry, backoff or cache: each poll evaluates
a fresh document, and retrying is left to the updater's polling loop.

Custom headers support environment variable references ("${VAR}") so
tokens stay out of config files.

Example:
    from versiongate.io import fetch_requirement_document

    data = fetch_requirement_document("https://version.example.com/")
    print(data["processes"]["storagenode"]["suggested"]["version"])
"""

from __future__ import annotations

import json
import os
from typing import Any

import requests

from versiongate.exceptions import ConfigError, NetworkError
from versiongate.logging import get_global_logger

DEFAULT_TIMEOUT = 30


def _expand_headers(headers: dict[str, str]) -> dict[str, str]:
    """Replace "${VAR}" header values with the environment value; drop unset ones."""
    logger = get_global_logger()
    expanded: dict[str, str] = {}
    for key, value in headers.items():
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.environ.get(env_var)
            if not env_value:
                logger.verbose("FETCH", f"Warning: Environment variable {env_var} not set")
                continue
            expanded[key] = env_value
        else:
            expanded[key] = value
    return expanded


def fetch_requirement_document(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """GET a requirement document and return its decoded JSON mapping.

    Args:
        url: Version server URL.
        timeout: Request timeout in seconds.
        headers: Extra request headers; "${VAR}" values are expanded.

    Returns:
        The decoded top-level JSON object.

    Raises:
        NetworkError: On HTTP errors, connection failures or invalid JSON.
        ConfigError: If the JSON body is not an object.
    """
    logger = get_global_logger()
    request_headers = {"Accept": "application/json"}
    request_headers.update(_expand_headers(headers or {}))

    logger.verbose("FETCH", f"GET {url}")
    try:
        response = requests.get(url, headers=request_headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise NetworkError(
            f"version server returned {response.status_code} {response.reason} for {url}"
        ) from err
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"failed to fetch requirement document from {url}: {err}") from err

    logger.verbose("FETCH", f"Response: {response.status_code}")

    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError) as err:
        raise NetworkError(
            f"invalid JSON from version server. Response: {response.text[:200]}"
        ) from err

    if not isinstance(data, dict):
        raise ConfigError(f"requirement document from {url} must be a JSON object")

    logger.debug("FETCH", f"Document: {json.dumps(data, indent=2)}")
    return data
