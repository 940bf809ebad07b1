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

"""Local requirement document loading for versiongate.

Public API:

- load_document_data: Load the raw mapping from a YAML/JSON file
- load_requirement_document: Load and parse a RequirementDocument

Example:
    Basic usage:

        from pathlib import Path
        from versiongate.config import load_requirement_document

        doc = load_requirement_document(Path("versions.json"))
        requirement = doc.get("storagenode")

"""

from .loader import load_document_data, load_requirement_document

__all__ = ["load_document_data", "load_requirement_document"]
