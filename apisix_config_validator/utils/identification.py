# Copyright 2026 TIER IV, inc.
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

"""Human-readable labels for resource documents, used in logs and errors."""

import json
from typing import Any, Mapping

IDENTIFICATION_FIELDS = ("id", "name", "username")


def get_resource_identification(raw_document: Any) -> str:
    """Return the first non-empty of ``id``, ``name`` and ``username``.

    Best effort: unparsable documents and documents without any of these
    fields yield an empty string.
    """
    document = raw_document
    if isinstance(document, (bytes, bytearray, str)):
        try:
            document = json.loads(document)
        except (ValueError, TypeError, RecursionError):
            return ""

    if not isinstance(document, Mapping):
        return ""

    for field in IDENTIFICATION_FIELDS:
        value = document.get(field)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and value:
            return value
    return ""
