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

"""Resource file loader for JSON and YAML documents."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..exceptions import SchemaViolation
from ..models.resource import ResourceKind

logger = logging.getLogger(__name__)


JSON_EXTENSIONS = (".json",)
YAML_EXTENSIONS = (".yaml", ".yml")


def resource_kind_from_file_name(file_name: str) -> Optional[str]:
    """Return the kind encoded in a file name like ``r1.route.json``, if any."""
    # example: 'default.stream_route.yaml' -> 'stream_route'
    for ext in JSON_EXTENSIONS + YAML_EXTENSIONS:
        if file_name.endswith(ext):
            base_name = file_name[:-len(ext)]
            if "." not in base_name:
                return None
            kind = base_name.rsplit(".", 1)[1]
            return kind if kind in ResourceKind.get_all_types() else None
    return None


class ResourceFileParser:
    """Loads resource documents from disk."""

    def load(self, file_path: Union[str, Path]) -> Any:
        """Load a JSON or YAML resource file.

        Raises:
            FileNotFoundError: If the file does not exist
            SchemaViolation: If the file content cannot be parsed
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Resource file not found: {path}")

        logger.debug(f"Loading resource file: {path}")
        content = path.read_text(encoding="utf-8")

        if path.suffix in YAML_EXTENSIONS:
            try:
                return yaml.safe_load(content)
            except yaml.YAMLError as exc:
                raise SchemaViolation(f"Invalid YAML in {path}: {exc}") from exc

        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise SchemaViolation(
                f"Invalid JSON in {path}: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            ) from exc
        except RecursionError as exc:
            raise SchemaViolation(f"Document nesting too deep in {path}") from exc


# Global parser instance
resource_file_parser = ResourceFileParser()
