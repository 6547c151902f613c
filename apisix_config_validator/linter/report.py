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

"""Error reporting for the linter."""

from pathlib import Path
from typing import List, Dict, Any, Optional


class LintResult:
    """Container for linting results for a single resource file."""

    def __init__(self, file_path: Path, resource: str = ""):
        """Initialize lint result.

        Args:
            file_path: Path to the file being linted
            resource: Identification of the resource inside the file, if known
        """
        self.file_path = file_path
        self.resource = resource
        self.kind: Optional[str] = None
        self.errors: List[Dict[str, Any]] = []

    @property
    def label(self) -> str:
        if self.resource:
            return f"{self.file_path} ({self.resource})"
        return str(self.file_path)

    def add_error(
        self,
        message: str,
        path: Optional[str] = None,
        index: Optional[int] = None,
        error_type: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            path: JSON-pointer-like path of the offending value
            index: Position of the offending element inside a list
            error_type: Name of the violation class
        """
        error: Dict[str, Any] = {'message': message}
        if path:
            error['path'] = path
        if index is not None:
            error['index'] = index
        if error_type is not None:
            error['type'] = error_type
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'resource': self.resource,
            'kind': self.kind,
            'errors': self.errors,
        }
