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

"""Linter package for APISIX resource files."""

import logging
from pathlib import Path
from typing import List

from ..exceptions import ConfigurationError, ValidationError
from ..parsers.data_validator import ValidatorFactory
from ..parsers.resource_file_parser import resource_file_parser, resource_kind_from_file_name
from ..utils.identification import get_resource_identification
from .report import LintResult

__all__ = ['lint_files', 'LintResult']

logger = logging.getLogger(__name__)


def lint_file(file_path: Path, version: str, sink: str) -> LintResult:
    """Validate one resource file against the schema of *version* and *sink*."""
    result = LintResult(file_path)

    result.kind = resource_kind_from_file_name(file_path.name)
    if result.kind is None:
        result.add_error("File name does not encode a resource kind (expected 'name.<kind>.json|yaml')")
        return result

    try:
        document = resource_file_parser.load(file_path)
        result.resource = get_resource_identification(document)
        validator = ValidatorFactory.get_validator(version, result.kind, sink)
        validator.validate(document)
    except ValidationError as e:
        result.add_error(e.message, path=e.field, index=e.index, error_type=type(e).__name__)
    except (ConfigurationError, FileNotFoundError) as e:
        result.add_error(str(e), error_type=type(e).__name__)
    return result


def lint_files(file_paths: List[Path], version: str, sink: str) -> List[LintResult]:
    """Lint a list of resource files.

    Args:
        file_paths: List of file paths to lint
        version: Gateway version the resources target
        sink: Storage sink selecting the schema strictness

    Returns:
        List of LintResult objects, one per file
    """
    results = []

    for file_path in file_paths:
        try:
            result = lint_file(file_path, version, sink)
        except Exception as e:
            logger.exception(f"Unexpected error while linting {file_path}")
            result = LintResult(file_path)
            result.add_error(f"Unexpected error during linting: {str(e)}")

        results.append(result)

    return results
