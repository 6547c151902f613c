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

"""Custom exceptions for the APISIX config validator."""

from typing import Optional


class ConfigValidatorError(Exception):
    """Base exception for config-validator related errors."""
    pass


class ConfigurationError(ConfigValidatorError):
    """Exception raised when schema resolution cannot proceed."""
    pass


class UnsupportedVersionError(ConfigurationError):
    """Exception raised for a gateway version without a schema document."""
    pass


class SchemaPathNotFoundError(ConfigurationError):
    """Exception raised when a schema path does not exist in a version's document."""
    pass


class ValidationError(ConfigValidatorError):
    """Exception raised for a resource document that fails validation.

    ``field`` is a JSON-pointer-like path to the offending value (``""`` for the
    document root) and ``index`` the position of the offending element when the
    violation is inside a list.
    """

    def __init__(self, message: str, field: str = "", index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} (path={self.field})"
        return self.message


class SchemaViolation(ValidationError):
    """Exception raised when a document does not match its structural schema."""
    pass


class SemanticViolation(ValidationError):
    """Exception raised when a structurally valid document breaks a semantic rule."""
    pass


class VarsGrammarError(SemanticViolation):
    pass


class InvalidHashOnError(SemanticViolation):
    pass


class InvalidHashKeyError(SemanticViolation):
    pass


class InvalidNodeCountError(SemanticViolation):
    pass


class MissingUpstreamHostError(SemanticViolation):
    pass


class MissingKeyError(SemanticViolation):
    pass


class InvalidRemoteAddrError(SemanticViolation):
    pass
