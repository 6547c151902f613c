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

"""Schema and semantic validation of APISIX gateway resource configurations."""

from .exceptions import (
    ConfigValidatorError,
    ConfigurationError,
    SchemaPathNotFoundError,
    SchemaViolation,
    SemanticViolation,
    UnsupportedVersionError,
    ValidationError,
)
from .models.json_schema_loader import ResolvedSchema, resolve_resource_schema
from .models.resource import ProxyVersion, ResourceKind, StorageSink
from .parsers.data_validator import JsonSchemaValidator, ResourceSchemaValidator, ValidatorFactory
from .utils.identification import get_resource_identification

__version__ = "0.1.0"

__all__ = [
    "ConfigValidatorError",
    "ConfigurationError",
    "JsonSchemaValidator",
    "ProxyVersion",
    "ResolvedSchema",
    "ResourceKind",
    "ResourceSchemaValidator",
    "SchemaPathNotFoundError",
    "SchemaViolation",
    "SemanticViolation",
    "StorageSink",
    "UnsupportedVersionError",
    "ValidationError",
    "ValidatorFactory",
    "get_resource_identification",
    "resolve_resource_schema",
]
