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

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from jsonschema.exceptions import best_match

from ..exceptions import ConfigurationError, SchemaPathNotFoundError, SchemaViolation
from ..models.json_schema_loader import ResolvedSchema, resolve_resource_schema
from ..models.resource import ResourceKind, StorageSink
from ..models.resource_semantics import get_semantic_checks

logger = logging.getLogger(__name__)


def parse_resource_document(raw_document: Any) -> Any:
    """Decode a raw JSON document. Already-decoded values are returned as is."""
    if isinstance(raw_document, (bytes, bytearray)):
        try:
            raw_document = raw_document.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SchemaViolation(f"Document is not valid UTF-8: {exc}") from exc

    if isinstance(raw_document, str):
        try:
            return json.loads(raw_document)
        except json.JSONDecodeError as exc:
            raise SchemaViolation(
                f"Invalid JSON document: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            ) from exc
        except RecursionError as exc:
            raise SchemaViolation("Document nesting too deep") from exc
    return raw_document


def resource_kind_from_path(path: str) -> str:
    """Derive the resource kind from the trailing segment of a schema path."""
    # example: 'main.stream_route' -> 'stream_route'

    if not path or not isinstance(path, str):
        raise SchemaPathNotFoundError(f"Schema path must be a non-empty string, got: {path!r}")

    kind = path.rsplit(".", 1)[-1].strip()
    if kind not in ResourceKind.get_all_types():
        raise SchemaPathNotFoundError(
            f"Cannot derive resource kind from schema path '{path}'. "
            f"Valid kinds: {ResourceKind.get_all_types()}"
        )
    return kind


def _json_pointer(tokens) -> str:
    return "".join(f"/{str(t).replace('~', '~0').replace('/', '~1')}" for t in tokens)


class JsonSchemaValidator:
    """Validator bound to one gateway version, resource kind and storage sink.

    ``validate`` runs JSON Schema evaluation first and the kind's semantic
    rules only on structurally valid documents. Instances hold no mutable
    state and can be shared between threads.
    """

    def __init__(
        self,
        version: str,
        kind: str,
        path: str,
        options: Optional[Mapping[str, Any]] = None,
        sink: str = StorageSink.RUNTIME_STORE,
    ):
        if kind not in ResourceKind.get_all_types():
            raise ConfigurationError(
                f"Unknown resource kind: '{kind}'. Valid kinds: {ResourceKind.get_all_types()}"
            )
        self._resolved: ResolvedSchema = resolve_resource_schema(version, kind, path, sink)
        self._semantic_checks = get_semantic_checks(kind)
        self._options = MappingProxyType(dict(options or {}))

    @property
    def version(self) -> str:
        return self._resolved.version

    @property
    def kind(self) -> str:
        return self._resolved.kind

    @property
    def sink(self) -> str:
        return self._resolved.sink

    @property
    def schema_text(self) -> str:
        return self._resolved.schema_text

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options

    def validate_structure(self, document: Any) -> None:
        """Raise SchemaViolation for the most relevant structural error, if any."""
        error = best_match(self._resolved.validator.iter_errors(document))
        if error is None:
            return
        raise SchemaViolation(
            f"{self.kind} schema validation failed: {error.message} (constraint '{error.validator}')",
            field=_json_pointer(error.absolute_path),
        )

    def validate(self, raw_document: Any) -> None:
        """Validate a raw document; raise the first violation found."""
        document = parse_resource_document(raw_document)
        self.validate_structure(document)
        for check in self._semantic_checks:
            check(document, self.version)
        logger.debug(f"Validated {self.kind} document (version={self.version}, sink={self.sink})")


class ResourceSchemaValidator:
    """Validator for callers that only know the schema path.

    The kind is taken from the path and the runtime store's strictness
    applies, since validation gates promotion toward the running gateway.
    """

    def __init__(self, version: str, path: str, options: Optional[Mapping[str, Any]] = None):
        kind = resource_kind_from_path(path)
        self._validator = JsonSchemaValidator(version, kind, path, options, StorageSink.RUNTIME_STORE)

    @property
    def kind(self) -> str:
        return self._validator.kind

    @property
    def version(self) -> str:
        return self._validator.version

    def validate(self, raw_document: Any) -> None:
        self._validator.validate(raw_document)


class ValidatorFactory:
    """Factory for creating validators."""

    @classmethod
    def get_validator(
        cls,
        version: str,
        kind: str,
        sink: str = StorageSink.RUNTIME_STORE,
        options: Optional[Dict[str, Any]] = None,
    ) -> JsonSchemaValidator:
        """Get validator for a resource kind at its standard schema path."""
        return JsonSchemaValidator(version, kind, ResourceKind.schema_path(kind), options, sink)

    @classmethod
    def get_validator_for_path(cls, version: str, path: str) -> ResourceSchemaValidator:
        return ResourceSchemaValidator(version, path)
