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

"""JSON Schema repository and resource schema resolution.

Every supported gateway version ships one document at
``schema/<version>/schema.json``. Resource fragments live under dotted paths
such as ``main.route``. Documents are loaded once into a read-only
repository; resolution copies the requested fragment, applies the storage
sink's strictness and compiles it.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from ..config import validator_config
from ..exceptions import ConfigurationError, SchemaPathNotFoundError, UnsupportedVersionError
from ..utils.format_version import parse_proxy_version
from .resource import ProxyVersion, StorageSink

logger = logging.getLogger(__name__)


SCHEMA_FILE_NAME = "schema.json"


def get_default_schema_dir() -> Path:
    """Directory holding the per-version documents."""
    if validator_config.schema_dir:
        return Path(validator_config.schema_dir)
    return Path(__file__).parent.parent / "schema"


def get_schema_path(version: str, schema_dir: Optional[Path] = None) -> Path:
    """Get the path to the schema document of a gateway version.

    Args:
        version: Gateway version (e.g., "3.11")
        schema_dir: Root directory of the documents, packaged ones by default

    Returns:
        Path to the schema file
    """
    if schema_dir is None:
        schema_dir = get_default_schema_dir()
    return Path(schema_dir) / version / SCHEMA_FILE_NAME


def _load_document(schema_path: Path) -> dict:
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found: {schema_path}. "
            f"Expected location: {schema_path.parent}"
        )

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(
            f"Invalid JSON in schema file {schema_path}: {e.msg}",
            e.doc,
            e.pos,
        ) from e

    if not isinstance(document, dict):
        raise ValueError(f"Schema file {schema_path} must contain a JSON object")
    return document


class SchemaRepository:
    """Read-only store of one schema document per supported gateway version."""

    def __init__(self, documents: Mapping[str, dict]):
        self._documents = MappingProxyType(dict(documents))

    @classmethod
    def load(cls, schema_dir: Optional[Path] = None) -> "SchemaRepository":
        """Load the document of every supported version.

        Raises:
            FileNotFoundError: If a supported version has no document
            json.JSONDecodeError: If a document is invalid JSON
        """
        documents = {}
        for version in ProxyVersion.get_all_versions():
            schema_path = get_schema_path(version, schema_dir)
            logger.debug(f"Loading schema document for version {version}: {schema_path}")
            documents[version] = _load_document(schema_path)
        return cls(documents)

    @property
    def versions(self) -> Tuple[str, ...]:
        return tuple(self._documents.keys())

    def _lookup(self, version: str) -> dict:
        proxy_version = parse_proxy_version(version)
        document = self._documents.get(proxy_version)
        if document is None:
            raise UnsupportedVersionError(f"No schema document loaded for gateway version '{version}'")
        return document

    def get_document(self, version: str) -> dict:
        """Return a private copy of the document of *version*.

        Raises:
            UnsupportedVersionError: If no document exists for the version
        """
        return copy.deepcopy(self._lookup(version))

    def get_fragment(self, version: str, path: str) -> Any:
        """Navigate the dot-delimited *path* inside the document of *version*.

        The returned fragment is shared; callers must copy before changing it.

        Raises:
            UnsupportedVersionError: If no document exists for the version
            SchemaPathNotFoundError: If any segment of the path is missing
        """
        node: Any = self._lookup(version)
        if not isinstance(path, str) or not path:
            raise SchemaPathNotFoundError(f"Schema path must be a non-empty string, got: {path!r}")

        for segment in path.split("."):
            if not isinstance(node, dict) or segment not in node:
                raise SchemaPathNotFoundError(
                    f"Schema path '{path}' not found for gateway version {version}: "
                    f"missing segment '{segment}'"
                )
            node = node[segment]
        return node


# Global repository instance
schema_repository = SchemaRepository.load()


@dataclass(frozen=True)
class ResolvedSchema:
    """Compiled schema for one (version, kind, sink) triple."""

    version: str
    kind: str
    path: str
    sink: str
    schema_text: str
    schema: Dict[str, Any] = field(repr=False, compare=False)
    validator: Draft7Validator = field(repr=False, compare=False)


def apply_sink_transform(fragment: Any, sink: str) -> Any:
    """Return a copy of *fragment* with the strictness of *sink* applied.

    The runtime store rejects top-level properties the fragment does not
    declare, unless the fragment sets ``additionalProperties`` itself. The
    draft store leaves the fragment as it is.
    """
    if sink not in StorageSink.get_all_sinks():
        raise ConfigurationError(
            f"Unknown storage sink: '{sink}'. Valid sinks: {StorageSink.get_all_sinks()}"
        )

    schema = copy.deepcopy(fragment)
    if sink == StorageSink.RUNTIME_STORE and isinstance(schema, dict):
        if "properties" in schema and "additionalProperties" not in schema:
            schema["additionalProperties"] = False
    return schema


def _compile(version: str, kind: str, path: str, sink: str, repository: SchemaRepository) -> ResolvedSchema:
    fragment = repository.get_fragment(version, path)
    schema = apply_sink_transform(fragment, sink)

    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as exc:
        raise ConfigurationError(
            f"Schema at '{path}' for gateway version {version} is not a valid JSON Schema: {exc.message}"
        ) from exc

    logger.debug(f"Resolved schema {path} (kind={kind}, version={version}, sink={sink})")
    return ResolvedSchema(
        version=version,
        kind=kind,
        path=path,
        sink=sink,
        schema_text=json.dumps(schema, sort_keys=True),
        schema=schema,
        validator=Draft7Validator(schema),
    )


@lru_cache(maxsize=None)
def _resolve_cached(version: str, kind: str, path: str, sink: str) -> ResolvedSchema:
    return _compile(version, kind, path, sink, schema_repository)


def resolve_resource_schema(
    version: str,
    kind: str,
    path: str,
    sink: str,
    repository: Optional[SchemaRepository] = None,
) -> ResolvedSchema:
    """Resolve the schema of a resource for a gateway version and storage sink.

    Args:
        version: Gateway version (e.g., "3.11")
        kind: Resource kind, carried for diagnostics
        path: Dotted path of the fragment (e.g., "main.route")
        sink: Storage sink selecting the strictness variant
        repository: Repository to read from, the global one by default

    Returns:
        ResolvedSchema ready for validation

    Raises:
        UnsupportedVersionError: If the version has no document
        SchemaPathNotFoundError: If the path is missing from the document
        ConfigurationError: If the sink is unknown
    """
    proxy_version = parse_proxy_version(version)
    if repository is None and validator_config.cache_enabled:
        if not isinstance(path, str):
            raise SchemaPathNotFoundError(f"Schema path must be a non-empty string, got: {path!r}")
        return _resolve_cached(proxy_version, kind, path, sink)
    return _compile(proxy_version, kind, path, sink, repository or schema_repository)


def clear_cache() -> None:
    """Clear the resolved schema cache. Useful for testing."""
    _resolve_cached.cache_clear()
