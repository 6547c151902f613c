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

import json

import pytest

from apisix_config_validator.exceptions import (
    ConfigurationError,
    SchemaPathNotFoundError,
    UnsupportedVersionError,
)
from apisix_config_validator.models.json_schema_loader import (
    SchemaRepository,
    apply_sink_transform,
    get_schema_path,
    resolve_resource_schema,
    schema_repository,
)
from apisix_config_validator.models.resource import ProxyVersion, ResourceKind, StorageSink


ALL_VERSIONS = ProxyVersion.get_all_versions()
ALL_KINDS = ResourceKind.get_all_types()


def test_packaged_documents_exist():
    for version in ALL_VERSIONS:
        assert get_schema_path(version).is_file()


def test_repository_holds_every_version():
    assert set(schema_repository.versions) == set(ALL_VERSIONS)


@pytest.mark.parametrize("version", ALL_VERSIONS)
@pytest.mark.parametrize("kind", ALL_KINDS)
@pytest.mark.parametrize("sink", StorageSink.get_all_sinks())
def test_every_kind_resolves(version, kind, sink):
    resolved = resolve_resource_schema(version, kind, ResourceKind.schema_path(kind), sink)

    assert resolved.version == version
    assert resolved.kind == kind
    assert resolved.sink == sink
    assert json.loads(resolved.schema_text) == resolved.schema


def test_runtime_store_rejects_undeclared_properties():
    resolved = resolve_resource_schema("3.11", ResourceKind.ROUTE, "main.route", StorageSink.RUNTIME_STORE)

    assert resolved.schema["additionalProperties"] is False


def test_draft_store_keeps_fragment_permissive():
    resolved = resolve_resource_schema("3.11", ResourceKind.ROUTE, "main.route", StorageSink.DRAFT_STORE)

    assert "additionalProperties" not in resolved.schema
    assert resolved.schema_text != resolve_resource_schema(
        "3.11", ResourceKind.ROUTE, "main.route", StorageSink.RUNTIME_STORE
    ).schema_text


def test_runtime_store_keeps_declared_additional_properties():
    resolved = resolve_resource_schema(
        "3.11", ResourceKind.PLUGIN_METADATA, "main.plugin_metadata", StorageSink.RUNTIME_STORE
    )

    assert resolved.schema["additionalProperties"] is True


def test_resolution_does_not_mutate_repository():
    resolve_resource_schema("3.13", ResourceKind.UPSTREAM, "main.upstream", StorageSink.RUNTIME_STORE)

    fragment = schema_repository.get_fragment("3.13", "main.upstream")
    assert "additionalProperties" not in fragment


def test_get_document_returns_private_copy():
    document = schema_repository.get_document("3.11")
    document["main"]["route"]["additionalProperties"] = False
    del document["main"]["upstream"]

    assert "additionalProperties" not in schema_repository.get_fragment("3.11", "main.route")
    assert "upstream" in schema_repository.get_document("3.11")["main"]


def test_version_spellings_share_one_document():
    resolved = resolve_resource_schema("v3.11.2", ResourceKind.ROUTE, "main.route", StorageSink.DRAFT_STORE)

    assert resolved.version == "3.11"


@pytest.mark.parametrize("version", ["invalid_version", "2.15", "3.12", ""])
def test_unsupported_version(version):
    with pytest.raises(UnsupportedVersionError):
        resolve_resource_schema(version, ResourceKind.ROUTE, "main.route", StorageSink.DRAFT_STORE)


@pytest.mark.parametrize("path", ["invalid.path", "main.unknown", "main.route.nope", ""])
def test_missing_schema_path(path):
    with pytest.raises(SchemaPathNotFoundError):
        resolve_resource_schema("3.11", ResourceKind.ROUTE, path, StorageSink.DRAFT_STORE)


def test_unknown_sink():
    with pytest.raises(ConfigurationError):
        resolve_resource_schema("3.11", ResourceKind.ROUTE, "main.route", "redis")


def test_ssl_protocols_only_from_3_3():
    for version in ("3.13", "3.11", "3.3"):
        assert "ssl_protocols" in schema_repository.get_fragment(version, "main.ssl.properties")
    assert "ssl_protocols" not in schema_repository.get_fragment("3.2", "main.ssl.properties")


def test_custom_repository():
    repository = SchemaRepository({
        "3.11": {"main": {"route": {"type": "object", "properties": {"uri": {"type": "string"}}}}},
    })

    resolved = resolve_resource_schema(
        "3.11", ResourceKind.ROUTE, "main.route", StorageSink.RUNTIME_STORE, repository=repository
    )

    assert resolved.schema == {
        "type": "object",
        "properties": {"uri": {"type": "string"}},
        "additionalProperties": False,
    }
    with pytest.raises(UnsupportedVersionError):
        repository.get_document("3.2")


def test_invalid_json_schema_is_configuration_error():
    repository = SchemaRepository({"3.11": {"main": {"route": {"type": 12}}}})

    with pytest.raises(ConfigurationError):
        resolve_resource_schema("3.11", ResourceKind.ROUTE, "main.route", StorageSink.DRAFT_STORE, repository)


def test_repository_load_from_directory(tmp_path):
    for version in ALL_VERSIONS:
        (tmp_path / version).mkdir()
        (tmp_path / version / "schema.json").write_text(json.dumps({"main": {"version": version}}))

    repository = SchemaRepository.load(tmp_path)

    assert repository.get_fragment("3.3", "main.version") == "3.3"


def test_repository_load_missing_document(tmp_path):
    with pytest.raises(FileNotFoundError):
        SchemaRepository.load(tmp_path)


def test_apply_sink_transform_ignores_non_object_fragments():
    fragment = {"type": "string", "pattern": "^arg_"}

    assert apply_sink_transform(fragment, StorageSink.RUNTIME_STORE) == fragment
    assert apply_sink_transform(fragment, StorageSink.RUNTIME_STORE) is not fragment
