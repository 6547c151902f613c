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

"""Identifiers for gateway releases, resource kinds and storage sinks."""

from typing import List


class ProxyVersion:
    """Supported APISIX release lines. Each one ships its own schema document."""

    V3_13 = "3.13"
    V3_11 = "3.11"
    V3_3 = "3.3"
    V3_2 = "3.2"

    @classmethod
    def get_all_versions(cls) -> List[str]:
        """Return supported versions, newest first."""
        return [cls.V3_13, cls.V3_11, cls.V3_3, cls.V3_2]


class ResourceKind:
    """Resource categories. The value is the key under ``main`` in a schema document."""

    ROUTE = "route"
    SERVICE = "service"
    UPSTREAM = "upstream"
    SSL = "ssl"
    CONSUMER = "consumer"
    CONSUMER_GROUP = "consumer_group"
    PLUGIN_CONFIG = "plugin_config"
    GLOBAL_RULE = "global_rule"
    PLUGIN_METADATA = "plugin_metadata"
    STREAM_ROUTE = "stream_route"

    @classmethod
    def get_all_types(cls) -> List[str]:
        return [
            cls.ROUTE,
            cls.SERVICE,
            cls.UPSTREAM,
            cls.SSL,
            cls.CONSUMER,
            cls.CONSUMER_GROUP,
            cls.PLUGIN_CONFIG,
            cls.GLOBAL_RULE,
            cls.PLUGIN_METADATA,
            cls.STREAM_ROUTE,
        ]

    @staticmethod
    def schema_path(kind: str) -> str:
        """Dotted path of a resource kind inside its version's document."""
        return f"main.{kind}"


class StorageSink:
    """Destination of a validated document.

    RUNTIME_STORE is the etcd store synchronized to the running gateway and
    rejects properties the schema does not declare. DRAFT_STORE is the
    control-plane database and tolerates storage bookkeeping fields.
    """

    RUNTIME_STORE = "etcd"
    DRAFT_STORE = "database"

    @classmethod
    def get_all_sinks(cls) -> List[str]:
        return [cls.RUNTIME_STORE, cls.DRAFT_STORE]
