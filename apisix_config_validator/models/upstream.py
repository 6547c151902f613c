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

"""Upstream view consumed by the semantic checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class UpstreamNode:
    host: str
    port: Optional[int] = None
    weight: int = 1
    priority: int = 0


@dataclass
class UpstreamDefinition:
    """Fields of an upstream that semantic checks look at.

    ``nodes`` is None when the document carries no node list at all, which is
    the case for upstreams resolved through service discovery. An explicit
    empty node list stays an empty list.
    """

    nodes: Optional[List[UpstreamNode]] = None
    type: str = ""
    hash_on: str = ""
    key: str = ""
    pass_host: str = ""
    upstream_host: str = ""
    service_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> UpstreamDefinition:
        raw_nodes = data.get("nodes")
        nodes: Optional[List[UpstreamNode]] = None
        if isinstance(raw_nodes, list):
            nodes = [_node_from_dict(item) for item in raw_nodes if isinstance(item, dict)]
        elif isinstance(raw_nodes, dict):
            nodes = [_node_from_address(address, weight) for address, weight in raw_nodes.items()]

        return cls(
            nodes=nodes,
            type=data.get("type") or "",
            hash_on=data.get("hash_on") or "",
            key=data.get("key") or "",
            pass_host=data.get("pass_host") or "",
            upstream_host=data.get("upstream_host") or "",
            service_name=data.get("service_name") or "",
        )


def _node_from_dict(item: Dict[str, Any]) -> UpstreamNode:
    return UpstreamNode(
        host=item.get("host", ""),
        port=item.get("port"),
        weight=item.get("weight", 1),
        priority=item.get("priority", 0),
    )


def split_node_address(address: str) -> Tuple[str, Optional[int]]:
    """Split a map-form node key such as ``127.0.0.1:80`` or ``[::1]:80``."""
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        port = rest[1:] if rest.startswith(":") else ""
        return host, int(port) if port.isdigit() else None

    if address.count(":") == 1:
        host, port = address.split(":")
        return host, int(port) if port.isdigit() else None
    return address, None


def _node_from_address(address: str, weight: Any) -> UpstreamNode:
    host, port = split_node_address(address)
    return UpstreamNode(host=host, port=port, weight=weight if isinstance(weight, int) else 1)
