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

"""Semantic rules for gateway resources.

These are cross-field rules that JSON Schema cannot express (e.g. "a
``node`` pass_host needs exactly one node"). They only run on documents that
already passed structural validation. Each rule raises the first violation
it finds.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from jsonschema.exceptions import best_match

from ..exceptions import (
    InvalidHashKeyError,
    InvalidHashOnError,
    InvalidNodeCountError,
    InvalidRemoteAddrError,
    MissingKeyError,
    MissingUpstreamHostError,
    VarsGrammarError,
)
from .json_schema_loader import resolve_resource_schema
from .resource import ResourceKind, StorageSink
from .upstream import UpstreamDefinition


SemanticCheck = Callable[[Dict[str, Any], Optional[str]], None]

# lua-resty-expr comparison operators
VARS_OPERATORS = frozenset({"==", "~=", ">", ">=", "<", "<=", "~~", "~*", "in", "has", "ipmatch"})
NEGATION_OPERATOR = "!"

HASH_ON_CONSUMER = "consumer"
HASH_ON_VALUES = (HASH_ON_CONSUMER, "vars", "header", "cookie")
DEFAULT_HASH_ON = "vars"
HASH_BALANCER_TYPES = frozenset({"chash"})

UPSTREAM_HASH_VARS_SCHEMA_PATH = "main.upstream_hash_vars_schema"


def _join(base_path: str, token: Any) -> str:
    return f"{base_path}/{token}"


def _is_operator(operator: Any) -> bool:
    return isinstance(operator, str) and operator.lower() in VARS_OPERATORS


# -------------------------
# Filter expressions (vars)
# -------------------------


def validate_var_item(item: Any, index: int = 0, base_path: str = "/vars") -> None:
    """Check one ``[subject, operator, value]`` or ``[subject, "!", operator, value]`` item."""
    path = _join(base_path, index)

    if not isinstance(item, (list, tuple)):
        raise VarsGrammarError(
            f"vars[{index}] must be an array, got {type(item).__name__}", field=path, index=index
        )

    if len(item) == 3:
        subject, operator, value = item
    elif len(item) == 4:
        subject, negation, operator, value = item
        if negation != NEGATION_OPERATOR:
            raise VarsGrammarError(
                f"vars[{index}]: second element of a 4-element expression must be "
                f"'{NEGATION_OPERATOR}', got {negation!r}",
                field=path,
                index=index,
            )
    else:
        raise VarsGrammarError(
            f"vars[{index}] must have 3 or 4 elements, got {len(item)}", field=path, index=index
        )

    if not isinstance(subject, str) or not subject:
        raise VarsGrammarError(
            f"vars[{index}]: subject must be a non-empty string, got {subject!r}", field=path, index=index
        )
    if not _is_operator(operator):
        raise VarsGrammarError(
            f"vars[{index}]: unsupported operator {operator!r}. "
            f"Valid operators: {sorted(VARS_OPERATORS)}",
            field=path,
            index=index,
        )
    if value is None:
        raise VarsGrammarError(f"vars[{index}]: value must not be null", field=path, index=index)


def check_vars(vars_: Sequence[Any], base_path: str = "/vars") -> None:
    if not isinstance(vars_, (list, tuple)):
        raise VarsGrammarError(f"vars must be an array, got {type(vars_).__name__}", field=base_path)
    for index, item in enumerate(vars_):
        validate_var_item(item, index, base_path)


# -------------------------
# Upstream rules
# -------------------------


def chash_key_schema_check(upstream: UpstreamDefinition, version: Optional[str], base_path: str = "") -> None:
    """Check that the consistent-hash key fits the ``hash_on`` source.

    A ``vars`` key must also match the vars-subject schema of the gateway
    version, so resolution errors for that version propagate from here.
    """
    hash_on = upstream.hash_on or DEFAULT_HASH_ON
    if hash_on == HASH_ON_CONSUMER:
        return

    if hash_on not in HASH_ON_VALUES:
        raise InvalidHashOnError(
            f"invalid hash_on type: {hash_on!r}. Valid types: {list(HASH_ON_VALUES)}",
            field=_join(base_path, "hash_on"),
        )

    if not upstream.key:
        raise MissingKeyError(
            f"upstream with hash_on '{hash_on}' requires a non-empty key", field=_join(base_path, "key")
        )

    if hash_on == "vars":
        resolved = resolve_resource_schema(
            version, ResourceKind.UPSTREAM, UPSTREAM_HASH_VARS_SCHEMA_PATH, StorageSink.DRAFT_STORE
        )
        error = best_match(resolved.validator.iter_errors(upstream.key))
        if error is not None:
            raise InvalidHashKeyError(
                f"key {upstream.key!r} is not a valid vars subject: {error.message}",
                field=_join(base_path, "key"),
            )


def check_upstream(upstream: Optional[UpstreamDefinition], version: Optional[str] = None, base_path: str = "") -> None:
    """Check the node set and host forwarding policy of an upstream."""
    if upstream is None:
        return

    if upstream.pass_host == "node" and upstream.nodes is not None and len(upstream.nodes) != 1:
        raise InvalidNodeCountError(
            f"pass_host 'node' requires exactly one upstream node, got {len(upstream.nodes)}",
            field=_join(base_path, "nodes"),
        )

    if upstream.pass_host == "rewrite" and not upstream.upstream_host:
        raise MissingUpstreamHostError(
            "pass_host 'rewrite' requires a non-empty upstream_host", field=_join(base_path, "upstream_host")
        )

    if upstream.type in HASH_BALANCER_TYPES:
        hash_on = upstream.hash_on or DEFAULT_HASH_ON
        if hash_on != HASH_ON_CONSUMER and not upstream.key:
            raise MissingKeyError(
                f"upstream of type '{upstream.type}' requires a key", field=_join(base_path, "key")
            )
        chash_key_schema_check(upstream, version, base_path)


# -------------------------
# Stream route rules
# -------------------------


def check_remote_addr(remote_addrs: Any, base_path: str = "/remote_addr") -> None:
    if isinstance(remote_addrs, str):
        remote_addrs = [remote_addrs]

    for index, addr in enumerate(remote_addrs):
        if not isinstance(addr, str) or not addr.strip():
            raise InvalidRemoteAddrError(
                f"remote_addr[{index}] must be a non-empty address", field=_join(base_path, index), index=index
            )


# -------------------------
# Per-kind rule table
# -------------------------


def _vars_semantics(config: Dict[str, Any], version: Optional[str]) -> None:
    vars_ = config.get("vars")
    if vars_ is not None:
        check_vars(vars_)


def _upstream_of(config: Dict[str, Any], embedded: bool) -> Tuple[Optional[UpstreamDefinition], str]:
    if not embedded:
        return UpstreamDefinition.from_dict(config), ""
    raw = config.get("upstream")
    if not isinstance(raw, dict):
        return None, "/upstream"
    return UpstreamDefinition.from_dict(raw), "/upstream"


def _hash_key_semantics(*, embedded: bool) -> SemanticCheck:
    def _check(config: Dict[str, Any], version: Optional[str]) -> None:
        upstream, base_path = _upstream_of(config, embedded)
        if upstream is None or not upstream.hash_on:
            return
        chash_key_schema_check(upstream, version, base_path)

    return _check


def _topology_semantics(*, embedded: bool) -> SemanticCheck:
    def _check(config: Dict[str, Any], version: Optional[str]) -> None:
        upstream, base_path = _upstream_of(config, embedded)
        check_upstream(upstream, version, base_path)

    return _check


def _remote_addr_semantics(config: Dict[str, Any], version: Optional[str]) -> None:
    remote_addr = config.get("remote_addr")
    if remote_addr is not None:
        check_remote_addr(remote_addr)


_EMBEDDED_UPSTREAM_CHECKS = (
    _hash_key_semantics(embedded=True),
    _topology_semantics(embedded=True),
)

SEMANTIC_CHECKS: Dict[str, Tuple[SemanticCheck, ...]] = {
    ResourceKind.ROUTE: (_vars_semantics, *_EMBEDDED_UPSTREAM_CHECKS),
    ResourceKind.SERVICE: _EMBEDDED_UPSTREAM_CHECKS,
    ResourceKind.UPSTREAM: (
        _hash_key_semantics(embedded=False),
        _topology_semantics(embedded=False),
    ),
    ResourceKind.SSL: (),
    ResourceKind.CONSUMER: (),
    ResourceKind.CONSUMER_GROUP: (),
    ResourceKind.PLUGIN_CONFIG: (),
    ResourceKind.GLOBAL_RULE: (),
    ResourceKind.PLUGIN_METADATA: (),
    ResourceKind.STREAM_ROUTE: (*_EMBEDDED_UPSTREAM_CHECKS, _remote_addr_semantics),
}


def get_semantic_checks(kind: str) -> Tuple[SemanticCheck, ...]:
    """Get semantic check functions for a resource kind, in execution order.

    Raises:
        ValueError: If the kind is not a known resource kind
    """
    try:
        return SEMANTIC_CHECKS[kind]
    except KeyError:
        raise ValueError(f"Unknown resource kind: {kind}") from None


def run_semantic_checks(config: Dict[str, Any], kind: str, version: Optional[str]) -> None:
    """Run the checks of *kind* in order; the first violation is raised."""
    for check in get_semantic_checks(kind):
        check(config, version)
