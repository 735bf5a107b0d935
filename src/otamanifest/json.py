# Copyright 2025 CrownOps Engineering
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

"""Canonical JSON types and helpers used across otamanifest.

Raw manifests arrive as parsed JSON trees. Adapters keep them in a frozen
form (read-only mappings and tuples) so a wrapped payload can be shared
between threads and never changes underneath a consumer. This module has no
dependencies on logging or configuration to keep the import graph acyclic.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final, TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "SUMMARY_MAX_LENGTH",
    "FrozenJSON",
    "FrozenMapping",
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "freeze_json",
    "normalize_enums_for_json",
    "summarize_value",
    "thaw_json",
    "type_label",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]
JSONList = list[JsonValue]

FrozenMapping: TypeAlias = "Mapping[str, FrozenJSON]"
FrozenJSON: TypeAlias = "str | int | float | bool | None | tuple[FrozenJSON, ...] | FrozenMapping"

SUMMARY_MAX_LENGTH: Final[int] = 60

_TYPE_LABELS: Final[dict[type, str]] = {
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
    tuple: "array",
    list: "array",
    dict: "object",
    MappingProxyType: "object",
    type(None): "null",
}


def freeze_json(value: object) -> FrozenJSON:
    """Return a deep, read-only copy of a parsed JSON value.

    Mappings become ``MappingProxyType`` views over fresh dictionaries and
    lists or tuples become tuples. Scalars are returned as-is. Mapping keys
    are converted to strings, matching what a JSON decoder produces.

    Args:
        value: Parsed JSON value.

    Returns:
        Frozen equivalent of value sharing no mutable state with it.
    """
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return MappingProxyType({str(key): freeze_json(item) for key, item in mapping.items()})
    if isinstance(value, (list, tuple)):
        items = cast("list[object] | tuple[object, ...]", value)
        return tuple(freeze_json(item) for item in items)
    return cast("FrozenJSON", value)


def thaw_json(value: object) -> JSONValue:
    """Return a mutable deep copy of a frozen JSON value.

    Args:
        value: Value previously produced by ``freeze_json`` (or any JSON tree).

    Returns:
        Plain ``dict``/``list`` structure safe to hand to callers.
    """
    if isinstance(value, Mapping):
        mapping = cast("Mapping[str, object]", value)
        return {key: thaw_json(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple)):
        items = cast("list[object] | tuple[object, ...]", value)
        return [thaw_json(item) for item in items]
    return cast("JSONValue", value)


def type_label(value: object) -> str:
    """Return the JSON type name used in field diagnostics."""
    for cls in type(value).__mro__:
        label = _TYPE_LABELS.get(cls)
        if label is not None:
            return label
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def summarize_value(value: object, *, limit: int = SUMMARY_MAX_LENGTH) -> str:
    """Return a bounded, log-safe summary of an arbitrary payload value.

    Args:
        value: Value found in a manifest payload.
        limit: Maximum number of characters kept from the value's ``repr``.

    Returns:
        ``"<type> <repr>"`` with the ``repr`` truncated to ``limit`` characters.
    """
    rendered = repr(thaw_json(value))
    if len(rendered) > limit:
        rendered = f"{rendered[: max(limit - 3, 0)]}..."
    return f"{type_label(value)} {rendered}"


def normalize_enums_for_json(value: object) -> JSONValue:
    """Recursively convert Enum keys/values to their string payloads for JSON serialisation.

    Args:
        value: Arbitrary Python object hierarchy that may include ``Enum``
            instances, mappings, or sequences.

    Returns:
        A JSON-compatible structure with all enum keys and values replaced
        by their ``.value`` payloads.
    """

    def _convert(obj: object) -> JSONValue:
        if isinstance(obj, Enum):
            return cast("JSONValue", obj.value)
        if isinstance(obj, Mapping):
            mapping_obj = cast("Mapping[object, object]", obj)
            result: dict[str, JSONValue] = {}
            for key, raw_val in mapping_obj.items():
                norm_key = str(key.value) if isinstance(key, Enum) else str(key)
                result[norm_key] = _convert(raw_val)
            return cast("JSONValue", result)
        if isinstance(obj, (list, tuple)):
            items = cast("list[object] | tuple[object, ...]", obj)
            return cast("JSONValue", [_convert(item) for item in items])
        if isinstance(obj, (str, int, float, bool)) or obj is None:
            return cast("JSONValue", obj)
        return cast("JSONValue", str(obj))

    return _convert(value)
