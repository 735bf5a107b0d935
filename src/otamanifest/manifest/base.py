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

"""Variant-agnostic storage and field lookup for raw manifest adapters.

Concrete adapters never index the payload directly. Every typed read goes
through ``BaseRawManifestAdapter.get_typed`` (or ``get_required``, which
delegates to it) so malformed-field errors carry the same diagnostics no
matter which variant raised them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Final, NoReturn, TypeAlias, TypeVar, cast, overload

from otamanifest.compat import override
from otamanifest.core.model_types import LogComponent
from otamanifest.json import freeze_json, summarize_value, thaw_json
from otamanifest.logging import structured_extra

from .errors import MalformedFieldError, ManifestPayloadTypeError, MissingFieldError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from otamanifest.core.model_types import ManifestVariant
    from otamanifest.json import FrozenJSON, FrozenMapping, JSONMapping

logger: logging.Logger = logging.getLogger("otamanifest.manifest")

T = TypeVar("T")

FieldKey: TypeAlias = "str | tuple[str, ...]"
ExpectedType: TypeAlias = "type | tuple[type, ...]"

TIMESTAMP_LABEL: Final[str] = "an ISO-8601 timestamp"

_EXPECTED_LABELS: Final[dict[type, str]] = {
    str: "a string",
    bool: "a boolean",
    int: "an integer",
    float: "a number",
    tuple: "an array",
    Mapping: "an object",
}
_MISSING: Final = object()


def field_name(key: FieldKey) -> str:
    """Return the diagnostic name of a top-level key or nested key path."""
    return key if isinstance(key, str) else ".".join(key)


def expected_label(expected: ExpectedType) -> str:
    """Return a readable description of the accepted type(s)."""
    types = expected if isinstance(expected, tuple) else (expected,)
    return " or ".join(_EXPECTED_LABELS.get(cls, cls.__name__) for cls in types)


def parse_iso8601(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing Z for UTC.

    Args:
        value: Timestamp text.

    Returns:
        Parsed datetime, or ``None`` when the text is not a valid timestamp.
    """
    text = value.strip()
    if text != value or not text:
        return None
    if text[-1] in "Zz":
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class BaseRawManifestAdapter:
    """Read-only holder of one frozen raw manifest payload.

    The payload is deep-copied into read-only mappings and tuples at
    construction, so the caller may keep mutating its own object without
    affecting the adapter, and adapters can be shared freely between threads.
    Construction never inspects individual fields.
    """

    __slots__ = ("_payload",)

    variant: ClassVar[ManifestVariant]

    def __init__(self, payload: Mapping[str, object]) -> None:
        """Freeze and take ownership of payload.

        Args:
            payload: Parsed, already authenticated manifest mapping.

        Raises:
            ManifestPayloadTypeError: If payload is not a mapping.
        """
        if not isinstance(payload, Mapping):
            raise ManifestPayloadTypeError(payload)
        object.__setattr__(self, "_payload", cast("FrozenMapping", freeze_json(payload)))

    @override
    def __setattr__(self, name: str, value: object) -> NoReturn:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @override
    def __repr__(self) -> str:
        keys = ", ".join(sorted(self._payload))
        return f"{type(self).__name__}(keys=[{keys}])"

    def _lookup(self, key: FieldKey) -> FrozenJSON | object:
        path = (key,) if isinstance(key, str) else key
        current: object = self._payload
        for part in path:
            if not isinstance(current, Mapping):
                return _MISSING
            mapping = cast("Mapping[str, object]", current)
            if part not in mapping:
                return _MISSING
            current = mapping[part]
        return current

    def has(self, key: FieldKey) -> bool:
        """Return whether key is present, even when its value is null.

        Args:
            key: Top-level key or a tuple path of nested keys.

        Returns:
            True when every segment of the path exists.
        """
        return self._lookup(key) is not _MISSING

    def get(self, key: FieldKey) -> FrozenJSON:
        """Return the stored value for key without coercion.

        Args:
            key: Top-level key or a tuple path of nested keys.

        Returns:
            The frozen stored value, or ``None`` when the key is absent.
        """
        value = self._lookup(key)
        return None if value is _MISSING else cast("FrozenJSON", value)

    @overload
    def get_typed(self, key: FieldKey, expected: type[T]) -> T | None: ...

    @overload
    def get_typed(self, key: FieldKey, expected: tuple[type, ...]) -> FrozenJSON: ...

    def get_typed(self, key: FieldKey, expected: ExpectedType) -> object:
        """Return the value for key checked against expected.

        Absent keys and explicit nulls both read as ``None``. Booleans never
        satisfy int or float; integers are widened when float is
        expected.

        Args:
            key: Top-level key or a tuple path of nested keys.
            expected: Accepted type or tuple of accepted types. Arrays are
                stored as tuple and objects as Mapping.

        Returns:
            The stored value, or ``None`` when absent or null.

        Raises:
            MalformedFieldError: If the value is present but of another type.
        """
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return None
        return self._coerce(key, value, expected)

    @overload
    def get_required(self, key: FieldKey, expected: type[T]) -> T: ...

    @overload
    def get_required(self, key: FieldKey, expected: tuple[type, ...]) -> FrozenJSON: ...

    def get_required(self, key: FieldKey, expected: ExpectedType) -> object:
        """Return a required value, separating missing from malformed.

        Args:
            key: Top-level key or a tuple path of nested keys.
            expected: Accepted type or tuple of accepted types.

        Returns:
            The stored value.

        Raises:
            MissingFieldError: If the key is absent.
            MalformedFieldError: If the key is present but null or of another type.
        """
        value = self._lookup(key)
        if value is _MISSING:
            raise MissingFieldError(field_name(key))
        if value is None:
            self._malformed(key, expected_label(expected), None)
        return self.get_typed(key, expected)

    def get_timestamp(self, key: FieldKey) -> str:
        """Return a required ISO-8601 timestamp string exactly as stored.

        Raises:
            MissingFieldError: If the key is absent.
            MalformedFieldError: If the value is not a parseable timestamp.
        """
        value = self.get_required(key, str)
        if parse_iso8601(value) is None:
            self._malformed(key, TIMESTAMP_LABEL, value)
        return value

    def probe(self, keys: Sequence[str]) -> tuple[str, FrozenJSON] | None:
        """Return the first of keys holding a non-null value.

        Args:
            keys: Candidate top-level keys in priority order.

        Returns:
            ``(key, value)`` for the winning key, or ``None`` if none is set.
        """
        for key in keys:
            value = self._lookup(key)
            if value is not _MISSING and value is not None:
                return key, cast("FrozenJSON", value)
        return None

    def to_json(self) -> JSONMapping:
        """Return a mutable deep copy of the wrapped payload."""
        return cast("JSONMapping", thaw_json(self._payload))

    def _coerce(self, key: FieldKey, value: object, expected: ExpectedType) -> object:
        types = expected if isinstance(expected, tuple) else (expected,)
        if isinstance(value, bool):
            if bool in types:
                return value
        elif isinstance(value, types):
            return value
        elif float in types and isinstance(value, int):
            return float(value)
        self._malformed(key, expected_label(expected), value)

    def _malformed(self, key: FieldKey, expected: str, value: object) -> NoReturn:
        name = field_name(key)
        logger.debug(
            "Malformed manifest field %s",
            name,
            extra=structured_extra(component=LogComponent.ADAPTER, variant=self.variant, field=name),
        )
        raise MalformedFieldError(name, expected, summarize_value(value))


__all__ = [
    "TIMESTAMP_LABEL",
    "BaseRawManifestAdapter",
    "ExpectedType",
    "FieldKey",
    "expected_label",
    "field_name",
    "parse_iso8601",
]
