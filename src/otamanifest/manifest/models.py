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

"""Pydantic model for validated, persistable manifest snapshots.

Adapters are discarded after each update cycle. When a client needs to keep
what it learned from a manifest (for example to remember the running
update), it stores a snapshot built from the adapter's read contract rather
than the adapter or its raw payload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, cast

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from otamanifest._internal.exceptions import OtaManifestValidationError
from otamanifest.compat import NotRequired, TypedDict
from otamanifest.core.model_types import LogComponent, ManifestVariant
from otamanifest.json import JSONValue, thaw_json
from otamanifest.logging import structured_extra

from .versioning import (
    CURRENT_SNAPSHOT_VERSION,
    InvalidSnapshotVersionTypeError,
    SnapshotVersion,
    SnapshotVersionError,
    UnsupportedSnapshotVersionError,
    ensure_current_snapshot_version,
)

if TYPE_CHECKING:
    from .behavior import RawManifestBehavior

logger: logging.Logger = logging.getLogger("otamanifest.snapshot")

STRICT_MODEL_CONFIG: ConfigDict = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


def alias_field(
    camel_name: str,
    *,
    default: object = ...,
    default_factory: Callable[[], object] | None = None,
) -> Any:  # noqa: ANN401  # JUSTIFIED: Must return Any to work with Pydantic field annotations
    """Return a Field whose validation and serialization alias is ``camel_name``.

    Args:
        camel_name: Key used in the persisted snapshot.
        default: Default value for the field (use ... for required fields).
        default_factory: Factory function to generate default values.

    Returns:
        FieldInfo exposing a snake_case attribute for a camelCase key.
    """
    aliases = AliasChoices(camel_name)
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            validation_alias=aliases,
            serialization_alias=camel_name,
        )
    return Field(
        default=default,
        validation_alias=aliases,
        serialization_alias=camel_name,
    )


class SnapshotPayload(TypedDict):
    """Plain-mapping form of a snapshot as written to storage."""

    schemaVersion: SnapshotVersion
    variant: str
    releaseID: str
    commitTime: str
    bundledAssets: NotRequired[list[JSONValue]]
    runtimeVersion: NotRequired[JSONValue]
    bundleKey: NotRequired[str]
    assetUrlOverride: NotRequired[str]


class ManifestSnapshotModel(BaseModel):
    """Validated manifest fields, independent of the source variant.

    Attributes:
        schemaVersion: Snapshot schema version.
        variant: Variant of the manifest the snapshot was taken from.
        releaseID: Opaque release identifier.
        commitTime: ISO-8601 commit timestamp, as stored in the manifest.
        bundledAssets: Bundled asset descriptors; absent when the manifest
            declared none, empty when it declared an empty list.
        runtimeVersion: Runtime version value, uninterpreted.
        bundleKey: Declared bundle key.
        assetUrlOverride: Asset base URL override.
    """

    model_config: ClassVar[ConfigDict] = STRICT_MODEL_CONFIG

    schema_version: SnapshotVersion = alias_field("schemaVersion", default=CURRENT_SNAPSHOT_VERSION)
    variant: ManifestVariant
    release_id: str = alias_field("releaseID")
    commit_time: str = alias_field("commitTime")
    bundled_assets: list[JSONValue] | None = alias_field("bundledAssets", default=None)
    runtime_version: JSONValue = alias_field("runtimeVersion", default=None)
    bundle_key: str | None = alias_field("bundleKey", default=None)
    asset_url_override: str | None = alias_field("assetUrlOverride", default=None)


class SnapshotValidationError(OtaManifestValidationError):
    """Validation error for snapshot payloads.

    Attributes:
        validation_error: The underlying Pydantic ValidationError.
    """

    def __init__(self, validation_error: ValidationError) -> None:
        super().__init__(str(validation_error))
        self.validation_error = validation_error


def snapshot_from_adapter(adapter: RawManifestBehavior) -> ManifestSnapshotModel:
    """Read every contract field of ``adapter`` into a snapshot.

    Field errors raised by the adapter propagate unchanged, so a snapshot
    only exists for manifests whose required fields are valid.

    Args:
        adapter: Any object implementing ``RawManifestBehavior``.

    Returns:
        Frozen snapshot model.
    """
    bundled = adapter.bundled_assets()
    model = ManifestSnapshotModel(
        variant=adapter.variant,
        release_id=adapter.release_id(),
        commit_time=adapter.commit_time(),
        bundled_assets=None if bundled is None else cast("list[JSONValue]", thaw_json(bundled)),
        runtime_version=thaw_json(adapter.runtime_version()),
        bundle_key=adapter.bundle_key(),
        asset_url_override=adapter.asset_url_override(),
    )
    logger.debug(
        "Captured manifest snapshot",
        extra=structured_extra(
            component=LogComponent.SNAPSHOT,
            variant=model.variant,
            release_id=model.release_id,
        ),
    )
    return model


def snapshot_to_payload(model: ManifestSnapshotModel) -> SnapshotPayload:
    """Convert a snapshot model into its storage mapping."""
    data = model.model_dump(mode="json", exclude_none=True, by_alias=True)
    return cast("SnapshotPayload", data)


def _version_error_details(exc: SnapshotVersionError) -> PydanticCustomError:
    if isinstance(exc, UnsupportedSnapshotVersionError):
        return PydanticCustomError(
            "snapshot.version.unsupported",
            "Unsupported snapshot schema version: {version}",
            {"version": exc.version},
        )
    if isinstance(exc, InvalidSnapshotVersionTypeError):
        return PydanticCustomError(
            "snapshot.version.type",
            "Unsupported schemaVersion type: {type}",
            {"type": type(exc.value).__name__},
        )
    return PydanticCustomError(
        "snapshot.version",
        "Snapshot schema version error: {message}",
        {"message": str(exc)},
    )


def snapshot_from_payload(payload: object) -> ManifestSnapshotModel:
    """Validate a stored snapshot mapping.

    Checks the schema version before validating the structure.

    Args:
        payload: Arbitrary data previously produced by ``snapshot_to_payload``.

    Returns:
        Validated snapshot model.

    Raises:
        SnapshotValidationError: If the payload fails validation or declares
            an unsupported version.
    """
    try:
        if isinstance(payload, Mapping):
            _ = ensure_current_snapshot_version(cast("Mapping[str, object]", payload))
        return ManifestSnapshotModel.model_validate(payload)
    except SnapshotVersionError as exc:
        validation_error = ValidationError.from_exception_data(
            ManifestSnapshotModel.__name__,
            [
                {
                    "type": _version_error_details(exc),
                    "loc": ("schemaVersion",),
                    "input": payload,
                },
            ],
        )
        raise SnapshotValidationError(validation_error) from exc
    except ValidationError as exc:
        raise SnapshotValidationError(exc) from exc


def snapshot_json_schema() -> dict[str, Any]:
    """Return the JSON Schema for persisted manifest snapshots."""
    schema = ManifestSnapshotModel.model_json_schema(by_alias=True)
    schema["$schema"] = "https://json-schema.org/draft-07/schema#"
    schema.setdefault("$id", "https://otamanifest.dev/schema/snapshot.json")
    schema.setdefault("additionalProperties", False)
    return schema


__all__ = [
    "ManifestSnapshotModel",
    "SnapshotPayload",
    "SnapshotValidationError",
    "snapshot_from_adapter",
    "snapshot_from_payload",
    "snapshot_json_schema",
    "snapshot_to_payload",
]
