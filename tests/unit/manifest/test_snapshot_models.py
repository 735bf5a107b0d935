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

"""Tests for persisted manifest snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from otamanifest.core.model_types import ManifestVariant
from otamanifest.manifest.errors import MissingFieldError
from otamanifest.manifest.models import (
    ManifestSnapshotModel,
    SnapshotValidationError,
    snapshot_from_adapter,
    snapshot_from_payload,
    snapshot_json_schema,
    snapshot_to_payload,
)
from otamanifest.manifest.resolver import resolve
from otamanifest.manifest.versioning import CURRENT_SNAPSHOT_VERSION

if TYPE_CHECKING:
    from otamanifest.json import JSONMapping

pytestmark = pytest.mark.unit


def test_snapshot_captures_every_contract_field(legacy_manifest: JSONMapping) -> None:
    snapshot = snapshot_from_adapter(resolve(legacy_manifest))
    assert snapshot.schema_version == CURRENT_SNAPSHOT_VERSION
    assert snapshot.variant is ManifestVariant.LEGACY
    assert snapshot.release_id == "0eef8214-4833-4089-9dff-b4138a14f196"
    assert snapshot.commit_time == "2024-03-01T12:30:00.000Z"
    assert snapshot.bundled_assets == ["asset_54da1e9b7fda3b3a.png", "asset_b2fc3a56ee4c4b59.ttf"]
    assert snapshot.runtime_version == "exposdk:44.0.0"
    assert snapshot.bundle_key == "bundle-0eef8214"
    assert snapshot.asset_url_override == "https://assets.example.com/"


def test_snapshot_thaws_structured_values() -> None:
    adapter = resolve(
        {
            "releaseID": "r",
            "commitTime": "2024-01-01T00:00:00Z",
            "bundledAssets": [{"url": "a"}],
            "runtimeVersion": {"policy": "appVersion"},
        },
    )
    snapshot = snapshot_from_adapter(adapter)
    assert snapshot.bundled_assets == [{"url": "a"}]
    assert snapshot.runtime_version == {"policy": "appVersion"}


def test_snapshot_payload_round_trip_keeps_asset_states() -> None:
    undeclared = snapshot_from_adapter(resolve({"releaseID": "r", "commitTime": "2024-01-01T00:00:00Z"}))
    declared = snapshot_from_adapter(
        resolve({"releaseID": "r", "commitTime": "2024-01-01T00:00:00Z", "bundledAssets": []}),
    )
    undeclared_payload = snapshot_to_payload(undeclared)
    declared_payload = snapshot_to_payload(declared)
    assert "bundledAssets" not in undeclared_payload
    assert declared_payload["bundledAssets"] == []
    assert snapshot_from_payload(undeclared_payload).bundled_assets is None
    assert snapshot_from_payload(declared_payload).bundled_assets == []


def test_snapshot_payload_uses_camel_case_keys(modern_manifest: JSONMapping) -> None:
    payload = snapshot_to_payload(snapshot_from_adapter(resolve(modern_manifest)))
    assert payload["schemaVersion"] == "1"
    assert payload["variant"] == "modern"
    assert payload["releaseID"] == "a2a3b54c-cf62-4bd9-92d4-4f9a0f1f0b42"
    assert payload["commitTime"] == "2024-04-10T08:00:00.000Z"
    assert payload["bundleKey"] == "bundle-a2a3b54c"
    assert "assetUrlOverride" not in payload


def test_snapshot_propagates_field_errors() -> None:
    with pytest.raises(MissingFieldError):
        _ = snapshot_from_adapter(resolve({"commitTime": "2024-01-01T00:00:00Z"}))


def test_snapshot_from_payload_rejects_future_versions() -> None:
    with pytest.raises(SnapshotValidationError) as excinfo:
        _ = snapshot_from_payload(
            {"schemaVersion": "2", "variant": "legacy", "releaseID": "r", "commitTime": "2024-01-01T00:00:00Z"},
        )
    errors = excinfo.value.validation_error.errors()
    assert errors[0]["type"] == "snapshot.version.unsupported"
    assert errors[0]["loc"] == ("schemaVersion",)


def test_snapshot_from_payload_rejects_non_string_versions() -> None:
    with pytest.raises(SnapshotValidationError) as excinfo:
        _ = snapshot_from_payload(
            {"schemaVersion": 1, "variant": "legacy", "releaseID": "r", "commitTime": "2024-01-01T00:00:00Z"},
        )
    assert excinfo.value.validation_error.errors()[0]["type"] == "snapshot.version.type"


@pytest.mark.parametrize(
    "payload",
    [
        {"variant": "legacy", "commitTime": "2024-01-01T00:00:00Z"},
        {"variant": "unknown", "releaseID": "r", "commitTime": "2024-01-01T00:00:00Z"},
        {"variant": "legacy", "releaseID": "r", "commitTime": "2024-01-01T00:00:00Z", "extra": 1},
        ["not", "a", "mapping"],
    ],
)
def test_snapshot_from_payload_wraps_structural_errors(payload: object) -> None:
    with pytest.raises(SnapshotValidationError):
        _ = snapshot_from_payload(payload)


def test_snapshot_model_is_frozen() -> None:
    snapshot = ManifestSnapshotModel(
        variant=ManifestVariant.LEGACY,
        release_id="r",
        commit_time="2024-01-01T00:00:00Z",
    )
    with pytest.raises(ValueError, match="frozen"):
        snapshot.release_id = "other"  # type: ignore[misc]


def test_snapshot_json_schema_contains_metadata() -> None:
    schema = snapshot_json_schema()
    assert "$schema" in schema
    assert schema["additionalProperties"] is False
    assert "releaseID" in schema["properties"]
    assert "releaseID" in schema["required"]
