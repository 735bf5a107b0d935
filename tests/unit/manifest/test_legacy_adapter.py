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

"""Tests for the legacy manifest adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from otamanifest.core.model_types import ManifestVariant
from otamanifest.json import thaw_json
from otamanifest.manifest.behavior import RawManifestBehavior
from otamanifest.manifest.errors import MalformedFieldError, MissingFieldError
from otamanifest.manifest.legacy import LEGACY_RUNTIME_VERSION_KEYS, LegacyManifestAdapter, looks_legacy
from tests.fixtures.payloads import legacy_payload

if TYPE_CHECKING:
    from otamanifest.json import JSONMapping

pytestmark = pytest.mark.unit


def test_legacy_adapter_implements_read_contract(legacy_manifest: JSONMapping) -> None:
    adapter = LegacyManifestAdapter(legacy_manifest)
    assert isinstance(adapter, RawManifestBehavior)
    assert adapter.variant is ManifestVariant.LEGACY


def test_full_legacy_payload_reads_every_field(legacy_manifest: JSONMapping) -> None:
    adapter = LegacyManifestAdapter(legacy_manifest)
    assert adapter.release_id() == "0eef8214-4833-4089-9dff-b4138a14f196"
    assert adapter.commit_time() == "2024-03-01T12:30:00.000Z"
    assert adapter.bundled_assets() == ("asset_54da1e9b7fda3b3a.png", "asset_b2fc3a56ee4c4b59.ttf")
    assert adapter.runtime_version() == "exposdk:44.0.0"
    assert adapter.bundle_key() == "bundle-0eef8214"
    assert adapter.asset_url_override() == "https://assets.example.com/"
    assert adapter.sdk_version() == "44.0.0"
    assert adapter.bundle_url() == "https://cdn.example.com/bundles/ios-0eef8214.js"
    assert adapter.slug() == "weather-app"
    assert adapter.is_development_mode() is False


def test_minimal_payload_leaves_optional_fields_unset() -> None:
    adapter = LegacyManifestAdapter({"releaseID": "r1", "commitTime": "2024-01-01T00:00:00Z"})
    assert adapter.release_id() == "r1"
    assert adapter.commit_time() == "2024-01-01T00:00:00Z"
    assert adapter.bundled_assets() is None
    assert adapter.runtime_version() is None
    assert adapter.bundle_key() is None
    assert adapter.asset_url_override() is None
    assert adapter.sdk_version() is None
    assert adapter.is_development_mode() is False


def test_bundled_assets_preserve_order_of_descriptors() -> None:
    adapter = LegacyManifestAdapter(
        {
            "releaseID": "r2",
            "commitTime": "2024-02-01T00:00:00Z",
            "bundledAssets": [{"url": "a"}, {"url": "b"}],
        },
    )
    assets = adapter.bundled_assets()
    assert assets is not None
    assert len(assets) == 2
    assert [dict(asset)["url"] for asset in assets] == ["a", "b"]  # type: ignore[call-overload]


def test_declared_empty_assets_differ_from_undeclared() -> None:
    declared = LegacyManifestAdapter(legacy_payload(bundledAssets=[]))
    undeclared_payload = legacy_payload()
    del undeclared_payload["bundledAssets"]
    undeclared = LegacyManifestAdapter(undeclared_payload)
    assert declared.bundled_assets() == ()
    assert declared.bundled_assets() is not None
    assert undeclared.bundled_assets() is None


def test_explicit_null_assets_read_as_undeclared() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(bundledAssets=None))
    assert adapter.bundled_assets() is None


def test_bundled_asset_entries_are_not_validated() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(bundledAssets=["a", 3, None, {"url": "x"}]))
    assets = adapter.bundled_assets()
    assert assets is not None
    assert assets[:3] == ("a", 3, None)


def test_missing_release_id_does_not_block_other_fields() -> None:
    adapter = LegacyManifestAdapter({"commitTime": "2024-01-01T00:00:00Z"})
    with pytest.raises(MissingFieldError) as excinfo:
        _ = adapter.release_id()
    assert excinfo.value.field == "releaseID"
    assert adapter.commit_time() == "2024-01-01T00:00:00Z"


def test_missing_commit_time_names_the_field() -> None:
    adapter = LegacyManifestAdapter({"releaseID": "r1"})
    with pytest.raises(MissingFieldError) as excinfo:
        _ = adapter.commit_time()
    assert excinfo.value.field == "commitTime"
    assert adapter.release_id() == "r1"


@pytest.mark.parametrize("value", [42, ["r"], {"id": "r"}, True])
def test_non_string_release_id_is_malformed(value: object) -> None:
    adapter = LegacyManifestAdapter(legacy_payload(releaseID=value))  # type: ignore[arg-type]
    with pytest.raises(MalformedFieldError) as excinfo:
        _ = adapter.release_id()
    assert excinfo.value.field == "releaseID"
    assert excinfo.value.expected == "a string"


def test_unparseable_commit_time_is_malformed() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(commitTime="last tuesday"))
    with pytest.raises(MalformedFieldError) as excinfo:
        _ = adapter.commit_time()
    assert excinfo.value.field == "commitTime"
    assert "last tuesday" in excinfo.value.actual


def test_malformed_optional_field_is_scoped_to_that_field() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(bundleKey=7, bundledAssets="not-a-list"))
    with pytest.raises(MalformedFieldError):
        _ = adapter.bundle_key()
    with pytest.raises(MalformedFieldError):
        _ = adapter.bundled_assets()
    assert adapter.release_id() == "0eef8214-4833-4089-9dff-b4138a14f196"
    assert adapter.asset_url_override() == "https://assets.example.com/"


def test_runtime_version_alias_order_is_fixed() -> None:
    assert LEGACY_RUNTIME_VERSION_KEYS == ("runtimeVersion", "sdkVersion")


def test_runtime_version_prefers_runtime_version_key() -> None:
    adapter = LegacyManifestAdapter(
        {"releaseID": "r", "commitTime": "2024-01-01T00:00:00Z", "runtimeVersion": "2.0", "sdkVersion": "44.0.0"},
    )
    assert adapter.runtime_version() == "2.0"


def test_runtime_version_falls_back_to_sdk_version() -> None:
    adapter = LegacyManifestAdapter({"releaseID": "r", "commitTime": "2024-01-01T00:00:00Z", "sdkVersion": "44.0.0"})
    assert adapter.runtime_version() == "44.0.0"


def test_runtime_version_null_falls_through_to_next_alias() -> None:
    adapter = LegacyManifestAdapter(
        {"releaseID": "r", "commitTime": "2024-01-01T00:00:00Z", "runtimeVersion": None, "sdkVersion": "43.0.0"},
    )
    assert adapter.runtime_version() == "43.0.0"


def test_structured_runtime_version_is_passed_through() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(runtimeVersion={"policy": "sdkVersion", "ios": "1.0"}))
    value = adapter.runtime_version()
    assert value == {"policy": "sdkVersion", "ios": "1.0"}


def test_array_runtime_version_is_returned_in_frozen_form() -> None:
    adapter = LegacyManifestAdapter(legacy_payload(runtimeVersion=["1.0", "1.1"]))
    value = adapter.runtime_version()
    assert value == ("1.0", "1.1")
    assert thaw_json(value) == ["1.0", "1.1"]


def test_accessors_are_idempotent(legacy_manifest: JSONMapping) -> None:
    adapter = LegacyManifestAdapter(legacy_manifest)
    for accessor in (
        adapter.release_id,
        adapter.commit_time,
        adapter.bundled_assets,
        adapter.runtime_version,
        adapter.bundle_key,
        adapter.asset_url_override,
    ):
        assert accessor() == accessor()


def test_construction_accepts_any_mapping() -> None:
    adapter = LegacyManifestAdapter({})
    with pytest.raises(MissingFieldError):
        _ = adapter.release_id()
    assert adapter.bundled_assets() is None


def test_looks_legacy_detects_marker_keys() -> None:
    assert looks_legacy({"releaseID": "r"})
    assert looks_legacy({"bundleUrl": "https://example.com/b.js"})
    assert looks_legacy({"assetUrlOverride": "https://assets.example.com/"})
    assert not looks_legacy({"name": "unknown"})
