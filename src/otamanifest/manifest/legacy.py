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

"""Adapter for the legacy manifest shape.

Legacy manifests predate the versioned protocol. They always carry
``releaseID`` and ``commitTime`` at the top level but may omit everything
else, and older servers published the runtime version under ``sdkVersion``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from otamanifest.core.model_types import ManifestVariant

from .base import BaseRawManifestAdapter

if TYPE_CHECKING:
    from collections.abc import Mapping

    from otamanifest.json import FrozenJSON

RELEASE_ID_KEY: Final[str] = "releaseID"
COMMIT_TIME_KEY: Final[str] = "commitTime"
BUNDLED_ASSETS_KEY: Final[str] = "bundledAssets"
BUNDLE_KEY_KEY: Final[str] = "bundleKey"
ASSET_URL_OVERRIDE_KEY: Final[str] = "assetUrlOverride"

# Probed in order; the first key holding a non-null value wins.
LEGACY_RUNTIME_VERSION_KEYS: Final[tuple[str, ...]] = ("runtimeVersion", "sdkVersion")

# Keys no other manifest generation uses.
LEGACY_ONLY_KEYS: Final[tuple[str, ...]] = (
    RELEASE_ID_KEY,
    "bundleUrl",
    "sdkVersion",
    BUNDLED_ASSETS_KEY,
    BUNDLE_KEY_KEY,
    ASSET_URL_OVERRIDE_KEY,
)

LEGACY_MARKER_KEYS: Final[tuple[str, ...]] = (COMMIT_TIME_KEY, *LEGACY_ONLY_KEYS)


class LegacyManifestAdapter(BaseRawManifestAdapter):
    """``RawManifestBehavior`` over a legacy manifest payload."""

    __slots__ = ()

    variant = ManifestVariant.LEGACY

    def release_id(self) -> str:
        return self.get_required(RELEASE_ID_KEY, str)

    def commit_time(self) -> str:
        return self.get_timestamp(COMMIT_TIME_KEY)

    def bundled_assets(self) -> tuple[FrozenJSON, ...] | None:
        """Return ``bundledAssets`` entries as opaque descriptors.

        Returns ``None`` when the key is absent so consumers can tell a
        manifest that never declared bundled assets from one that declared
        none. Individual entries are not validated here.
        """
        return self.get_typed(BUNDLED_ASSETS_KEY, tuple)

    def runtime_version(self) -> FrozenJSON:
        """Return the first runtime version found in ``LEGACY_RUNTIME_VERSION_KEYS``.

        The value may be a plain version string or a structured policy
        object; it is returned as stored, in frozen form.
        """
        found = self.probe(LEGACY_RUNTIME_VERSION_KEYS)
        return None if found is None else found[1]

    def bundle_key(self) -> str | None:
        return self.get_typed(BUNDLE_KEY_KEY, str)

    def asset_url_override(self) -> str | None:
        return self.get_typed(ASSET_URL_OVERRIDE_KEY, str)

    def sdk_version(self) -> str | None:
        """Return the SDK version the legacy bundle was built against."""
        return self.get_typed("sdkVersion", str)

    def bundle_url(self) -> str | None:
        return self.get_typed("bundleUrl", str)

    def slug(self) -> str | None:
        return self.get_typed("slug", str)

    def is_development_mode(self) -> bool:
        """Return whether a development server produced the manifest (absent means False)."""
        return bool(self.get_typed("isDevelopmentMode", bool))


def looks_legacy(payload: Mapping[str, object]) -> bool:
    """Return whether a payload carries any legacy marker key."""
    return any(key in payload for key in LEGACY_MARKER_KEYS)


__all__ = [
    "LEGACY_MARKER_KEYS",
    "LEGACY_ONLY_KEYS",
    "LEGACY_RUNTIME_VERSION_KEYS",
    "LegacyManifestAdapter",
    "looks_legacy",
]
