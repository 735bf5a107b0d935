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

"""Adapter for manifests served over the versioned update protocol.

Modern manifests identify the update with ``id`` and ``createdAt``, describe
the JavaScript bundle as a ``launchAsset`` object and list every other file
under ``assets``. Nothing is bundled with the binary, so the
bundled-assets concept does not exist for this variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from otamanifest.core.model_types import ManifestVariant

from .base import BaseRawManifestAdapter

if TYPE_CHECKING:
    from otamanifest.json import FrozenJSON, FrozenMapping

ID_KEY: Final[str] = "id"
CREATED_AT_KEY: Final[str] = "createdAt"
LAUNCH_ASSET_KEY: Final[str] = "launchAsset"
LAUNCH_ASSET_BUNDLE_KEY: Final[tuple[str, str]] = (LAUNCH_ASSET_KEY, "key")


class ModernManifestAdapter(BaseRawManifestAdapter):
    """``RawManifestBehavior`` over a modern protocol manifest."""

    __slots__ = ()

    variant = ManifestVariant.MODERN

    def release_id(self) -> str:
        return self.get_required(ID_KEY, str)

    def commit_time(self) -> str:
        return self.get_timestamp(CREATED_AT_KEY)

    def bundled_assets(self) -> None:
        return None

    def runtime_version(self) -> FrozenJSON:
        return self.get("runtimeVersion")

    def bundle_key(self) -> str | None:
        """Return the key of the launch asset, which names the JS bundle."""
        return self.get_typed(LAUNCH_ASSET_BUNDLE_KEY, str)

    def asset_url_override(self) -> None:
        return None

    def launch_asset(self) -> FrozenMapping | None:
        return self.get_typed(LAUNCH_ASSET_KEY, Mapping)

    def assets(self) -> tuple[FrozenJSON, ...] | None:
        """Return downloadable asset descriptors, or ``None`` when undeclared."""
        return self.get_typed("assets", tuple)

    def metadata(self) -> FrozenMapping | None:
        return self.get_typed("metadata", Mapping)


def looks_modern(payload: Mapping[str, object]) -> bool:
    """Return whether a payload has the modern protocol shape."""
    return LAUNCH_ASSET_KEY in payload or (ID_KEY in payload and CREATED_AT_KEY in payload)


__all__ = ["ModernManifestAdapter", "looks_modern"]
