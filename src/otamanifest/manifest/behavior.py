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

"""Read contract shared by every manifest variant.

Consumers (bundle loader, asset fetcher, runtime compatibility check) depend
on ``RawManifestBehavior`` only and never on a concrete adapter, payload
shape, or key name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from otamanifest.core.model_types import ManifestVariant
    from otamanifest.json import FrozenJSON, FrozenMapping


@runtime_checkable
class RawManifestBehavior(Protocol):
    """Uniform, side-effect free view over one raw manifest payload.

    Every accessor is idempotent and performs no I/O. Field errors surface as
    MissingFieldError or MalformedFieldError on access of the affected
    field only.
    """

    @property
    def variant(self) -> ManifestVariant:
        """Schema generation of the wrapped payload."""
        ...

    def release_id(self) -> str:
        """Return the opaque release identifier.

        Raises:
            MissingFieldError: If the payload has no release identifier.
            MalformedFieldError: If the identifier is not a string.
        """
        ...

    def commit_time(self) -> str:
        """Return the ISO-8601 commit timestamp exactly as stored.

        Raises:
            MissingFieldError: If the payload has no commit time.
            MalformedFieldError: If the value is not a parseable timestamp.
        """
        ...

    def bundled_assets(self) -> tuple[FrozenMapping | FrozenJSON, ...] | None:
        """Return bundled asset descriptors in payload order.

        ``None`` means the manifest does not declare bundled assets at all,
        while ``()`` means it declares an empty list.
        """
        ...

    def runtime_version(self) -> FrozenJSON:
        """Return the runtime version value without type coercion, or ``None``.

        The value is in frozen form like every payload value: arrays come back
        as tuples and objects as read-only mappings, so ``["1.0"]`` in the
        payload reads as ``("1.0",)``. Use ``otamanifest.json.thaw_json`` for
        plain lists and dicts.
        """
        ...

    def bundle_key(self) -> str | None:
        """Return the declared bundle key, or ``None``.

        Callers derive their own default when this is ``None``.
        """
        ...

    def asset_url_override(self) -> str | None:
        """Return the asset base URL override, or ``None``."""
        ...


__all__ = ["RawManifestBehavior"]
