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

"""Adapter for the manifest compiled into the application binary.

Embedded manifests describe the update that shipped with the build. Their
``commitTime`` is written by the build tooling either as an ISO-8601 string
or as epoch milliseconds.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Final

from otamanifest.compat import UTC
from otamanifest.core.model_types import ManifestVariant
from otamanifest.json import summarize_value

from .base import TIMESTAMP_LABEL, BaseRawManifestAdapter
from .errors import MalformedFieldError
from .legacy import LEGACY_ONLY_KEYS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from otamanifest.json import FrozenJSON

ID_KEY: Final[str] = "id"
COMMIT_TIME_KEY: Final[str] = "commitTime"


def format_epoch_millis(millis: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    moment = datetime.fromtimestamp(millis // 1000, tz=UTC)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{millis % 1000:03d}Z"


class EmbeddedManifestAdapter(BaseRawManifestAdapter):
    """``RawManifestBehavior`` over an embedded manifest."""

    __slots__ = ()

    variant = ManifestVariant.EMBEDDED

    def release_id(self) -> str:
        return self.get_required(ID_KEY, str)

    def commit_time(self) -> str:
        """Return the commit time as an ISO-8601 string.

        String values are validated and returned unmodified; integer epoch
        milliseconds are rendered in UTC.

        Raises:
            MissingFieldError: If ``commitTime`` is absent.
            MalformedFieldError: If the value is neither a timestamp string nor
                an integer.
        """
        value = self.get_required(COMMIT_TIME_KEY, (str, int))
        if isinstance(value, str):
            return self.get_timestamp(COMMIT_TIME_KEY)
        if isinstance(value, int) and value >= 0:
            try:
                return format_epoch_millis(value)
            except (OverflowError, OSError, ValueError) as exc:
                raise MalformedFieldError(COMMIT_TIME_KEY, TIMESTAMP_LABEL, summarize_value(value)) from exc
        self._malformed(COMMIT_TIME_KEY, TIMESTAMP_LABEL, value)

    def bundled_assets(self) -> tuple[FrozenJSON, ...] | None:
        """Return the assets shipped inside the binary, or ``None`` when undeclared."""
        return self.get_typed("assets", tuple)

    def runtime_version(self) -> FrozenJSON:
        return self.get("runtimeVersion")

    def bundle_key(self) -> None:
        return None

    def asset_url_override(self) -> None:
        return None


def looks_embedded(payload: Mapping[str, object]) -> bool:
    """Return whether a payload has the embedded manifest shape.

    Legacy manifests may also carry ``id`` and ``commitTime``, so any
    legacy-only key rules the embedded shape out.
    """
    if ID_KEY not in payload or COMMIT_TIME_KEY not in payload:
        return False
    return not any(key in payload for key in LEGACY_ONLY_KEYS)


__all__ = ["EmbeddedManifestAdapter", "format_epoch_millis", "looks_embedded"]
