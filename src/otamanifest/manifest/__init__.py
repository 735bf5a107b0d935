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

"""Manifest normalization for the over-the-air update client.

Raw manifests arrive in several schema generations. This package turns any
accepted payload into an adapter implementing ``RawManifestBehavior``.

Key components:
    - RawManifestBehavior: read contract consumers depend on
    - BaseRawManifestAdapter: frozen payload storage and typed field lookup
    - LegacyManifestAdapter / ModernManifestAdapter / EmbeddedManifestAdapter
    - resolve: variant detection and adapter construction
    - ManifestSnapshotModel: validated, persistable form of a manifest
"""

from __future__ import annotations

from .base import BaseRawManifestAdapter, parse_iso8601
from .behavior import RawManifestBehavior
from .embedded import EmbeddedManifestAdapter
from .errors import (
    MalformedFieldError,
    ManifestFieldError,
    ManifestPayloadTypeError,
    MissingFieldError,
    UnrecognizedManifestError,
)
from .legacy import LEGACY_RUNTIME_VERSION_KEYS, LegacyManifestAdapter
from .models import (
    ManifestSnapshotModel,
    SnapshotPayload,
    SnapshotValidationError,
    snapshot_from_adapter,
    snapshot_from_payload,
    snapshot_json_schema,
    snapshot_to_payload,
)
from .modern import ModernManifestAdapter
from .resolver import ADAPTERS, ManifestHint, detect_variant, resolve, select_variant
from .versioning import (
    CURRENT_SNAPSHOT_VERSION,
    InvalidSnapshotVersionTypeError,
    SnapshotVersion,
    SnapshotVersionError,
    UnsupportedSnapshotVersionError,
    ensure_current_snapshot_version,
)

__all__ = [
    "ADAPTERS",
    "CURRENT_SNAPSHOT_VERSION",
    "LEGACY_RUNTIME_VERSION_KEYS",
    "BaseRawManifestAdapter",
    "EmbeddedManifestAdapter",
    "InvalidSnapshotVersionTypeError",
    "LegacyManifestAdapter",
    "MalformedFieldError",
    "ManifestFieldError",
    "ManifestHint",
    "ManifestPayloadTypeError",
    "ManifestSnapshotModel",
    "MissingFieldError",
    "ModernManifestAdapter",
    "RawManifestBehavior",
    "SnapshotPayload",
    "SnapshotValidationError",
    "SnapshotVersion",
    "SnapshotVersionError",
    "UnrecognizedManifestError",
    "UnsupportedSnapshotVersionError",
    "detect_variant",
    "ensure_current_snapshot_version",
    "parse_iso8601",
    "resolve",
    "select_variant",
    "snapshot_from_adapter",
    "snapshot_from_payload",
    "snapshot_json_schema",
    "snapshot_to_payload",
]
