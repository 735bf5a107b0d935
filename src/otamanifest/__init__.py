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

"""otamanifest - manifest compatibility layer for over-the-air updates.

Normalizes raw update manifests from every server generation into one typed,
read-only contract that bundle loaders, asset fetchers and runtime
compatibility checks consume uniformly.
"""

from __future__ import annotations

from otamanifest.exceptions import (
    MalformedFieldError,
    ManifestFieldError,
    ManifestPayloadTypeError,
    MissingFieldError,
    OtaManifestError,
    OtaManifestTypeError,
    OtaManifestValidationError,
    SnapshotValidationError,
    UnrecognizedManifestError,
)

from .config import ResolverConfig, load_config
from .core.model_types import ManifestVariant
from .error_codes import error_code_catalog, error_code_for
from .manifest import (
    LEGACY_RUNTIME_VERSION_KEYS,
    BaseRawManifestAdapter,
    EmbeddedManifestAdapter,
    LegacyManifestAdapter,
    ManifestHint,
    ManifestSnapshotModel,
    ModernManifestAdapter,
    RawManifestBehavior,
    resolve,
    snapshot_from_adapter,
    snapshot_from_payload,
    snapshot_to_payload,
)

__all__ = [
    "LEGACY_RUNTIME_VERSION_KEYS",
    "BaseRawManifestAdapter",
    "EmbeddedManifestAdapter",
    "LegacyManifestAdapter",
    "MalformedFieldError",
    "ManifestFieldError",
    "ManifestHint",
    "ManifestPayloadTypeError",
    "ManifestSnapshotModel",
    "ManifestVariant",
    "MissingFieldError",
    "ModernManifestAdapter",
    "OtaManifestError",
    "OtaManifestTypeError",
    "OtaManifestValidationError",
    "RawManifestBehavior",
    "ResolverConfig",
    "SnapshotValidationError",
    "UnrecognizedManifestError",
    "error_code_catalog",
    "error_code_for",
    "load_config",
    "resolve",
    "snapshot_from_adapter",
    "snapshot_from_payload",
    "snapshot_to_payload",
]
