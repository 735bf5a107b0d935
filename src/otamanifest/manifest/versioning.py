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

"""Schema versioning for persisted manifest snapshots.

Snapshots are the validated, persistable form of a resolved manifest. Each
one records ``schemaVersion`` so that a client reading a snapshot written by
a newer build rejects it instead of misreading it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Literal, TypeAlias

from otamanifest._internal.exceptions import OtaManifestValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

SnapshotVersion: TypeAlias = Literal["1"]

CURRENT_SNAPSHOT_VERSION: Final[SnapshotVersion] = "1"


class SnapshotVersionError(OtaManifestValidationError):
    """Base error for snapshot version-related issues."""


class InvalidSnapshotVersionTypeError(SnapshotVersionError):
    """Raised when schemaVersion is not a string.

    Attributes:
        value: The invalid value that was provided.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unsupported schemaVersion type: {type(value)!r}")


class UnsupportedSnapshotVersionError(SnapshotVersionError):
    """Raised when a snapshot declares a future or unknown schema version.

    Attributes:
        version: The unsupported version string.
    """

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Unsupported snapshot schema version: {version}")


def _normalize_version(value: object) -> str:
    if isinstance(value, str):
        return value.strip()
    raise InvalidSnapshotVersionTypeError(value)


def ensure_current_snapshot_version(snapshot: Mapping[str, object]) -> SnapshotVersion:
    """Validate that a snapshot declares the currently supported schema version.

    A missing ``schemaVersion`` is treated as the current version.

    Args:
        snapshot: Raw snapshot data as a mapping.

    Returns:
        The current snapshot version if validation succeeds.

    Raises:
        InvalidSnapshotVersionTypeError: If schemaVersion is not a string.
        UnsupportedSnapshotVersionError: If schemaVersion is not supported.
    """
    if "schemaVersion" not in snapshot:
        return CURRENT_SNAPSHOT_VERSION
    version = _normalize_version(snapshot["schemaVersion"])
    if version != CURRENT_SNAPSHOT_VERSION:
        raise UnsupportedSnapshotVersionError(version)
    return CURRENT_SNAPSHOT_VERSION


__all__ = [
    "CURRENT_SNAPSHOT_VERSION",
    "InvalidSnapshotVersionTypeError",
    "SnapshotVersion",
    "SnapshotVersionError",
    "UnsupportedSnapshotVersionError",
    "ensure_current_snapshot_version",
]
