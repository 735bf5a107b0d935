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

"""Unit tests for snapshot schema versioning."""

from __future__ import annotations

import pytest

from otamanifest.manifest.versioning import (
    CURRENT_SNAPSHOT_VERSION,
    InvalidSnapshotVersionTypeError,
    UnsupportedSnapshotVersionError,
    ensure_current_snapshot_version,
)

pytestmark = pytest.mark.unit


def test_missing_version_is_treated_as_current() -> None:
    assert ensure_current_snapshot_version({}) == CURRENT_SNAPSHOT_VERSION


def test_current_version_is_accepted_with_whitespace() -> None:
    assert ensure_current_snapshot_version({"schemaVersion": " 1 "}) == "1"


def test_future_version_is_rejected() -> None:
    with pytest.raises(UnsupportedSnapshotVersionError) as excinfo:
        _ = ensure_current_snapshot_version({"schemaVersion": "2"})
    assert excinfo.value.version == "2"


@pytest.mark.parametrize("value", [1, 1.0, None, ["1"]])
def test_non_string_version_is_rejected(value: object) -> None:
    with pytest.raises(InvalidSnapshotVersionTypeError) as excinfo:
        _ = ensure_current_snapshot_version({"schemaVersion": value})
    assert excinfo.value.value == value
