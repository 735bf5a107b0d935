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

"""Reusable Hypothesis strategies for manifest payloads."""

from __future__ import annotations

from datetime import datetime

from hypothesis import strategies as st

from otamanifest.compat import UTC
from otamanifest.json import JSONMapping, JSONValue

_MISSING = object()

_KNOWN_KEYS = (
    "releaseID",
    "commitTime",
    "bundledAssets",
    "runtimeVersion",
    "sdkVersion",
    "bundleKey",
    "assetUrlOverride",
    "bundleUrl",
    "id",
    "createdAt",
    "launchAsset",
)


def json_scalars() -> st.SearchStrategy[JSONValue]:
    """Return a strategy for JSON scalars (no NaN, so equality is reflexive)."""
    return st.one_of(
        st.none(),
        st.booleans(),
        st.integers(min_value=-(2**53), max_value=2**53),
        st.floats(allow_nan=False, allow_infinity=False),
        st.text(max_size=12),
    )


def json_values(max_leaves: int = 8) -> st.SearchStrategy[JSONValue]:
    """Return a strategy for small, arbitrarily nested JSON trees."""
    return st.recursive(
        json_scalars(),
        lambda children: st.one_of(
            st.lists(children, max_size=3),
            st.dictionaries(st.text(max_size=6), children, max_size=3),
        ),
        max_leaves=max_leaves,
    )


def iso_timestamps() -> st.SearchStrategy[str]:
    """Return ISO-8601 UTC timestamps in the ``...Z`` form servers emit."""
    return st.datetimes(
        min_value=datetime(2000, 1, 1),  # noqa: DTZ001
        max_value=datetime(2099, 12, 31),  # noqa: DTZ001
    ).map(lambda moment: moment.replace(tzinfo=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"))


def optional_values(values: st.SearchStrategy[JSONValue]) -> st.SearchStrategy[object]:
    """Return values that may also be an explicit null or the absent marker."""
    return st.one_of(st.just(_MISSING), st.none(), values)


@st.composite
def legacy_payloads(draw: st.DrawFn) -> JSONMapping:
    """Return well-formed legacy manifests with a random subset of optional keys."""
    payload: JSONMapping = {
        "releaseID": draw(st.uuids().map(str)),
        "commitTime": draw(iso_timestamps()),
    }
    optional: dict[str, object] = {
        "bundledAssets": draw(optional_values(st.lists(json_values(4), max_size=4))),
        "runtimeVersion": draw(optional_values(st.one_of(st.text(min_size=1, max_size=10), json_values(4)))),
        "sdkVersion": draw(optional_values(st.text(min_size=1, max_size=10))),
        "bundleKey": draw(optional_values(st.text(max_size=16))),
        "assetUrlOverride": draw(optional_values(st.text(max_size=16))),
    }
    for key, value in optional.items():
        if value is not _MISSING:
            payload[key] = value  # type: ignore[assignment]
    return payload


def manifest_payloads() -> st.SearchStrategy[JSONMapping]:
    """Return arbitrary mappings biased towards keys the resolver inspects."""
    keys = st.one_of(st.sampled_from(_KNOWN_KEYS), st.text(max_size=8))
    return st.dictionaries(keys, json_values(4), max_size=6)
