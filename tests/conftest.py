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

"""Pytest entry point that wires shared fixtures and markers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from otamanifest._internal.logging_utils import CHILD_LOGGERS, ROOT_LOGGER_NAME
from tests.fixtures.payloads import embedded_payload, legacy_payload, modern_payload

if TYPE_CHECKING:
    from collections.abc import Iterator

    from otamanifest.json import JSONMapping


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with the custom markers used by the test suite."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "property: Property-based tests")


@pytest.fixture(autouse=True)
def _reset_library_logger() -> Iterator[None]:
    """Undo handler changes made by ``configure_logging`` between tests."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
    for child in CHILD_LOGGERS:
        logging.getLogger(child).setLevel(logging.NOTSET)


@pytest.fixture
def legacy_manifest() -> JSONMapping:
    return legacy_payload()


@pytest.fixture
def modern_manifest() -> JSONMapping:
    return modern_payload()


@pytest.fixture
def embedded_manifest() -> JSONMapping:
    return embedded_payload()
