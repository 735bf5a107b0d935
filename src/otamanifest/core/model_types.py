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

"""Enumerations shared by the manifest, logging, and configuration layers."""

from __future__ import annotations

from otamanifest.compat import StrEnum

__all__ = ["LogComponent", "LogFormat", "ManifestVariant"]


class ManifestVariant(StrEnum):
    """Closed set of manifest schema generations understood by the resolver.

    Attributes:
        LEGACY: Original manifest shape served before the versioned protocol.
        MODERN: Versioned protocol manifest with a launch asset and asset list.
        EMBEDDED: Manifest compiled into the application binary.
    """

    LEGACY = "legacy"
    MODERN = "modern"
    EMBEDDED = "embedded"

    @classmethod
    def from_str(cls, raw: str) -> ManifestVariant:
        """Create a ManifestVariant from a string value.

        Args:
            raw: String representation of the variant (case-insensitive).

        Returns:
            ManifestVariant enum value.

        Raises:
            ValueError: If the string does not match any ManifestVariant value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown manifest variant '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable library components.

    Attributes:
        RESOLVER: Variant detection and adapter construction.
        ADAPTER: Field access on a manifest adapter.
        SNAPSHOT: Conversion to and from the validated snapshot model.
        CONFIG: Configuration loading.
    """

    RESOLVER = "resolver"
    ADAPTER = "adapter"
    SNAPSHOT = "snapshot"
    CONFIG = "config"
