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

"""Configuration models for manifest resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from otamanifest._internal.exceptions import OtaManifestValidationError
from otamanifest._internal.logging_utils import LEVELS
from otamanifest.core.model_types import LogFormat, ManifestVariant

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_MODERN_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "application/expo+json",
    "multipart/mixed",
)
DEFAULT_MAX_PROTOCOL_VERSION: Final[int] = 1


class ConfigValidationError(OtaManifestValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path | None, error: Exception) -> None:
        self.path = path
        self.error = error
        source = str(path) if path is not None else "environment"
        super().__init__(f"Invalid otamanifest configuration in {source}: {error}")


@dataclass(slots=True, frozen=True)
class ResolverConfig:
    """Settings that influence variant resolution and logging.

    Attributes:
        fallback_variant: Variant assumed when neither the hint nor the payload
            shape identifies one. ``None`` makes such payloads fail.
        modern_content_types: Content types that mark a response as a modern
            protocol manifest.
        max_protocol_version: Highest protocol version the resolver accepts.
        log_format: Log format applied by ``configure_logging_from_config``.
        log_level: Log level name applied by ``configure_logging_from_config``.
    """

    fallback_variant: ManifestVariant | None = None
    modern_content_types: tuple[str, ...] = DEFAULT_MODERN_CONTENT_TYPES
    max_protocol_version: int = DEFAULT_MAX_PROTOCOL_VERSION
    log_format: LogFormat | None = None
    log_level: str | None = None


class ResolverConfigModel(BaseModel):
    """Pydantic model validating the ``[tool.otamanifest]`` table."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    fallback_variant: ManifestVariant | None = None
    modern_content_types: list[str] = Field(default_factory=lambda: list(DEFAULT_MODERN_CONTENT_TYPES))
    max_protocol_version: int = Field(default=DEFAULT_MAX_PROTOCOL_VERSION, ge=0)
    log_format: LogFormat | None = None
    log_level: str | None = None

    @field_validator("fallback_variant", "log_format", mode="before")
    @classmethod
    def _lower_enum_text(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        name = value.strip().lower()
        if name not in LEVELS:
            msg = f"log_level must be one of {', '.join(LEVELS)}"
            raise ValueError(msg)
        return name

    @field_validator("modern_content_types")
    @classmethod
    def _normalise_content_types(cls, value: list[str]) -> list[str]:
        return [item.strip().lower() for item in value if item.strip()]


def config_from_model(model: ResolverConfigModel) -> ResolverConfig:
    """Convert a validated model into the immutable runtime configuration."""
    return ResolverConfig(
        fallback_variant=model.fallback_variant,
        modern_content_types=tuple(model.modern_content_types),
        max_protocol_version=model.max_protocol_version,
        log_format=model.log_format,
        log_level=model.log_level,
    )


__all__ = [
    "DEFAULT_MAX_PROTOCOL_VERSION",
    "DEFAULT_MODERN_CONTENT_TYPES",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "ResolverConfig",
    "ResolverConfigModel",
    "config_from_model",
]
