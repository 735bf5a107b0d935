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

"""Configuration loading for otamanifest.

Settings come from a standalone ``otamanifest.toml`` / ``.otamanifest.toml``
(top-level keys) or from ``[tool.otamanifest]`` in ``pyproject.toml``, searched
in that order. ``OTAMANIFEST_FALLBACK_VARIANT`` overrides the file value.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from otamanifest.compat import tomllib
from otamanifest.core.model_types import LogComponent, ManifestVariant
from otamanifest.logging import LogConfig, configure_logging, structured_extra

from .models import (
    ConfigReadError,
    InvalidConfigFileError,
    ResolverConfig,
    ResolverConfigModel,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("otamanifest.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("otamanifest.toml", ".otamanifest.toml", "pyproject.toml")
FALLBACK_VARIANT_ENV: Final[str] = "OTAMANIFEST_FALLBACK_VARIANT"


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
    """

    config: ResolverConfig
    path: Path | None


def load_config(explicit_path: Path | None = None, *, search_dir: Path | None = None) -> ResolverConfig:
    """Load resolver configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit configuration file. When given, only
            this file is read and it must exist.
        search_dir: Directory searched for standard file names; defaults to
            the current working directory.

    Returns:
        The resolved configuration, with environment overrides applied.
    """
    return load_config_with_metadata(explicit_path, search_dir=search_dir).config


def load_config_with_metadata(
    explicit_path: Path | None = None,
    *,
    search_dir: Path | None = None,
) -> LoadedConfig:
    """Load resolver configuration along with the file it came from.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed.
        InvalidConfigFileError: If the settings fail validation.
    """
    if explicit_path is not None:
        candidate = explicit_path if explicit_path.is_absolute() else (Path.cwd() / explicit_path).resolve()
        if not candidate.exists():
            raise ConfigReadError(candidate, FileNotFoundError("configuration file not found"))
        search_order = [candidate]
    else:
        base_dir = search_dir or Path.cwd()
        search_order = [base_dir / name for name in CONFIG_FILENAMES]

    loaded = LoadedConfig(config=ResolverConfig(), path=None)
    for candidate in search_order:
        candidate_config = _load_candidate_config(candidate, explicit=explicit_path is not None)
        if candidate_config is not None:
            loaded = candidate_config
            break

    config = _apply_env_overrides(loaded.config)
    logger.debug(
        "Loaded resolver configuration",
        extra=structured_extra(component=LogComponent.CONFIG, path=loaded.path),
    )
    return LoadedConfig(config=config, path=loaded.path)


def configure_logging_from_config(config: ResolverConfig) -> LogConfig:
    """Apply the ``log_format`` and ``log_level`` settings of config.

    Unset values fall back to the environment variables and defaults that
    ``configure_logging`` uses.
    """
    return configure_logging(config.log_format, log_level=config.log_level)


def _load_candidate_config(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.is_file():
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.otamanifest] table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        model = ResolverConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    return LoadedConfig(config=config_from_model(model), path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    if candidate.name != "pyproject.toml":
        return raw_map
    tool_section = raw_map.get("tool")
    if not isinstance(tool_section, dict):
        return None
    section = cast("dict[str, object]", tool_section).get("otamanifest")
    if section is None:
        return None
    if not isinstance(section, dict):
        message = "[tool.otamanifest] must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    return cast("dict[str, object]", section)


def _apply_env_overrides(config: ResolverConfig) -> ResolverConfig:
    raw = os.getenv(FALLBACK_VARIANT_ENV)
    if raw is None or not raw.strip():
        return config
    try:
        variant = ManifestVariant.from_str(raw)
    except ValueError as exc:
        raise InvalidConfigFileError(None, exc) from exc
    return replace(config, fallback_variant=variant)


__all__ = [
    "CONFIG_FILENAMES",
    "FALLBACK_VARIANT_ENV",
    "LoadedConfig",
    "configure_logging_from_config",
    "load_config",
    "load_config_with_metadata",
]
