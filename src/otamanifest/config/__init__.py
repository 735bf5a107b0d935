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

"""Configuration management for otamanifest.

Provides loading and validation of resolver settings from TOML files and the
environment.
"""

from __future__ import annotations

from .loader import (
    CONFIG_FILENAMES,
    FALLBACK_VARIANT_ENV,
    LoadedConfig,
    configure_logging_from_config,
    load_config,
    load_config_with_metadata,
)
from .models import (
    DEFAULT_MAX_PROTOCOL_VERSION,
    DEFAULT_MODERN_CONTENT_TYPES,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    ResolverConfig,
    ResolverConfigModel,
    config_from_model,
)

__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_MAX_PROTOCOL_VERSION",
    "DEFAULT_MODERN_CONTENT_TYPES",
    "FALLBACK_VARIANT_ENV",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "LoadedConfig",
    "ResolverConfig",
    "ResolverConfigModel",
    "config_from_model",
    "configure_logging_from_config",
    "load_config",
    "load_config_with_metadata",
]
