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


"""Structured logging for manifest resolution and field access.

Library modules log through children of the ``otamanifest`` logger and attach
manifest context (variant, field, release id, transport hint) as record
attributes built by ``structured_extra``. Nothing is configured on import;
hosts call ``configure_logging`` to attach a handler.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Final, cast

from otamanifest.compat import UTC, TypedDict, Unpack, override
from otamanifest.core.model_types import LogComponent, LogFormat, ManifestVariant
from otamanifest.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "otamanifest"
LOG_FORMAT_ENV: Final[str] = "OTAMANIFEST_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "OTAMANIFEST_LOG_LEVEL"

LEVELS: Final[Mapping[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "otamanifest.manifest",
    "otamanifest.resolver",
    "otamanifest.snapshot",
    "otamanifest.config",
)

# Record attributes that describe which manifest (and which field) a record is about.
_CONTEXT_FIELDS: Final[tuple[str, ...]] = ("variant", "release_id", "field", "hint", "path")


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Logging settings applied by ``configure_logging``."""

    format: LogFormat
    level: int
    level_name: str


class JSONLogFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for name in ("component", *_CONTEXT_FIELDS, "details"):
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class ManifestTextFormatter(logging.Formatter):
    """Single-line formatter that appends the manifest context of a record.

    ``Malformed manifest field releaseID`` logged with a variant and field
    renders as ``[DEBUG] Malformed manifest field releaseID [legacy releaseID]``.
    """

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [str(getattr(record, name)) for name in _CONTEXT_FIELDS if hasattr(record, name)]
        if not context:
            return line
        head, sep, tail = line.partition("\n")
        return f"{head} [{' '.join(context)}]{sep}{tail}"


def _level_from(value: str | int) -> tuple[int, str]:
    if isinstance(value, int):
        return value, logging.getLevelName(value).lower()
    name = value.strip().lower()
    if name not in LEVELS:
        msg = f"Unknown log level '{value}'"
        raise ValueError(msg)
    return LEVELS[name], name


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Attach a single handler to the ``otamanifest`` logger.

    Args:
        log_format: ``text`` or ``json``. ``None`` falls back to
            ``OTAMANIFEST_LOG_FORMAT``, then ``text``.
        log_level: Level name or number. ``None`` falls back to
            ``OTAMANIFEST_LOG_LEVEL``, then ``info``.

    Returns:
        The format and level that were applied to the root and child loggers.

    Raises:
        ValueError: If the format or level name is unknown.
    """
    raw_format = log_format if log_format is not None else os.getenv(LOG_FORMAT_ENV) or LogFormat.TEXT
    selected = raw_format if isinstance(raw_format, LogFormat) else LogFormat.from_str(raw_format)
    level, level_name = _level_from(log_level if log_level is not None else os.getenv(LOG_LEVEL_ENV) or "info")

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter() if selected is LogFormat.JSON else ManifestTextFormatter())
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
    for child in CHILD_LOGGERS:
        logging.getLogger(child).setLevel(level)
    return LogConfig(format=selected, level=level, level_name=level_name)


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """``extra=`` payload accepted by otamanifest log records."""

    variant: ManifestVariant
    field: str
    release_id: str
    hint: str
    path: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    variant: ManifestVariant | str | None
    field: str | None
    release_id: str | None
    hint: object
    path: str | os.PathLike[str] | None
    details: Mapping[str, object] | None


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Return an ``extra=`` mapping describing the manifest a record is about.

    ``None`` values and empty ``details`` are left out so formatters only
    render context that is actually known.

    Args:
        component: Library component emitting the record.
        **kwargs: Manifest context (variant, field, release id, hint, path, details).

    Returns:
        Mapping suitable for the ``extra`` parameter of logging calls.
    """
    extra: StructuredLogExtra = {"component": component}
    variant = kwargs.get("variant")
    if variant is not None:
        extra["variant"] = variant if isinstance(variant, ManifestVariant) else ManifestVariant.from_str(variant)
    fields = cast("Mapping[str, object]", kwargs)
    for name in ("field", "release_id", "hint"):
        value = fields.get(name)
        if value is not None:
            cast("dict[str, object]", extra)[name] = str(value)
    path = kwargs.get("path")
    if path is not None:
        extra["path"] = os.fspath(path)
    details = kwargs.get("details")
    if details:
        extra["details"] = dict(details)
    return extra


__all__ = [
    "CHILD_LOGGERS",
    "LEVELS",
    "ROOT_LOGGER_NAME",
    "JSONLogFormatter",
    "LogConfig",
    "ManifestTextFormatter",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
