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

"""Manifest variant detection and adapter construction.

``resolve`` is the only place that knows which adapter classes exist.
Onboarding a new manifest generation means adding one adapter and one entry
to ``ADAPTERS`` plus a detection branch here; consumers keep depending on
``RawManifestBehavior`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeAlias

from otamanifest.config.models import ResolverConfig
from otamanifest.core.model_types import LogComponent, ManifestVariant
from otamanifest.logging import structured_extra

from .embedded import EmbeddedManifestAdapter, looks_embedded
from .errors import ManifestPayloadTypeError, UnrecognizedManifestError
from .legacy import LegacyManifestAdapter, looks_legacy
from .modern import ModernManifestAdapter, looks_modern

if TYPE_CHECKING:
    from collections.abc import Callable

    from .behavior import RawManifestBehavior

logger: logging.Logger = logging.getLogger("otamanifest.resolver")

ADAPTERS: Final[Mapping[ManifestVariant, Callable[[Mapping[str, object]], RawManifestBehavior]]] = {
    ManifestVariant.LEGACY: LegacyManifestAdapter,
    ManifestVariant.MODERN: ModernManifestAdapter,
    ManifestVariant.EMBEDDED: EmbeddedManifestAdapter,
}

_DEFAULT_CONFIG: Final[ResolverConfig] = ResolverConfig()


@dataclass(slots=True, frozen=True)
class ManifestHint:
    """Transport-level hints supplied by the collaborator that fetched a manifest.

    Attributes:
        variant: Explicit variant tag; wins over every other signal.
        embedded: True when the payload was read from the application binary.
        protocol_version: Value of the protocol version response header.
            Any accepted version means a modern manifest.
        content_type: Response content type, parameters allowed.
    """

    variant: ManifestVariant | str | None = None
    embedded: bool = False
    protocol_version: str | int | None = None
    content_type: str | None = None

    def describe(self) -> str:
        parts = [
            f"{name}={value}"
            for name, value in (
                ("variant", self.variant),
                ("embedded", self.embedded or None),
                ("protocol_version", self.protocol_version),
                ("content_type", self.content_type),
            )
            if value is not None
        ]
        return ", ".join(parts) or "none"


HintLike: TypeAlias = "ManifestHint | ManifestVariant | str | None"


def _coerce_hint(hint: HintLike) -> ManifestHint:
    if hint is None:
        return ManifestHint()
    if isinstance(hint, ManifestHint):
        return hint
    return ManifestHint(variant=hint)


def _explicit_variant(hint: ManifestHint) -> ManifestVariant | None:
    if hint.variant is None:
        return None
    if isinstance(hint.variant, ManifestVariant):
        return hint.variant
    reason = f"unknown variant tag {hint.variant!r}"
    if not isinstance(hint.variant, str):
        raise UnrecognizedManifestError(reason, hint=hint.describe())
    try:
        return ManifestVariant.from_str(hint.variant)
    except ValueError as exc:
        raise UnrecognizedManifestError(reason, hint=hint.describe()) from exc


def _protocol_variant(hint: ManifestHint, config: ResolverConfig) -> ManifestVariant | None:
    raw = hint.protocol_version
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    if not text.isdigit():
        raise UnrecognizedManifestError(f"invalid protocol version {raw!r}", hint=hint.describe())
    if int(text) > config.max_protocol_version:
        raise UnrecognizedManifestError(f"unsupported protocol version {text}", hint=hint.describe())
    return ManifestVariant.MODERN


def _content_type_variant(hint: ManifestHint, config: ResolverConfig) -> ManifestVariant | None:
    if hint.content_type is None:
        return None
    media_type = hint.content_type.split(";", 1)[0].strip().lower()
    if media_type in config.modern_content_types:
        return ManifestVariant.MODERN
    return None


def detect_variant(payload: Mapping[str, object]) -> ManifestVariant | None:
    """Return the variant implied by payload shape alone, or None.

    Modern is checked before embedded, and embedded before legacy. Legacy
    payloads never carry launchAsset, and the embedded check rejects any
    payload holding a legacy-only key, so a legacy manifest with an ``id``
    still resolves as legacy. A legacy manifest with ``id``, ``commitTime``
    and no legacy-only key reads as embedded; pass an explicit hint to override.
    """
    if looks_modern(payload):
        return ManifestVariant.MODERN
    if looks_embedded(payload):
        return ManifestVariant.EMBEDDED
    if looks_legacy(payload):
        return ManifestVariant.LEGACY
    return None


def select_variant(
    payload: Mapping[str, object],
    hint: HintLike = None,
    *,
    config: ResolverConfig | None = None,
) -> ManifestVariant:
    """Pick the variant for a payload without constructing an adapter.

    Precedence: explicit variant, embedded flag, protocol version, content
    type, payload shape, then config.fallback_variant.

    Raises:
        UnrecognizedManifestError: If nothing identifies a known variant.
    """
    settings = config or _DEFAULT_CONFIG
    resolved_hint = _coerce_hint(hint)
    variant = _explicit_variant(resolved_hint)
    if variant is None and resolved_hint.embedded:
        variant = ManifestVariant.EMBEDDED
    if variant is None:
        variant = _protocol_variant(resolved_hint, settings)
    if variant is None:
        variant = _content_type_variant(resolved_hint, settings)
    if variant is None:
        variant = detect_variant(payload)
    if variant is None:
        variant = settings.fallback_variant
    if variant is None:
        raise UnrecognizedManifestError(
            "payload shape matches no known manifest variant",
            hint=resolved_hint.describe() if hint is not None else None,
        )
    return variant


def resolve(
    payload: Mapping[str, object],
    hint: HintLike = None,
    *,
    config: ResolverConfig | None = None,
) -> RawManifestBehavior:
    """Construct the adapter that interprets payload.

    Deterministic: identical arguments always select the same variant and
    yield adapters with identical field values.

    Args:
        payload: Parsed, authenticated manifest mapping.
        hint: Optional ManifestHint or bare variant tag from the transport.
        config: Resolver settings; defaults apply when omitted.

    Returns:
        An adapter implementing RawManifestBehavior.

    Raises:
        ManifestPayloadTypeError: If payload is not a mapping.
        UnrecognizedManifestError: If no known variant matches.
    """
    if not isinstance(payload, Mapping):
        raise ManifestPayloadTypeError(payload)
    variant = select_variant(payload, hint, config=config)
    adapter = ADAPTERS[variant](payload)
    logger.debug(
        "Resolved %s manifest",
        variant,
        extra=structured_extra(
            component=LogComponent.RESOLVER,
            variant=variant,
            hint=_coerce_hint(hint).describe(),
        ),
    )
    return adapter


__all__ = [
    "ADAPTERS",
    "HintLike",
    "ManifestHint",
    "detect_variant",
    "resolve",
    "select_variant",
]
