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

"""Errors raised while resolving and reading raw manifests.

Field errors are always scoped to a single field and are raised on access of
that field, never when an adapter is constructed.
"""

from __future__ import annotations

from otamanifest._internal.exceptions import OtaManifestTypeError, OtaManifestValidationError


class ManifestFieldError(OtaManifestValidationError):
    """Base error for a problem with one manifest field.

    Attributes:
        field: Name (or dotted path) of the offending field.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(ManifestFieldError):
    """Raised when a required field is absent from the payload."""

    def __init__(self, field: str) -> None:
        """Initialize with the name of the missing field.

        Args:
            field: Name of the required field that was not found.
        """
        super().__init__(field, f"Manifest field '{field}' is required but missing")


class MalformedFieldError(ManifestFieldError):
    """Raised when a present field cannot be read as its documented type.

    Attributes:
        field: Name of the offending field.
        expected: Human-readable name of the expected type.
        actual: Bounded summary of the value that was found.
    """

    def __init__(self, field: str, expected: str, actual: str) -> None:
        """Initialize with field diagnostics.

        Args:
            field: Name of the offending field.
            expected: Human-readable name of the expected type.
            actual: Safe summary of the value actually present.
        """
        self.expected = expected
        self.actual = actual
        super().__init__(field, f"Manifest field '{field}' must be {expected} (got {actual})")


class UnrecognizedManifestError(OtaManifestValidationError):
    """Raised when no manifest variant matches a payload and hint.

    Attributes:
        reason: Why resolution failed.
        hint: String form of the transport hint, if one was supplied.
    """

    def __init__(self, reason: str, *, hint: str | None = None) -> None:
        self.reason = reason
        self.hint = hint
        message = f"Unrecognized manifest: {reason}"
        if hint is not None:
            message = f"{message} (hint: {hint})"
        super().__init__(message)


class ManifestPayloadTypeError(OtaManifestTypeError):
    """Raised when the raw payload handed to an adapter is not a mapping."""

    def __init__(self, value: object) -> None:
        self.value_type = type(value).__name__
        super().__init__(f"Manifest payload must be a mapping, not {self.value_type}")


__all__ = [
    "MalformedFieldError",
    "ManifestFieldError",
    "ManifestPayloadTypeError",
    "MissingFieldError",
    "UnrecognizedManifestError",
]
