"""Exception hierarchy and result contracts for connection configuration.

Validation failures fall into four categories: unknown options, a missing
required option, a value of the wrong shape, and a value rejected by a field
parser. Each category is a :class:`FieldError` subclass so callers can react to
the category while still reading the offending field and reason. The
:class:`ValidationError` aggregate bundles every failure found in one call.

``validate`` never raises; it returns :class:`ValidationOK` or
:class:`ValidationReject`. Only ``unwrap`` (and ``validate_or_raise``) turns a
reject into a raised :class:`ValidationError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence, Tuple, Type, Union

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checkers only
    from .models import Configuration

__all__ = [
    "ErrorCode",
    "ConfigurationError",
    "FieldError",
    "SchemaError",
    "MissingRequiredFieldError",
    "TypeMismatchError",
    "CustomParseError",
    "ValidationError",
    "ValidationOK",
    "ValidationReject",
    "ValidationResult",
]

# ============================================================================
# Error Codes
# ============================================================================


class ErrorCode(str, Enum):
    """Canonical codes attached to every field failure."""

    E_UNKNOWN_OPTION = "E_UNKNOWN_OPTION"  # Option key not in the schema
    E_OPTIONS_SHAPE = "E_OPTIONS_SHAPE"  # Options container is not a mapping
    E_MISSING_REQUIRED = "E_MISSING_REQUIRED"  # Required option absent
    E_TYPE_MISMATCH = "E_TYPE_MISMATCH"  # Value has the wrong primitive/list shape
    E_PARSE = "E_PARSE"  # Field parser rejected the value


_NO_VALUE: Any = object()


# ============================================================================
# Exceptions
# ============================================================================


class ConfigurationError(RuntimeError):
    """Base exception for connection configuration failures."""


class FieldError(ConfigurationError):
    """A single failure attributed to one option."""

    code: ErrorCode = ErrorCode.E_PARSE

    def __init__(self, field: str, reason: str, *, value: Any = _NO_VALUE) -> None:
        self.field = field
        self.reason = reason
        self._value = value
        super().__init__(f"{field}: {reason}")

    @property
    def has_value(self) -> bool:
        """Whether the failure refers to a supplied value."""
        return self._value is not _NO_VALUE

    @property
    def value(self) -> Any:
        """The offending raw value, or ``None`` when nothing was supplied."""
        return self._value if self.has_value else None


class SchemaError(FieldError):
    """Raised for options the schema does not recognise."""

    code = ErrorCode.E_UNKNOWN_OPTION


class MissingRequiredFieldError(FieldError):
    """Raised when a required option is absent."""

    code = ErrorCode.E_MISSING_REQUIRED


class TypeMismatchError(FieldError):
    """Raised when a value does not match its declared primitive or list shape."""

    code = ErrorCode.E_TYPE_MISMATCH


class CustomParseError(FieldError):
    """Raised when a field parser rejects a value."""

    code = ErrorCode.E_PARSE


class ValidationError(ConfigurationError):
    """All failures found while validating one set of options."""

    def __init__(self, errors: Sequence[FieldError]) -> None:
        if not errors:
            raise ValueError("ValidationError requires at least one field error")
        self.errors: Tuple[FieldError, ...] = tuple(errors)
        super().__init__(
            "Configuration validation failed:\n  "
            + "\n  ".join(str(error) for error in self.errors)
        )

    @property
    def first(self) -> FieldError:
        return self.errors[0]

    @property
    def fields(self) -> Tuple[str, ...]:
        """Names of the failing options, in report order."""
        return tuple(error.field for error in self.errors)

    def of_type(self, error_type: Type[FieldError]) -> Tuple[FieldError, ...]:
        return tuple(error for error in self.errors if isinstance(error, error_type))


# ============================================================================
# Result Types
# ============================================================================


@dataclass(frozen=True)
class ValidationOK:
    """Options validated into a configuration."""

    configuration: "Configuration"

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> "Configuration":
        return self.configuration


@dataclass(frozen=True)
class ValidationReject:
    """Options rejected; ``error`` lists every failure."""

    error: ValidationError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> "Configuration":
        """Raise the carried :class:`ValidationError`."""
        raise self.error


ValidationResult = Union[ValidationOK, ValidationReject]
