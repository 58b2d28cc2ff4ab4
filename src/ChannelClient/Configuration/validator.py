# === NAVMAP v1 ===
# {
#   "module": "ChannelClient.Configuration.validator",
#   "purpose": "Validate raw connection options into a Configuration",
#   "sections": [
#     {"id": "validate", "name": "validate", "anchor": "function-validate", "kind": "function"},
#     {"id": "validate-or-raise", "name": "validate_or_raise", "anchor": "function-validate-or-raise", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Validation engine interpreting :data:`~ChannelClient.Configuration.schema.SCHEMA`.

Failure policy: unknown option keys are reported on their own, before any
field is examined. Otherwise every row is checked in schema order and all
failures are reported together, so one call surfaces every problem in the
options. The error list order is deterministic (schema order, then element
index for list rows).
"""

from __future__ import annotations

import difflib
import logging
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from .errors import (
    CustomParseError,
    FieldError,
    MissingRequiredFieldError,
    SchemaError,
    TypeMismatchError,
    ValidationError,
    ValidationOK,
    ValidationReject,
    ValidationResult,
)
from .models import Configuration
from .parsers import ParseReject
from .schema import FIELD_NAMES, SCHEMA, FieldKind, FieldSpec

__all__ = ["validate", "validate_or_raise"]

logger = logging.getLogger("ChannelClient.Configuration")

_OPTIONS_FIELD = "<options>"


def _pydantic_reasons(exc: PydanticValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = " -> ".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def _unknown_option_error(key: Any) -> SchemaError:
    reason = f"unknown option {key!r}: known options are {sorted(FIELD_NAMES)}"
    if isinstance(key, str):
        matches = difflib.get_close_matches(key, sorted(FIELD_NAMES), n=1)
        if matches:
            reason += f" (did you mean {matches[0]!r}?)"
    return SchemaError(str(key), reason, value=key)


def _check_shape(spec: FieldSpec, value: Any) -> Union[Any, FieldError]:
    try:
        return spec.adapter.validate_python(value, strict=True)  # type: ignore[union-attr]
    except PydanticValidationError as exc:
        detail = "; ".join(_pydantic_reasons(exc))
        return TypeMismatchError(
            spec.name,
            f"expected {spec.type_label}, got {value!r} ({detail})",
            value=value,
        )


def _check_field(spec: FieldSpec, value: Any) -> Tuple[Any, List[FieldError]]:
    """Return ``(canonical_value, failures)`` for one supplied option."""

    if spec.kind is FieldKind.CUSTOM:
        outcome = spec.parser(value)  # type: ignore[misc]
        if isinstance(outcome, ParseReject):
            return None, [CustomParseError(spec.name, outcome.reason, value=value)]
        return outcome.value, []

    checked = _check_shape(spec, value)
    if isinstance(checked, FieldError):
        return None, [checked]

    if spec.kind is FieldKind.PRIMITIVE:
        return checked, []

    if spec.element_parser is None:
        return tuple(checked), []

    items = []
    failures: List[FieldError] = []
    for index, element in enumerate(checked):
        outcome = spec.element_parser(element)
        if isinstance(outcome, ParseReject):
            failures.append(
                CustomParseError(spec.name, f"element {index}: {outcome.reason}", value=element)
            )
        else:
            items.append(outcome.value)
    return tuple(items), failures


def _reject(errors: List[FieldError]) -> ValidationReject:
    logger.debug(
        "Configuration rejected",
        extra={"stage": "config", "extra_fields": {"fields": [e.field for e in errors]}},
    )
    return ValidationReject(ValidationError(errors))


def validate(options: Mapping[str, Any]) -> ValidationResult:
    """Validate raw connection options.

    Never raises: the outcome is :class:`ValidationOK` carrying the
    :class:`Configuration`, or :class:`ValidationReject` carrying a
    :class:`ValidationError` that lists every failure.

    Args:
        options: Mapping of option name to raw value. Absent optional options
            take their schema default; ``None`` counts as a supplied value.

    Returns:
        The validation result.

    Examples:
        >>> result = validate({"endpoint": "ws://localhost/socket/websocket"})
        >>> result.configuration.endpoint.port
        80
    """

    if not isinstance(options, Mapping):
        return _reject(
            [SchemaError(_OPTIONS_FIELD, f"options must be a mapping, got {options!r}", value=options)]
        )

    unknown = sorted((key for key in options if key not in FIELD_NAMES), key=repr)
    if unknown:
        return _reject([_unknown_option_error(key) for key in unknown])

    values: Dict[str, Any] = {}
    failures: List[FieldError] = []
    for spec in SCHEMA:
        if spec.name not in options:
            if spec.required:
                failures.append(
                    MissingRequiredFieldError(spec.name, f"required option {spec.name!r} not found")
                )
            else:
                values[spec.name] = spec.default
            continue

        checked, field_failures = _check_field(spec, options[spec.name])
        if field_failures:
            failures.extend(field_failures)
        else:
            values[spec.name] = checked

    if failures:
        return _reject(failures)

    try:
        configuration = Configuration(**values)
    except PydanticValidationError as exc:
        return _reject(
            [TypeMismatchError(_OPTIONS_FIELD, reason) for reason in _pydantic_reasons(exc)]
        )

    endpoint = configuration.endpoint
    logger.debug(
        "Configuration validated for %s://%s:%s",
        endpoint.scheme,
        endpoint.host,
        endpoint.port,
        extra={"stage": "config"},
    )
    return ValidationOK(configuration)


def validate_or_raise(options: Mapping[str, Any]) -> Configuration:
    """Validate ``options`` and return the configuration.

    Intended for start-up paths that cannot continue without a valid
    configuration.

    Raises:
        ValidationError: If any option is invalid.
    """

    return validate(options).unwrap()
