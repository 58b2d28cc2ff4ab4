"""Tests for the error taxonomy and result contracts."""

from __future__ import annotations

import pytest

from ChannelClient.Configuration import (
    ConfigurationError,
    CustomParseError,
    ErrorCode,
    FieldError,
    MissingRequiredFieldError,
    SchemaError,
    TypeMismatchError,
    ValidationError,
    ValidationOK,
    ValidationReject,
    validate,
)


class TestFieldErrors:
    def test_hierarchy(self):
        for cls in (SchemaError, MissingRequiredFieldError, TypeMismatchError, CustomParseError):
            assert issubclass(cls, FieldError)
            assert issubclass(cls, ConfigurationError)
        assert issubclass(ValidationError, ConfigurationError)
        assert issubclass(ConfigurationError, RuntimeError)

    def test_codes(self):
        assert SchemaError("x", "r").code is ErrorCode.E_UNKNOWN_OPTION
        assert MissingRequiredFieldError("x", "r").code is ErrorCode.E_MISSING_REQUIRED
        assert TypeMismatchError("x", "r").code is ErrorCode.E_TYPE_MISMATCH
        assert CustomParseError("x", "r").code is ErrorCode.E_PARSE

    def test_message_and_value(self):
        error = CustomParseError("headers", "bad pair", value=("a", 1))
        assert str(error) == "headers: bad pair"
        assert error.has_value
        assert error.value == ("a", 1)

    def test_none_is_a_real_value(self):
        error = TypeMismatchError("heartbeat_interval_ms", "bad", value=None)
        assert error.has_value
        assert error.value is None

    def test_missing_value(self):
        error = MissingRequiredFieldError("endpoint", "required option 'endpoint' not found")
        assert not error.has_value
        assert error.value is None


class TestValidationError:
    def test_requires_errors(self):
        with pytest.raises(ValueError):
            ValidationError([])

    def test_aggregate_accessors(self):
        errors = [
            MissingRequiredFieldError("endpoint", "missing"),
            TypeMismatchError("headers", "not a list"),
            CustomParseError("transport_options", "not a mapping"),
        ]
        error = ValidationError(errors)

        assert error.first is errors[0]
        assert error.fields == ("endpoint", "headers", "transport_options")
        assert error.of_type(CustomParseError) == (errors[2],)
        assert str(error) == (
            "Configuration validation failed:\n"
            "  endpoint: missing\n"
            "  headers: not a list\n"
            "  transport_options: not a mapping"
        )


class TestResults:
    def test_ok_unwrap(self, endpoint_options):
        result = validate(endpoint_options)
        assert isinstance(result, ValidationOK)
        assert result.ok
        assert result.unwrap() is result.configuration

    def test_reject_unwrap_raises_carried_error(self):
        result = validate({})
        assert isinstance(result, ValidationReject)
        assert not result.ok
        with pytest.raises(ValidationError) as exc_info:
            result.unwrap()
        assert exc_info.value is result.error

    def test_results_are_frozen(self):
        result = validate({})
        with pytest.raises(AttributeError):
            result.error = None
