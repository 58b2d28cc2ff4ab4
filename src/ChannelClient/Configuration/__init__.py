# === NAVMAP v1 ===
# {
#   "module": "ChannelClient.Configuration",
#   "purpose": "Public API for websocket connection configuration",
#   "sections": []
# }
# === /NAVMAP ===

"""Connection configuration for the ChannelClient websocket client.

Raw options supplied at client start are validated into an immutable
:class:`Configuration` before any connection is attempted:

    >>> from ChannelClient.Configuration import validate_or_raise
    >>> config = validate_or_raise({"endpoint": "wss://example.com/socket/websocket"})
    >>> config.endpoint.port
    443

Modules:
- errors: error taxonomy and ``ValidationOK`` / ``ValidationReject`` results
- models: ``EndpointURI`` and ``Configuration``
- codecs: ``JSONCodec`` and the built-in codec registry
- parsers: pure per-field parsers
- schema: the option table and generated option reference
- validator: ``validate`` and ``validate_or_raise``
"""

from ChannelClient.Configuration.codecs import BUILTIN_CODECS, DEFAULT_CODEC, JSONCodec
from ChannelClient.Configuration.errors import (
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
    ValidationResult,
)
from ChannelClient.Configuration.models import Configuration, EndpointURI, backoff_delay
from ChannelClient.Configuration.schema import (
    FIELD_NAMES,
    SCHEMA,
    FieldKind,
    FieldSpec,
    get_schema_summary,
    render_options_doc,
)
from ChannelClient.Configuration.validator import validate, validate_or_raise

__all__ = [
    # Validation
    "validate",
    "validate_or_raise",
    # Models
    "Configuration",
    "EndpointURI",
    "JSONCodec",
    "BUILTIN_CODECS",
    "DEFAULT_CODEC",
    "backoff_delay",
    # Schema
    "SCHEMA",
    "FIELD_NAMES",
    "FieldKind",
    "FieldSpec",
    "get_schema_summary",
    "render_options_doc",
    # Errors
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
