# === NAVMAP v1 ===
# {
#   "module": "ChannelClient.Configuration.schema",
#   "purpose": "Declarative table of recognised connection options",
#   "sections": [
#     {"id": "fieldkind", "name": "FieldKind", "anchor": "class-fieldkind", "kind": "class"},
#     {"id": "fieldspec", "name": "FieldSpec", "anchor": "class-fieldspec", "kind": "class"},
#     {"id": "schema", "name": "SCHEMA", "anchor": "constant-schema", "kind": "constant"},
#     {"id": "get-schema-summary", "name": "get_schema_summary", "anchor": "function-get-schema-summary", "kind": "function"},
#     {"id": "render-options-doc", "name": "render_options_doc", "anchor": "function-render-options-doc", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Schema registry for connection options.

Every recognised option is one :class:`FieldSpec` row in :data:`SCHEMA`. A row
is tagged with how its value is checked:

- ``PRIMITIVE``: a strict pydantic type check against ``annotation``
- ``LIST``: a strict list check, then ``element_parser`` on every element
- ``CUSTOM``: the row's ``parser`` owns both shape and semantics

Adding an option means adding a row (and the matching ``Configuration`` field).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import NonNegativeInt, TypeAdapter, conlist

from .codecs import DEFAULT_CODEC, JSONCodec
from .parsers import (
    TRANSPORT_BASELINE,
    FieldParser,
    parse_header_pair,
    parse_json_codec,
    parse_transport_options,
    parse_uri,
)

__all__ = [
    "FieldKind",
    "FieldSpec",
    "NO_DEFAULT",
    "SCHEMA",
    "FIELD_NAMES",
    "field_spec",
    "get_schema_summary",
    "render_options_doc",
]


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


class FieldKind(str, Enum):
    """How a field's raw value is checked."""

    PRIMITIVE = "primitive"
    LIST = "list"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FieldSpec:
    """One recognised option.

    Attributes:
        name: Option key, unique within the schema.
        kind: Checking strategy.
        type_label: Human-readable type used in messages and docs.
        doc: Option reference text.
        required: Whether the option must be supplied.
        default: Value used verbatim when the option is absent.
        annotation: Type checked by pydantic for ``PRIMITIVE`` and ``LIST`` rows.
        parser: Field parser for ``CUSTOM`` rows.
        element_parser: Per-element parser for ``LIST`` rows.
    """

    name: str
    kind: FieldKind
    type_label: str
    doc: str
    required: bool = False
    default: Any = NO_DEFAULT
    annotation: Any = None
    parser: Optional[FieldParser] = None
    element_parser: Optional[FieldParser] = None
    adapter: Optional[TypeAdapter] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.required == self.has_default:
            raise ValueError(f"Field '{self.name}' must be either required or have a default")
        if self.kind in (FieldKind.PRIMITIVE, FieldKind.LIST) and self.annotation is None:
            raise ValueError(f"Field '{self.name}' of kind {self.kind.value} needs an annotation")
        if self.kind is FieldKind.CUSTOM and self.parser is None:
            raise ValueError(f"Custom field '{self.name}' needs a parser")
        if self.element_parser is not None and self.kind is not FieldKind.LIST:
            raise ValueError(f"Only list fields take an element parser, not '{self.name}'")
        if self.annotation is not None:
            object.__setattr__(self, "adapter", TypeAdapter(self.annotation))

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


_NonEmptyBackoff = conlist(NonNegativeInt, min_length=1)

SCHEMA: Tuple[FieldSpec, ...] = (
    FieldSpec(
        name="endpoint",
        kind=FieldKind.CUSTOM,
        type_label="websocket URI",
        doc=(
            "The endpoint the websocket connects to. Schemes \"ws\" and \"wss\" are "
            "supported and a scheme must be given. Strings and parsed URIs are accepted, "
            "e.g. \"ws://localhost:4000/socket/websocket\"."
        ),
        required=True,
        parser=parse_uri,
    ),
    FieldSpec(
        name="heartbeat_interval_ms",
        kind=FieldKind.PRIMITIVE,
        type_label="non-negative integer",
        doc=(
            "Time between heartbeat messages. 0 disables automatic heartbeats. "
            "Phoenix channels close connections after 60 seconds of inactivity (60000)."
        ),
        default=30_000,
        annotation=NonNegativeInt,
    ),
    FieldSpec(
        name="headers",
        kind=FieldKind.LIST,
        type_label="list of (str, str) pairs",
        doc=(
            "Headers merged into the upgrade request. Each header is a two-tuple of "
            "strings. Header names are case-insensitive."
        ),
        default=(),
        annotation=List[Any],
        element_parser=parse_header_pair,
    ),
    FieldSpec(
        name="json_codec",
        kind=FieldKind.CUSTOM,
        type_label="JSON codec",
        doc=(
            "Codec used to encode and decode messages: a built-in codec name, a "
            "JSONCodec, or an object exposing dumps() and loads()."
        ),
        default=DEFAULT_CODEC,
        parser=parse_json_codec,
    ),
    FieldSpec(
        name="reconnect_backoff_ms",
        kind=FieldKind.LIST,
        type_label="non-empty list of non-negative integers",
        doc=(
            "Delays used when reconnecting, indexed by attempt number. Attempts past "
            "the end of the list reuse the final value."
        ),
        default=(10, 50, 100, 150, 200, 250, 500, 1_000, 2_000, 5_000),
        annotation=_NonEmptyBackoff,
    ),
    FieldSpec(
        name="rejoin_backoff_ms",
        kind=FieldKind.LIST,
        type_label="non-empty list of non-negative integers",
        doc=(
            "Delays used when rejoining a topic, indexed by attempt number. Attempts "
            "past the end of the list reuse the final value."
        ),
        default=(100, 500, 1_000, 2_000, 5_000, 10_000),
        annotation=_NonEmptyBackoff,
    ),
    FieldSpec(
        name="transport_options",
        kind=FieldKind.CUSTOM,
        type_label="mapping",
        doc=(
            "Options passed to the transport when opening the connection. "
            "{'protocols': ('http',)} is merged in by default so \"wss\" endpoints "
            "negotiate HTTP/1.1, which websocket upgrades require."
        ),
        default=TRANSPORT_BASELINE,
        parser=parse_transport_options,
    ),
)

FIELD_NAMES: FrozenSet[str] = frozenset(spec.name for spec in SCHEMA)

_BY_NAME: Dict[str, FieldSpec] = {spec.name: spec for spec in SCHEMA}


def field_spec(name: str) -> FieldSpec:
    """Return the row for ``name``.

    Raises:
        KeyError: If ``name`` is not a recognised option.
    """
    return _BY_NAME[name]


def _describe_default(spec: FieldSpec) -> Optional[str]:
    if not spec.has_default:
        return None
    default = spec.default
    if isinstance(default, JSONCodec):
        return repr(default.name)
    if isinstance(default, tuple):
        return repr(list(default))
    if hasattr(default, "items"):
        return repr(dict(default))
    return repr(default)


def get_schema_summary() -> Dict[str, Dict[str, Any]]:
    """Summarise the schema for documentation and tooling."""

    return {
        spec.name: {
            "kind": spec.kind.value,
            "type": spec.type_label,
            "required": spec.required,
            "default": _describe_default(spec),
        }
        for spec in SCHEMA
    }


def render_options_doc() -> str:
    """Render the option reference as a Markdown bullet list."""

    lines = []
    for spec in SCHEMA:
        qualifier = "required" if spec.required else f"default {_describe_default(spec)}"
        lines.append(f"* `{spec.name}` ({spec.type_label}, {qualifier}) - {spec.doc}")
    return "\n".join(lines) + "\n"
