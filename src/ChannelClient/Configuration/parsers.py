# === NAVMAP v1 ===
# {
#   "module": "ChannelClient.Configuration.parsers",
#   "purpose": "Pure per-field parsers for connection options",
#   "sections": [
#     {"id": "parseok", "name": "ParseOK", "anchor": "class-parseok", "kind": "class"},
#     {"id": "parsereject", "name": "ParseReject", "anchor": "class-parsereject", "kind": "class"},
#     {"id": "parse-uri", "name": "parse_uri", "anchor": "function-parse-uri", "kind": "function"},
#     {"id": "parse-header-pair", "name": "parse_header_pair", "anchor": "function-parse-header-pair", "kind": "function"},
#     {"id": "parse-transport-options", "name": "parse_transport_options", "anchor": "function-parse-transport-options", "kind": "function"},
#     {"id": "parse-json-codec", "name": "parse_json_codec", "anchor": "function-parse-json-codec", "kind": "function"}
#   ]
# }
# === /NAVMAP ===

"""Field parsers for connection options.

Each parser takes one raw option value and returns :class:`ParseOK` with the
canonical value or :class:`ParseReject` with a human-readable reason naming the
offending value. Parsers never raise; the validator attaches the field name and
turns a reject into a :class:`~ChannelClient.Configuration.errors.CustomParseError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union
from urllib.parse import ParseResult, SplitResult, urlsplit

from .codecs import BUILTIN_CODECS, JSONCodec, codec_from_module
from .models import EndpointURI

__all__ = [
    "ParseOK",
    "ParseReject",
    "ParseOutcome",
    "FieldParser",
    "KNOWN_SCHEMES",
    "DEFAULT_PORTS",
    "TRANSPORT_BASELINE",
    "parse_uri",
    "parse_header_pair",
    "parse_transport_options",
    "parse_json_codec",
]

# ============================================================================
# Outcomes
# ============================================================================


@dataclass(frozen=True)
class ParseOK:
    """Parser accepted the value; ``value`` is its canonical form."""

    value: Any


@dataclass(frozen=True)
class ParseReject:
    """Parser rejected the value."""

    reason: str


ParseOutcome = Union[ParseOK, ParseReject]
FieldParser = Callable[[Any], ParseOutcome]

# ============================================================================
# Endpoint URI
# ============================================================================

KNOWN_SCHEMES: Tuple[str, ...] = ("ws", "wss")
DEFAULT_PORTS: Dict[str, int] = {"ws": 80, "wss": 443}


def _port_text(netloc: str) -> str:
    """Return the raw port text of ``netloc`` (after userinfo and IPv6 brackets)."""

    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        hostport = hostport.partition("]")[2]
    return hostport.partition(":")[2]


def _split_string(text: str) -> Union[Tuple[EndpointURI, Any], ParseReject]:
    try:
        parts = urlsplit(text)
        hostname = parts.hostname
    except ValueError as exc:
        return ParseReject(f"could not parse {text!r} as a URI: {exc}")

    try:
        port: Any = parts.port
    except ValueError:
        port = _port_text(parts.netloc)

    userinfo = parts.netloc.rpartition("@")[0] if "@" in parts.netloc else None
    uri = EndpointURI(
        scheme=parts.scheme,
        host=hostname,
        path=parts.path,
        query=parts.query or None,
        fragment=parts.fragment or None,
        userinfo=userinfo or None,
    )
    return uri, port


def parse_uri(value: Any) -> ParseOutcome:
    """Validate a websocket endpoint and resolve its port.

    Accepts a URI string, an :class:`EndpointURI`, or a ``urllib.parse``
    split/parse result. A missing port is assumed from the scheme (``ws`` -> 80,
    ``wss`` -> 443); the scheme must be one of :data:`KNOWN_SCHEMES`, the host
    must be present and the resolved port must be a positive integer. Host
    names in string input are lower-cased, as ``urllib.parse`` reports them.

    Examples:
        >>> parse_uri("ws://localhost/socket/websocket").value.port
        80
        >>> parse_uri("ftp://example.com").reason
        "unknown scheme 'ftp': only ['ws', 'wss'] are accepted"
    """

    if isinstance(value, EndpointURI):
        uri, port = value, value.port
    elif isinstance(value, str):
        split = _split_string(value)
        if isinstance(split, ParseReject):
            return split
        uri, port = split
    elif isinstance(value, (SplitResult, ParseResult)):
        split = _split_string(value.geturl())
        if isinstance(split, ParseReject):
            return split
        uri, port = split
    else:
        return ParseReject(f"could not parse {value!r} as a string or URI")

    if port is None:
        port = DEFAULT_PORTS.get(uri.scheme)

    if uri.scheme not in KNOWN_SCHEMES:
        return ParseReject(f"unknown scheme {uri.scheme!r}: only {list(KNOWN_SCHEMES)} are accepted")

    if not uri.host:
        text = value if isinstance(value, str) else str(uri)
        return ParseReject(f"missing host in {text!r}: please provide a host to connect to")

    if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
        return ParseReject(f"unparseable port value {port!r}: please provide a positive-integer value")

    return ParseOK(uri.model_copy(update={"port": port}))


# ============================================================================
# Headers
# ============================================================================


def parse_header_pair(value: Any) -> ParseOutcome:
    """Validate one ``(name, value)`` header pair of strings.

    Order and casing are preserved; duplicates are the caller's business.
    """

    if isinstance(value, (tuple, list)) and len(value) == 2:
        name, header_value = value
        if isinstance(name, str) and isinstance(header_value, str):
            return ParseOK((name, header_value))
    return ParseReject(f"could not parse {value!r} as a two-tuple of strings")


# ============================================================================
# Transport options
# ============================================================================

TRANSPORT_BASELINE: Mapping[str, Any] = MappingProxyType({"protocols": ("http",)})


def parse_transport_options(value: Any) -> ParseOutcome:
    """Merge caller transport options over :data:`TRANSPORT_BASELINE`.

    Baseline keys stay present unless the caller supplies the same key.
    """

    if not isinstance(value, Mapping):
        return ParseReject(f"transport options must be a mapping, got {value!r}")
    merged: Dict[Any, Any] = dict(TRANSPORT_BASELINE)
    merged.update(value)
    return ParseOK(merged)


# ============================================================================
# JSON codec
# ============================================================================


def parse_json_codec(value: Any) -> ParseOutcome:
    """Resolve a codec from a built-in name, a :class:`JSONCodec`, or a dumps/loads provider."""

    if isinstance(value, JSONCodec):
        return ParseOK(value)
    if isinstance(value, str):
        codec: Optional[JSONCodec] = BUILTIN_CODECS.get(value)
        if codec is None:
            return ParseReject(
                f"unknown codec {value!r}: only {sorted(BUILTIN_CODECS)} are built in"
            )
        return ParseOK(codec)
    codec = codec_from_module(value)
    if codec is None:
        return ParseReject(
            f"could not use {value!r} as a JSON codec: expected one of "
            f"{sorted(BUILTIN_CODECS)}, a JSONCodec, or an object exposing dumps() and loads()"
        )
    return ParseOK(codec)
