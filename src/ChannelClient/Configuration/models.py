# === NAVMAP v1 ===
# {
#   "module": "ChannelClient.Configuration.models",
#   "purpose": "Immutable endpoint and connection configuration models",
#   "sections": [
#     {"id": "endpointuri", "name": "EndpointURI", "anchor": "class-endpointuri", "kind": "class"},
#     {"id": "backoff-delay", "name": "backoff_delay", "anchor": "function-backoff-delay", "kind": "function"},
#     {"id": "mask-sensitive-headers", "name": "mask_sensitive_headers", "anchor": "function-mask-sensitive-headers", "kind": "function"},
#     {"id": "configuration", "name": "Configuration", "anchor": "class-configuration", "kind": "class"}
#   ]
# }
# === /NAVMAP ===

"""Immutable models produced by configuration validation.

:class:`Configuration` is the only value downstream connection code receives.
It is built exclusively by the validator once every option has passed, so its
fields are always resolved: the endpoint carries a concrete port, backoff
sequences are non-empty, and transport options include the baseline settings.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, field_validator

from .codecs import JSONCodec, builtin_codec_name

__all__ = [
    "EndpointURI",
    "Configuration",
    "backoff_delay",
    "mask_sensitive_headers",
    "SENSITIVE_HEADERS",
]

SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)
_SENSITIVE_FRAGMENTS = ("token", "secret", "password", "api-key", "apikey")
_MASK = "***masked***"


class EndpointURI(BaseModel):
    """Websocket endpoint split into its URI components."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    host: Optional[str] = None
    port: Optional[int] = None
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None
    userinfo: Optional[str] = None

    def __str__(self) -> str:
        authority = ""
        if self.host is not None or self.port is not None or self.userinfo:
            host = self.host or ""
            if ":" in host:
                host = f"[{host}]"
            userinfo = f"{self.userinfo}@" if self.userinfo else ""
            port = f":{self.port}" if self.port is not None else ""
            authority = f"//{userinfo}{host}{port}"
        text = f"{self.scheme}:{authority}{self.path}"
        if self.query is not None:
            text += f"?{self.query}"
        if self.fragment is not None:
            text += f"#{self.fragment}"
        return text

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "userinfo" and value and ":" in value:
                value = f"{value.partition(':')[0]}:{_MASK}"
            yield name, value


def backoff_delay(sequence: Sequence[int], attempt: int) -> int:
    """Return the delay for ``attempt``, repeating the last entry once exhausted.

    Args:
        sequence: Non-empty backoff sequence in milliseconds.
        attempt: Zero-based retry attempt.

    Raises:
        ValueError: If ``attempt`` is negative or ``sequence`` is empty.

    Examples:
        >>> backoff_delay((10, 50, 100), 1)
        50
        >>> backoff_delay((10, 50, 100), 7)
        100
    """

    if attempt < 0:
        raise ValueError(f"attempt must be non-negative, got {attempt}")
    if not sequence:
        raise ValueError("backoff sequence must not be empty")
    return sequence[min(attempt, len(sequence) - 1)]


def _is_sensitive(name: str) -> bool:
    lower = name.lower()
    return lower in SENSITIVE_HEADERS or any(fragment in lower for fragment in _SENSITIVE_FRAGMENTS)


def mask_sensitive_headers(headers: Iterable[Tuple[str, str]]) -> Tuple[Tuple[str, str], ...]:
    """Replace credential-bearing header values with a mask.

    Examples:
        >>> mask_sensitive_headers([("Authorization", "Basic abc"), ("X-Trace", "1")])
        (('Authorization', '***masked***'), ('X-Trace', '1'))
    """

    return tuple((name, _MASK if _is_sensitive(name) else value) for name, value in headers)


class Configuration(BaseModel):
    """Validated websocket connection configuration."""

    model_config = ConfigDict(frozen=True)

    endpoint: EndpointURI
    heartbeat_interval_ms: NonNegativeInt
    headers: Tuple[Tuple[str, str], ...]
    json_codec: JSONCodec
    reconnect_backoff_ms: Tuple[NonNegativeInt, ...] = Field(min_length=1)
    rejoin_backoff_ms: Tuple[NonNegativeInt, ...] = Field(min_length=1)
    transport_options: Mapping[Any, Any]

    @field_validator("transport_options", mode="after")
    @classmethod
    def freeze_transport_options(cls, value: Mapping[Any, Any]) -> Mapping[Any, Any]:
        return MappingProxyType(dict(value))

    @property
    def heartbeat_enabled(self) -> bool:
        return self.heartbeat_interval_ms > 0

    def reconnect_delay_ms(self, attempt: int) -> int:
        """Delay before reconnect ``attempt`` (zero-based)."""
        return backoff_delay(self.reconnect_backoff_ms, attempt)

    def rejoin_delay_ms(self, attempt: int) -> int:
        """Delay before rejoin ``attempt`` (zero-based)."""
        return backoff_delay(self.rejoin_backoff_ms, attempt)

    def to_options(self) -> Dict[str, Any]:
        """Return raw options that validate back into an equal configuration."""

        codec_name = builtin_codec_name(self.json_codec)
        headers: List[Tuple[str, str]] = [(name, value) for name, value in self.headers]
        return {
            "endpoint": str(self.endpoint),
            "heartbeat_interval_ms": self.heartbeat_interval_ms,
            "headers": headers,
            "json_codec": codec_name if codec_name is not None else self.json_codec,
            "reconnect_backoff_ms": list(self.reconnect_backoff_ms),
            "rejoin_backoff_ms": list(self.rejoin_backoff_ms),
            "transport_options": dict(self.transport_options),
        }

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "headers":
                value = mask_sensitive_headers(value)
            elif name == "transport_options":
                value = dict(value)
            yield name, value

    def __hash__(self) -> int:
        # transport option values may be unhashable; equal mappings share a key set
        return hash(
            (
                self.endpoint,
                self.heartbeat_interval_ms,
                self.headers,
                self.json_codec,
                self.reconnect_backoff_ms,
                self.rejoin_backoff_ms,
                frozenset(self.transport_options),
            )
        )
