"""JSON codec capability used to encode and decode channel messages.

A codec is any pair of ``encode``/``decode`` callables. Callers either name a
built-in codec, pass a :class:`JSONCodec`, or hand over a module-like object
exposing ``dumps`` and ``loads`` (``json``, ``simplejson``, ...).
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict

__all__ = [
    "JSONCodec",
    "BUILTIN_CODECS",
    "DEFAULT_CODEC",
    "DEFAULT_CODEC_NAME",
    "codec_from_module",
    "builtin_codec_name",
]


class JSONCodec(BaseModel):
    """Named encode/decode pair."""

    model_config = ConfigDict(frozen=True)

    name: str
    encoder: Callable[[Any], Any]
    decoder: Callable[[Any], Any]

    def encode(self, payload: Any) -> Any:
        return self.encoder(payload)

    def decode(self, data: Any) -> Any:
        return self.decoder(data)


def _compact_dumps(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))


DEFAULT_CODEC_NAME = "json"

BUILTIN_CODECS: Dict[str, JSONCodec] = {
    DEFAULT_CODEC_NAME: JSONCodec(name=DEFAULT_CODEC_NAME, encoder=_compact_dumps, decoder=json.loads),
}

DEFAULT_CODEC = BUILTIN_CODECS[DEFAULT_CODEC_NAME]


def codec_from_module(provider: Any) -> Optional[JSONCodec]:
    """Wrap an object exposing ``dumps``/``loads`` as a codec.

    Returns ``None`` when ``provider`` lacks either callable.
    """

    dumps = getattr(provider, "dumps", None)
    loads = getattr(provider, "loads", None)
    if not callable(dumps) or not callable(loads):
        return None
    name = getattr(provider, "__name__", None) or type(provider).__name__
    return JSONCodec(name=str(name), encoder=dumps, decoder=loads)


def builtin_codec_name(codec: JSONCodec) -> Optional[str]:
    """Return the registry name when ``codec`` is a built-in instance."""

    for name, builtin in BUILTIN_CODECS.items():
        if codec == builtin:
            return name
    return None
