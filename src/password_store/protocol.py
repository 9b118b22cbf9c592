"""
Length-prefixed JSON protocol spoken by ``gopass jsonapi listen``.

A message is a 4-byte little-endian unsigned length followed by that many
bytes of UTF-8 encoded JSON.  The program mirrors the framing on its
output, so decoding skips the first 4 bytes of the captured stdout.
"""

import json
import struct
from typing import Any, Dict, List, Optional

from .errors import JsonDecodeError, TextDecodeError

# Request types (client -> store)
GET_LOGIN = "getLogin"
QUERY = "query"
CREATE = "create"

MSG_SIZE = 4
_HEADER = struct.Struct("<I")


def make_request(msg_type: str, **payload: Any) -> Dict[str, Any]:
    """Build a request mapping with its ``type`` field first."""
    return {"type": msg_type, **payload}


def frame(obj: Dict[str, Any]) -> bytes:
    """Serialize ``obj`` and prepend its byte length."""
    body = json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return _HEADER.pack(len(body)) + body


def decode_text(raw: bytes, stream: str) -> str:
    """Decode captured stream bytes as UTF-8."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TextDecodeError(exc, stream=stream) from exc


def decode_message(raw: bytes) -> "JsonValue":
    """Decode a framed response, skipping the size header without checking it."""
    text = decode_text(raw[MSG_SIZE:], "stdout")
    try:
        return JsonValue(json.loads(text))
    except ValueError as exc:
        raise JsonDecodeError(exc) from exc


class JsonValue:
    """
    A decoded JSON node with fallible accessors.

    The store does not guarantee response shapes, so every accessor
    returns ``None`` on a type mismatch instead of raising.  Indexing a
    missing key (or a non-object) yields a null node, which lets callers
    chain lookups like ``response["password"].as_string()``.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f"JsonValue({self.value!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, JsonValue):
            return self.value == other.value
        return NotImplemented

    def __getitem__(self, key: str) -> "JsonValue":
        return self.get(key)

    def get(self, key: str) -> "JsonValue":
        obj = self.as_object()
        if obj is None:
            return JsonValue()
        return JsonValue(obj.get(key))

    def is_null(self) -> bool:
        return self.value is None

    def as_string(self) -> Optional[str]:
        return self.value if isinstance(self.value, str) else None

    def as_bool(self) -> Optional[bool]:
        return self.value if isinstance(self.value, bool) else None

    def as_number(self):
        # bool is an int subclass but not a JSON number
        if isinstance(self.value, bool):
            return None
        return self.value if isinstance(self.value, (int, float)) else None

    def as_array(self) -> Optional[List["JsonValue"]]:
        if not isinstance(self.value, list):
            return None
        return [JsonValue(item) for item in self.value]

    def as_object(self) -> Optional[Dict[str, Any]]:
        return self.value if isinstance(self.value, dict) else None
