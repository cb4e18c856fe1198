"""JSON codec for request bodies and response documents.

orjson handles both directions. Parsing is lenient: any JSON value is accepted
at the top level and no member is required to be present. orjson never escapes
forward slashes, so re-serialized documents keep URLs readable.

Usage:
    >>> from restcall.io.codec import encode_body, parse_json
    >>> encode_body({"name": "a/b"})
    b'{"name":"a/b"}'
    >>> parse_json('{"id": 7}').unwrap()["id"]
    7
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel

from restcall.foundation.errors import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterator

    from restcall.foundation.errors import JsonValue

# Shortest text that can hold a JSON document worth parsing ("{}" or "[]")
MIN_JSON_LENGTH = 2

_MISSING = object()


class JsonDocument:
    """Parsed JSON response handed to the caller.

    Member access never raises for missing keys through get(); item access
    behaves like the underlying dict/list.
    """

    __slots__ = ("_root",)

    def __init__(self, root: JsonValue) -> None:
        self._root = root

    @property
    def root(self) -> JsonValue:
        return self._root

    @property
    def is_object(self) -> bool:
        return isinstance(self._root, dict)

    @property
    def is_array(self) -> bool:
        return isinstance(self._root, list)

    def get(self, key: str, default: JsonValue = None) -> JsonValue:
        """Member lookup on an object root; default for anything else."""
        if isinstance(self._root, dict):
            return self._root.get(key, default)
        return default

    def find(self, dotted: str, default: JsonValue = None) -> JsonValue:
        """Walk a dotted path ("value.0.id"); list segments are integer indexes."""
        node: object = self._root
        for part in dotted.split("."):
            if isinstance(node, dict):
                node = node.get(part, _MISSING)
            elif isinstance(node, list) and part.lstrip("-").isdigit():
                idx = int(part)
                node = node[idx] if -len(node) <= idx < len(node) else _MISSING
            else:
                node = _MISSING
            if node is _MISSING:
                return default
        return node  # type: ignore[return-value]

    def to_json(self, *, indent: bool = False) -> str:
        return orjson.dumps(self._root, option=orjson.OPT_INDENT_2 if indent else None).decode()

    def __getitem__(self, key: str | int) -> JsonValue:
        return self._root[key]  # type: ignore[index]

    def __contains__(self, key: object) -> bool:
        return isinstance(self._root, (dict, list)) and key in self._root

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self._root) if isinstance(self._root, (dict, list)) else iter(())

    def __len__(self) -> int:
        return len(self._root) if isinstance(self._root, (dict, list, str)) else 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonDocument):
            return self._root == other._root
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        text = self.to_json()
        return f"JsonDocument({text[:77] + '...' if len(text) > 80 else text})"


def parse_json(text: str | bytes) -> Result[JsonDocument, str]:
    """Parse text into a JsonDocument, or Err with the parser's diagnostic."""
    try:
        return Ok(JsonDocument(orjson.loads(text)))
    except orjson.JSONDecodeError as e:
        return Err(str(e))


def encode_body(body: object) -> bytes:
    """Serialize a request body to wire bytes.

    str and bytes pass through untouched (str as UTF-8); pydantic models are
    dumped in JSON mode; anything else must be orjson-serializable.
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, BaseModel):
        return orjson.dumps(body.model_dump(mode="json"))
    return orjson.dumps(body)
