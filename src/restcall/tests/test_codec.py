"""Tests for JSON parsing, body encoding and JsonDocument access."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from restcall.io import JsonDocument, encode_body, parse_json


def test_parse_ok() -> None:
    doc = parse_json('{"value": [{"id": "a"}, {"id": "b"}], "@odata.count": 2}').unwrap()

    assert doc.is_object
    assert doc.get("@odata.count") == 2
    assert doc.get("missing", "dflt") == "dflt"
    assert "value" in doc
    assert len(doc) == 2


def test_parse_err_carries_parser_message() -> None:
    result = parse_json("{invalid")
    assert result.is_err()
    assert isinstance(result.unwrap_err(), str)
    assert result.unwrap_err()


def test_find_walks_objects_and_arrays() -> None:
    doc = JsonDocument({"value": [{"id": "a"}, {"id": "b"}]})

    assert doc.find("value.1.id") == "b"
    assert doc.find("value.-1.id") == "b"
    assert doc.find("value.5.id") is None
    assert doc.find("value.x") is None
    assert doc.find("nope.deeper", default=0) == 0


def test_array_root() -> None:
    doc = JsonDocument([1, 2, 3])
    assert doc.is_array
    assert doc[0] == 1
    assert doc.get("anything") is None
    assert list(doc) == [1, 2, 3]


def test_reserialize_keeps_forward_slashes() -> None:
    doc = parse_json(r'{"link": "https:\/\/example.com\/a"}').unwrap()
    assert doc.to_json() == '{"link":"https://example.com/a"}'


def test_equality() -> None:
    assert JsonDocument({"a": 1}) == parse_json('{"a":1}').unwrap()
    assert JsonDocument({"a": 1}) != JsonDocument({"a": 2})


class _Payload(BaseModel):
    name: str
    tags: list[str] = []


@pytest.mark.parametrize("body,expected", [
    ({"a": "b/c"}, b'{"a":"b/c"}'),
    ([1, None, True], b"[1,null,true]"),
    ("raw text", b"raw text"),
    (b"\x00bytes", b"\x00bytes"),
    (_Payload(name="n", tags=["t"]), b'{"name":"n","tags":["t"]}'),
])
def test_encode_body(body: object, expected: bytes) -> None:
    assert encode_body(body) == expected


def test_encode_body_rejects_unserializable() -> None:
    with pytest.raises(TypeError):
        encode_body({"obj": object()})
