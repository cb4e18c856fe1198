"""Wire-level helpers: JSON encoding and parsed documents."""

from .codec import MIN_JSON_LENGTH, JsonDocument, encode_body, parse_json

__all__ = ["JsonDocument", "parse_json", "encode_body", "MIN_JSON_LENGTH"]
