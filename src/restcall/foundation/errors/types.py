"""JSON type aliases shared across restcall."""

from __future__ import annotations

from typing import Any, Union

# Any in the recursive slots keeps pydantic from chasing the recursion
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]
