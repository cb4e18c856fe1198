"""Error handling for restcall.

- ErrorCode: closed taxonomy of call outcomes
- CallError: structured failure record (code, message, host, path)
- Result/Ok/Err: success-or-failure values returned instead of raising
"""

from .errors import CallError, ErrorCode
from .result import Err, Ok, Result
from .types import JsonDict, JsonValue

__all__ = [
    "ErrorCode", "CallError",
    "Result", "Ok", "Err",
    "JsonDict", "JsonValue",
]
