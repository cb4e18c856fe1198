"""Error taxonomy for REST calls.

Every call settles on exactly one ErrorCode. Failures additionally carry a
CallError: a structured, human-readable record naming the host and path that
failed plus whatever diagnostic the failing stage produced.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Closed set of call outcome codes.

    OK and NO_CONTENT are not failures; the rest are.
    """
    OK = "OK"
    NO_CONTENT = "NO_CONTENT"
    CALL_FAILED = "CALL_FAILED"
    BAD_STATUS = "BAD_STATUS"
    JSON_PARSE_FAIL = "JSON_PARSE_FAIL"
    NO_ACCESS_TOKEN = "NO_ACCESS_TOKEN"

    @property
    def is_failure(self) -> bool:
        return self not in (ErrorCode.OK, ErrorCode.NO_CONTENT)


# Codes where repeating the same call may reasonably succeed
_RETRYABLE_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.CALL_FAILED,
    ErrorCode.NO_ACCESS_TOKEN,
})


class CallError(BaseModel):
    """Structured error for a failed REST call.

    Attributes:
        code: Machine-readable failure classification
        message: Human-readable message including host and path
        host: Host the call targeted (empty when unknown)
        path: Final request path including query string
        status_code: HTTP status when the server answered, else None
        recoverable: Whether the caller may retry
        details: Raw diagnostic (transport error text, parser message, body)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        extra="forbid",
        json_schema_extra={
            "title": "Call Error",
            "examples": [{
                "code": "BAD_STATUS",
                "message": "api.example.com/v1/items?nonce=... returned HTTP 404 Not Found",
                "host": "api.example.com",
                "path": "/v1/items?nonce=...",
                "status_code": 404,
            }],
        },
    )

    code: ErrorCode
    message: Annotated[str, Field(min_length=1)]
    host: str = ""
    path: str = ""
    status_code: Annotated[int, Field(ge=100, le=599)] | None = None
    recoverable: bool = True
    details: str | None = Field(default=None, repr=False)

    @computed_field
    @property
    def is_retryable(self) -> bool:
        """Transport failures and token outages are worth retrying; bad answers are not."""
        return self.code in _RETRYABLE_CODES or (self.status_code is not None and self.status_code >= 500)

    @classmethod
    def create(
        cls,
        code: ErrorCode,
        message: str,
        *,
        host: str = "",
        path: str = "",
        status_code: int | None = None,
        details: str | None = None,
    ) -> Self:
        """Factory that derives recoverability from the code."""
        return cls(
            code=code,
            message=message,
            host=host,
            path=path,
            status_code=status_code,
            recoverable=code in _RETRYABLE_CODES or (status_code is not None and status_code >= 500),
            details=details,
        )

    def render(self) -> str:
        parts = [f"{self.message} [{self.code}]"]
        if self.details:
            parts.append(f"\nDetails:\n{self.details}")
        return "".join(parts)

    __str__ = render
