"""Response reduction: turn a TransportReply into exactly one ResponseOutcome.

Classification is linear and stops at the first match:

1. transport failed            -> TransportFailure (CALL_FAILED)
2. status outside [200, 300)   -> BadStatus        (BAD_STATUS)
3. body shorter than "{}"      -> NoContent        (NO_CONTENT, not an error)
4. body does not parse as JSON -> ParseFailure     (JSON_PARSE_FAIL)
5. otherwise                   -> Success(JsonDocument)
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from restcall.foundation.errors import CallError, Err, ErrorCode, Ok, Result
from restcall.io.codec import MIN_JSON_LENGTH, JsonDocument, parse_json

from .transport import TransportReply


class NoContentType(Enum):
    """Type of the NO_CONTENT sentinel."""
    NO_CONTENT = "NO_CONTENT"

    def __repr__(self) -> str:
        return "NO_CONTENT"


# Returned in place of a document when a 2xx response carried no JSON body
NO_CONTENT = NoContentType.NO_CONTENT

CallResult = Result[Union[JsonDocument, NoContentType], CallError]


# ─────────────────────────────────────────────────────────────────────────────
# Outcome Variants
# ─────────────────────────────────────────────────────────────────────────────

class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    host: str = ""
    path: str = ""

    @property
    def target(self) -> str:
        return f"{self.host}{self.path}"


class TransportFailure(_Outcome):
    """No HTTP response was obtained."""

    kind: Literal["transport_failure"] = "transport_failure"
    detail: str = ""

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.CALL_FAILED

    def to_result(self) -> CallResult:
        suffix = f": {self.detail}" if self.detail else ""
        return Err(CallError.create(
            ErrorCode.CALL_FAILED,
            f"REST call to {self.target} failed{suffix}",
            host=self.host,
            path=self.path,
            details=self.detail or None,
        ))


class BadStatus(_Outcome):
    """Server answered with a non-2xx status."""

    kind: Literal["bad_status"] = "bad_status"
    status_code: int
    status_text: str = ""
    body: str = Field(default="", repr=False)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.BAD_STATUS

    def to_result(self) -> CallResult:
        status = f"{self.status_code} {self.status_text}".rstrip()
        body = f"\n{self.body}" if self.body else ""
        return Err(CallError.create(
            ErrorCode.BAD_STATUS,
            f"REST call to {self.target} returned HTTP {status}{body}",
            host=self.host,
            path=self.path,
            status_code=self.status_code if 100 <= self.status_code <= 599 else None,
            details=self.body or None,
        ))


class NoContent(_Outcome):
    """2xx with an empty (or too short to be JSON) body, e.g. HTTP 204."""

    kind: Literal["no_content"] = "no_content"
    status_code: int = 204

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.NO_CONTENT

    def to_result(self) -> CallResult:
        return Ok(NO_CONTENT)


class ParseFailure(_Outcome):
    """2xx whose body is not valid JSON."""

    kind: Literal["parse_failure"] = "parse_failure"
    detail: str = ""

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.JSON_PARSE_FAIL

    def to_result(self) -> CallResult:
        return Err(CallError.create(
            ErrorCode.JSON_PARSE_FAIL,
            f"REST call to {self.target} returned invalid JSON: {self.detail}",
            host=self.host,
            path=self.path,
            details=self.detail or None,
        ))


class Success(_Outcome):
    """2xx with a parsed JSON document."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    kind: Literal["success"] = "success"
    document: JsonDocument = Field(repr=False)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.OK

    def to_result(self) -> CallResult:
        return Ok(self.document)


ResponseOutcome = Union[TransportFailure, BadStatus, NoContent, ParseFailure, Success]


# ─────────────────────────────────────────────────────────────────────────────
# Reducer
# ─────────────────────────────────────────────────────────────────────────────

def reduce_response(reply: TransportReply, *, host: str = "", path: str = "") -> ResponseOutcome:
    """Classify a transport reply. Never raises for bad input from the wire."""
    if not reply.ok:
        return TransportFailure(host=host, path=path, detail=reply.detail)

    text = reply.text
    if not 200 <= reply.status_code < 300:
        return BadStatus(
            host=host,
            path=path,
            status_code=reply.status_code,
            status_text=reply.status_text,
            body=text,
        )

    if len(text) < MIN_JSON_LENGTH:
        return NoContent(host=host, path=path, status_code=reply.status_code)

    parsed = parse_json(text)
    if parsed.is_err():
        return ParseFailure(host=host, path=path, detail=parsed.unwrap_err())
    return Success(host=host, path=path, document=parsed.unwrap())
