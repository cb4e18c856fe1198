"""Tests for response reduction."""

from __future__ import annotations

import pytest

from restcall.foundation.errors import ErrorCode
from restcall.http import (
    NO_CONTENT,
    BadStatus,
    NoContent,
    ParseFailure,
    Success,
    TransportFailure,
    TransportReply,
    reduce_response,
)


def _reply(body: bytes = b"", status: int = 200, reason: str = "OK") -> TransportReply:
    return TransportReply(ok=True, status_code=status, status_text=reason, body=body)


def test_transport_failure_wins_over_everything() -> None:
    outcome = reduce_response(TransportReply.failure("ReadTimeout: slow"), host="h", path="/p")

    assert isinstance(outcome, TransportFailure)
    assert outcome.code is ErrorCode.CALL_FAILED
    err = outcome.to_result().unwrap_err()
    assert err.message == "REST call to h/p failed: ReadTimeout: slow"
    assert err.recoverable is True


@pytest.mark.parametrize("status", [100, 199, 300, 301, 400, 404, 500, 503])
def test_non_2xx_is_bad_status(status: int) -> None:
    outcome = reduce_response(_reply(b'{"a": 1}', status=status, reason="Whatever"), host="h", path="/p")

    assert isinstance(outcome, BadStatus)
    err = outcome.to_result().unwrap_err()
    assert err.code is ErrorCode.BAD_STATUS
    assert str(status) in err.message
    assert err.status_code == status


def test_bad_status_retryability() -> None:
    server = reduce_response(_reply(status=503), host="h", path="/p").to_result().unwrap_err()
    client = reduce_response(_reply(status=400), host="h", path="/p").to_result().unwrap_err()
    assert server.is_retryable is True
    assert client.is_retryable is False


@pytest.mark.parametrize("body", [b"", b" ", b"1"])
def test_short_2xx_body_is_no_content(body: bytes) -> None:
    outcome = reduce_response(_reply(body, status=204))

    assert isinstance(outcome, NoContent)
    assert outcome.code is ErrorCode.NO_CONTENT
    assert outcome.to_result().unwrap() is NO_CONTENT


def test_empty_200_is_no_content() -> None:
    assert isinstance(reduce_response(_reply(b"", status=200)), NoContent)


def test_unparsable_body_is_parse_failure() -> None:
    outcome = reduce_response(_reply(b"{invalid"), host="h", path="/p")

    assert isinstance(outcome, ParseFailure)
    assert outcome.detail
    err = outcome.to_result().unwrap_err()
    assert err.code is ErrorCode.JSON_PARSE_FAIL
    assert err.message.startswith("REST call to h/p returned invalid JSON")


@pytest.mark.parametrize("body,expected", [
    (b'{"a": 1}', {"a": 1}),
    (b"[1, 2]", [1, 2]),
    (b'"hi"', "hi"),
    (b"42", 42),
])
def test_any_json_value_is_success(body: bytes, expected: object) -> None:
    outcome = reduce_response(_reply(body, status=201))

    assert isinstance(outcome, Success)
    assert outcome.to_result().unwrap().root == expected


def test_invalid_utf8_is_replaced_not_raised() -> None:
    outcome = reduce_response(_reply(b'{"a": "\xff"}'))
    assert isinstance(outcome, Success)
