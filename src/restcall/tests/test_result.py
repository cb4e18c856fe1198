"""Tests for the Result type and CallError."""

from __future__ import annotations

import pytest

from restcall.foundation.errors import CallError, Err, ErrorCode, Ok, Result


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)

    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None
    assert bool(result) is True
    assert list(result) == [42]


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")

    assert result.is_err()
    assert result.unwrap_err() == "failed"
    assert result.unwrap_or(0) == 0
    assert result.ok() is None
    assert bool(result) is False
    assert list(result) == []


def test_unwrap_wrong_variant_raises() -> None:
    with pytest.raises(RuntimeError):
        Err("x").unwrap()
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()
    with pytest.raises(RuntimeError, match="needed a value"):
        Err("x").expect("needed a value")


def test_map_and_flat_map() -> None:
    def half(n: int) -> Result[int, str]:
        return Ok(n // 2) if n % 2 == 0 else Err(f"{n} is odd")

    assert Ok(8).flat_map(half).flat_map(half) == Ok(2)
    assert Ok(6).flat_map(half).flat_map(half) == Err("3 is odd")
    assert Ok(2).map(str) == Ok("2")
    assert Err("e").map(str) == Err("e")
    assert Err("e").map_err(str.upper) == Err("E")


def test_match_and_inspect_err() -> None:
    seen: list[str] = []
    Err("bad").inspect_err(seen.append)
    Ok("good").inspect_err(seen.append)

    assert seen == ["bad"]
    assert Ok(3).match(ok=lambda v: v * 2, err=len) == 6
    assert Err("four").match(ok=lambda v: v * 2, err=len) == 4


def test_call_error_render() -> None:
    err = CallError.create(
        ErrorCode.JSON_PARSE_FAIL,
        "REST call to h/p returned invalid JSON: unexpected character",
        host="h",
        path="/p",
        details="unexpected character: line 1 column 2 (char 1)",
    )

    assert err.recoverable is False
    assert err.is_retryable is False
    assert "[JSON_PARSE_FAIL]" in err.render()
    assert "Details:" in str(err)


def test_error_code_failure_flags() -> None:
    assert not ErrorCode.OK.is_failure
    assert not ErrorCode.NO_CONTENT.is_failure
    assert all(code.is_failure for code in (
        ErrorCode.CALL_FAILED, ErrorCode.BAD_STATUS, ErrorCode.JSON_PARSE_FAIL, ErrorCode.NO_ACCESS_TOKEN,
    ))
