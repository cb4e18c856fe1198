"""Result/Either type for call outcomes.

A call either succeeds with a value (Ok) or fails with a structured error (Err).
Failures travel as values, never as exceptions, so callers branch on the
variant or chain transformations railway-style:

    >>> Ok(2).map(lambda x: x * 10).unwrap()
    20
    >>> Err("boom").map(lambda x: x * 10).unwrap_or(0)
    0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union of success (Ok) and failure (Err)."""

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    # ─── Variant Checks ──────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─── Extraction ──────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def expect(self, msg: str) -> T:
        """Extract Ok value, raising RuntimeError prefixed with msg on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"{msg}: {self._value}")

    def ok(self) -> T | None:
        """Ok value or None."""
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        """Err value or None."""
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    # ─── Transformation ──────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Result(f(self._value), _OK) if self._is_ok else Result(self._value, _ERR)  # type: ignore[arg-type]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return Result(f(self._value), _ERR) if not self._is_ok else Result(self._value, _OK)  # type: ignore[arg-type]

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain a step that can itself fail; Err short-circuits."""
        return f(self._value) if self._is_ok else Result(self._value, _ERR)  # type: ignore[arg-type]

    and_then = flat_map

    def inspect_err(self, f: Callable[[E], None]) -> Result[T, E]:
        """Call f with the Err value for side effects, return self."""
        if not self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive two-way branch."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    # ─── Dunder Methods ──────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self) -> Iterator[T]:
        if self._is_ok:
            yield self._value  # type: ignore[misc]


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)
