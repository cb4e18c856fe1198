"""Caller-maintained extra headers that ride along on every request."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ExtraHeaders:
    """Ordered (name, value) pairs with unique names.

    Registration order is preserved and the first registration of a name wins;
    later registrations of the same name (exact, case-sensitive match) are
    ignored. Persists across calls until cleared.

    Example:
        >>> h = ExtraHeaders()
        >>> h.add("X-Trace", "1"), h.add("X-Trace", "2")
        (True, False)
        >>> h.get("X-Trace")
        '1'
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def add(self, name: str, value: str) -> bool:
        """Append a header unless the name is empty or already registered. Returns whether it was added."""
        if not name or name in self:
            return False
        self._items.append((name, value))
        return True

    def clear(self) -> None:
        self._items.clear()

    def get(self, name: str, default: str | None = None) -> str | None:
        return next((v for k, v in self._items if k == name), default)

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def __contains__(self, name: object) -> bool:
        return any(k == name for k, _ in self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ExtraHeaders({[k for k, _ in self._items]!r})"
