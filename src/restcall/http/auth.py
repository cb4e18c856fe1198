"""Access token providers and bearer header injection.

The orchestrator never acquires tokens itself; it asks an injected
TokenProvider on every call. An empty string means no token is available.

Example:
    >>> provider = StaticTokenProvider(token="eyJhbGciOi...")
    >>> provider.get_access_token()
    'eyJhbGciOi...'
    >>> provider = CallableTokenProvider(lambda: app.oauth2.access_token)
"""

from __future__ import annotations

from typing import Callable, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer


@runtime_checkable
class TokenProvider(Protocol):
    """Anything that can hand out the current OAuth2 access token."""

    def get_access_token(self) -> str: ...


class StaticTokenProvider(BaseModel):
    """Fixed token, stored as SecretStr so it never shows up in reprs or logs."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    token: SecretStr = Field(default=SecretStr(""), description="Bearer token value (OAuth2/JWT)")

    def get_access_token(self) -> str:
        return self.token.get_secret_value()

    @field_serializer("token", when_used="json")
    def _mask_token(self, v: SecretStr) -> str:
        secret = v.get_secret_value()
        return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "***"


class CallableTokenProvider:
    """Adapts a zero-argument callable (e.g. a bound accessor on the host app)."""

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[], str | None]) -> None:
        self._fn = fn

    def get_access_token(self) -> str:
        return (self._fn() or "").strip()

    def __repr__(self) -> str:
        return f"CallableTokenProvider({getattr(self._fn, '__qualname__', self._fn)!r})"


class BearerAuth(BaseModel):
    """Bearer token authentication header."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")
    auth_type: Literal["bearer"] = "bearer"
    token: SecretStr

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        headers["Authorization"] = f"Bearer {self.token.get_secret_value()}"
        return headers

    @field_serializer("token", when_used="json")
    def _mask_token(self, v: SecretStr) -> str:
        secret = v.get_secret_value()
        return f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "***"
