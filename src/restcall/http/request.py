"""Request building: headers, token, cache-defeat nonce and body serialization.

The builder turns (verb, path, params, body) plus the orchestrator's config and
extra headers into a PreparedRequest the transport can send as-is:

    >>> builder = RequestBuilder(RestCallConfig(), StaticTokenProvider(token="t0k"), ExtraHeaders())
    >>> req = builder.build("post", "/v1/items", "top=5", {"name": "x"}).unwrap()
    >>> req.verb, req.path.startswith("/v1/items?top=5&nonce="), req.content
    ('POST', True, b'{"name":"x"}')
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from restcall.foundation.errors import CallError, Err, ErrorCode, Ok, Result
from restcall.io.codec import encode_body

from .auth import BearerAuth

if TYPE_CHECKING:
    from restcall.foundation.config import RestCallConfig

    from .auth import TokenProvider
    from .headers import ExtraHeaders

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
ALL_METHODS: frozenset[HttpMethod] = frozenset(["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"])

# Only these verbs ever put a body on the wire
BODY_METHODS: frozenset[HttpMethod] = frozenset(["POST", "PUT", "PATCH"])


def new_nonce() -> str:
    """Fresh 128-bit random value as 32 lowercase hex chars."""
    return uuid.uuid4().hex


def compose_path(path: str, params: str = "", nonce: str | None = None) -> str:
    """Join path, raw query params and an optional cache-defeat nonce."""
    query = "&".join(p for p in (params, f"nonce={nonce}" if nonce else "") if p)
    return f"{path}?{query}" if query else path


class RequestContext(BaseModel):
    """Per-call request inputs.

    The body is held only until the builder consumes it; after that the
    context no longer references it.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    verb: HttpMethod = "GET"
    path: str = "/"
    params: str = ""
    body: Any = Field(default=None, repr=False, exclude=True)
    final_path: str = ""

    @field_validator("verb", mode="before")
    @classmethod
    def _upper_verb(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("params", mode="before")
    @classmethod
    def _none_as_empty(cls, v: str | None) -> str:
        return "" if v is None else v

    @property
    def sends_body(self) -> bool:
        return self.verb in BODY_METHODS

    def consume_body(self) -> Any:
        """Hand the body over exactly once; later calls return None."""
        body, self.body = self.body, None
        return body


class PreparedRequest(BaseModel):
    """Transport-ready request: canonical verb, final path, ordered headers, wire body."""

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    verb: HttpMethod
    path: str
    headers: dict[str, str] = Field(repr=False)
    content: bytes | None = Field(default=None, repr=False)

    @computed_field
    @property
    def has_body(self) -> bool:
        return self.content is not None

    def header_names(self) -> list[str]:
        return list(self.headers)


class RequestBuilder:
    """Assembles PreparedRequests for one orchestrator."""

    __slots__ = ("config", "token_provider", "extra_headers", "nonce_factory")

    def __init__(
        self,
        config: RestCallConfig,
        token_provider: TokenProvider,
        extra_headers: ExtraHeaders,
        nonce_factory: Callable[[], str] = new_nonce,
    ) -> None:
        self.config = config
        self.token_provider = token_provider
        self.extra_headers = extra_headers
        self.nonce_factory = nonce_factory

    def headers(self, token: str) -> dict[str, str]:
        """Fixed headers first, then extra headers in registration order.

        Each name goes on the wire once, compared case-insensitively; fixed headers
        win over extras and earlier extras win over later ones.
        """
        headers = {"Content-Type": self.config.content_type, "Accept": self.config.accept}
        if token:
            BearerAuth(token=token).apply(headers)
        seen = {name.lower() for name in headers}
        for name, value in self.extra_headers:
            if name.lower() not in seen:
                seen.add(name.lower())
                headers[name] = value
        return headers

    def build_context(self, ctx: RequestContext, *, host: str = "") -> Result[PreparedRequest, CallError]:
        """Build from a RequestContext, consuming its body whatever the outcome."""
        body = ctx.consume_body()
        nonce = self.nonce_factory() if self.config.defeat_caching else None
        ctx.final_path = compose_path(ctx.path, ctx.params, nonce)

        token = (self.token_provider.get_access_token() or "").strip()
        if self.config.require_token and not token:
            return Err(CallError.create(
                ErrorCode.NO_ACCESS_TOKEN,
                f"No access token available for call to {host}{ctx.path}",
                host=host,
                path=ctx.final_path,
            ))

        content = None
        if body is not None and ctx.sends_body:
            try:
                content = encode_body(body)
            except TypeError as e:
                return Err(CallError.create(
                    ErrorCode.CALL_FAILED,
                    f"REST call to {host}{ctx.path} failed: request body is not serializable: {e}",
                    host=host,
                    path=ctx.final_path,
                    details=f"{type(body).__name__} body: {e}",
                ))
        return Ok(PreparedRequest(
            verb=ctx.verb,
            path=ctx.final_path,
            headers=self.headers(token),
            content=content,
        ))

    def build(
        self,
        verb: str,
        path: str,
        params: str = "",
        body: object = None,
        *,
        host: str = "",
    ) -> Result[PreparedRequest, CallError]:
        return self.build_context(RequestContext(verb=verb, path=path, params=params, body=body), host=host)
