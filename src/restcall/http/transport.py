"""Transport adapters: the only code that touches the network.

A transport takes a PreparedRequest-shaped exchange (verb, path, body bytes,
headers) and returns a TransportReply. Network-level failures are folded into
`ok=False` with a diagnostic instead of raising, so the response reducer sees
every outcome as data.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Protocol, runtime_checkable
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ConfigDict, Field, computed_field

if TYPE_CHECKING:
    from restcall.foundation.config import RestCallConfig

logger = logging.getLogger("restcall.transport")


class TransportReply(BaseModel):
    """What came back from one exchange.

    When `ok` is False the exchange never produced an HTTP response and only
    `detail` is meaningful.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", revalidate_instances="never")

    ok: bool
    status_code: Annotated[int, Field(ge=0, le=999)] = 0
    status_text: str = ""
    body: bytes = Field(default=b"", repr=False)
    content_type: str = ""
    detail: str = ""

    @computed_field
    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @classmethod
    def failure(cls, detail: str) -> TransportReply:
        return cls(ok=False, detail=detail)


@runtime_checkable
class Transport(Protocol):
    """Protocol for transport adapters."""

    host: str

    def send(self, verb: str, path: str, body: bytes | None, headers: dict[str, str]) -> TransportReply: ...

    def close(self) -> None: ...


class HttpxTransport:
    """Blocking transport over httpx.Client.

    Paths are resolved against `base_url`. Timeouts, TLS verification and
    redirect handling come from RestCallConfig.

    Example:
        >>> transport = HttpxTransport("https://graph.example.com", timeout=10.0)
        >>> reply = transport.send("GET", "/v1/me?nonce=abc", None, {"Accept": "*/*"})
    """

    __slots__ = ("base_url", "host", "_client", "_owns_client")

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        follow_redirects: bool = True,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.host = urlparse(self.base_url).netloc if self.base_url else ""
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            verify=verify_ssl,
            follow_redirects=follow_redirects,
        )

    @classmethod
    def from_config(cls, config: RestCallConfig) -> HttpxTransport:
        return cls(
            config.base_url,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            follow_redirects=config.follow_redirects,
        )

    def send(self, verb: str, path: str, body: bytes | None, headers: dict[str, str]) -> TransportReply:
        try:
            response = self._client.request(verb, path, content=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.debug("transport timeout for %s %s: %s", verb, path, e)
            return TransportReply.failure(f"Request timed out: {e}")
        except httpx.HTTPError as e:
            logger.debug("transport error for %s %s: %s", verb, path, e)
            return TransportReply.failure(f"{type(e).__name__}: {e}")

        content_type = response.headers.get("content-type", "")
        return TransportReply(
            ok=True,
            status_code=response.status_code,
            status_text=response.reason_phrase,
            body=response.content,
            content_type=content_type.split(";")[0].strip(),
        )

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __repr__(self) -> str:
        return f"HttpxTransport({self.base_url!r})"
