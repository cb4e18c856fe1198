"""RestCallOrchestrator - authenticated JSON calls against a REST API.

One call runs Builder -> Transport -> Reducer and settles on exactly one
outcome. Failures come back as Err(CallError) and are mirrored into the
orchestrator's error state; nothing raises for network, status, token or JSON
problems.

Example:
    >>> rest = RestCallOrchestrator(
    ...     CallableTokenProvider(lambda: app.oauth2.access_token),
    ...     config=RestCallConfig(base_url="https://graph.example.com"),
    ... )
    >>> rest.add_extra_header("ConsistencyLevel", "eventual")
    >>> result = rest.make_json_call("GET", "/v1.0/me/messages", "$top=10")
    >>> if result.is_err():
    ...     print(rest.error_code, rest.error_message)
    >>> elif result.unwrap() is NO_CONTENT:
    ...     ...
    >>> else:
    ...     doc = result.unwrap()
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from restcall.foundation.config import RestCallConfig
from restcall.foundation.errors import Err, ErrorCode

from .headers import ExtraHeaders
from .request import RequestBuilder, RequestContext
from .response import CallResult, reduce_response
from .transport import HttpxTransport

if TYPE_CHECKING:
    from types import TracebackType

    from restcall.foundation.errors import CallError, Result

    from .auth import TokenProvider
    from .request import PreparedRequest
    from .response import ResponseOutcome
    from .transport import Transport, TransportReply

logger = logging.getLogger("restcall.orchestrator")


class RestCallOrchestrator:
    """Builds, sends and reduces REST/JSON calls for a host application.

    Not safe for concurrent use: each call resets and then overwrites the
    instance's response buffer and error state. Use one orchestrator per
    concurrent caller.

    Attributes:
        error_code: Outcome code of the last call (OK before any call).
        error_message: Human-readable failure text of the last call ("" on success).
        response_text: Raw body of the last response.
        response_content_type: Content type of the last response (parameters stripped).
        status_code: HTTP status of the last response (0 when none was received).
        status_text: HTTP reason phrase of the last response.
        last_outcome: ResponseOutcome of the last call that reached the transport.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        transport: Transport | None = None,
        config: RestCallConfig | None = None,
    ) -> None:
        self.config = config or RestCallConfig()
        self.token_provider = token_provider
        self._owns_transport = transport is None
        self.transport: Transport = transport if transport is not None else HttpxTransport.from_config(self.config)
        self._extra_headers = ExtraHeaders()
        self._builder = RequestBuilder(self.config, token_provider, self._extra_headers)
        self.reset()

    # ─────────────────────────────────────────────────────────────────
    # Header / State Bookkeeping
    # ─────────────────────────────────────────────────────────────────

    @property
    def extra_headers(self) -> list[tuple[str, str]]:
        """Snapshot of registered extra headers in registration order."""
        return self._extra_headers.items()

    def add_extra_header(self, name: str, value: str) -> bool:
        """Register a header for all following calls. First registration of a name wins."""
        added = self._extra_headers.add(name, value)
        if not added:
            logger.debug("extra header %s already registered, keeping first value", name)
        return added

    def clear_extra_headers(self) -> None:
        self._extra_headers.clear()

    def reset(self) -> None:
        """Forget everything about the previous call."""
        self.response_text = ""
        self.response_content_type = ""
        self.status_code = 0
        self.status_text = ""
        self.error_code = ErrorCode.OK
        self.error_message = ""
        self.last_outcome: ResponseOutcome | None = None

    @property
    def host(self) -> str:
        return getattr(self.transport, "host", "")

    # ─────────────────────────────────────────────────────────────────
    # Calls
    # ─────────────────────────────────────────────────────────────────

    def build_request(self, verb: str, path: str, params: str = "", body: object = None) -> Result[PreparedRequest, CallError]:
        """Build the request a call would send, without sending it."""
        return self._builder.build(verb, path, params, body, host=self.host)

    def make_json_call(self, verb: str, path: str, params: str = "", body: object = None) -> CallResult:
        """Send one JSON call.

        Args:
            verb: HTTP method, any case.
            path: Request path relative to the configured base URL.
            params: Raw query string without the leading "?".
            body: Consumed by the call. Serialized for POST/PUT/PATCH, silently
                dropped for every other verb.

        Returns:
            Ok(JsonDocument) on a parsed 2xx body, Ok(NO_CONTENT) on an empty
            2xx body, Err(CallError) otherwise.
        """
        ctx = RequestContext(verb=verb, path=path, params=params, body=body)
        self.reset()

        host = self.host
        built = self._builder.build_context(ctx, host=host)
        if built.is_err():
            return self._fail(built.unwrap_err(), ctx.verb)

        request = built.unwrap()
        logger.debug("%s %s%s", request.verb, host, request.path)
        start = time.perf_counter()
        reply = self.transport.send(request.verb, request.path, request.content, dict(request.headers))
        elapsed_ms = (time.perf_counter() - start) * 1000

        self._record_reply(reply)
        outcome = reduce_response(reply, host=host, path=request.path)
        self.last_outcome = outcome
        result = outcome.to_result()

        if result.is_err():
            return self._fail(result.unwrap_err(), request.verb, elapsed_ms)

        self.error_code = outcome.code
        logger.info(
            "%s %s%s -> %s (%.1fms)", request.verb, host, request.path, self.status_code, elapsed_ms,
            extra={"outcome": outcome.kind, "duration_ms": round(elapsed_ms, 1)},
        )
        return result

    def get(self, path: str, params: str = "") -> CallResult:
        return self.make_json_call("GET", path, params)

    def delete(self, path: str, params: str = "") -> CallResult:
        return self.make_json_call("DELETE", path, params)

    def post(self, path: str, body: object = None, params: str = "") -> CallResult:
        return self.make_json_call("POST", path, params, body)

    def put(self, path: str, body: object = None, params: str = "") -> CallResult:
        return self.make_json_call("PUT", path, params, body)

    def patch(self, path: str, body: object = None, params: str = "") -> CallResult:
        return self.make_json_call("PATCH", path, params, body)

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    def _record_reply(self, reply: TransportReply) -> None:
        self.status_code = reply.status_code
        self.status_text = reply.status_text
        self.response_text = reply.text
        self.response_content_type = reply.content_type

    def _fail(self, error: CallError, verb: str, elapsed_ms: float | None = None) -> CallResult:
        self.error_code = error.code
        self.error_message = error.message
        timing = f" ({elapsed_ms:.1f}ms)" if elapsed_ms is not None else ""
        logger.warning(
            "%s %s failed: %s%s", verb, error.path or "<unbuilt>", error.code, timing,
            extra={"error_code": str(error.code), "status_code": error.status_code},
        )
        return Err(error)

    # ─────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Release the transport if this orchestrator created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> RestCallOrchestrator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RestCallOrchestrator(host={self.host!r}, extra_headers={len(self._extra_headers)})"
