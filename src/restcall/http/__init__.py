"""REST/JSON call orchestration: request building, transport and response reduction."""

from .auth import BearerAuth, CallableTokenProvider, StaticTokenProvider, TokenProvider
from .headers import ExtraHeaders
from .orchestrator import RestCallOrchestrator
from .request import (
    ALL_METHODS,
    BODY_METHODS,
    HttpMethod,
    PreparedRequest,
    RequestBuilder,
    RequestContext,
    compose_path,
    new_nonce,
)
from .response import (
    NO_CONTENT,
    BadStatus,
    CallResult,
    NoContent,
    NoContentType,
    ParseFailure,
    ResponseOutcome,
    Success,
    TransportFailure,
    reduce_response,
)
from .transport import HttpxTransport, Transport, TransportReply

__all__ = [
    # Orchestrator
    "RestCallOrchestrator",
    # Auth
    "TokenProvider", "StaticTokenProvider", "CallableTokenProvider", "BearerAuth",
    # Request building
    "ExtraHeaders", "RequestBuilder", "RequestContext", "PreparedRequest",
    "HttpMethod", "ALL_METHODS", "BODY_METHODS", "compose_path", "new_nonce",
    # Transport
    "Transport", "TransportReply", "HttpxTransport",
    # Response reduction
    "ResponseOutcome", "TransportFailure", "BadStatus", "NoContent", "ParseFailure", "Success",
    "NO_CONTENT", "NoContentType", "CallResult", "reduce_response",
]
