"""Restcall - authenticated REST/JSON calls with typed outcomes.

Builds a request (content-type, accept, bearer token, extra headers,
cache-defeating nonce, JSON body), sends it over httpx and reduces the
response to a parsed JSON document, a NO_CONTENT sentinel or a structured
CallError. Failures are values, not exceptions.

Quick Start:
    >>> from restcall import RestCallOrchestrator, RestCallConfig, StaticTokenProvider, NO_CONTENT
    >>>
    >>> rest = RestCallOrchestrator(
    ...     StaticTokenProvider(token="eyJ0eXAi..."),
    ...     config=RestCallConfig(base_url="https://graph.example.com"),
    ... )
    >>> result = rest.make_json_call("POST", "/v1/items", body={"name": "widget"})
    >>> match result.ok():
    ...     case None: print(rest.error_code, rest.error_message)
    ...     case doc if doc is NO_CONTENT: print("created")
    ...     case doc: print(doc.get("id"))

Configuration from the environment (RESTCALL_* variables):
    >>> from restcall import RestCallConfig
    >>> rest = RestCallOrchestrator(provider, config=RestCallConfig.from_settings())
"""

from __future__ import annotations

__version__ = "0.1.0"

# Configuration
from .foundation.config import RestCallConfig, RestCallSettings, get_settings

# Errors
from .foundation.errors import CallError, Err, ErrorCode, Ok, Result

# HTTP
from .http import (
    NO_CONTENT,
    CallableTokenProvider,
    CallResult,
    HttpxTransport,
    PreparedRequest,
    ResponseOutcome,
    RestCallOrchestrator,
    StaticTokenProvider,
    TokenProvider,
    Transport,
    TransportReply,
)

# JSON
from .io import JsonDocument, parse_json

# Logging
from .observability import configure_logging

__all__ = [
    "__version__",
    "RestCallOrchestrator",
    "RestCallConfig", "RestCallSettings", "get_settings",
    "ErrorCode", "CallError", "Result", "Ok", "Err",
    "TokenProvider", "StaticTokenProvider", "CallableTokenProvider",
    "Transport", "TransportReply", "HttpxTransport", "PreparedRequest",
    "ResponseOutcome", "CallResult", "NO_CONTENT",
    "JsonDocument", "parse_json",
    "configure_logging",
]
