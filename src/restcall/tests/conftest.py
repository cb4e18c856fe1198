"""Shared fixtures: an in-memory transport and a ready orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from restcall.foundation.config import RestCallConfig, clear_settings_cache
from restcall.http import RestCallOrchestrator, StaticTokenProvider, TransportReply


@dataclass(slots=True)
class SentRequest:
    verb: str
    path: str
    body: bytes | None
    headers: dict[str, str]


@dataclass
class FakeTransport:
    """Records every send() and answers with a canned reply."""

    reply: TransportReply = field(default_factory=lambda: ok_reply(b'{"ok": true}'))
    host: str = "api.test"
    calls: list[SentRequest] = field(default_factory=list)
    closed: bool = False

    def send(self, verb: str, path: str, body: bytes | None, headers: dict[str, str]) -> TransportReply:
        self.calls.append(SentRequest(verb, path, body, headers))
        return self.reply

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> SentRequest:
        return self.calls[-1]


def ok_reply(body: bytes, status: int = 200, reason: str = "OK") -> TransportReply:
    return TransportReply(ok=True, status_code=status, status_text=reason, body=body, content_type="application/json")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def token_provider() -> StaticTokenProvider:
    return StaticTokenProvider(token="test-token-123456")


@pytest.fixture
def orchestrator(transport: FakeTransport, token_provider: StaticTokenProvider) -> RestCallOrchestrator:
    return RestCallOrchestrator(token_provider, transport=transport, config=RestCallConfig())


@pytest.fixture(autouse=True)
def fresh_settings() -> object:
    """Reset cached settings around each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
