"""Per-orchestrator call configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .settings import RestCallSettings


class RestCallConfig(BaseModel):
    """Configuration for RestCallOrchestrator.

    Attributes:
        base_url: Scheme and host prefixed to every call path.
        content_type: Value of the Content-Type header on every request.
        accept: Value of the Accept header on every request.
        require_token: Fail calls up front when no access token is available.
        defeat_caching: Append a fresh random nonce to every query string.
        timeout: Transport timeout in seconds.
        verify_ssl: Whether the transport verifies TLS certificates.
        follow_redirects: Whether the transport follows redirects.
    """

    model_config = ConfigDict(
        validate_default=True,
        str_strip_whitespace=True,
        extra="forbid",
        revalidate_instances="never",
        frozen=True,
        json_schema_extra={
            "title": "REST Call Configuration",
            "examples": [{
                "base_url": "https://graph.example.com",
                "require_token": True,
                "defeat_caching": True,
            }],
        },
    )

    base_url: str = ""
    content_type: Annotated[str, Field(min_length=1)] = "application/json"
    accept: Annotated[str, Field(min_length=1)] = "*/*"
    require_token: bool = True
    defeat_caching: bool = True
    timeout: Annotated[float, Field(ge=0.1, le=300.0)] = 30.0
    verify_ssl: bool = True
    follow_redirects: bool = True

    @field_validator("base_url", mode="after")
    @classmethod
    def _validate_base_url(cls, v: str) -> str:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @classmethod
    def from_settings(cls, settings: RestCallSettings | None = None) -> RestCallConfig:
        """Build a config from environment settings (cached global settings by default)."""
        if settings is None:
            from .settings import get_settings
            settings = get_settings()
        return cls(**settings.model_dump(exclude={"logging"}))
