"""Configuration: environment settings and per-orchestrator call config."""

from .call import RestCallConfig
from .settings import LoggingSettings, RestCallSettings, clear_settings_cache, get_settings

__all__ = [
    "RestCallConfig",
    "RestCallSettings", "LoggingSettings",
    "get_settings", "clear_settings_cache",
]
