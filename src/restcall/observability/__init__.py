"""Observability: logging configuration."""

from .logging import JsonFormatter, TextFormatter, configure_from_settings, configure_logging

__all__ = ["configure_logging", "configure_from_settings", "TextFormatter", "JsonFormatter"]
