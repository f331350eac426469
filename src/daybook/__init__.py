"""Shared configuration, logging and LLM client for the Daybook app."""

from .config import AuthConfig, Config, OllamaConfig
from .exceptions import (
    AuthError,
    DaybookError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "AuthConfig",
    "Config",
    "OllamaConfig",
    "AuthError",
    "DaybookError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
]
