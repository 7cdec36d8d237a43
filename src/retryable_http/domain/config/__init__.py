"""Configuration models with Pydantic validation."""

from retryable_http.domain.config.acceptance import AcceptanceConfig
from retryable_http.domain.config.app import AppConfig
from retryable_http.domain.config.retry import RetryConfig
from retryable_http.domain.config.transport import TransportConfig

__all__ = [
    "AppConfig",
    "RetryConfig",
    "AcceptanceConfig",
    "TransportConfig",
]
