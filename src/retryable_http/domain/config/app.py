"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from retryable_http.domain.config.acceptance import AcceptanceConfig
from retryable_http.domain.config.retry import RetryConfig
from retryable_http.domain.config.transport import TransportConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Aggregates all configuration sections. Validation is performed at load
    time to fail fast on configuration errors.

    Attributes:
        retry: Attempt budget and delay
        acceptance: Accepted status code range
        transport: Per-attempt transport settings
    """

    retry: RetryConfig = Field(default_factory=RetryConfig)
    acceptance: AcceptanceConfig = Field(default_factory=AcceptanceConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "retry": {
                    "max_attempts": 3,
                    "delay": 0.5,
                },
                "acceptance": {
                    "min_status": 200,
                    "max_status": 299,
                },
                "transport": {
                    "timeout": 10.0,
                    "headers": {"User-Agent": "retryable-http"},
                },
            }
        },
    )
