"""Retry configuration model."""

from pydantic import BaseModel, ConfigDict, Field


class RetryConfig(BaseModel):
    """Configuration for retry logic.

    Attributes:
        max_attempts: Maximum number of transport invocations per request (1 = no retry)
        delay: Fixed delay between attempts in seconds
    """

    max_attempts: int = Field(1, gt=0)
    delay: float = Field(0.0, ge=0.0)

    model_config = ConfigDict(extra="forbid")
