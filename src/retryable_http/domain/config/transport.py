"""Transport configuration model."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class TransportConfig(BaseModel):
    """Configuration passed to the HTTP transport on every attempt.

    Attributes:
        timeout: Per-attempt timeout in seconds (None = wait indefinitely)
        headers: Extra headers added to every request
    """

    timeout: Optional[float] = Field(None, gt=0.0)
    headers: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")
