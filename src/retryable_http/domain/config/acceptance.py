"""Response acceptance configuration model."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AcceptanceConfig(BaseModel):
    """Configuration for the response acceptability check.

    Attributes:
        min_status: Lowest accepted status code (inclusive)
        max_status: Highest accepted status code (inclusive)
    """

    min_status: int = Field(200, ge=100, le=599)
    max_status: int = Field(299, ge=100, le=599)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_range(self) -> "AcceptanceConfig":
        if self.min_status > self.max_status:
            raise ValueError("min_status must not be greater than max_status")
        return self
