"""Operation waiter configuration schema."""

from pydantic import BaseModel, Field, field_validator


class WaiterConfig(BaseModel):
    """Polling budget for asynchronous provider operations."""

    poll_interval: float = Field(2.0, description="Seconds between operation status polls")
    max_attempts: int = Field(10, description="Maximum number of status polls")

    @field_validator("poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate poll interval."""
        if v <= 0:
            raise ValueError("Poll interval must be positive")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        """Validate max attempts."""
        if v < 1:
            raise ValueError("Max attempts must be at least 1")
        return v
