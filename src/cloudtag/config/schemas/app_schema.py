"""Main application configuration schema."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .logging_schema import LoggingConfig
from .provider_schema import ProviderConfig
from .waiter_schema import WaiterConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    provider: ProviderConfig
    waiter: WaiterConfig = Field(default_factory=lambda: WaiterConfig())
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    request_timeout: Optional[float] = Field(
        None, description="Default overall deadline for a tag call in seconds"
    )

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Validate request timeout."""
        if v is not None and v <= 0:
            raise ValueError("Request timeout must be positive")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from a raw dictionary."""
        return cls.model_validate(data)
