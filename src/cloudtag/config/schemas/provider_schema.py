"""Provider configuration schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class GCPProviderConfig(BaseModel):
    """Google Cloud scope and credentials."""

    project_id: str = Field(..., description="GCP project id")
    region: str = Field(..., description="GCP region, e.g. asia-northeast3")
    zone: str = Field(..., description="GCP zone, e.g. asia-northeast3-a")
    credentials_file: Optional[str] = Field(
        None, description="Service account key file; application default credentials when unset"
    )

    @field_validator("project_id", "region", "zone")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate scope fields."""
        if not v or not v.strip():
            raise ValueError("GCP scope fields cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_zone_in_region(self) -> "GCPProviderConfig":
        """Ensure the zone belongs to the region."""
        if not self.zone.startswith(f"{self.region}-"):
            raise ValueError(f"Zone {self.zone} is not in region {self.region}")
        return self


class AWSProviderConfig(BaseModel):
    """AWS region and client settings."""

    region: str = Field("us-east-1", description="AWS region")
    profile: Optional[str] = Field(None, description="AWS named profile")
    endpoint_url: Optional[str] = Field(None, description="Custom endpoint URL")
    max_retry_attempts: int = Field(3, description="botocore standard-mode retry attempts")
    connect_timeout: float = Field(10.0, description="Connection timeout in seconds")

    @field_validator("max_retry_attempts")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        """Validate retry attempts."""
        if v < 0 or v > 10:
            raise ValueError("Retry attempts must be between 0 and 10")
        return v

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: float) -> float:
        """Validate connection timeout."""
        if v <= 0:
            raise ValueError("Connection timeout must be positive")
        return v


class MockProviderConfig(BaseModel):
    """In-memory provider behaviour."""

    operation_polls: int = Field(
        0, description="Polls before a write completes; 0 completes writes immediately"
    )

    @field_validator("operation_polls")
    @classmethod
    def validate_operation_polls(cls, v: int) -> int:
        """Validate operation polls."""
        if v < 0:
            raise ValueError("Operation polls must be non-negative")
        return v


class ProviderConfig(BaseModel):
    """Selects the provider bound to the tag manager."""

    type: Literal["gcp", "aws", "mock"] = Field("gcp", description="Provider type")
    gcp: Optional[GCPProviderConfig] = None
    aws: AWSProviderConfig = Field(default_factory=lambda: AWSProviderConfig())
    mock: MockProviderConfig = Field(default_factory=lambda: MockProviderConfig())

    @model_validator(mode="after")
    def ensure_active_section(self) -> "ProviderConfig":
        """The selected provider must be configured."""
        if self.type == "gcp" and self.gcp is None:
            raise ValueError("provider.gcp is required when provider.type is 'gcp'")
        return self
