"""Configuration model for the dashboard API client."""

from pydantic import BaseModel, Field, field_validator


class DashboardConfig(BaseModel):
    """Configuration for the pipeline dashboard API."""

    base_url: str = Field(
        default="http://localhost:8080", description="Dashboard API base URL"
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
