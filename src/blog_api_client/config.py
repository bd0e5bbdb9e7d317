"""Client configuration via environment variables."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8080/api/v1"


class Settings(BaseSettings):
    """API client configuration loaded from ``BLOG_API_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="BLOG_API_")

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="API root, including the version prefix"
    )
    timeout: float = Field(default=30.0, description="Transport timeout in seconds")
    log_level: str = Field(default="info", description="Log level")

    # Credential storage
    credential_backend: Literal["memory", "redis"] = Field(
        default="memory", description="Credential store backend: 'memory' or 'redis'"
    )
    redis_url: str | None = Field(
        default=None, description="Redis URL (required when CREDENTIAL_BACKEND=redis)"
    )

    @model_validator(mode="after")
    def _check_backend(self) -> "Settings":
        if self.credential_backend == "redis" and not self.redis_url:
            raise ValueError(
                "BLOG_API_REDIS_URL is required when BLOG_API_CREDENTIAL_BACKEND=redis"
            )
        return self
