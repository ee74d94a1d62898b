"""
CreatorShare Configuration Management

Centralized configuration using Pydantic Settings for type-safe environment
variable loading with validation.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════
    # APPLICATION
    # ═══════════════════════════════════════════════════════════════
    app_name: str = Field(default="creatorshare", description="Application name")
    app_env: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API port")

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated CORS origins",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ═══════════════════════════════════════════════════════════════
    # CONTENT FEED
    # ═══════════════════════════════════════════════════════════════
    default_page_limit: int = Field(default=20, ge=1, description="Default page size")
    max_page_limit: int = Field(default=50, ge=1, description="Upper bound on page size")
    max_tags_per_content: int = Field(default=10, ge=0)
    max_tag_length: int = Field(default=20, ge=1)

    # ═══════════════════════════════════════════════════════════════
    # REVENUE SHARE
    # ═══════════════════════════════════════════════════════════════
    default_revenue_share_percentage: float = Field(default=15.0, ge=0, le=100)
    default_remix_share_percentage: float = Field(
        default=10.0, ge=0, le=50, description="Share proposed by frame-created remixes"
    )
    default_enhancement_cost: float = Field(
        default=0.01, ge=0, description="Cost (ETH) of frame-purchased enhancements"
    )

    # ═══════════════════════════════════════════════════════════════
    # FARCASTER FRAMES
    # ═══════════════════════════════════════════════════════════════
    frame_message_max_age_seconds: int = Field(
        default=300, ge=1, description="Reject frame messages older than this"
    )
    frame_base_url: str = Field(
        default="http://localhost:3000", description="Public URL used in frame links"
    )

    # ═══════════════════════════════════════════════════════════════
    # RATE LIMITING
    # ═══════════════════════════════════════════════════════════════
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_requests: int = Field(
        default=100, ge=1, description="General API requests per window"
    )
    rate_limit_window_seconds: int = Field(default=60, ge=1)
    content_creation_limit_per_hour: int = Field(default=10, ge=1)
    remix_creation_limit_per_hour: int = Field(default=10, ge=1)
    enhancement_creation_limit_per_hour: int = Field(default=20, ge=1)
    revenue_share_update_limit_per_hour: int = Field(default=5, ge=1)

    # ═══════════════════════════════════════════════════════════════
    # POLLS
    # ═══════════════════════════════════════════════════════════════
    poll_sweep_interval_seconds: int = Field(
        default=60, ge=1, description="How often expired polls are closed"
    )

    @model_validator(mode="after")
    def validate_page_limits(self) -> "Settings":
        if self.default_page_limit > self.max_page_limit:
            raise ValueError("default_page_limit cannot exceed max_page_limit")
        return self

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def validation_context(self) -> dict[str, Any]:
        """Limits request models read while validating a body."""
        return {
            "max_tags_per_content": self.max_tags_per_content,
            "max_tag_length": self.max_tag_length,
            "default_revenue_share_percentage": self.default_revenue_share_percentage,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton settings instance
settings = get_settings()
