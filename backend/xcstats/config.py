"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Project root: xcstats repo/
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Content directory: repo/content/
CONTENT_DIR = PROJECT_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Server ===
    host: str = Field(default="127.0.0.1", description="Bind address for `python -m xcstats`")
    port: int = Field(default=8000, ge=1, le=65535)

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Content ===
    content_dir: Path = Field(
        default=CONTENT_DIR,
        description="Directory holding courses/courses.yaml"
    )

    # === Records ===
    leaderboard_size: int = Field(default=10, ge=1, description="Top-N leaderboard length")
    team_bests_limit: int = Field(default=10, ge=1, description="Team performances kept")

    # === Trends ===
    big_movers_window_days: int = Field(
        default=30, ge=1,
        description="Days before today that start the 'recent' window"
    )
    big_movers_limit: int = Field(default=5, ge=1)
    recent_performance_days: int = Field(default=10, ge=1)

    @field_validator('log_level')
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        """Accept 'debug' as well as 'DEBUG'."""
        return v.upper()

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
