"""Application settings loaded from environment variables.

Values come from OS environment variables first, then a ``.env`` file in
the working directory, then the defaults below. Built once at startup
and passed explicitly to the app factory.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "default_secret"


class Settings(BaseSettings):
    """Process-wide configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    port: int = 5000
    host: str = "0.0.0.0"
    jwt_secret: str = DEFAULT_JWT_SECRET
    database_url: str = "sqlite:///./data/app.db"
    cors_origins: str = "*"  # comma-separated
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def load_settings() -> Settings:
    return Settings()
