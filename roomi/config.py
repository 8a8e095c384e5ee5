"""Application configuration using pydantic-settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Roomi Availability"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Bookings
    default_currency: str = "RUB"
    import_max_rows: int = 5000
    max_axis_days: int = 366

    # Frontend
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8081",
    ]

    @model_validator(mode="after")
    def _ensure_frontend_in_cors(self) -> "Settings":
        """Ensure the configured frontend_url is always in cors_origins."""
        if self.frontend_url and self.frontend_url not in self.cors_origins:
            self.cors_origins.append(self.frontend_url)
        return self

    @model_validator(mode="after")
    def _validate_limits(self) -> "Settings":
        """Reject limits that would refuse every request."""
        if self.import_max_rows < 1:
            raise ValueError("IMPORT_MAX_ROWS must be at least 1")
        if self.max_axis_days < 1:
            raise ValueError("MAX_AXIS_DAYS must be at least 1")
        return self


settings = Settings()
