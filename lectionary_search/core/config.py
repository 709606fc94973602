"""
Lectionary Search - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix LS_ for Lectionary Search
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Bundled sample collection shipped inside the package
DEFAULT_READINGS_PATH = Path(__file__).parent.parent / "data" / "readings.json"

VALID_DATE_ENCODINGS = ("auto", "iso", "compact")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with LS_ prefix.
    Example: LS_READINGS_LOCATION=https://example.org/readings.json, LS_PORT=8090
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8090

    # Application metadata
    service_name: str = "lectionary-search"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Reading collection (file path or http(s) URL)
    readings_location: str = str(DEFAULT_READINGS_PATH)
    date_encoding: str = "auto"
    http_timeout: float = 10.0
    http_max_retries: int = 3

    # Search presentation
    debounce_ms: int = Field(default=300, ge=0)
    preview_chars: int = Field(default=200, ge=1)

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = True

    model_config = SettingsConfigDict(
        env_prefix="LS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("date_encoding")
    @classmethod
    def validate_date_encoding(cls, v: str) -> str:
        """Restrict date_encoding to the supported encodings."""
        normalized = v.strip().lower()
        if normalized not in VALID_DATE_ENCODINGS:
            raise ValueError(
                f"date_encoding must be one of {', '.join(VALID_DATE_ENCODINGS)}"
            )
        return normalized

    @property
    def debounce_seconds(self) -> float:
        """Debounce window expressed in seconds."""
        return self.debounce_ms / 1000.0


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
