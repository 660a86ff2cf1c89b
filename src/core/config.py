"""
ZEE Search Service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix ZEE_ for the search service

Upstream URLs and the Hadith credential live here, but they are handed to the
gateways explicitly at construction (see src/api/deps.py). Nothing below the
API layer reads settings directly.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with ZEE_ prefix.
    Example: ZEE_HADITH_API_KEY=..., ZEE_QURAN_API_URL=http://zee-api:8000
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8080

    # Application metadata
    service_name: str = "zee-search-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Upstream content providers
    quran_api_url: str = "http://localhost:8000"
    hadith_api_url: str = "https://api.sunnah.com/v1/"
    hadith_api_key: str = ""
    request_timeout: float = 10.0

    # Search behaviour
    source_timeout: float = 15.0
    default_translation: str = "en.sahih"
    page_size: int = 10
    max_quran_matches: int = 20
    max_concurrent_fetches: int = 20
    hadith_search_limit: int = 20

    # Tracing configuration
    tracing_enabled: bool = True
    tracing_console_export: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ZEE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
