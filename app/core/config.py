"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        api_prefix: Path prefix every router is mounted under.
        rate_limit_enabled: Toggle for the slowapi limiter.
        rate_limit_write: Rate limit for endpoints that modify tickets.
        max_attachment_size_bytes: Largest attachment accepted.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Helpdesk"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"
    rate_limit_enabled: bool = True
    rate_limit_write: str = "30/minute"
    max_attachment_size_bytes: int = 10_485_760  # 10 MB


settings = Settings()
