"""Configuration management for the weather report service."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class WeatherDataConfig(BaseSettings):
    """Upstream observation provider settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Temperature provider
    temp_data_protocol: str = "http"
    temp_data_host: str = "localhost"
    temp_data_port: int = 5000

    # Precipitation provider
    precip_data_protocol: str = "http"
    precip_data_host: str = "localhost"
    precip_data_port: int = 5001

    # Seconds to wait on a single upstream request
    upstream_timeout: float = 30.0

    @property
    def temp_data_base_url(self) -> str:
        """Base URL of the temperature provider."""
        return f"{self.temp_data_protocol}://{self.temp_data_host}:{self.temp_data_port}"

    @property
    def precip_data_base_url(self) -> str:
        """Base URL of the precipitation provider."""
        return f"{self.precip_data_protocol}://{self.precip_data_host}:{self.precip_data_port}"


class APIConfig(BaseSettings):
    """API configuration with PostgreSQL connection settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # PostgreSQL connection
    postgres_host: str = "postgres"
    postgres_port: int = 5432
    postgres_db: str = "weather_report"
    postgres_user: str = "weather_report"
    postgres_password: str = "weather_report"

    # Full SQLAlchemy URL, takes precedence over the postgres_* fields
    database_url: Optional[str] = None

    # API settings
    api_title: str = "Weather Report API"
    api_version: str = "1.0.0"
    api_description: str = "Builds and stores precipitation and temperature reports by postal code"

    # Report request limits
    min_report_days: int = 1
    max_report_days: int = 30

    # Pagination defaults
    default_page_size: int = 50
    max_page_size: int = 1000

    # Database connection pool
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600

    # Logging
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL."""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        """URL handed to the SQLAlchemy engine."""
        return self.database_url or self.postgres_url


# Global config instances
_config: Optional[APIConfig] = None
_weather_data_config: Optional[WeatherDataConfig] = None


def get_config() -> APIConfig:
    """Get or create global configuration instance."""
    global _config
    if _config is None:
        _config = APIConfig()
    return _config


def get_weather_data_config() -> WeatherDataConfig:
    """Get or create the upstream provider configuration."""
    global _weather_data_config
    if _weather_data_config is None:
        _weather_data_config = WeatherDataConfig()
    return _weather_data_config
