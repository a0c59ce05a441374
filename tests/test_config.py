"""Tests for configuration loading."""

from weather_report.config import APIConfig, WeatherDataConfig


def test_weather_data_config_from_env(monkeypatch):
    """Test provider settings are read from environment variables."""
    monkeypatch.setenv("TEMP_DATA_PROTOCOL", "https")
    monkeypatch.setenv("TEMP_DATA_HOST", "temperature-observations")
    monkeypatch.setenv("TEMP_DATA_PORT", "8443")
    monkeypatch.setenv("PRECIP_DATA_HOST", "precipitation-observations")
    monkeypatch.setenv("PRECIP_DATA_PORT", "8080")

    config = WeatherDataConfig()

    assert config.temp_data_base_url == "https://temperature-observations:8443"
    assert config.precip_data_base_url == "http://precipitation-observations:8080"


def test_postgres_url():
    """Test PostgreSQL URL is composed from its parts."""
    config = APIConfig(
        postgres_host="db",
        postgres_port=5433,
        postgres_db="reports",
        postgres_user="reporter",
        postgres_password="secret",
        database_url=None,
    )

    assert config.postgres_url == "postgresql://reporter:secret@db:5433/reports"
    assert config.sqlalchemy_url == config.postgres_url


def test_database_url_overrides_postgres():
    """Test an explicit database URL takes precedence."""
    config = APIConfig(database_url="sqlite:///reports.db")

    assert config.sqlalchemy_url == "sqlite:///reports.db"
