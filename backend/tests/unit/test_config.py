"""Unit tests for environment-driven settings."""

import logging

import pytest

from app.config import DEFAULT_CORS_ORIGINS, Settings

ENV_VARS = (
    "WEATHER_API_URL",
    "WEATHER_API_KEY",
    "WEATHER_API_TIMEOUT",
    "CACHE_TTL",
    "CACHE_CHECK_PERIOD",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from an empty environment with no .env file."""
    monkeypatch.setattr("app.config.load_dotenv", lambda: False)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self) -> None:
        settings = Settings.from_env()

        assert settings.weather_api_url == "https://api.weatherapi.com/v1"
        assert settings.weather_api_key == ""
        assert settings.weather_api_timeout == 5.0
        assert settings.cache_ttl == 900
        assert settings.cache_check_period == 120
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS

    def test_reads_and_coerces_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WEATHER_API_URL", "http://weather.test/v1")
        monkeypatch.setenv("WEATHER_API_KEY", "secret")
        monkeypatch.setenv("WEATHER_API_TIMEOUT", "2.5")
        monkeypatch.setenv("CACHE_TTL", "7200")
        monkeypatch.setenv("CACHE_CHECK_PERIOD", "30")

        settings = Settings.from_env()

        assert settings.weather_api_url == "http://weather.test/v1"
        assert settings.weather_api_key == "secret"
        assert settings.weather_api_timeout == 2.5
        assert isinstance(settings.weather_api_timeout, float)
        assert settings.cache_ttl == 7200
        assert isinstance(settings.cache_ttl, int)
        assert settings.cache_check_period == 30
        assert isinstance(settings.cache_check_period, int)

    def test_invalid_number_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CACHE_TTL", "fifteen minutes")
        with pytest.raises(ValueError):
            Settings.from_env()

    def test_cors_origins_comma_split(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,,https://c.example ")

        settings = Settings.from_env()

        assert settings.cors_origins == (
            "https://a.example",
            "https://b.example",
            "https://c.example",
        )

    def test_empty_cors_origins_falls_back_to_defaults(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "")
        assert Settings.from_env().cors_origins == DEFAULT_CORS_ORIGINS

    def test_missing_api_key_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="app.config"):
            Settings.from_env()

        warnings = [r for r in caplog.records if r.name == "app.config"]
        assert len(warnings) == 1
        assert warnings[0].levelno == logging.WARNING
        assert "WEATHER_API_KEY" in warnings[0].getMessage()

    def test_api_key_set_logs_nothing(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("WEATHER_API_KEY", "secret")
        with caplog.at_level(logging.WARNING, logger="app.config"):
            Settings.from_env()

        assert not [r for r in caplog.records if r.name == "app.config"]

    def test_settings_are_frozen(self) -> None:
        settings = Settings.from_env()
        with pytest.raises(AttributeError):
            settings.cache_ttl = 60  # type: ignore[misc]
