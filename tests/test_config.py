"""Tests for Pydantic Settings configuration."""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from wataxrate import __version__
from wataxrate.core.config import DOR_ADDRESS_RATES_URL, LookupSettings, get_settings


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove WATAXRATE_* variables so defaults apply."""
    for key in list(os.environ.keys()):
        if key.startswith("WATAXRATE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestLookupSettings:
    """Tests for LookupSettings."""

    def test_default_values(self, clean_env: pytest.MonkeyPatch) -> None:
        """LookupSettings should default to the DOR endpoint."""
        settings = LookupSettings()

        assert settings.base_url == DOR_ADDRESS_RATES_URL
        assert settings.timeout is None
        assert settings.max_attempts == 3
        assert settings.attempt_timeout == 2.5
        assert settings.user_agent == f"wataxrate/{__version__}"
        assert settings.log_level == "INFO"
        assert settings.log_json is False

    def test_from_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        """Settings should be read from WATAXRATE_* variables."""
        clean_env.setenv("WATAXRATE_BASE_URL", "https://mirror.example/rates.aspx")
        clean_env.setenv("WATAXRATE_TIMEOUT", "10")
        clean_env.setenv("WATAXRATE_MAX_ATTEMPTS", "5")
        clean_env.setenv("WATAXRATE_LOG_LEVEL", "debug")

        settings = LookupSettings()

        assert settings.base_url == "https://mirror.example/rates.aspx"
        assert settings.timeout == 10.0
        assert settings.max_attempts == 5
        assert settings.log_level == "DEBUG"

    def test_rejects_non_http_url(self) -> None:
        """base_url must be http(s)."""
        with pytest.raises(ValidationError, match="http"):
            LookupSettings(base_url="ftp://dor.wa.gov/rates")

    def test_rejects_url_with_query(self) -> None:
        """base_url must not carry query parameters."""
        with pytest.raises(ValidationError, match="query string"):
            LookupSettings(base_url=f"{DOR_ADDRESS_RATES_URL}?output=xml")

    def test_rejects_non_positive_timeout(self) -> None:
        """timeout must be positive when set."""
        with pytest.raises(ValidationError, match="timeout must be positive"):
            LookupSettings(timeout=0)

    def test_rejects_zero_attempts(self) -> None:
        """max_attempts must be at least 1."""
        with pytest.raises(ValidationError):
            LookupSettings(max_attempts=0)

    def test_rejects_unknown_log_level(self) -> None:
        """log_level must be a known level."""
        with pytest.raises(ValidationError):
            LookupSettings(log_level="CHATTY")


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self, clean_env: pytest.MonkeyPatch) -> None:
        """get_settings should return LookupSettings."""
        assert isinstance(get_settings(), LookupSettings)

    def test_is_cached(self, clean_env: pytest.MonkeyPatch) -> None:
        """get_settings should return the same instance each time."""
        assert get_settings() is get_settings()
