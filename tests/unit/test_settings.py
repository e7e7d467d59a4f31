"""
Unit tests for Settings.

Signing and link configuration is required and validated at load time.
"""

import pytest
from pydantic import ValidationError

from src.config.settings import Settings

VALID = {
    "jwt_secret": "s" * 32,
    "jwt_issuer": "registrar",
    "jwt_audience": "registrar-frontend",
    "frontend_url": "http://localhost:3000",
}


class TestSettings:
    """Tests for settings loading and validation."""

    def test_valid_settings(self) -> None:
        settings = Settings(**VALID)
        assert settings.jwt_expiry_minutes == 60
        assert settings.pool_min_size == 2
        assert settings.pool_max_size == 10

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JWT_EXPIRY_MINUTES", "5")
        monkeypatch.setenv("FRONTEND_URL", "https://app.example.com")
        settings = Settings(**{k: v for k, v in VALID.items() if k != "frontend_url"})
        assert settings.jwt_expiry_minutes == 5
        assert settings.frontend_url == "https://app.example.com"

    @pytest.mark.parametrize("name", ["jwt_secret", "jwt_issuer", "jwt_audience", "frontend_url"])
    def test_required_fields(self, monkeypatch: pytest.MonkeyPatch, name: str) -> None:
        monkeypatch.delenv(name.upper(), raising=False)
        values = {k: v for k, v in VALID.items() if k != name}
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **values)

    def test_short_secret_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(**{**VALID, "jwt_secret": "too-short"})

    @pytest.mark.parametrize("name", ["jwt_issuer", "jwt_audience", "frontend_url"])
    def test_blank_values_rejected(self, name: str) -> None:
        with pytest.raises(ValidationError):
            Settings(**{**VALID, name: "   "})

    @pytest.mark.parametrize("minutes", [0, -1])
    def test_non_positive_expiry_rejected(self, minutes: int) -> None:
        with pytest.raises(ValidationError):
            Settings(**{**VALID, "jwt_expiry_minutes": minutes})
