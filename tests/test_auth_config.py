"""Tests for bearer authentication and settings."""

import pytest

from src.auth import BearerTokenAuth
from src.config import DEFAULT_API_URL, ConfigurationError, Settings


class TestBearerTokenAuth:
    """Tests for bearer token auth."""

    def test_header(self):
        """Test Authorization header format."""
        auth = BearerTokenAuth("abc123")

        assert auth.get_auth_header() == {"Authorization": "Bearer abc123"}

    def test_token_is_stripped(self):
        """Test surrounding whitespace from .env files is removed."""
        auth = BearerTokenAuth("  abc123\n")

        assert auth.get_auth_header()["Authorization"] == "Bearer abc123"

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_empty_token_rejected(self, token):
        """Test empty tokens raise ValueError."""
        with pytest.raises(ValueError):
            BearerTokenAuth(token)

    def test_apply_auth_keeps_headers(self):
        """Test apply_auth merges into existing headers."""
        auth = BearerTokenAuth("abc123")
        headers = auth.apply_auth({"X-Request-Id": "r-1"})

        assert headers == {"X-Request-Id": "r-1", "Authorization": "Bearer abc123"}

    def test_repr_hides_token(self):
        """Test the token never shows up in repr."""
        assert "abc123" not in repr(BearerTokenAuth("abc123"))


class TestSettings:
    """Tests for environment settings."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "EPILOT_API_TOKEN",
            "ERP_INTEGRATION_API_URL",
            "ERP_API_TIMEOUT",
            "ERP_API_MAX_RETRIES",
            "SAMPLES_DIR",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Test defaults with an empty environment."""
        settings = Settings.from_env(dotenv=False)

        assert settings.api_token is None
        assert settings.api_url == DEFAULT_API_URL
        assert settings.timeout == 30
        assert settings.max_retries == 3
        assert settings.samples_dir is None

    def test_from_env(self, monkeypatch):
        """Test values are read from the environment."""
        monkeypatch.setenv("EPILOT_API_TOKEN", "tok")
        monkeypatch.setenv("ERP_INTEGRATION_API_URL", "https://erp.example.test")
        monkeypatch.setenv("ERP_API_TIMEOUT", "45")
        monkeypatch.setenv("ERP_API_MAX_RETRIES", "0")

        settings = Settings.from_env(dotenv=False)

        assert settings.api_token == "tok"
        assert settings.api_url == "https://erp.example.test"
        assert settings.timeout == 45
        assert settings.max_retries == 0

    def test_invalid_number(self, monkeypatch):
        """Test malformed numbers raise ConfigurationError."""
        monkeypatch.setenv("ERP_API_TIMEOUT", "thirty")

        with pytest.raises(ConfigurationError, match="ERP_API_TIMEOUT"):
            Settings.from_env(dotenv=False)

    def test_require_token(self):
        """Test missing token guidance."""
        with pytest.raises(ConfigurationError, match=".env file"):
            Settings().require_token()

        assert Settings(api_token="tok").require_token() == "tok"

    def test_dotenv_loaded(self, tmp_path, monkeypatch):
        """Test a .env file in the working directory is picked up."""
        (tmp_path / ".env").write_text("EPILOT_API_TOKEN=from-dotenv\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("EPILOT_API_TOKEN", "placeholder")
        monkeypatch.delenv("EPILOT_API_TOKEN")

        settings = Settings.from_env()

        assert settings.api_token == "from-dotenv"

    def test_blank_token_is_missing(self, monkeypatch):
        """Test a whitespace-only token counts as no token."""
        monkeypatch.setenv("EPILOT_API_TOKEN", "   ")

        settings = Settings.from_env(dotenv=False)

        assert settings.api_token is None
        with pytest.raises(ConfigurationError):
            Settings(api_token="  \n").require_token()
