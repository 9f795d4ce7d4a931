"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from hosted_translation.core import NetworkEnvironment
from hosted_translation.services import ActivityCounter, NetworkStatus, SettingsManager

ENV_KEYS = ("GEMINI_API_KEY", "NETWORK_ENVIRONMENT", "NETWORK_TIMEOUT_SECONDS")


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Clear configuration keys from the environment before and after each test."""
    saved = {key: os.environ.pop(key, None) for key in ENV_KEYS}
    yield
    for key, value in saved.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


def make_settings(directory: Path, contents: str) -> SettingsManager:
    (directory / ".env").write_text(contents)
    return SettingsManager(project_root=directory)


class TestSettingsManagerAPIKey:
    """Tests for API key management from .env file."""

    def test_get_api_key_returns_none_when_empty(self, temp_env_dir, clean_env):
        """API key should be None when .env has empty value."""
        settings = make_settings(temp_env_dir, "GEMINI_API_KEY=\n")
        assert settings.get_gemini_api_key() is None

    def test_get_api_key_strips_whitespace(self, temp_env_dir, clean_env):
        """API key should strip leading/trailing whitespace."""
        settings = make_settings(temp_env_dir, "GEMINI_API_KEY='  test-key  '\n")
        assert settings.get_gemini_api_key() == "test-key"

    def test_reload_env_updates_api_key(self, temp_env_dir, clean_env):
        """reload_env should pick up changes to .env file."""
        settings = make_settings(temp_env_dir, "GEMINI_API_KEY=old-key\n")
        assert settings.get_gemini_api_key() == "old-key"

        (temp_env_dir / ".env").write_text("GEMINI_API_KEY=new-key\n")
        settings.reload_env()
        assert settings.get_gemini_api_key() == "new-key"

    def test_missing_env_file_returns_none(self, temp_env_dir, clean_env):
        """SettingsManager should handle missing .env file gracefully."""
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() is None


class TestSettingsManagerNetwork:
    """Tests for network environment and timeout settings."""

    def test_defaults(self, temp_env_dir, clean_env):
        settings = SettingsManager(project_root=temp_env_dir)

        assert settings.get_network_environment() is NetworkEnvironment.PRODUCTION
        assert settings.get_network_timeout() == 10.0

    @pytest.mark.parametrize("value", ["dev", "development"])
    def test_environment_accepts_short_and_long_names(self, temp_env_dir, clean_env, value):
        settings = make_settings(temp_env_dir, f"NETWORK_ENVIRONMENT={value}\n")

        assert settings.get_network_environment() is NetworkEnvironment.DEVELOPMENT

    def test_unknown_environment_falls_back_to_production(self, temp_env_dir, clean_env):
        settings = make_settings(temp_env_dir, "NETWORK_ENVIRONMENT=qa\n")

        assert settings.get_network_environment() is NetworkEnvironment.PRODUCTION

    @pytest.mark.parametrize("value, expected", [("2.5", 2.5), ("soon", 10.0), ("-1", 10.0)])
    def test_timeout_parsing(self, temp_env_dir, clean_env, value, expected):
        settings = make_settings(temp_env_dir, f"NETWORK_TIMEOUT_SECONDS={value}\n")

        assert settings.get_network_timeout() == expected

    def test_build_network_config(self, temp_env_dir, clean_env):
        settings = make_settings(
            temp_env_dir,
            "GEMINI_API_KEY=abc\nNETWORK_ENVIRONMENT=stage\nNETWORK_TIMEOUT_SECONDS=4\n",
        )
        status = NetworkStatus()

        config = settings.build_network_config(status=status)

        assert config.environment is NetworkEnvironment.STAGING
        assert config.default_timeout == 4.0
        assert config.gemini_api_key == "abc"
        assert config.status is status
        assert isinstance(config.activity_indicator, ActivityCounter)
