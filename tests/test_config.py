"""Tests for configuration management."""

import os
from datetime import timedelta
from pathlib import Path
from unittest.mock import patch

from gh_activity.config import (
    ApiConfig,
    CacheConfig,
    ExportConfig,
    LoggingConfig,
    RetryConfig,
    Settings,
    get_settings,
)


class TestApiConfig:
    """Test API configuration."""

    def test_default_values(self):
        """Test default API configuration values."""
        config = ApiConfig()
        assert config.base_url == "https://api.github.com"
        assert config.user_agent == "github-activity-cli"
        assert config.page_size == 30
        assert config.max_pages == 10
        assert config.max_events == 100

    def test_env_overrides(self):
        """Test environment variable overrides."""
        with patch.dict(
            os.environ,
            {
                "GH_ACTIVITY_API_URL": "http://localhost:8080",
                "GH_ACTIVITY_PAGE_SIZE": "5",
                "GH_ACTIVITY_MAX_EVENTS": "20",
            },
        ):
            config = ApiConfig()
        assert config.base_url == "http://localhost:8080"
        assert config.page_size == 5
        assert config.max_events == 20


class TestRetryConfig:
    """Test retry configuration."""

    def test_default_values(self):
        """Test the fixed-interval defaults."""
        config = RetryConfig()
        assert config.max_attempts == 3
        assert config.delay_ms == 5000

    def test_env_overrides(self):
        """Test environment variable overrides."""
        with patch.dict(
            os.environ, {"GH_ACTIVITY_MAX_ATTEMPTS": "0", "GH_ACTIVITY_RETRY_DELAY_MS": "10"}
        ):
            config = RetryConfig()
        assert config.max_attempts == 0
        assert config.delay_ms == 10


class TestCacheConfig:
    """Test cache configuration."""

    def test_default_values(self):
        """Test default cache location and TTL."""
        config = CacheConfig()
        assert config.path == Path("cache.json")
        assert config.ttl == timedelta(minutes=10)

    def test_env_overrides(self):
        """Test cache path override."""
        with patch.dict(os.environ, {"GH_ACTIVITY_CACHE_PATH": "/tmp/gh-cache.json"}):
            config = CacheConfig()
        assert config.path == Path("/tmp/gh-cache.json")


class TestLoggingConfig:
    """Test logging configuration."""

    def test_default_values(self):
        """Test default logging configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            config = LoggingConfig()
        assert config.level == "INFO"
        assert config.log_dir == Path("logs")
        assert config.max_bytes == 10_485_760
        assert config.backup_count == 5

    def test_env_overrides(self):
        """Test environment variable overrides."""
        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG", "LOG_DIR": "/tmp/gh-activity-logs"}):
            config = LoggingConfig()
        assert config.level == "DEBUG"
        assert config.log_dir == Path("/tmp/gh-activity-logs")


class TestSettings:
    """Test main settings."""

    def test_default_sections(self):
        """Test that all sections are populated."""
        settings = Settings()
        assert isinstance(settings.api, ApiConfig)
        assert isinstance(settings.retry, RetryConfig)
        assert isinstance(settings.cache, CacheConfig)
        assert isinstance(settings.export, ExportConfig)
        assert isinstance(settings.logging, LoggingConfig)

    def test_loads_env_file(self, tmp_path):
        """Test loading overrides from ENV_FILE."""
        env_file = tmp_path / ".env"
        env_file.write_text("GH_ACTIVITY_MAX_PAGES=2\n")

        with patch.dict(os.environ, {"ENV_FILE": str(env_file)}):
            settings = Settings()

        assert settings.api.max_pages == 2

    def test_get_settings_is_cached(self):
        """Test singleton behaviour."""
        assert get_settings() is get_settings()
