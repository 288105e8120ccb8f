"""Configuration management for fetching, caching, exporting and logging."""

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Remote event API configuration."""

    base_url: str = Field(default="https://api.github.com", description="API root URL")
    user_agent: str = Field(
        default="github-activity-cli", description="User agent sent with every request"
    )
    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    page_size: int = Field(default=30, ge=1, le=100, description="Events requested per page")
    max_pages: int = Field(default=10, ge=1, description="Upper bound on pages per lookup")
    max_events: int = Field(
        default=100, ge=1, description="Events retrieved per lookup, before filtering"
    )

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable overrides."""
        if base_url := os.environ.get("GH_ACTIVITY_API_URL"):
            data["base_url"] = base_url
        if timeout := os.environ.get("GH_ACTIVITY_TIMEOUT"):
            data["timeout"] = float(timeout)
        if page_size := os.environ.get("GH_ACTIVITY_PAGE_SIZE"):
            data["page_size"] = int(page_size)
        if max_pages := os.environ.get("GH_ACTIVITY_MAX_PAGES"):
            data["max_pages"] = int(max_pages)
        if max_events := os.environ.get("GH_ACTIVITY_MAX_EVENTS"):
            data["max_events"] = int(max_events)
        super().__init__(**data)


class RetryConfig(BaseModel):
    """Rate-limit retry configuration."""

    max_attempts: int = Field(default=3, ge=0, description="Retries after the first request")
    delay_ms: int = Field(default=5000, ge=0, description="Fixed delay between attempts")

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable overrides."""
        if max_attempts := os.environ.get("GH_ACTIVITY_MAX_ATTEMPTS"):
            data["max_attempts"] = int(max_attempts)
        if delay_ms := os.environ.get("GH_ACTIVITY_RETRY_DELAY_MS"):
            data["delay_ms"] = int(delay_ms)
        super().__init__(**data)


class CacheConfig(BaseModel):
    """Local response cache configuration."""

    path: Path = Field(default=Path("cache.json"), description="Cache index file")
    ttl_minutes: int = Field(default=10, ge=0, description="Time to live of cache entries")

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable overrides."""
        if path := os.environ.get("GH_ACTIVITY_CACHE_PATH"):
            data["path"] = Path(path)
        super().__init__(**data)

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)


class ExportConfig(BaseModel):
    """Export artifact configuration."""

    output_dir: Path = Field(default=Path("."), description="Directory for activities.<fmt>")

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable overrides."""
        if output_dir := os.environ.get("GH_ACTIVITY_EXPORT_DIR"):
            data["output_dir"] = Path(output_dir)
        super().__init__(**data)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    max_bytes: int = Field(default=10_485_760, description="Max size of log file in bytes")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable overrides."""
        data["level"] = os.environ.get("LOG_LEVEL", data.get("level", "INFO"))
        if log_dir := os.environ.get("LOG_DIR"):
            data["log_dir"] = Path(log_dir)
        if max_bytes := os.environ.get("LOG_MAX_BYTES"):
            data["max_bytes"] = int(max_bytes)
        if backup_count := os.environ.get("LOG_BACKUP_COUNT"):
            data["backup_count"] = int(backup_count)
        super().__init__(**data)


class Settings(BaseModel):
    """Main application settings."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize settings, optionally loading from .env file."""
        if env_file := os.environ.get("ENV_FILE"):
            env_path = Path(env_file)
            if env_path.exists():
                load_dotenv(env_path, override=True)
        super().__init__(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance."""
    return Settings()
