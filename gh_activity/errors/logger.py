"""Structured error records written as JSON lines to a rotating log file."""

import json
import logging
import logging.handlers
import traceback
import uuid
from datetime import UTC, datetime
from enum import Enum
from functools import cache
from typing import Any

from pydantic import BaseModel, Field

from gh_activity.config import Settings, get_settings
from gh_activity.errors.exceptions import (
    CacheCorrupt,
    NetworkError,
    ParseError,
    RequestFailed,
    UnknownIdentity,
    UnsupportedFormat,
)


class ErrorSeverity(Enum):
    """Error severity levels, named after the logging levels they map to."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_log_level(self) -> int:
        return getattr(logging, self.name)


class ErrorCategory(Enum):
    """What went wrong while retrieving or exporting activity."""

    NETWORK = "network"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    PARSING = "parsing"
    CACHE = "cache"
    EXPORT = "export"
    UNKNOWN = "unknown"


# Failures caused by the caller's input or a transient remote state.
_WARNING_CATEGORIES = {ErrorCategory.RATE_LIMIT, ErrorCategory.NOT_FOUND, ErrorCategory.CACHE}


def category_for(exception: BaseException) -> ErrorCategory:
    """Map an exception onto its error category."""
    if isinstance(exception, UnknownIdentity):
        return ErrorCategory.NOT_FOUND
    if isinstance(exception, RequestFailed):
        if exception.status_code == 403:
            return ErrorCategory.RATE_LIMIT
        return ErrorCategory.UNKNOWN
    if isinstance(exception, NetworkError):
        return ErrorCategory.NETWORK
    if isinstance(exception, ParseError):
        return ErrorCategory.PARSING
    if isinstance(exception, CacheCorrupt):
        return ErrorCategory.CACHE
    if isinstance(exception, (UnsupportedFormat, OSError)):
        return ErrorCategory.EXPORT
    return ErrorCategory.UNKNOWN


def severity_for(category: ErrorCategory) -> ErrorSeverity:
    if category in _WARNING_CATEGORIES:
        return ErrorSeverity.WARNING
    return ErrorSeverity.ERROR


class StructuredError(BaseModel):
    """One failed lookup or export, as written to the error log."""

    error_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    identity: str | None = None
    url: str | None = None
    error_code: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    traceback: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class JSONFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "structured_error"):
            return json.dumps(record.structured_error)
        return json.dumps(
            {
                "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
                "logger": record.name,
                "level": record.levelname,
                "message": record.getMessage(),
            }
        )


class StructuredLogger:
    """Writes StructuredError records to <log_dir>/<name>.log."""

    def __init__(self, name: str, config: Settings | None = None) -> None:
        self.name = name
        self.config = config or get_settings()
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        settings = self.config.logging
        logger = logging.getLogger(self.name)
        logger.setLevel(settings.level)
        logger.handlers.clear()

        settings.log_dir.mkdir(exist_ok=True, parents=True)
        handler = logging.handlers.RotatingFileHandler(
            settings.log_dir / f"{self.name}.log",
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
        )
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        return logger

    def log_error(self, error: StructuredError) -> None:
        self.logger.log(
            error.severity.to_log_level(),
            error.message,
            extra={"structured_error": error.to_dict()},
        )

    def create_error_from_exception(
        self,
        exception: Exception,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        identity: str | None = None,
        url: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> StructuredError:
        """Build a StructuredError, classifying the exception when no category is given.

        The URL defaults to the exception's own `url` attribute, which the
        network and HTTP failures carry.
        """
        category = category or category_for(exception)
        return StructuredError(
            message=str(exception),
            category=category,
            severity=severity or severity_for(category),
            identity=identity or getattr(exception, "identity", None),
            url=url or getattr(exception, "url", None),
            error_code=type(exception).__name__,
            metadata=metadata or {},
            traceback="".join(traceback.format_exception(exception)),
        )


@cache
def get_logger(name: str = "gh_activity") -> StructuredLogger:
    return StructuredLogger(name)
