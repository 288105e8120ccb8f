"""Error taxonomy and structured error logging."""

from gh_activity.errors.exceptions import (
    ActivityError,
    CacheCorrupt,
    NetworkError,
    ParseError,
    RequestFailed,
    UnknownIdentity,
    UnsupportedFormat,
)

__all__ = [
    "ActivityError",
    "CacheCorrupt",
    "NetworkError",
    "ParseError",
    "RequestFailed",
    "UnknownIdentity",
    "UnsupportedFormat",
]
