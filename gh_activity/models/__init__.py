"""Data models for the activity feed."""

from gh_activity.models.events import (
    EventKind,
    EventRecord,
    FetchRequest,
    KnownKind,
    Repository,
    UnknownKind,
    UserProfile,
    classify_kind,
    parse_timestamp,
)

__all__ = [
    "EventKind",
    "EventRecord",
    "FetchRequest",
    "KnownKind",
    "Repository",
    "UnknownKind",
    "UserProfile",
    "classify_kind",
    "parse_timestamp",
]
