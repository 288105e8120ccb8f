"""Data models for activity events and user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field


class KnownKind(Enum):
    """Event kinds the formatter has dedicated wording for."""

    PUSH = "PushEvent"
    ISSUES = "IssuesEvent"
    WATCH = "WatchEvent"
    PULL_REQUEST = "PullRequestEvent"
    PULL_REQUEST_REVIEW = "PullRequestReviewEvent"
    FORK = "ForkEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    CREATE = "CreateEvent"
    DELETE = "DeleteEvent"
    RELEASE = "ReleaseEvent"


@dataclass(frozen=True)
class UnknownKind:
    """Any event kind outside KnownKind, carrying the raw tag."""

    tag: str


EventKind = KnownKind | UnknownKind

_KNOWN_BY_TAG = {kind.value: kind for kind in KnownKind}


def classify_kind(tag: str) -> EventKind:
    """Classify a raw event type tag. Never fails."""
    return _KNOWN_BY_TAG.get(tag) or UnknownKind(tag)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an API timestamp, returning None when missing or unparsable."""
    if not value:
        return None
    try:
        dt = date_parser.isoparse(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _dump_as_received(model: BaseModel) -> dict[str, Any]:
    """Dump only the keys the model was built from, extras included."""
    keys = set(model.model_fields_set) | set(model.model_extra or {})
    return model.model_dump(mode="json", include=keys)


class Repository(BaseModel):
    """Repository reference attached to an event."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = ""


class EventRecord(BaseModel):
    """A single public event as returned by the API.

    Fields the API sends that we do not model (id, actor, org, ...) are kept
    as extras so that serializing a record gives back the shape the API sent.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str
    repo: Repository = Field(default_factory=Repository)
    created_at: str | None = None
    payload: Any = Field(default_factory=dict)

    @property
    def kind(self) -> EventKind:
        return classify_kind(self.type)

    @property
    def repository_name(self) -> str:
        return self.repo.name

    @property
    def created(self) -> datetime | None:
        """Parsed creation time, or None if missing or unparsable."""
        return parse_timestamp(self.created_at)

    def to_api_dict(self) -> dict[str, Any]:
        """Serialize back to the API's JSON shape."""
        return _dump_as_received(self)


class UserProfile(BaseModel):
    """Public profile snapshot of a user."""

    model_config = ConfigDict(frozen=True, extra="allow")

    login: str | None = None
    name: str | None = None
    bio: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0

    @property
    def display_name(self) -> str | None:
        return self.name or self.login

    def to_api_dict(self) -> dict[str, Any]:
        """Serialize back to the API's JSON shape."""
        return _dump_as_received(self)


class FetchRequest(BaseModel):
    """One page request against the public events endpoint."""

    model_config = ConfigDict(frozen=True)

    identity: str
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=30, ge=1)

    def url(self, base_url: str) -> str:
        """Build the page/size-qualified events URL."""
        return (
            f"{base_url.rstrip('/')}/users/{self.identity}/events/public"
            f"?page={self.page}&per_page={self.page_size}"
        )
