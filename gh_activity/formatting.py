"""Human-readable wording for events and timestamps."""

from datetime import UTC, datetime

from gh_activity.models.events import EventRecord, KnownKind, UnknownKind, parse_timestamp

_WORDING = {
    KnownKind.ISSUES: "🐛 Opened an issue",
    KnownKind.WATCH: "⭐ Starred",
    KnownKind.PULL_REQUEST: "🔀 Created a pull request",
    KnownKind.PULL_REQUEST_REVIEW: "📝 Reviewed a pull request",
    KnownKind.FORK: "🍴 Forked",
    KnownKind.ISSUE_COMMENT: "💬 Commented on an issue",
    KnownKind.CREATE: "✨ Created",
    KnownKind.DELETE: "🗑️ Deleted",
    KnownKind.RELEASE: "🏷️ Published a release",
}


def format_activity(event: EventRecord) -> str:
    """Describe what an event did, without the repository name."""
    kind = event.kind
    if isinstance(kind, UnknownKind):
        return f"📌 Performed {kind.tag}"
    if kind is KnownKind.PUSH:
        payload = event.payload if isinstance(event.payload, dict) else {}
        commits = payload.get("commits") or []
        count = len(commits) if isinstance(commits, list) else 0
        return f"🚀 Pushed {count} commits"
    return _WORDING[kind]


def time_ago(created_at: str | None, now: datetime | None = None) -> str:
    """Relative time such as '5 minutes ago'. Unparsable input gives 'unknown time'."""
    created = parse_timestamp(created_at)
    if created is None:
        return "unknown time"

    now = now or datetime.now(UTC)
    seconds = max(int((now - created).total_seconds()), 0)

    if seconds < 60:
        return f"{seconds} seconds ago"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    return f"{seconds // 86400} days ago"
