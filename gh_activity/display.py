"""Console output for profiles and activity lists."""

from collections.abc import Sequence
from datetime import datetime

from gh_activity.formatting import format_activity, time_ago
from gh_activity.models.events import EventRecord, UserProfile


def render_user(user: UserProfile) -> str:
    lines = [
        "\n👤 User Details:",
        f"- Name: {user.display_name or 'N/A'}",
        f"- Bio: {user.bio or 'N/A'}",
        f"- Public Repos: {user.public_repos}",
        f"- Followers: {user.followers}",
        f"- Following: {user.following}",
    ]
    return "\n".join(lines)


def render_activities(
    events: Sequence[EventRecord], identity: str, now: datetime | None = None
) -> str:
    if not events:
        return f"No public activity found for \"{identity}\"."

    lines = ["\nRecent Activity:\n"]
    for event in events:
        lines.append(
            f"- {format_activity(event)} in {event.repository_name} "
            f"({time_ago(event.created_at, now)})"
        )
    return "\n".join(lines)


def display_user(user: UserProfile) -> None:
    print(render_user(user))


def display_activities(events: Sequence[EventRecord], identity: str) -> None:
    print(render_activities(events, identity))
