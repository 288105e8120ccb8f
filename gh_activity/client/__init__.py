"""GitHub API access: retry policy, client and pagination."""

from gh_activity.client.api import GitHubClient
from gh_activity.client.pagination import PaginationFetcher
from gh_activity.client.retry import RetryPhase, RetryPolicy, RetryState

__all__ = ["GitHubClient", "PaginationFetcher", "RetryPhase", "RetryPolicy", "RetryState"]
