"""HTTP client for the GitHub REST API."""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from gh_activity.client.retry import RetryPolicy
from gh_activity.config import ApiConfig
from gh_activity.errors.exceptions import ParseError, UnknownIdentity
from gh_activity.models.events import UserProfile

logger = logging.getLogger(__name__)


class GitHubClient:
    """Thin async client sending every request through a RetryPolicy."""

    def __init__(
        self,
        config: ApiConfig | None = None,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: API configuration. Defaults to ApiConfig()
            retry_policy: Policy applied to every request
            transport: Optional httpx transport, used by tests to fake the API
        """
        self.config = config or ApiConfig()
        self.retry_policy = retry_policy or RetryPolicy()
        self.client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/vnd.github+json",
            },
            follow_redirects=True,
            timeout=self.config.timeout,
            transport=transport,
        )

    def url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def get_json(self, url: str) -> Any:
        """Fetch url through the retry policy and decode the JSON body."""
        body = await self.retry_policy.fetch(self.client, url)
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Malformed JSON from {url}: {e}") from e

    async def fetch_user(self, identity: str) -> UserProfile:
        """Fetch a user's public profile."""
        url = self.url(f"users/{identity}")
        try:
            data = await self.get_json(url)
        except UnknownIdentity as e:
            e.identity = identity
            raise
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Unexpected profile shape for {identity}: {e}") from e

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
