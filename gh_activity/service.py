"""Cache-first retrieval of profiles and activity."""

import logging

from pydantic import ValidationError

from gh_activity.cache.store import CacheStore, events_key, user_key
from gh_activity.client.api import GitHubClient
from gh_activity.client.pagination import PaginationFetcher
from gh_activity.models.events import EventRecord, UserProfile

logger = logging.getLogger(__name__)


class ActivityService:
    """Checks the cache, falls back to the API on a miss, and caches the result."""

    def __init__(self, client: GitHubClient, cache: CacheStore) -> None:
        self.client = client
        self.cache = cache
        self.fetcher = PaginationFetcher(client)

    async def get_user(self, identity: str) -> UserProfile:
        """Get a user's profile, from cache when fresh."""
        key = user_key(identity)
        hit = await self.cache.get(key)
        if hit is not None:
            try:
                user = UserProfile.model_validate(hit.data)
                logger.info(f"Using cached profile for {identity}")
                return user
            except ValidationError as e:
                logger.warning(f"Cached profile for {identity} is unusable, refetching: {e}")

        user = await self.client.fetch_user(identity)
        await self.cache.put(key, user.to_api_dict())
        return user

    async def get_events(self, identity: str, page_size: int | None = None) -> list[EventRecord]:
        """Get a user's raw public events in API order, from cache when fresh.

        At most `max_events` from the API config are retrieved. Display limits,
        filters and sorting are applied afterwards by the pipeline.
        """
        key = events_key(identity)
        hit = await self.cache.get(key)
        if hit is not None:
            try:
                events = [EventRecord.model_validate(item) for item in hit.data]
                logger.info(f"Using cached events for {identity}")
                return events
            except (ValidationError, TypeError) as e:
                logger.warning(f"Cached events for {identity} are unusable, refetching: {e}")

        events = await self.fetcher.fetch_events(
            identity, self.client.config.max_events, page_size
        )
        await self.cache.put(key, [event.to_api_dict() for event in events])
        return events
