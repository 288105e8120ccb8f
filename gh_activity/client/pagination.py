"""Page-by-page retrieval of a user's public events."""

import logging

from pydantic import ValidationError

from gh_activity.client.api import GitHubClient
from gh_activity.errors.exceptions import ParseError, UnknownIdentity
from gh_activity.models.events import EventRecord, FetchRequest

logger = logging.getLogger(__name__)


class PaginationFetcher:
    """Fetches public events one page at a time.

    Each page is a single retry-policy call, so retry accounting stays local
    to that page. Aggregating pages is done by fetch_events.
    """

    def __init__(self, client: GitHubClient, max_pages: int | None = None) -> None:
        self.client = client
        self.max_pages = max_pages or client.config.max_pages

    async def fetch_page(self, identity: str, page: int, page_size: int) -> list[EventRecord]:
        """Fetch one page of events.

        Raises:
            ParseError: The body is not a JSON array of event objects
        """
        request = FetchRequest(identity=identity, page=page, page_size=page_size)
        url = request.url(self.client.config.base_url)
        try:
            data = await self.client.get_json(url)
        except UnknownIdentity as e:
            e.identity = identity
            raise

        if not isinstance(data, list):
            raise ParseError(
                f"Expected a JSON array of events from {url}, got {type(data).__name__}"
            )

        try:
            events = [EventRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise ParseError(f"Malformed event in {url}: {e}") from e

        logger.debug(f"Fetched {len(events)} events for {identity} (page {page})")
        return events

    async def fetch_events(
        self, identity: str, limit: int, page_size: int | None = None
    ) -> list[EventRecord]:
        """Collect up to `limit` events across pages, in API order.

        Stops at the first short page or after max_pages pages.
        """
        if limit <= 0:
            return []
        page_size = page_size or self.client.config.page_size

        events: list[EventRecord] = []
        for page in range(1, self.max_pages + 1):
            batch = await self.fetch_page(identity, page, page_size)
            events.extend(batch)
            if len(events) >= limit or len(batch) < page_size:
                break

        logger.info(f"Retrieved {min(len(events), limit)} events for {identity}")
        return events[:limit]
