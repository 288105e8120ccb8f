"""Cache store keeping API results in a single persisted index."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from pydantic import ValidationError

from gh_activity.cache.models import CacheEntry, CacheHit, now_ms
from gh_activity.cache.storage.base import StorageBackend
from gh_activity.cache.storage.filesystem import FileSystemStorage
from gh_activity.errors.exceptions import CacheCorrupt

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=10)


def user_key(identity: str) -> str:
    """Cache key for a user's profile."""
    return f"user:{identity}"


def events_key(identity: str) -> str:
    """Cache key for the raw public events retrieved for a user."""
    return f"events:{identity}"


class CacheStore:
    """Key/value cache with a fixed TTL over a whole-index storage backend.

    Every read loads the full index and every write rewrites it. Expired
    entries are skipped by reads but stay in the index until overwritten.
    """

    def __init__(
        self,
        storage: StorageBackend | None = None,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize cache store.

        Args:
            storage: Storage backend to use. Defaults to ./cache.json on disk.
            ttl: How long entries stay fresh
            clock: Returns the current time in epoch milliseconds
        """
        self.storage = storage or FileSystemStorage()
        self.ttl = ttl
        self.clock = clock
        self._write_lock = asyncio.Lock()

    @property
    def ttl_ms(self) -> int:
        return int(self.ttl.total_seconds() * 1000)

    async def get(self, key: str) -> CacheHit | None:
        """Look up a fresh entry. Returns None on a miss or an expired entry."""
        index = await self._load_index()
        entry = index.get(key)
        if entry is None:
            logger.debug(f"Cache miss for {key}")
            return None

        if entry.is_expired(self.clock(), self.ttl_ms):
            logger.debug(f"Cache entry for {key} expired")
            return None

        logger.debug(f"Cache hit for {key}")
        return CacheHit(key=key, data=entry.data, stored_at=entry.timestamp)

    async def put(self, key: str, data: Any) -> None:
        """Replace the entry for key and persist the whole index."""
        async with self._write_lock:
            index = await self._load_index()
            index[key] = CacheEntry(data=data, timestamp=self.clock())
            await self._save_index(index)
        logger.debug(f"Cached {key}")

    async def invalidate(self, key: str) -> bool:
        """Drop the entry for key. Returns True if it was present."""
        async with self._write_lock:
            index = await self._load_index()
            if key not in index:
                return False
            del index[key]
            await self._save_index(index)
        logger.info(f"Invalidated cache entry {key}")
        return True

    async def clear(self) -> bool:
        """Remove the persisted index entirely."""
        async with self._write_lock:
            try:
                removed = await self.storage.delete()
            except OSError as e:
                logger.warning(f"Could not remove cache index: {e}")
                return False
        if removed:
            logger.info("Cache cleared")
        return removed

    async def get_or_fetch(self, key: str, fetch_func: Callable[[], Awaitable[Any]]) -> Any:
        """Return cached data for key, or fetch, store and return fresh data.

        Args:
            key: Cache key
            fetch_func: Async function producing fresh data on a miss

        Returns:
            Cached or freshly fetched data
        """
        hit = await self.get(key)
        if hit is not None:
            return hit.data

        fresh_data = await fetch_func()
        await self.put(key, fresh_data)
        return fresh_data

    async def _load_index(self) -> dict[str, CacheEntry]:
        """Load the full index, treating an unreadable one as empty."""
        try:
            blob = await self.storage.load()
        except OSError as e:
            logger.warning(f"Ignoring unreadable cache index: {e}")
            return {}
        if blob is None:
            return {}
        try:
            return self._parse_index(blob)
        except CacheCorrupt as e:
            logger.warning(f"Ignoring corrupt cache index: {e}")
            return {}

    def _parse_index(self, blob: bytes) -> dict[str, CacheEntry]:
        try:
            raw = json.loads(blob.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CacheCorrupt(f"index is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise CacheCorrupt(f"index must be a JSON object, got {type(raw).__name__}")

        try:
            return {key: CacheEntry.model_validate(value) for key, value in raw.items()}
        except ValidationError as e:
            raise CacheCorrupt(f"malformed cache entry: {e}") from e

    async def _save_index(self, index: dict[str, CacheEntry]) -> None:
        """Persist the full index. A failed write leaves the cache as it was."""
        payload = {key: entry.model_dump(mode="json") for key, entry in index.items()}
        try:
            await self.storage.save(json.dumps(payload, indent=2).encode("utf-8"))
        except OSError as e:
            logger.warning(f"Could not write cache index: {e}")
