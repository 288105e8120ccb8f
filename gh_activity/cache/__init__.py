"""Caching infrastructure for API results."""

from gh_activity.cache.models import CacheEntry, CacheHit
from gh_activity.cache.storage.base import StorageBackend
from gh_activity.cache.storage.filesystem import FileSystemStorage
from gh_activity.cache.storage.memory import MemoryStorage
from gh_activity.cache.store import CacheStore, events_key, user_key

__all__ = [
    "CacheEntry",
    "CacheHit",
    "CacheStore",
    "StorageBackend",
    "FileSystemStorage",
    "MemoryStorage",
    "events_key",
    "user_key",
]
