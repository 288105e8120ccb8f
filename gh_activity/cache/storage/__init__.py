"""Storage backends for cache persistence."""

from gh_activity.cache.storage.base import StorageBackend
from gh_activity.cache.storage.filesystem import FileSystemStorage
from gh_activity.cache.storage.memory import MemoryStorage

__all__ = ["StorageBackend", "FileSystemStorage", "MemoryStorage"]
