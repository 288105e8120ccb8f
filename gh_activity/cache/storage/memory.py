"""In-memory storage backend, mainly for tests."""

from gh_activity.cache.storage.base import StorageBackend


class MemoryStorage(StorageBackend):
    """Keeps the serialized index in a bytes attribute."""

    def __init__(self, blob: bytes | None = None):
        self.blob = blob
        self.save_count = 0

    async def load(self) -> bytes | None:
        return self.blob

    async def save(self, blob: bytes) -> None:
        self.blob = blob
        self.save_count += 1

    async def delete(self) -> bool:
        existed = self.blob is not None
        self.blob = None
        return existed
