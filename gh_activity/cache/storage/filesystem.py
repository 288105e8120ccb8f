"""File system storage backend holding the index in one JSON file."""

import asyncio
from pathlib import Path

from gh_activity.cache.storage.base import StorageBackend


class FileSystemStorage(StorageBackend):
    """Single-file cache storage.

    The file is rewritten in place; a crash in the middle of a save can leave
    a truncated file behind, which the cache store then treats as empty.
    """

    def __init__(self, path: Path | None = None):
        """Initialize filesystem storage.

        Args:
            path: Location of the index file. Defaults to ./cache.json
        """
        self.path = path or Path.cwd() / "cache.json"

    async def load(self) -> bytes | None:
        if not self.path.exists():
            return None
        return await asyncio.to_thread(self.path.read_bytes)

    async def save(self, blob: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(self.path.write_bytes, blob)

    async def delete(self) -> bool:
        if not self.path.exists():
            return False
        await asyncio.to_thread(self.path.unlink)
        return True
