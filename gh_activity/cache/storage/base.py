"""Abstract base class for cache index storage backends."""

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Persists the cache index as a single opaque blob.

    Backends never see individual entries: every load returns the whole
    index and every save replaces it.
    """

    @abstractmethod
    async def load(self) -> bytes | None:
        """Read the persisted index.

        Returns:
            The stored blob, or None if nothing has been written yet
        """
        pass

    @abstractmethod
    async def save(self, blob: bytes) -> None:
        """Replace the persisted index.

        Args:
            blob: The complete serialized index
        """
        pass

    @abstractmethod
    async def delete(self) -> bool:
        """Remove the persisted index.

        Returns:
            True if something was removed, False if nothing was stored
        """
        pass
