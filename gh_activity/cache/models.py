"""Cache models for stored API results."""

import time
from typing import Any

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    """One cached API result. Replaced wholesale on every write."""

    data: Any
    timestamp: int = Field(description="When the entry was stored, epoch milliseconds")

    def is_expired(self, now: int, ttl_ms: int) -> bool:
        """Check whether the entry is at least ttl_ms old."""
        return now - self.timestamp >= ttl_ms


class CacheHit(BaseModel):
    """Result of a successful cache lookup."""

    key: str
    data: Any
    stored_at: int
